"""SQLAlchemy column type for puidv7 identifiers.

The database stores the plain UUID; the application sees the prefixed
identifier:

    class Account(Base):
        __tablename__ = "accounts"
        id: Mapped[str] = mapped_column(Puidv7Type("acc"), primary_key=True)
"""

from sqlalchemy import Uuid
from sqlalchemy.types import TypeDecorator

from puidv7.core.codec import decode_id, encode_id, validate_prefix


class Puidv7Type(TypeDecorator):
    """Stores a puidv7 as a native UUID column, bound to one prefix."""

    impl = Uuid(as_uuid=False)
    cache_ok = True

    def __init__(self, prefix: str, *args, **kwargs):
        validate_prefix(prefix)
        self.prefix = prefix
        super().__init__(*args, **kwargs)

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return decode_id(value, self.prefix)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return encode_id(value, self.prefix)

    def process_literal_param(self, value, dialect):
        return self.process_bind_param(value, dialect)

    @property
    def python_type(self):
        return str

"""Pydantic field types that only accept puidv7 identifiers for one prefix."""

from typing import Annotated

from pydantic import AfterValidator

from puidv7.core.codec import validate_id, validate_prefix
from puidv7.core.errors import Puidv7Error

INVALID_ID_MESSAGE = "Invalid puidv7 ID"


def puidv7_field(prefix: str):
    """Build an ``Annotated[str, ...]`` type validating puidv7 IDs.

        class AccountRef(BaseModel):
            account_id: puidv7_field("acc")

    Only the shape and prefix are checked; the ID is not decoded.
    """
    validate_prefix(prefix)

    def _check(value: str) -> str:
        try:
            validate_id(value, prefix)
        except Puidv7Error:
            raise ValueError(INVALID_ID_MESSAGE)
        return value

    return Annotated[str, AfterValidator(_check)]

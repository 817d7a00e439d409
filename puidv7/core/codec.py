"""Prefixed, Crockford base-32 encoded UUIDv7 identifiers (puidv7).

A puidv7 is a 3 letter type prefix followed by the 26 character lowercase
Crockford base-32 encoding of the UUID's 16 raw bytes:

    01960ec0-c6cf-74d3-ae14-50c20e035fe6  +  "tst"
    -> tst06b0xg66sxtd7bgma310w0tzwr

All functions here are pure except ``new_id``, which asks ``uuid7`` for a
fresh value.
"""

import logging
import re
import uuid as uuid_lib
from typing import Union

from uuid_extensions import uuid7

from puidv7.core import base32
from puidv7.core.errors import (
    DecodeFailureError,
    InvalidPrefixError,
    InvalidUuidFormatError,
    MalformedIdentifierError,
    PrefixMismatchError,
)

logger = logging.getLogger(__name__)

PREFIX_LENGTH = 3
BODY_LENGTH = 26
ID_LENGTH = PREFIX_LENGTH + BODY_LENGTH

PREFIX_PATTERN = re.compile(r"^[a-z]{3}$")
ID_PATTERN = re.compile(r"^[a-z]{3}[0-9a-z]{26}$")
BODY_PATTERN = re.compile(r"^[0-9a-z]{26}$")
# Only the RFC 4122 variant nibble is checked, not the version nibble.
UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def validate_prefix(prefix: str) -> None:
    """Check that prefix is empty or exactly 3 lowercase a-z characters.

    Raises:
        InvalidPrefixError: for any other value.
    """
    if not isinstance(prefix, str):
        raise InvalidPrefixError(prefix)
    if prefix and not PREFIX_PATTERN.fullmatch(prefix):
        raise InvalidPrefixError(prefix)


def encode_id(uuid: Union[str, uuid_lib.UUID], prefix: str) -> str:
    """Encode a UUID into a prefixed, lowercase Crockford base-32 ID.

    Args:
        uuid: Hyphenated UUID string (any case) or a ``uuid.UUID``.
        prefix: 3 lowercase letters, or "" for an unprefixed 26 char body.

    Returns:
        ``prefix + body``, 29 characters (26 when prefix is empty).

    Raises:
        InvalidPrefixError: if the prefix is not valid.
        InvalidUuidFormatError: if the UUID is not canonical hyphenated hex
            with an RFC 4122 variant nibble.
    """
    validate_prefix(prefix)
    if isinstance(uuid, uuid_lib.UUID):
        uuid = str(uuid)
    if not isinstance(uuid, str) or not UUID_PATTERN.fullmatch(uuid):
        raise InvalidUuidFormatError(uuid)

    raw = bytes.fromhex(uuid.lower().replace("-", ""))
    body = base32.encode(raw)
    if len(body) != BODY_LENGTH:
        raise InvalidUuidFormatError(uuid)
    return f"{prefix}{body}"


def validate_id(id: str, prefix: str) -> None:
    """Check the shape and prefix of an ID without decoding it.

    With an empty prefix any 3 letter prefix is accepted, as is a bare
    26 character body.

    Raises:
        InvalidPrefixError: if the expected prefix is not valid.
        MalformedIdentifierError: if the ID is not ``[a-z]{3}[0-9a-z]{26}``.
        PrefixMismatchError: if the ID does not start with the expected prefix.
    """
    validate_prefix(prefix)
    if not isinstance(id, str):
        raise MalformedIdentifierError(id)
    normalized = id.lower()
    if not prefix and BODY_PATTERN.fullmatch(normalized):
        return
    if not ID_PATTERN.fullmatch(normalized):
        raise MalformedIdentifierError(id)
    if prefix and not normalized.startswith(prefix):
        raise PrefixMismatchError(id, prefix)


def decode_id(id: str, prefix: str) -> str:
    """Decode a puidv7 back to its hyphenated, lowercase UUID string.

    Raises:
        InvalidPrefixError: if the expected prefix is not valid.
        MalformedIdentifierError: if the ID has the wrong shape.
        PrefixMismatchError: if the ID carries a different prefix.
        DecodeFailureError: if the body is not valid base-32 or does not
            decode to a variant-tagged UUID.
    """
    validate_id(id, prefix)
    normalized = id.lower()
    body = normalized[len(normalized) - BODY_LENGTH:]

    try:
        raw = base32.decode(body)
    except ValueError as e:
        raise DecodeFailureError(id, str(e)) from e
    if len(raw) != 16:
        raise DecodeFailureError(id, f"decoded to {len(raw)} bytes")

    h = raw.hex()
    uuid = f"{h[0:8]}-{h[8:12]}-{h[12:16]}-{h[16:20]}-{h[20:32]}"
    if not UUID_PATTERN.fullmatch(uuid):
        raise DecodeFailureError(id, f"bad UUID variant in {uuid}")
    return uuid


def new_id(prefix: str) -> str:
    """Generate a new UUIDv7 and encode it with the given prefix."""
    validate_prefix(prefix)
    puid = encode_id(str(uuid7()), prefix)
    logger.debug(f"Generated puidv7 {puid}")
    return puid

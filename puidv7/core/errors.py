"""Error types raised by the puidv7 codec, prefix deriver and prefix registry.

Every error is a ``ValueError`` subclass and keeps the offending input on the
instance so callers can report it without parsing the message.
"""

from typing import Iterable, Optional


class Puidv7Error(ValueError):
    """Base class for all puidv7 errors."""


# ---------------------------------------------------------------------------
# Codec errors
# ---------------------------------------------------------------------------

class InvalidPrefixError(Puidv7Error):
    def __init__(self, prefix):
        self.prefix = prefix
        super().__init__(
            f"puidv7 prefix must be 3 lowercase a-z characters. got: {prefix!r}"
        )


class InvalidUuidFormatError(Puidv7Error):
    def __init__(self, uuid):
        self.uuid = uuid
        super().__init__(f"invalid UUID provided to encode: {uuid!r}")


class MalformedIdentifierError(Puidv7Error):
    def __init__(self, id: str):
        self.id = id
        super().__init__(f"puidv7 invalid - cannot decode: {id!r}")


class PrefixMismatchError(Puidv7Error):
    def __init__(self, id: str, prefix: str):
        self.id = id
        self.prefix = prefix
        super().__init__(
            f"puidv7 prefix mismatch - expected '{prefix}', cannot decode: {id!r}"
        )


class DecodeFailureError(Puidv7Error):
    def __init__(self, id: str, reason: str):
        self.id = id
        self.reason = reason
        super().__init__(f"puidv7 ID is not a valid UUID ({reason}): {id!r}")


# ---------------------------------------------------------------------------
# Prefix derivation errors
# ---------------------------------------------------------------------------

class InvalidModelNamesError(Puidv7Error):
    def __init__(self, names: Iterable[str]):
        self.names = list(names)
        super().__init__("Invalid model names found: " + ", ".join(str(n) for n in self.names))


class DuplicateModelNamesError(Puidv7Error):
    def __init__(self, names: Iterable[str]):
        self.names = list(names)
        super().__init__("Duplicate model names found: " + ", ".join(str(n) for n in self.names))


class HeuristicInvariantViolationError(Puidv7Error):
    """A prefix strategy produced a candidate that is not 3 characters long.

    This points at a broken strategy, not at bad input.
    """

    def __init__(self, model: str, candidate: str):
        self.model = model
        self.candidate = candidate
        super().__init__(
            f"Unexpected length prefix generated for {model}: {candidate!r}"
        )


class PrefixExhaustedError(Puidv7Error):
    def __init__(self, model: str):
        self.model = model
        super().__init__(f"No unique prefix found for model: {model}")


# ---------------------------------------------------------------------------
# Registry errors
# ---------------------------------------------------------------------------

class PrefixRegistryError(Puidv7Error):
    def __init__(self, message: str, errors: Optional[list[str]] = None):
        self.errors = errors or []
        if self.errors:
            message = f"{message}: {self.errors}"
        super().__init__(message)

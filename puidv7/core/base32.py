"""Crockford base-32 for raw bytes.

Uses the RFC 4648 bit layout (5-bit groups, most significant bit first, no
padding characters) with Crockford's alphabet, which drops I, L, O and U:

    0123456789abcdefghjkmnpqrstvwxyz

Output is lowercase. Input is case-insensitive and the lookalikes ``i``/``l``
and ``o`` are read as ``1`` and ``0``. See https://www.crockford.com/base32.html
"""

import base64
import binascii

CROCKFORD_ALPHABET = "0123456789abcdefghjkmnpqrstvwxyz"
_RFC4648_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_TO_CROCKFORD = str.maketrans(_RFC4648_ALPHABET, CROCKFORD_ALPHABET)
_FROM_CROCKFORD = str.maketrans(CROCKFORD_ALPHABET, _RFC4648_ALPHABET)
_LOOKALIKES = str.maketrans("ilo", "110")


def encode(data: bytes) -> str:
    """Encode bytes to an unpadded, lowercase Crockford base-32 string."""
    encoded = base64.b32encode(data).decode("ascii").rstrip("=")
    return encoded.translate(_TO_CROCKFORD)


def decode(text: str) -> bytes:
    """Decode a Crockford base-32 string back to bytes.

    Raises:
        ValueError: on an empty string, a symbol outside the alphabet, an
            impossible length, or non-zero trailing bits.
    """
    normalized = text.lower().translate(_LOOKALIKES)
    if not normalized:
        raise ValueError("empty string")

    for ch in normalized:
        if ch not in CROCKFORD_ALPHABET:
            raise ValueError(f"invalid base32 symbol {ch!r}")

    # Bits of the last symbol past the final byte must be zero.
    spare_bits = len(normalized) * 5 % 8
    if spare_bits and CROCKFORD_ALPHABET.index(normalized[-1]) & ((1 << spare_bits) - 1):
        raise ValueError("non-zero padding bits")

    padded = normalized.translate(_FROM_CROCKFORD)
    padded += "=" * (-len(padded) % 8)
    try:
        return base64.b32decode(padded)
    except binascii.Error as e:
        raise ValueError(f"invalid base32 length {len(normalized)}: {e}") from e

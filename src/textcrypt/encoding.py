"""
Binary-to-text boundary.

Signatures, ciphertexts and keys travel over text channels as URL-safe base64
without padding. The padded standard alphabet is available for callers that
need it.
"""

import base64
import binascii
import re
from enum import Enum
from typing import Union

from .errors import EncodingError

_URL_SAFE_ALPHABET = re.compile(rb'[A-Za-z0-9_-]*')


class Base64Format(Enum):
    STANDARD = "standard"
    URL_SAFE = "urlsafe"


def encode(data: bytes, fmt: Base64Format = Base64Format.URL_SAFE) -> str:
    """Encode raw bytes as base64 text."""
    if fmt is Base64Format.STANDARD:
        return base64.b64encode(data).decode('ascii')
    return base64.urlsafe_b64encode(data).rstrip(b'=').decode('ascii')


def decode(text: Union[str, bytes], fmt: Base64Format = Base64Format.URL_SAFE) -> bytes:
    """
    Decode base64 text back to raw bytes.

    Surrounding whitespace (such as the newline left by a terminal) is ignored.
    Raises EncodingError for characters outside the alphabet, padding in
    URL-safe input, a length no encoder could have produced, or non-zero
    trailing bits in the last character.
    """
    if isinstance(text, str):
        try:
            text = text.encode('ascii')
        except UnicodeEncodeError as e:
            raise EncodingError(f"Non-ASCII character in base64 input at position {e.start}") from e

    data = bytes(text).strip()

    if fmt is Base64Format.STANDARD:
        try:
            decoded = base64.b64decode(data, validate=True)
        except binascii.Error as e:
            raise EncodingError(f"Invalid base64 input: {e}") from e
        _check_canonical(decoded, data, fmt)
        return decoded

    if b'=' in data:
        raise EncodingError("Padding is not allowed in URL-safe base64 input")
    if not _URL_SAFE_ALPHABET.fullmatch(data):
        raise EncodingError("Input contains characters outside the URL-safe base64 alphabet")
    if len(data) % 4 == 1:
        raise EncodingError(f"Truncated base64 input ({len(data)} characters)")

    padded = data + b'=' * (-len(data) % 4)
    try:
        decoded = base64.urlsafe_b64decode(padded)
    except binascii.Error as e:
        raise EncodingError(f"Invalid base64 input: {e}") from e
    _check_canonical(decoded, data, fmt)
    return decoded


def _check_canonical(decoded: bytes, data: bytes, fmt: Base64Format):
    # Unused trailing bits must be zero, so each byte string has exactly one encoding
    if encode(decoded, fmt).encode("ascii") != data:
        raise EncodingError("Base64 input has non-zero trailing bits")


def to_text(data: bytes) -> str:
    """Interpret bytes as UTF-8 text."""
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise EncodingError(f"Result is not valid UTF-8 text: {e.reason} at byte {e.start}") from e

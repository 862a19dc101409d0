"""
Key material and randomness.

KeyMaterial holds exactly one 32-byte key and validates its length when it is
built. Keys are read from a key source (a path, raw bytes, or a binary
stream) and truncated to the length the algorithm needs; a source that is
too short is rejected.
"""

from __future__ import annotations

import os
import secrets
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Protocol, Union

from .errors import KeyLoadError

KEY_LENGTH = 32

KeySource = Union[str, os.PathLike, bytes, bytearray, memoryview, BinaryIO]


class KeyRole(Enum):
    """What a piece of key material is used for."""

    SYMMETRIC = "symmetric"
    SIGNING = "signing"
    VERIFYING = "verifying"


@dataclass(frozen=True)
class KeyMaterial:
    """A single fixed-length key."""

    role: KeyRole
    data: bytes

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            object.__setattr__(self, 'data', bytes(self.data))
        if len(self.data) != KEY_LENGTH:
            raise KeyLoadError(
                f"{self.role.value} key must be {KEY_LENGTH} bytes, got {len(self.data)}"
            )

    def require(self, role: KeyRole) -> bytes:
        """Return the key bytes, or raise KeyLoadError if this key has another role."""
        if self.role is not role:
            raise KeyLoadError(f"Expected a {role.value} key, got a {self.role.value} key")
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def __repr__(self) -> str:
        return f"KeyMaterial(role={self.role.value}, length={len(self.data)})"


class RandomSource(Protocol):
    """Provider of random bytes for key and nonce generation."""

    def token_bytes(self, n: int) -> bytes: ...


class SystemRandomSource:
    """RandomSource backed by the operating system CSPRNG."""

    def token_bytes(self, n: int) -> bytes:
        return secrets.token_bytes(n)


def default_random_source() -> RandomSource:
    return SystemRandomSource()


def read_key_source(source: KeySource) -> bytes:
    """Read the entire key source into memory."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)

    if isinstance(source, (str, os.PathLike)):
        try:
            with open(source, 'rb') as f:
                return f.read()
        except OSError as e:
            raise KeyLoadError(f"Cannot read key file {os.fspath(source)}: {e}") from e

    if hasattr(source, 'read'):
        try:
            data = source.read()
        except OSError as e:
            raise KeyLoadError(f"Cannot read key stream: {e}") from e
        if isinstance(data, str):
            raise KeyLoadError("Key stream must be opened in binary mode")
        return bytes(data)

    raise KeyLoadError(f"Unsupported key source type: {type(source).__name__}")


def load_key_bytes(source: KeySource, length: int = KEY_LENGTH) -> bytes:
    """
    Read a key source and return its first `length` bytes.

    Longer sources are truncated (a trailing newline in a key file is common);
    shorter ones raise KeyLoadError.
    """
    raw = read_key_source(source)
    if len(raw) < length:
        raise KeyLoadError(f"Key source holds {len(raw)} bytes, need at least {length}")
    return raw[:length]

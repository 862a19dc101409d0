from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Union

from ..errors import InvalidFormatError
from ..keys import KeyMaterial, KeySource, RandomSource
from ..utils.io import InputSource


class TextFormat(str, Enum):
    """Format selector naming one of the algorithm variants."""

    BLAKE3 = "blake3"
    ED25519 = "ed25519"
    CHACHA20 = "chacha20"

    @classmethod
    def parse(cls, value: Union[str, "TextFormat"]) -> "TextFormat":
        """Parse a selector string, case-insensitively."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidFormatError(f"Format selector must be a string, got {type(value).__name__}")
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(f.value for f in cls)
            raise InvalidFormatError(f"Invalid text format: {value!r} (expected one of {valid})") from None

    def __str__(self) -> str:
        return self.value


class Operation(str, Enum):
    SIGN = "sign"
    VERIFY = "verify"
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"
    LOAD_KEY = "load_key"
    GENERATE_KEY = "generate_key"

    def __str__(self) -> str:
        return self.value


class Sign(ABC):
    @abstractmethod
    def sign(self, key: KeyMaterial, stream: InputSource) -> bytes:
        """Read the whole stream and return its signature."""


class Verify(ABC):
    @abstractmethod
    def verify(self, key: KeyMaterial, stream: InputSource, signature: bytes) -> bool:
        """Read the whole stream and check `signature` against it."""


class Encrypt(ABC):
    @abstractmethod
    def encrypt(self, key: KeyMaterial, stream: InputSource, rng: RandomSource) -> bytes:
        """Read the whole stream and return its ciphertext."""


class Decrypt(ABC):
    @abstractmethod
    def decrypt(self, key: KeyMaterial, stream: InputSource) -> bytes:
        """Read the whole stream as ciphertext and return the plaintext."""


class LoadKey(ABC):
    @abstractmethod
    def load_key(self, source: KeySource, operation: Operation) -> KeyMaterial:
        """Load the key needed for `operation` from a key source."""


class GenerateKey(ABC):
    @abstractmethod
    def generate_key(self, rng: RandomSource) -> List[KeyMaterial]:
        """Generate fresh key material."""


CAPABILITIES = {
    Operation.SIGN: Sign,
    Operation.VERIFY: Verify,
    Operation.ENCRYPT: Encrypt,
    Operation.DECRYPT: Decrypt,
    Operation.LOAD_KEY: LoadKey,
    Operation.GENERATE_KEY: GenerateKey,
}


class TextAlgorithm(ABC):
    """Base class for all algorithm variants. Subclasses mix in the capabilities they implement."""

    format: TextFormat

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.description = description

    def supports(self, operation: Operation) -> bool:
        return isinstance(self, CAPABILITIES[Operation(operation)])

    def capabilities(self) -> FrozenSet[Operation]:
        return frozenset(op for op in Operation if self.supports(op))

    def get_info(self) -> Dict[str, Any]:
        """Return algorithm metadata."""
        return {
            'name': self.name,
            'format': self.format.value,
            'description': self.description,
            'capabilities': sorted(op.value for op in self.capabilities()),
            'type': self.__class__.__name__
        }

import hmac
from typing import List

from blake3 import blake3

from ..keys import KEY_LENGTH, KeyMaterial, KeyRole, KeySource, RandomSource, load_key_bytes
from ..utils.io import InputSource, read_input
from .base import GenerateKey, LoadKey, Operation, Sign, TextAlgorithm, TextFormat, Verify

DIGEST_SIZE = 32


class Blake3KeyedHash(TextAlgorithm, Sign, Verify, LoadKey, GenerateKey):
    """BLAKE3 keyed hash used as a symmetric signature, via the blake3 package."""

    format = TextFormat.BLAKE3

    def load_key(self, source: KeySource, operation: Operation = Operation.SIGN) -> KeyMaterial:
        return KeyMaterial(KeyRole.SYMMETRIC, load_key_bytes(source, KEY_LENGTH))

    def generate_key(self, rng: RandomSource) -> List[KeyMaterial]:
        return [KeyMaterial(KeyRole.SYMMETRIC, rng.token_bytes(KEY_LENGTH))]

    def _digest(self, key: KeyMaterial, message: bytes) -> bytes:
        return blake3(message, key=key.require(KeyRole.SYMMETRIC)).digest(length=DIGEST_SIZE)

    def sign(self, key: KeyMaterial, stream: InputSource) -> bytes:
        # Whole input is hashed at once; no incremental update
        return self._digest(key, read_input(stream))

    def verify(self, key: KeyMaterial, stream: InputSource, signature: bytes) -> bool:
        expected = self._digest(key, read_input(stream))
        return hmac.compare_digest(expected, bytes(signature))

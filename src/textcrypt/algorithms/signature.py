from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519
from typing import List

from ..errors import CryptoFailure, KeyLoadError
from ..keys import KEY_LENGTH, KeyMaterial, KeyRole, KeySource, RandomSource, load_key_bytes
from ..utils.io import InputSource, read_input
from .base import GenerateKey, LoadKey, Operation, Sign, TextAlgorithm, TextFormat, Verify

SIGNATURE_SIZE = 64


class Ed25519Signature(TextAlgorithm, Sign, Verify, LoadKey, GenerateKey):
    """Ed25519 signature implementation using cryptography library."""

    format = TextFormat.ED25519

    def generate_key(self, rng: RandomSource) -> List[KeyMaterial]:
        # An Ed25519 private key is a 32-byte seed, so it can come straight from rng
        seed = rng.token_bytes(KEY_LENGTH)
        private_key_obj = self._private_key_obj(KeyMaterial(KeyRole.SIGNING, seed))

        public_bytes = private_key_obj.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw
        )
        return [KeyMaterial(KeyRole.SIGNING, seed), KeyMaterial(KeyRole.VERIFYING, public_bytes)]

    def load_key(self, source: KeySource, operation: Operation = Operation.SIGN) -> KeyMaterial:
        operation = Operation(operation)
        if operation is Operation.SIGN:
            role = KeyRole.SIGNING
        elif operation is Operation.VERIFY:
            role = KeyRole.VERIFYING
        else:
            raise KeyLoadError(f"{self.name} keys cannot be loaded for {operation.value}")

        key = KeyMaterial(role, load_key_bytes(source, KEY_LENGTH))
        if role is KeyRole.VERIFYING:
            # Reject bytes that are not a usable point before any input is read
            self._public_key_obj(key)
        return key

    def _private_key_obj(self, key: KeyMaterial) -> ed25519.Ed25519PrivateKey:
        try:
            return ed25519.Ed25519PrivateKey.from_private_bytes(key.require(KeyRole.SIGNING))
        except (ValueError, UnsupportedAlgorithm) as e:
            raise KeyLoadError(f"Invalid Ed25519 private key: {e}") from e

    def _public_key_obj(self, key: KeyMaterial) -> ed25519.Ed25519PublicKey:
        try:
            return ed25519.Ed25519PublicKey.from_public_bytes(key.require(KeyRole.VERIFYING))
        except (ValueError, UnsupportedAlgorithm) as e:
            raise KeyLoadError(f"Invalid Ed25519 public key: {e}") from e

    def sign(self, key: KeyMaterial, stream: InputSource) -> bytes:
        private_key_obj = self._private_key_obj(key)
        return private_key_obj.sign(read_input(stream))

    def verify(self, key: KeyMaterial, stream: InputSource, signature: bytes) -> bool:
        public_key_obj = self._public_key_obj(key)
        message = read_input(stream)

        if len(signature) != SIGNATURE_SIZE:
            raise CryptoFailure(
                f"Malformed Ed25519 signature: expected {SIGNATURE_SIZE} bytes, got {len(signature)}"
            )

        try:
            public_key_obj.verify(bytes(signature), message)
            return True
        except InvalidSignature:
            return False

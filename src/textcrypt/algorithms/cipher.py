from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305
from typing import List

from ..errors import CryptoFailure
from ..keys import KEY_LENGTH, KeyMaterial, KeyRole, KeySource, RandomSource, load_key_bytes
from ..utils.io import InputSource, read_input
from .base import Decrypt, Encrypt, GenerateKey, LoadKey, Operation, TextAlgorithm, TextFormat

NONCE_SIZE = 12
TAG_SIZE = 16

# Trailing bytes stripped from plaintext before encryption
_TRAILING_WHITESPACE = b' \t\r\n\x0b\x0c'


class ChaCha20Cipher(TextAlgorithm, Encrypt, Decrypt, LoadKey, GenerateKey):
    """
    ChaCha20-Poly1305 authenticated encryption.

    Ciphertext layout is nonce (12 bytes) followed by the AEAD output, with the
    16-byte Poly1305 tag at the end. The nonce travels with the ciphertext, so
    decryption needs nothing but the key.
    """

    format = TextFormat.CHACHA20

    def load_key(self, source: KeySource, operation: Operation = Operation.ENCRYPT) -> KeyMaterial:
        return KeyMaterial(KeyRole.SYMMETRIC, load_key_bytes(source, KEY_LENGTH))

    def generate_key(self, rng: RandomSource) -> List[KeyMaterial]:
        return [KeyMaterial(KeyRole.SYMMETRIC, rng.token_bytes(KEY_LENGTH))]

    def encrypt(self, key: KeyMaterial, stream: InputSource, rng: RandomSource) -> bytes:
        """
        Encrypt the whole input.

        Trailing whitespace is stripped from the input first, so text read from
        a terminal or a file with a final newline round-trips to its trimmed form.
        Binary payloads ending in whitespace bytes lose them.
        """
        cipher = ChaCha20Poly1305(key.require(KeyRole.SYMMETRIC))
        plaintext = read_input(stream).rstrip(_TRAILING_WHITESPACE)

        nonce = rng.token_bytes(NONCE_SIZE)
        if len(nonce) != NONCE_SIZE:
            raise CryptoFailure(f"Random source returned {len(nonce)} nonce bytes, need {NONCE_SIZE}")

        return nonce + cipher.encrypt(nonce, plaintext, None)

    def decrypt(self, key: KeyMaterial, stream: InputSource) -> bytes:
        cipher = ChaCha20Poly1305(key.require(KeyRole.SYMMETRIC))
        data = read_input(stream)

        if len(data) < NONCE_SIZE + TAG_SIZE:
            raise CryptoFailure(
                f"Ciphertext too short: {len(data)} bytes, need at least {NONCE_SIZE + TAG_SIZE}"
            )

        nonce, ciphertext = data[:NONCE_SIZE], data[NONCE_SIZE:]
        try:
            return cipher.decrypt(nonce, ciphertext, None)
        except InvalidTag as e:
            raise CryptoFailure("Decryption failed: authentication tag mismatch") from e

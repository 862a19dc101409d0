from .base import (
    TextAlgorithm,
    TextFormat,
    Operation,
    Sign,
    Verify,
    Encrypt,
    Decrypt,
    LoadKey,
    GenerateKey,
)
from .keyed_hash import Blake3KeyedHash
from .signature import Ed25519Signature
from .cipher import ChaCha20Cipher
from .factory import AlgorithmFactory

__all__ = [
    'TextAlgorithm',
    'TextFormat',
    'Operation',
    'Sign',
    'Verify',
    'Encrypt',
    'Decrypt',
    'LoadKey',
    'GenerateKey',
    'Blake3KeyedHash',
    'Ed25519Signature',
    'ChaCha20Cipher',
    'AlgorithmFactory',
]

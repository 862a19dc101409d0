from .algorithms import AlgorithmFactory, Operation, TextFormat
from .dispatcher import (
    decrypt,
    encrypt,
    generate_key,
    generated_key_names,
    sign,
    supports,
    verify,
    write_generated_keys,
)
from .encoding import Base64Format
from .errors import (
    CryptoFailure,
    EncodingError,
    InvalidFormatError,
    KeyLoadError,
    TextCryptError,
    UnsupportedOperation,
)
from .keys import KeyMaterial, KeyRole, RandomSource, SystemRandomSource

__version__ = "0.1.0"

__all__ = [
    'AlgorithmFactory',
    'Operation',
    'TextFormat',
    'sign',
    'verify',
    'encrypt',
    'decrypt',
    'generate_key',
    'generated_key_names',
    'write_generated_keys',
    'supports',
    'Base64Format',
    'TextCryptError',
    'InvalidFormatError',
    'KeyLoadError',
    'UnsupportedOperation',
    'CryptoFailure',
    'EncodingError',
    'KeyMaterial',
    'KeyRole',
    'RandomSource',
    'SystemRandomSource',
]

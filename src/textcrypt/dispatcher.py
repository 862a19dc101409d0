"""
Format-selector dispatch.

Each function resolves the selector to an algorithm variant, checks that the
variant implements the requested operation, loads the key for that operation
and runs it. Calls are single-shot: nothing is kept between them apart from
the parsed formats configuration.

Generated key shapes per selector:
    blake3   -> [symmetric key]                  (blake3.txt)
    ed25519  -> [signing key, verifying key]     (ed25519.sk, ed25519.pk)
    chacha20 -> [symmetric key]                  (chacha20.txt)
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union

from . import encoding
from .algorithms.base import Operation, TextAlgorithm, TextFormat
from .algorithms.factory import AlgorithmFactory
from .errors import EncodingError, UnsupportedOperation
from .keys import KeyMaterial, KeySource, RandomSource, default_random_source
from .utils.io import InputSource, read_input

Selector = Union[str, TextFormat]


@lru_cache(maxsize=1)
def default_factory() -> AlgorithmFactory:
    return AlgorithmFactory()


def _resolve(selector: Selector, operation: Operation,
             factory: Optional[AlgorithmFactory] = None) -> TextAlgorithm:
    algo = (factory or default_factory()).create_algorithm(selector)
    if not algo.supports(operation):
        raise UnsupportedOperation(algo.format.value, operation.value)
    return algo


def supports(selector: Selector, operation: Union[str, Operation],
             factory: Optional[AlgorithmFactory] = None) -> bool:
    """Whether the selected variant implements `operation`."""
    algo = (factory or default_factory()).create_algorithm(selector)
    return algo.supports(Operation(operation))


def sign(selector: Selector, key_source: KeySource, stream: InputSource, *,
         encoded: bool = False, factory: Optional[AlgorithmFactory] = None) -> bytes:
    """Sign the input. With encoded=True the signature is returned as URL-safe base64."""
    algo = _resolve(selector, Operation.SIGN, factory)
    key = algo.load_key(key_source, Operation.SIGN)
    signature = algo.sign(key, stream)
    if encoded:
        return encoding.encode(signature).encode('ascii')
    return signature


def verify(selector: Selector, key_source: KeySource, stream: InputSource,
           signature: Union[bytes, str], *, encoded: bool = False,
           factory: Optional[AlgorithmFactory] = None) -> bool:
    """
    Verify a signature over the input.

    A signature that does not match returns False. With encoded=True the
    signature is taken as URL-safe base64 text and decoded first; without it
    a str signature raises EncodingError.
    """
    algo = _resolve(selector, Operation.VERIFY, factory)
    key = algo.load_key(key_source, Operation.VERIFY)
    if encoded:
        signature = encoding.decode(signature)
    elif isinstance(signature, str):
        raise EncodingError("Raw signature must be bytes; pass encoded=True for base64 text")
    return algo.verify(key, stream, signature)


def encrypt(selector: Selector, key_source: KeySource, stream: InputSource, *,
            encoded: bool = False, rng: Optional[RandomSource] = None,
            factory: Optional[AlgorithmFactory] = None) -> bytes:
    """Encrypt the input. Output is nonce || ciphertext || tag, base64 text when encoded=True."""
    algo = _resolve(selector, Operation.ENCRYPT, factory)
    key = algo.load_key(key_source, Operation.ENCRYPT)
    ciphertext = algo.encrypt(key, stream, rng or default_random_source())
    if encoded:
        return encoding.encode(ciphertext).encode('ascii')
    return ciphertext


def decrypt(selector: Selector, key_source: KeySource, stream: InputSource, *,
            encoded: bool = False, factory: Optional[AlgorithmFactory] = None) -> bytes:
    """Decrypt the input. With encoded=True the input is URL-safe base64 text."""
    algo = _resolve(selector, Operation.DECRYPT, factory)
    key = algo.load_key(key_source, Operation.DECRYPT)
    if encoded:
        stream = encoding.decode(read_input(stream))
    return algo.decrypt(key, stream)


def generate_key(selector: Selector, *, rng: Optional[RandomSource] = None,
                 factory: Optional[AlgorithmFactory] = None) -> List[KeyMaterial]:
    algo = _resolve(selector, Operation.GENERATE_KEY, factory)
    return algo.generate_key(rng or default_random_source())


def generated_key_names(selector: Selector, factory: Optional[AlgorithmFactory] = None) -> List[str]:
    """File names for the keys generate_key returns, in the same order."""
    return (factory or default_factory()).get_key_files(selector)


def write_generated_keys(selector: Selector, output_dir: Union[str, Path], *,
                         rng: Optional[RandomSource] = None,
                         factory: Optional[AlgorithmFactory] = None) -> List[Path]:
    """Generate keys and write each one as raw bytes under its configured file name."""
    output_dir = Path(output_dir)
    if not output_dir.is_dir():
        raise NotADirectoryError(f"Output path is not a directory: {output_dir}")

    keys = generate_key(selector, rng=rng, factory=factory)
    names = generated_key_names(selector, factory)
    if len(names) != len(keys):
        raise ValueError(f"{selector} produces {len(keys)} keys but {len(names)} file names are configured")

    paths = []
    for name, key in zip(names, keys):
        path = output_dir / name
        path.write_bytes(key.data)
        paths.append(path)
    return paths

import os
import sys
from typing import BinaryIO, Union

InputSource = Union[str, os.PathLike, bytes, bytearray, memoryview, BinaryIO]

STDIN = "-"


def read_input(source: InputSource) -> bytes:
    """
    Read an entire input source into memory.

    Accepts raw bytes, a readable binary stream, a file path, or "-" for
    standard input. Streams passed in by the caller are consumed but not closed.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)

    if isinstance(source, str) and source == STDIN:
        return sys.stdin.buffer.read()

    if isinstance(source, (str, os.PathLike)):
        with open(source, 'rb') as f:
            return f.read()

    data = source.read()
    if isinstance(data, str):
        raise TypeError("Input stream must be opened in binary mode")
    return bytes(data)

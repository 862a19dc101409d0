"""
Exception classes for textcrypt.
Every failure surfaced by the library derives from TextCryptError.
"""

from typing import Optional


class TextCryptError(Exception):
    """Base textcrypt error class"""

    code = "TEXTCRYPT_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class InvalidFormatError(TextCryptError, ValueError):
    """Unknown format selector text"""

    code = "INVALID_FORMAT"


class KeyLoadError(TextCryptError):
    """Key source unreadable, too short, or rejected by the primitive"""

    code = "KEY_LOAD"


class UnsupportedOperation(TextCryptError):
    """The selected algorithm does not implement the requested operation"""

    code = "UNSUPPORTED_OPERATION"

    def __init__(self, format_name: str, operation: str):
        super().__init__(f"{format_name} does not support {operation}")
        self.format_name = format_name
        self.operation = operation


class CryptoFailure(TextCryptError):
    """Authentication failure, malformed signature, or primitive error"""

    code = "CRYPTO_FAILURE"


class EncodingError(TextCryptError, ValueError):
    """Input does not conform to the text encoding"""

    code = "ENCODING"

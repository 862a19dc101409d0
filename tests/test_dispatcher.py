import io

import pytest

import textcrypt
from textcrypt import dispatcher
from textcrypt.algorithms.base import Operation, TextFormat
from textcrypt.encoding import decode, encode
from textcrypt.errors import (
    CryptoFailure,
    EncodingError,
    InvalidFormatError,
    KeyLoadError,
    TextCryptError,
    UnsupportedOperation,
)


def test_blake3_zero_key_scenario(zero_key_file):
    digest = dispatcher.sign("blake3", zero_key_file, b"hello world")
    assert len(digest) == 32
    assert dispatcher.verify("blake3", zero_key_file, b"hello world", digest) is True

    tampered = bytes([digest[0] ^ 0xFF]) + digest[1:]
    assert dispatcher.verify("blake3", zero_key_file, b"hello world", tampered) is False


def test_chacha20_cargo_toml_scenario(tmp_path, rng):
    key_file = tmp_path / "chacha20.txt"
    key_file.write_bytes(bytes(range(32)))

    ciphertext = dispatcher.encrypt("chacha20", key_file, b"Cargo.toml", rng=rng)
    assert len(ciphertext) > 12

    text = encode(ciphertext)
    assert dispatcher.decrypt("chacha20", key_file, text.encode(), encoded=True) == b"Cargo.toml"


def test_ed25519_keypair_scenario(tmp_path):
    sk_path, pk_path = dispatcher.write_generated_keys("ed25519", tmp_path)
    signature = dispatcher.sign("ed25519", sk_path, b"hello world")
    assert dispatcher.verify("ed25519", pk_path, b"hello world", signature) is True

    _, unrelated_public = dispatcher.generate_key("ed25519")
    assert dispatcher.verify("ed25519", unrelated_public.data, b"hello world", signature) is False


@pytest.mark.parametrize("selector", ["blake3", "ed25519"])
def test_sign_verify_round_trip(selector, rng):
    keys = dispatcher.generate_key(selector, rng=rng)
    private, public = keys[0].data, keys[-1].data
    for message in (b"", b"hello world", bytes(range(256)) * 10):
        signature = dispatcher.sign(selector, private, message)
        assert dispatcher.verify(selector, public, message, signature) is True


@pytest.mark.parametrize("plaintext", [b"", b"x", b"hello world\n", "héllo wörld  \n".encode()])
def test_encrypt_decrypt_round_trip(plaintext, rng):
    key = dispatcher.generate_key("chacha20", rng=rng)[0].data
    ciphertext = dispatcher.encrypt("chacha20", key, plaintext, rng=rng)
    assert dispatcher.decrypt("chacha20", key, ciphertext) == plaintext.rstrip()


def test_encoded_sign_and_verify(zero_key_file):
    signature = dispatcher.sign("blake3", zero_key_file, b"hello world", encoded=True)
    assert b"=" not in signature
    assert decode(signature) == dispatcher.sign("blake3", zero_key_file, b"hello world")
    assert dispatcher.verify("blake3", zero_key_file, b"hello world", signature.decode(), encoded=True) is True


def test_encoded_encrypt_and_decrypt(zero_key_file):
    text = dispatcher.encrypt("chacha20", zero_key_file, b"secret\n", encoded=True)
    text.decode("ascii")
    assert dispatcher.decrypt("chacha20", zero_key_file, io.BytesIO(text + b"\n"), encoded=True) == b"secret"


def test_verify_rejects_text_signature_without_encoded(zero_key_file):
    with pytest.raises(EncodingError) as exc_info:
        dispatcher.verify("blake3", zero_key_file, b"hello world", "abc")
    assert isinstance(exc_info.value, TextCryptError)


def test_encoded_verify_rejects_bad_text(zero_key_file):
    with pytest.raises(EncodingError):
        dispatcher.verify("blake3", zero_key_file, b"hello world", "not base64!", encoded=True)


def test_encoded_decrypt_rejects_bad_text(zero_key_file):
    with pytest.raises(EncodingError):
        dispatcher.decrypt("chacha20", zero_key_file, b"****", encoded=True)


def test_malformed_ed25519_signature(rng):
    _, public = dispatcher.generate_key("ed25519", rng=rng)
    with pytest.raises(CryptoFailure):
        dispatcher.verify("ed25519", public.data, b"hello world", b"\x00" * 10)


@pytest.mark.parametrize("selector, call", [
    ("blake3", lambda k: dispatcher.encrypt("blake3", k, b"data")),
    ("blake3", lambda k: dispatcher.decrypt("blake3", k, b"data")),
    ("ed25519", lambda k: dispatcher.encrypt("ed25519", k, b"data")),
    ("chacha20", lambda k: dispatcher.sign("chacha20", k, b"data")),
    ("chacha20", lambda k: dispatcher.verify("chacha20", k, b"data", bytes(32))),
])
def test_unsupported_operation(selector, call):
    with pytest.raises(UnsupportedOperation) as exc_info:
        call(bytes(32))
    assert exc_info.value.format_name == selector
    assert exc_info.value.code == "UNSUPPORTED_OPERATION"


def test_capability_checked_before_key_load():
    with pytest.raises(UnsupportedOperation):
        dispatcher.encrypt("blake3", b"short", b"data")


@pytest.mark.parametrize("selector, call", [
    ("blake3", lambda k: dispatcher.sign("blake3", k, b"data")),
    ("blake3", lambda k: dispatcher.verify("blake3", k, b"data", bytes(32))),
    ("ed25519", lambda k: dispatcher.sign("ed25519", k, b"data")),
    ("ed25519", lambda k: dispatcher.verify("ed25519", k, b"data", bytes(64))),
    ("chacha20", lambda k: dispatcher.encrypt("chacha20", k, b"data")),
    ("chacha20", lambda k: dispatcher.decrypt("chacha20", k, bytes(40))),
])
def test_short_key_source(selector, call, short_key_file):
    with pytest.raises(KeyLoadError):
        call(short_key_file)


def test_missing_key_file(tmp_path):
    with pytest.raises(KeyLoadError):
        dispatcher.sign("blake3", tmp_path / "nope.key", b"data")


def test_invalid_selector():
    with pytest.raises(InvalidFormatError):
        dispatcher.sign("rsa", bytes(32), b"data")


def test_selector_is_case_insensitive(zero_key_file):
    assert dispatcher.sign("BLAKE3", zero_key_file, b"x") == dispatcher.sign(TextFormat.BLAKE3, zero_key_file, b"x")


def test_input_from_path_and_stdin(tmp_path, zero_key_file, monkeypatch):
    message = tmp_path / "message.txt"
    message.write_bytes(b"hello world")
    expected = dispatcher.sign("blake3", zero_key_file, b"hello world")
    assert dispatcher.sign("blake3", zero_key_file, message) == expected
    assert dispatcher.sign("blake3", zero_key_file, str(message)) == expected

    class FakeStdin:
        buffer = io.BytesIO(b"hello world")

    monkeypatch.setattr("sys.stdin", FakeStdin())
    assert dispatcher.sign("blake3", zero_key_file, "-") == expected


def test_missing_input_file(zero_key_file, tmp_path):
    with pytest.raises(OSError):
        dispatcher.sign("blake3", zero_key_file, tmp_path / "missing.txt")


@pytest.mark.parametrize("selector, names", [
    ("blake3", ["blake3.txt"]),
    ("ed25519", ["ed25519.sk", "ed25519.pk"]),
    ("chacha20", ["chacha20.txt"]),
])
def test_write_generated_keys(selector, names, tmp_path, rng):
    paths = dispatcher.write_generated_keys(selector, tmp_path, rng=rng)
    assert [p.name for p in paths] == names
    assert dispatcher.generated_key_names(selector) == names
    for path in paths:
        assert len(path.read_bytes()) == 32


def test_write_generated_keys_requires_directory(tmp_path):
    with pytest.raises(NotADirectoryError):
        dispatcher.write_generated_keys("blake3", tmp_path / "missing")


def test_generate_key_shapes():
    assert len(dispatcher.generate_key("blake3")) == 1
    assert len(dispatcher.generate_key("chacha20")) == 1
    assert len(dispatcher.generate_key("ed25519")) == 2


def test_supports():
    assert dispatcher.supports("blake3", Operation.SIGN)
    assert dispatcher.supports("chacha20", "encrypt")
    assert not dispatcher.supports("chacha20", "sign")
    assert not dispatcher.supports("ed25519", Operation.DECRYPT)


def test_package_exports(zero_key_file):
    assert textcrypt.sign is dispatcher.sign
    assert textcrypt.verify("blake3", zero_key_file, b"m", textcrypt.sign("blake3", zero_key_file, b"m"))

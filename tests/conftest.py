import pytest

from textcrypt.algorithms.factory import AlgorithmFactory


class CountingRandomSource:
    """Deterministic RandomSource: every call returns a distinct, reproducible byte run."""

    def __init__(self, start: int = 0):
        self.calls = start

    def token_bytes(self, n: int) -> bytes:
        offset = self.calls
        self.calls += 1
        return bytes((offset * 31 + i) % 256 for i in range(n))


@pytest.fixture
def rng() -> CountingRandomSource:
    return CountingRandomSource()


@pytest.fixture(scope="session")
def factory() -> AlgorithmFactory:
    return AlgorithmFactory()


@pytest.fixture
def zero_key_file(tmp_path):
    path = tmp_path / "zero.key"
    path.write_bytes(bytes(32))
    return path


@pytest.fixture
def short_key_file(tmp_path):
    path = tmp_path / "short.key"
    path.write_bytes(b"\x01" * 31)
    return path

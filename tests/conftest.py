import hashlib

import pytest

# Single repeated symbol: entropy 0, every pattern except sequences fires.
ZEROS_HASH = "0" * 128

# All 16 hex digits equally often: entropy exactly 4.0.
UNIFORM_HASH = "0123456789abcdef" * 8

# Eight digits, no patterns: entropy 3.0, score 53, checksum 944.
MIXED_HASH = "3a5b6879" * 16


@pytest.fixture
def zeros_hash():
    return ZEROS_HASH


@pytest.fixture
def uniform_hash():
    return UNIFORM_HASH


@pytest.fixture
def mixed_hash():
    return MIXED_HASH


@pytest.fixture
def sha512_hashes():
    """Realistic hex digests for range checks."""
    return [hashlib.sha512(f"round-{i}".encode()).hexdigest() for i in range(40)]

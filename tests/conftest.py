import os

import pytest


@pytest.fixture
def key32():
    return bytes(range(1, 33))


@pytest.fixture
def key16():
    return bytes(range(101, 117))


@pytest.fixture
def nonce():
    return bytes.fromhex("0102030405060708")


@pytest.fixture
def message():
    # spans several blocks and ends mid-block
    return os.urandom(64 * 5 + 23)

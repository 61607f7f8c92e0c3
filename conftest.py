import pytest


@pytest.fixture
def abc_block() -> bytes:
    """The single padded block of the message "abc"."""
    return b"abc" + b"\x80" + bytes(52) + (24).to_bytes(8, byteorder="big")

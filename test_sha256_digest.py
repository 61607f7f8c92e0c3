import pytest

from sha256_constants import H0
from sha256_digest import digest_to_bytes, format_digest


def test_format_initial_state():
    assert format_digest(H0) == (
        "6a09e667bb67ae853c6ef372a54ff53a510e527f9b05688c1f83d9ab5be0cd19"
    )


def test_format_pads_each_word_to_eight_digits():
    text = format_digest((0, 1, 0xA, 0xFF, 0x1000, 0xABCDEF, 0x0FFFFFFF, 0xFFFFFFFF))

    assert len(text) == 64
    assert text == (
        "00000000" "00000001" "0000000a" "000000ff"
        "00001000" "00abcdef" "0fffffff" "ffffffff"
    )
    assert text == text.lower()


def test_bytes_match_hex():
    raw = digest_to_bytes(H0)
    assert len(raw) == 32
    assert raw.hex() == format_digest(H0)


@pytest.mark.parametrize("words", [(), H0[:7], H0 + (0,)])
def test_rejects_wrong_word_count(words):
    with pytest.raises(ValueError):
        format_digest(words)
    with pytest.raises(ValueError):
        digest_to_bytes(words)

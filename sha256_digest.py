"""Rendering of a final SHA-256 chaining value."""

from __future__ import annotations

from typing import Sequence


def _check_words(state: Sequence[int]) -> None:
    if len(state) != 8:
        raise ValueError(f"A SHA-256 digest has 8 words, got {len(state)}")


def format_digest(state: Sequence[int]) -> str:
    """Return the 64-character lowercase hex form of an 8-word state.

    Each word is written as exactly 8 hex digits, most significant byte first,
    in state order.
    """
    _check_words(state)
    return "".join(f"{word:08x}" for word in state)


def digest_to_bytes(state: Sequence[int]) -> bytes:
    """Convert the final chaining value H_N into the 32-byte SHA-256 digest."""
    _check_words(state)
    return b"".join(word.to_bytes(4, byteorder="big") for word in state)

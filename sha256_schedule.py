"""SHA-256 message schedule expansion.

A 64-byte block is turned into the 64-word schedule ``w[0..63]`` consumed by
the compression rounds:

    w[i] = block word i (big-endian)                          for 0 <= i < 16
    w[i] = s1(w[i-2]) + s0(w[i-15]) + w[i-16] + w[i-7]        for 16 <= i < 64

    s0(x) = (x >>> 7) ^ (x >>> 18) ^ (x >> 3)
    s1(x) = (x >>> 17) ^ (x >>> 19) ^ (x >> 10)

All additions are performed modulo 2**32.
"""

from __future__ import annotations

from typing import List

from compress import rotr
from sha256_constants import BLOCK_SIZE, MASK32


SCHEDULE_LENGTH = 64


def _shr(x: int, n: int) -> int:
    """Right-shift a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return x >> n


def small_sigma0(x: int) -> int:
    """SHA-256 function σ0 used in the message schedule."""
    return (rotr(x, 7) ^ rotr(x, 18) ^ _shr(x, 3)) & MASK32


def small_sigma1(x: int) -> int:
    """SHA-256 function σ1 used in the message schedule."""
    return (rotr(x, 17) ^ rotr(x, 19) ^ _shr(x, 10)) & MASK32


def block_words(block: bytes) -> List[int]:
    """Split a 64-byte block into its sixteen big-endian 32-bit words."""
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Expected {BLOCK_SIZE}-byte block, got {len(block)}")

    return [
        int.from_bytes(block[4 * i : 4 * (i + 1)], byteorder="big")
        for i in range(BLOCK_SIZE // 4)
    ]


def build_message_schedule(block: bytes) -> List[int]:
    """Given a 512-bit block, build the 64-word message schedule w[0..63]."""
    w: List[int] = block_words(block) + [0] * (SCHEDULE_LENGTH - 16)

    for i in range(16, SCHEDULE_LENGTH):
        s0 = small_sigma0(w[i - 15])
        s1 = small_sigma1(w[i - 2])
        w[i] = (s1 + s0 + w[i - 16] + w[i - 7]) & MASK32

    return w

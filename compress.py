"""SHA-256 compression function.

One round of the compression loop, given the working state words
`(a, b, c, d, e, f, g, h)`, the round constant `k` and the message schedule
word `w`, computes:

    S1    = (e >>> 6) ^ (e >>> 11) ^ (e >>> 25)
    ch    = (e & f) ^ (~e & g)
    temp1 = k + w + ch + h + S1

    S0    = (a >>> 2) ^ (a >>> 13) ^ (a >>> 22)
    maj   = (a & b) ^ (a & c) ^ (b & c)
    temp2 = S0 + maj

    h' = g, g' = f, f' = e, e' = d + temp1,
    d' = c, c' = b, b' = a, a' = temp1 + temp2

After 64 rounds the block's contribution is folded into the running hash
state by word-wise addition. All additions are performed modulo 2**32.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple, Union

from sha256_constants import K_VALUES, MASK32


State = Tuple[int, int, int, int, int, int, int, int]


def rotr(x: int, n: int) -> int:
    """Right-rotate a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return ((x >> n) | (x << (32 - n))) & MASK32


def big_sigma0(a: int) -> int:
    """SHA-256 function Σ0 applied to working word `a`."""
    return rotr(a, 2) ^ rotr(a, 13) ^ rotr(a, 22)


def big_sigma1(e: int) -> int:
    """SHA-256 function Σ1 applied to working word `e`."""
    return rotr(e, 6) ^ rotr(e, 11) ^ rotr(e, 25)


def ch(e: int, f: int, g: int) -> int:
    """Choose: bits of `f` where `e` is set, bits of `g` elsewhere."""
    return ((e & f) ^ (~e & g)) & MASK32


def maj(a: int, b: int, c: int) -> int:
    """Majority of each bit position across `a`, `b` and `c`."""
    return (a & b) ^ (a & c) ^ (b & c)


def compression(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    w: int,
    k: int,
) -> State:
    """Perform one SHA-256 compression round.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        32-bit words representing the current working state.
    w : int
        Message schedule word `w[i]`.
    k : int
        Round constant `k[i]`.

    Returns
    -------
    (a_new, b_new, c_new, d_new, e_new, f_new, g_new, h_new) : tuple[int, ...]
        Updated working state after one compression round, all reduced modulo 2**32.
    """
    temp1 = (k + w + ch(e, f, g) + h + big_sigma1(e)) & MASK32
    temp2 = (big_sigma0(a) + maj(a, b, c)) & MASK32

    return (
        (temp1 + temp2) & MASK32,
        a,
        b,
        c,
        (d + temp1) & MASK32,
        e,
        f,
        g,
    )


def compress64(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    ws: Sequence[int],
    track_states: bool = False,
) -> Union[State, Tuple[State, List[State]]]:
    """Run the full 64-round SHA-256 compression loop for one block.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        Initial working state words (typically the current hash value).
    ws : Sequence[int]
        The 64-word message schedule `w[0..63]` for this block.
    track_states : bool
        When true, also collect the working state after every round.

    Returns
    -------
    (a, b, c, d, e, f, g, h) : tuple[int, ...]
        Final working state words after 64 rounds. With ``track_states`` the
        return value is ``(final_state, round_states)`` where
        ``round_states[i]`` is the working state after round ``i``.
    """
    if len(ws) != 64:
        raise ValueError(f"compress64 expects 64 message schedule words, got {len(ws)}")

    work: State = (
        a & MASK32,
        b & MASK32,
        c & MASK32,
        d & MASK32,
        e & MASK32,
        f & MASK32,
        g & MASK32,
        h & MASK32,
    )
    round_states: List[State] = []
    for i in range(64):
        work = compression(*work, ws[i] & MASK32, K_VALUES[i])
        if track_states:
            round_states.append(work)

    if track_states:
        return work, round_states
    return work


def add_states(state: Sequence[int], work: Sequence[int]) -> State:
    """Fold a block's working registers into the chaining value.

        H_{i+1}[j] = (H_i[j] + working[j]) mod 2^32
    """
    if len(state) != 8 or len(work) != 8:
        raise ValueError(
            f"Expected two 8-word states, got {len(state)} and {len(work)} words"
        )
    return tuple((x + y) & MASK32 for x, y in zip(state, work))  # type: ignore[return-value]


def compress_block(state: Sequence[int], schedule: Sequence[int]) -> State:
    """Advance the running hash state by one block's message schedule."""
    return add_states(state, compress64(*state, schedule))

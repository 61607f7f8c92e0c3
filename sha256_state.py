"""Streaming SHA-256 engine.

`SHA256State` accepts input in chunks of any size through `update`, buffers
bytes until a full 64-byte block is available, and compresses blocks one at
a time with `compress_block`. `digest` appends the padding, compresses the
final block(s), returns the hash and resets the engine so it can be reused:

    state = SHA256State()
    for chunk in chunks:
        state.update(chunk)
    print(state.digest())
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Optional

from compress import State, add_states, compress64, compress_block
from sha256_constants import (
    BLOCK_SIZE,
    H0,
    LENGTH_FIELD_OFFSET,
    LENGTH_FIELD_SIZE,
    PADDING_MARKER,
)
from sha256_digest import digest_to_bytes, format_digest
from sha256_schedule import build_message_schedule


logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = BLOCK_SIZE


class BlockStateError(AssertionError):
    """Raised when a block is compressed while the buffer is not exactly full.

    This can only happen through a bug in the buffering logic; no input
    sequence triggers it.
    """


class SHA256State:
    """Incremental SHA-256 hasher.

    An instance owns its running state, a 64-byte accumulation buffer, the
    number of buffered bytes and the total message length. It is not
    thread-safe: callers sharing one instance between threads must serialise
    `update` and `digest` themselves. Separate instances are independent.

    Args:
        trace_rounds: Log the working state after each of the 64 rounds of
            every block at DEBUG level.
    """

    def __init__(self, trace_rounds: bool = False) -> None:
        self.trace_rounds = trace_rounds
        self.reset()

    @property
    def pending_count(self) -> int:
        """Number of bytes waiting in the buffer for a full block."""
        return self._pending_count

    @property
    def length(self) -> int:
        """Number of message bytes passed to `update` since the last reset."""
        return self._length

    @property
    def blocks_processed(self) -> int:
        """Number of blocks compressed since the last reset."""
        return self._blocks

    def reset(self) -> None:
        """Return the engine to its initial, empty state."""
        self._values: State = H0
        self._length = 0
        self._pending_count = 0
        self._pending = bytearray(BLOCK_SIZE)
        self._blocks = 0

    def update(self, data) -> None:
        """Feed `data` (any bytes-like object) into the hash."""
        if isinstance(data, str):
            raise TypeError("Unicode strings must be encoded before hashing")

        view = memoryview(data).cast("B")
        self._length += len(view)

        # Consume entire blocks while they are available.
        while len(view) + self._pending_count >= BLOCK_SIZE:
            take = BLOCK_SIZE - self._pending_count
            self._pending[self._pending_count :] = view[:take]
            self._pending_count += take
            self._process_block()
            view = view[take:]

        # Keep the remainder for the next call.
        end = self._pending_count + len(view)
        self._pending[self._pending_count : end] = view
        self._pending_count = end

    def _process_block(self) -> None:
        if self._pending_count != BLOCK_SIZE or len(self._pending) != BLOCK_SIZE:
            raise BlockStateError(
                f"Block compression requires {BLOCK_SIZE} buffered bytes, "
                f"have {self._pending_count}"
            )

        schedule = build_message_schedule(bytes(self._pending))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "SHA-256 block %d: w[0..63] = %s",
                self._blocks,
                " ".join(f"{w:08x}" for w in schedule),
            )

        if self.trace_rounds:
            work, round_states = compress64(*self._values, schedule, track_states=True)
            for i, round_state in enumerate(round_states):
                logger.debug(
                    "Round %2d %s", i, " ".join(f"{w:08x}" for w in round_state)
                )
            self._values = add_states(self._values, work)
        else:
            self._values = compress_block(self._values, schedule)

        self._pending_count = 0
        self._blocks += 1

    def digest_words(self) -> State:
        """Finish the message and return the final 8-word state.

        The engine is reset afterwards.
        """
        # Bit length of the message itself, before any padding is buffered.
        final_length = (self._length * 8).to_bytes(LENGTH_FIELD_SIZE, byteorder="big")

        self.update(bytes([PADDING_MARKER]))

        # No room left for the length field: zero-fill and start a new block.
        if self._pending_count > LENGTH_FIELD_OFFSET:
            self.update(bytes(BLOCK_SIZE - self._pending_count))

        self.update(bytes(LENGTH_FIELD_OFFSET - self._pending_count))
        self.update(final_length)

        value = self._values
        logger.debug("SHA-256 finished after %d block(s)", self._blocks)
        self.reset()
        return value

    def digest(self) -> str:
        """Finish the message, reset the engine and return the hex digest."""
        return format_digest(self.digest_words())

    def digest_bytes(self) -> bytes:
        """Like `digest`, but return the raw 32-byte digest."""
        return digest_to_bytes(self.digest_words())


def sha256(data: bytes) -> bytes:
    """Compute the SHA-256 digest of `data` in one call."""
    state = SHA256State()
    state.update(data)
    return state.digest_bytes()


def sha256_hex(data: bytes) -> str:
    """Convenience helper to return the SHA-256 hex digest of `data`."""
    state = SHA256State()
    state.update(data)
    return state.digest()


def hash_stream(
    stream: BinaryIO,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    state: Optional[SHA256State] = None,
) -> str:
    """Hash everything readable from a binary file object.

    The stream is read `chunk_size` bytes at a time and each chunk is passed
    to `update`. A caller-supplied `state` is reused and left reset.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if state is None:
        state = SHA256State()

    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        state.update(chunk)
    return state.digest()

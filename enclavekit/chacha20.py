"""ChaCha20 stream cipher (96-bit nonce, 32-bit block counter)."""

from __future__ import annotations

import struct
from collections.abc import Sequence

from .wordops import MASK32, rotate32_left

__all__ = [
    "KEY_SIZE",
    "NONCE_SIZE",
    "BLOCK_SIZE",
    "quarter_round",
    "chacha20_key_block",
    "chacha20",
]

KEY_SIZE = 32
NONCE_SIZE = 12
BLOCK_SIZE = 64
_STATE_WORDS = 16
_DOUBLE_ROUNDS = 10
_COUNTER_LIMIT = 1 << 32

# "expand 32-byte k"
_SIGMA = (0x61707865, 0x3320646E, 0x79622D32, 0x6B206574)

_DOUBLE_ROUND = (
    (0, 4, 8, 12),
    (1, 5, 9, 13),
    (2, 6, 10, 14),
    (3, 7, 11, 15),
    (0, 5, 10, 15),
    (1, 6, 11, 12),
    (2, 7, 8, 13),
    (3, 4, 9, 14),
)


def _quarter_round(st: list[int], a: int, b: int, c: int, d: int) -> None:
    st[a] = (st[a] + st[b]) & MASK32
    st[d] = rotate32_left(st[d] ^ st[a], 16)
    st[c] = (st[c] + st[d]) & MASK32
    st[b] = rotate32_left(st[b] ^ st[c], 12)
    st[a] = (st[a] + st[b]) & MASK32
    st[d] = rotate32_left(st[d] ^ st[a], 8)
    st[c] = (st[c] + st[d]) & MASK32
    st[b] = rotate32_left(st[b] ^ st[c], 7)


def quarter_round(state: Sequence[int], a: int, b: int, c: int, d: int) -> list[int]:
    """Apply one quarter round to words ``a, b, c, d`` of a 16-word state.

    The input is left untouched; the updated state is returned as a new list.
    """
    words = list(state)
    if len(words) != _STATE_WORDS:
        raise ValueError(f"state must hold {_STATE_WORDS} words, got {len(words)}")
    if any(not 0 <= w <= MASK32 for w in words):
        raise ValueError("state words must be 32-bit unsigned integers")
    if any(not 0 <= i < _STATE_WORDS for i in (a, b, c, d)):
        raise ValueError("quarter round indices must be in 0..15")
    _quarter_round(words, a, b, c, d)
    return words


def _check_counter(counter: int) -> None:
    if not 0 <= counter < _COUNTER_LIMIT:
        raise ValueError(f"counter must be a 32-bit unsigned integer: {counter}")


def _initial_state(key: bytes, nonce: bytes) -> list[int]:
    key = bytes(key)
    nonce = bytes(nonce)
    if len(key) != KEY_SIZE:
        raise ValueError(f"key must be {KEY_SIZE} bytes, got {len(key)}")
    if len(nonce) != NONCE_SIZE:
        raise ValueError(f"nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")
    return [*_SIGMA, *struct.unpack("<8I", key), 0, *struct.unpack("<3I", nonce)]


def _block(state: list[int], counter: int) -> bytes:
    initial = list(state)
    initial[12] = counter
    working = list(initial)
    for _ in range(_DOUBLE_ROUNDS):
        for indices in _DOUBLE_ROUND:
            _quarter_round(working, *indices)
    return struct.pack(
        "<16I", *((w + s) & MASK32 for w, s in zip(working, initial))
    )


def chacha20_key_block(key: bytes, nonce: bytes, counter: int) -> bytes:
    """Return the 64-byte keystream block for ``counter``."""
    _check_counter(counter)
    return _block(_initial_state(key, nonce), counter)


def chacha20(data: bytes, key: bytes, nonce: bytes, counter: int) -> bytes:
    """Encrypt or decrypt ``data`` starting at block ``counter``."""
    data = bytes(data)
    _check_counter(counter)
    state = _initial_state(key, nonce)
    if counter + len(data) // BLOCK_SIZE >= _COUNTER_LIMIT:
        raise ValueError("data too long for the given starting counter")
    out = bytearray()
    for index, start in enumerate(range(0, len(data), BLOCK_SIZE)):
        chunk = data[start:start + BLOCK_SIZE]
        stream = _block(state, counter + index)[: len(chunk)]
        mixed = int.from_bytes(chunk, "little") ^ int.from_bytes(stream, "little")
        out += mixed.to_bytes(len(chunk), "little")
    return bytes(out)
"""Poly1305 one-time authenticator in the block layout used by the AEAD.

Messages are fed in 16-byte blocks.  A trailing partial block is padded
with zero bytes to a full block and authenticated as a full block; this is
the padding the ChaCha20-Poly1305 construction requires.  The tag is
produced after a final 16-byte block, normally the encoded lengths.
"""

from __future__ import annotations

__all__ = [
    "BLOCK_SIZE",
    "KEY_SIZE",
    "TAG_SIZE",
    "PRIME",
    "CLAMP",
    "mul_div_16",
    "Poly1305State",
]

BLOCK_SIZE = 16
KEY_SIZE = 16
TAG_SIZE = 16
PRIME = (1 << 130) - 5
CLAMP = 0x0FFFFFFC0FFFFFFC0FFFFFFC0FFFFFFF
_HIGH_BIT = 1 << 128
_MASK128 = (1 << 128) - 1
_MAX_LENGTH = 1 << 32


def _check_length(length: int) -> None:
    if not 0 <= length < _MAX_LENGTH:
        raise ValueError(f"length must be a 32-bit unsigned integer: {length}")


def mul_div_16(length: int) -> int:
    """Return ``length`` rounded down to a multiple of 16."""
    _check_length(length)
    return BLOCK_SIZE * (length >> 4)


def _exact(data: bytes, size: int, name: str) -> bytes:
    data = bytes(data)
    if len(data) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(data)}")
    return data


class Poly1305State:
    """Running Poly1305 state: the clamped key ``r`` and accumulator ``h``."""

    def __init__(self) -> None:
        self.r = 0
        self.h = 0

    def _update(self, block: bytes) -> None:
        n = int.from_bytes(block, "little") | _HIGH_BIT
        self.h = (self.h + n) * self.r % PRIME

    def _blocks(self, data: bytes) -> None:
        full = mul_div_16(len(data))
        for start in range(0, full, BLOCK_SIZE):
            self._update(data[start:start + BLOCK_SIZE])

    def pad_last(self, data: bytes) -> None:
        """Authenticate a final partial block, zero-padded to 16 bytes.

        Empty data leaves the state unchanged.
        """
        data = bytes(data)
        if len(data) > BLOCK_SIZE:
            raise ValueError(f"last block holds at most {BLOCK_SIZE} bytes, got {len(data)}")
        if data:
            self._update(data.ljust(BLOCK_SIZE, b"\0"))

    def blocks_init(self, data: bytes, key: bytes) -> None:
        """Load and clamp ``r`` from ``key``, reset ``h`` and absorb ``data``."""
        data = bytes(data)
        _check_length(len(data))
        key = _exact(key, KEY_SIZE, "key")
        self.r = int.from_bytes(key, "little") & CLAMP
        self.h = 0
        self._blocks(data)
        self.pad_last(data[mul_div_16(len(data)):])

    def blocks_continue(self, data: bytes) -> None:
        """Absorb more ``data``, padding its trailing partial block."""
        data = bytes(data)
        _check_length(len(data))
        self._blocks(data)
        self.pad_last(data[mul_div_16(len(data)):])

    def blocks_finish_accumulator(self, block: bytes) -> int:
        """Absorb a last full ``block`` and return the reduced accumulator."""
        self._update(_exact(block, BLOCK_SIZE, "block"))
        self.h %= PRIME
        return self.h

    def blocks_finish(self, block: bytes, key_s: bytes) -> bytes:
        """Absorb a last full ``block`` and return the 16-byte tag."""
        key_s = _exact(key_s, KEY_SIZE, "key_s")
        acc = self.blocks_finish_accumulator(block)
        mac = (acc + int.from_bytes(key_s, "little")) & _MASK128
        return mac.to_bytes(TAG_SIZE, "little")
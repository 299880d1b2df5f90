"""Arithmetic in GF(2**255 - 19) on five 51-bit limbs.

An element is a list of five unsigned 64-bit integers ``[l0, .., l4]``
whose value is ``sum(l_i << (51 * i))``.  Limbs may exceed 51 bits between
operations; :func:`fcontract` produces the canonical 32-byte encoding.
All functions return new lists and leave their arguments unchanged.
"""

from __future__ import annotations

import struct
from collections.abc import Sequence

from .wordops import MASK64, MASK128, eq_mask, gte_mask

__all__ = [
    "PRIME",
    "LIMB_COUNT",
    "LIMB_BITS",
    "ELEMENT_SIZE",
    "fsum",
    "fdifference",
    "fscalar",
    "fmul",
    "fsquare_times",
    "crecip",
    "fexpand",
    "fcontract",
]

PRIME = (1 << 255) - 19
LIMB_COUNT = 5
LIMB_BITS = 51
ELEMENT_SIZE = 32
_MASK51 = (1 << LIMB_BITS) - 1
_P0 = 0x7FFFFFFFFFFED

# 2p spread over the limbs, added before subtracting to avoid underflow.
_TWO_P = (
    0x3FFFFFFFFFFF68,
    0x3FFFFFFFFFFFF8,
    0x3FFFFFFFFFFFF8,
    0x3FFFFFFFFFFFF8,
    0x3FFFFFFFFFFFF8,
)


def _limbs(value: Sequence[int], name: str = "element") -> list[int]:
    limbs = list(value)
    if len(limbs) != LIMB_COUNT:
        raise ValueError(f"{name} must have {LIMB_COUNT} limbs, got {len(limbs)}")
    for limb in limbs:
        if not isinstance(limb, int) or not 0 <= limb <= MASK64:
            raise ValueError(f"{name} limbs must be 64-bit unsigned integers: {limb!r}")
    return limbs


def _carry_wide(t: list[int]) -> None:
    for i in range(LIMB_COUNT - 1):
        t[i + 1] = (t[i + 1] + (t[i] >> LIMB_BITS)) & MASK128
        t[i] &= _MASK51


def _reduce_wide(t: list[int]) -> list[int]:
    """Carry a wide element, fold the top carry back and narrow to 64 bits."""
    _carry_wide(t)
    top = t[4]
    t[4] = top & _MASK51
    t[0] = (t[0] + 19 * ((top >> LIMB_BITS) & MASK64)) & MASK128
    return [w & MASK64 for w in t]


def _carry_first(out: list[int]) -> list[int]:
    i0, i1 = out[0], out[1]
    out[0] = i0 & _MASK51
    out[1] = (i1 + (i0 >> LIMB_BITS)) & MASK64
    return out


def fsum(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """Return ``a + b`` limb by limb, without carrying."""
    a = _limbs(a, "a")
    b = _limbs(b, "b")
    return [(x + y) & MASK64 for x, y in zip(a, b)]


def fdifference(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """Return ``b - a`` limb by limb, offset by 2p so no limb underflows."""
    a = _limbs(a, "a")
    b = _limbs(b, "b")
    return [((y + k) - x) & MASK64 for x, y, k in zip(a, b, _TWO_P)]


def fscalar(b: Sequence[int], s: int) -> list[int]:
    """Return ``b * s`` for a 64-bit scalar ``s``, partially reduced."""
    b = _limbs(b, "b")
    if not 0 <= s <= MASK64:
        raise ValueError(f"scalar must be a 64-bit unsigned integer: {s}")
    return _reduce_wide([x * s for x in b])


def _mul(a: list[int], b: list[int]) -> list[int]:
    shifted = list(a)
    t = [0] * LIMB_COUNT
    for i, scalar in enumerate(b):
        t = [(acc + limb * scalar) & MASK128 for acc, limb in zip(t, shifted)]
        if i < LIMB_COUNT - 1:
            shifted = [(19 * shifted[4]) & MASK64, *shifted[:4]]
    return _carry_first(_reduce_wide(t))


def fmul(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """Return ``a * b`` modulo p, partially reduced."""
    return _mul(_limbs(a, "a"), _limbs(b, "b"))


def _square(r: list[int]) -> list[int]:
    r0, r1, r2, r3, r4 = r
    d0 = (r0 * 2) & MASK64
    d1 = (r1 * 2) & MASK64
    d2 = (r2 * 2 * 19) & MASK64
    d419 = (r4 * 19) & MASK64
    d4 = (d419 * 2) & MASK64
    r3_19 = (r3 * 19) & MASK64
    t = [
        (r0 * r0 + d4 * r1 + d2 * r3) & MASK128,
        (d0 * r1 + d4 * r2 + r3_19 * r3) & MASK128,
        (d0 * r2 + r1 * r1 + d4 * r3) & MASK128,
        (d0 * r3 + d1 * r2 + r4 * d419) & MASK128,
        (d0 * r4 + d1 * r3 + r2 * r2) & MASK128,
    ]
    return _carry_first(_reduce_wide(t))


def _square_times(a: list[int], count: int) -> list[int]:
    for _ in range(count):
        a = _square(a)
    return a


def fsquare_times(a: Sequence[int], count: int) -> list[int]:
    """Square ``a`` ``count`` times, i.e. return ``a ** (2 ** count)``."""
    limbs = _limbs(a, "a")
    if count < 1:
        raise ValueError(f"count must be at least 1: {count}")
    return _square_times(limbs, count)


def crecip(z: Sequence[int]) -> list[int]:
    """Return ``z ** (p - 2)``, the inverse of ``z`` (zero maps to zero)."""
    z = _limbs(z, "z")
    a = _square_times(z, 1)
    t0 = _square_times(a, 2)
    b = _mul(t0, z)
    a = _mul(b, a)
    t0 = _square_times(a, 1)
    b = _mul(t0, b)
    t0 = _square_times(b, 5)
    b = _mul(t0, b)
    t0 = _square_times(b, 10)
    c = _mul(t0, b)
    t0 = _square_times(c, 20)
    t0 = _mul(t0, c)
    t0 = _square_times(t0, 10)
    b = _mul(t0, b)
    t0 = _square_times(b, 50)
    c = _mul(t0, b)
    t0 = _square_times(c, 100)
    t0 = _mul(t0, c)
    t0 = _square_times(t0, 50)
    t0 = _mul(t0, b)
    t0 = _square_times(t0, 5)
    return _mul(t0, a)


def fexpand(data: bytes) -> list[int]:
    """Load a 32-byte little-endian value into limbs, ignoring bit 255."""
    data = bytes(data)
    if len(data) != ELEMENT_SIZE:
        raise ValueError(f"element must be {ELEMENT_SIZE} bytes, got {len(data)}")

    def load(offset: int) -> int:
        return int.from_bytes(data[offset:offset + 8], "little")

    return [
        load(0) & _MASK51,
        (load(6) >> 3) & _MASK51,
        (load(12) >> 6) & _MASK51,
        (load(19) >> 1) & _MASK51,
        (load(24) >> 12) & _MASK51,
    ]


def _carry_pass(t: list[int]) -> None:
    for i in range(LIMB_COUNT - 1):
        t[i + 1] = (t[i + 1] + (t[i] >> LIMB_BITS)) & MASK64
        t[i] &= _MASK51


def _carry_top(t: list[int]) -> None:
    top = t[4]
    t[4] = top & _MASK51
    t[0] = (t[0] + 19 * (top >> LIMB_BITS)) & MASK64


def _trim(t: list[int]) -> list[int]:
    mask = gte_mask(t[0], _P0, 64)
    for limb in t[1:]:
        mask &= eq_mask(limb, _MASK51, 64)
    moduli = (_P0, _MASK51, _MASK51, _MASK51, _MASK51)
    return [(limb - (m & mask)) & MASK64 for limb, m in zip(t, moduli)]


def fcontract(limbs: Sequence[int]) -> bytes:
    """Fully reduce an element and return its canonical 32-byte encoding."""
    t = _limbs(limbs, "limbs")
    _carry_pass(t)
    _carry_top(t)
    _carry_pass(t)
    _carry_top(t)
    t = _carry_first(t)
    t0, t1, t2, t3, t4 = _trim(t)
    return struct.pack(
        "<4Q",
        ((t1 << 51) | t0) & MASK64,
        ((t2 << 38) | (t1 >> 13)) & MASK64,
        ((t3 << 25) | (t2 >> 26)) & MASK64,
        ((t4 << 12) | (t3 >> 39)) & MASK64,
    )
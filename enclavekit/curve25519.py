"""X25519 scalar multiplication on the Montgomery curve Curve25519.

Points are projective ``(x, z)`` pairs, each coordinate a five-limb field
element as used by :mod:`enclavekit.field25519`.  The ladder uses
mask-based conditional swaps so that the sequence of field operations
does not depend on the secret scalar.
"""

from __future__ import annotations

from collections.abc import Sequence

from .field25519 import (
    ELEMENT_SIZE,
    LIMB_COUNT,
    crecip,
    fcontract,
    fdifference,
    fexpand,
    fmul,
    fscalar,
    fsquare_times,
    fsum,
)
from .wordops import MASK64

__all__ = [
    "SCALAR_SIZE",
    "BASEPOINT",
    "A24",
    "Point",
    "clamp_scalar",
    "swap_conditional",
    "fmonty",
    "scalarmult",
]

SCALAR_SIZE = 32
BASEPOINT = bytes([9]) + bytes(31)
A24 = 121665

Point = tuple[list[int], list[int]]


def _coordinate(value: Sequence[int], name: str) -> list[int]:
    limbs = list(value)
    if len(limbs) != LIMB_COUNT:
        raise ValueError(f"{name} must have {LIMB_COUNT} limbs, got {len(limbs)}")
    for limb in limbs:
        if not isinstance(limb, int) or not 0 <= limb <= MASK64:
            raise ValueError(f"{name} limbs must be 64-bit unsigned integers: {limb!r}")
    return limbs


def _point(value: Sequence[Sequence[int]], name: str) -> Point:
    coords = tuple(value)
    if len(coords) != 2:
        raise ValueError(f"{name} must be an (x, z) pair")
    return _coordinate(coords[0], f"{name}.x"), _coordinate(coords[1], f"{name}.z")


def clamp_scalar(secret: bytes) -> bytes:
    """Clear the low three bits and the top bit of ``secret`` and set bit 254."""
    e = bytearray(secret)
    if len(e) != SCALAR_SIZE:
        raise ValueError(f"secret must be {SCALAR_SIZE} bytes, got {len(e)}")
    e[0] &= 248
    e[31] &= 127
    e[31] |= 64
    return bytes(e)


def _swap(a: Point, b: Point, swap: int) -> tuple[Point, Point]:
    mask = (-swap) & MASK64
    out_a: list[list[int]] = []
    out_b: list[list[int]] = []
    for ca, cb in zip(a, b):
        diffs = [mask & (x ^ y) for x, y in zip(ca, cb)]
        out_a.append([x ^ d for x, d in zip(ca, diffs)])
        out_b.append([y ^ d for y, d in zip(cb, diffs)])
    return (out_a[0], out_a[1]), (out_b[0], out_b[1])


def swap_conditional(a: Sequence[Sequence[int]], b: Sequence[Sequence[int]],
                     swap: int) -> tuple[Point, Point]:
    """Return ``(b, a)`` if ``swap`` is 1 and ``(a, b)`` if it is 0."""
    if swap not in (0, 1):
        raise ValueError(f"swap must be 0 or 1: {swap!r}")
    return _swap(_point(a, "a"), _point(b, "b"), swap)


def _fmonty(p: Point, pq: Point, qx: list[int]) -> tuple[Point, Point]:
    x, z = p
    xprime, zprime = pq
    origx = x
    x = fsum(x, z)
    z = fdifference(z, origx)
    origxprime = xprime
    xprime = fsum(xprime, zprime)
    zprime = fdifference(zprime, origxprime)
    xxprime = fmul(xprime, z)
    zzprime = fmul(x, zprime)
    origxxprime = xxprime
    xxprime = fsum(xxprime, zzprime)
    zzprime = fdifference(zzprime, origxxprime)
    x3 = fsquare_times(xxprime, 1)
    zzzprime = fsquare_times(zzprime, 1)
    z3 = fmul(zzzprime, qx)
    xx = fsquare_times(x, 1)
    zz = fsquare_times(z, 1)
    x2 = fmul(xx, zz)
    zz = fdifference(zz, xx)
    zzz = fsum(fscalar(zz, A24), xx)
    z2 = fmul(zzz, zz)
    return (x2, z2), (x3, z3)


def fmonty(p: Sequence[Sequence[int]], pq: Sequence[Sequence[int]],
           qx: Sequence[int]) -> tuple[Point, Point]:
    """One Montgomery ladder step.

    Given points ``p`` and ``pq`` whose difference has x-coordinate ``qx``
    (with z = 1), return ``(2p, p + pq)``.
    """
    return _fmonty(_point(p, "p"), _point(pq, "pq"), _coordinate(qx, "qx"))


def _ladder(scalar: bytes, qx: list[int]) -> Point:
    nq: Point = ([1, 0, 0, 0, 0], [0] * LIMB_COUNT)
    nqpq: Point = (list(qx), [1, 0, 0, 0, 0])
    for byte in reversed(scalar):
        for shift in range(7, -1, -1):
            bit = (byte >> shift) & 1
            nq, nqpq = _swap(nq, nqpq, bit)
            nq, nqpq = _fmonty(nq, nqpq, qx)
            nq, nqpq = _swap(nq, nqpq, bit)
    return nq


def scalarmult(secret: bytes, basepoint: bytes = BASEPOINT) -> bytes:
    """Return the 32-byte u-coordinate of ``clamp(secret) * basepoint``."""
    scalar = clamp_scalar(secret)
    basepoint = bytes(basepoint)
    if len(basepoint) != ELEMENT_SIZE:
        raise ValueError(f"basepoint must be {ELEMENT_SIZE} bytes, got {len(basepoint)}")
    x, z = _ladder(scalar, fexpand(basepoint))
    return fcontract(fmul(x, crecip(z)))
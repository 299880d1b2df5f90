"""Fixed-width unsigned word operations with wrap-around semantics.

Words are plain non-negative Python integers.  The 128-bit helpers work on
integers in ``range(2**128)`` and wrap modulo ``2**128`` as a two-limb
machine value would.  The mask functions return either all-ones of the
requested width or zero, which lets callers select values without
branching on secret data.
"""

from __future__ import annotations

__all__ = [
    "MASK32",
    "MASK64",
    "MASK128",
    "eq_mask",
    "gte_mask",
    "rotate32_left",
    "rotate32_right",
    "mul_wide",
    "add128",
    "sub128",
    "shift_left128",
    "shift_right128",
    "eq_mask128",
    "gte_mask128",
]

MASK32 = (1 << 32) - 1
MASK64 = (1 << 64) - 1
MASK128 = (1 << 128) - 1

_SUPPORTED_WIDTHS = frozenset({8, 16, 32, 64})


def _check_width(bits: int) -> int:
    if bits not in _SUPPORTED_WIDTHS:
        raise ValueError(f"unsupported word width: {bits}")
    return (1 << bits) - 1


def _check_word(value: int, bits: int, name: str) -> None:
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{name} does not fit in {bits} unsigned bits: {value}")


def eq_mask(x: int, y: int, bits: int) -> int:
    """Return all-ones of ``bits`` width if ``x == y``, else 0."""
    mask = _check_width(bits)
    _check_word(x, bits, "x")
    _check_word(y, bits, "y")
    # Fold the complemented xor down so that the top bit holds the AND of all bits.
    v = ~(x ^ y) & mask
    shift = bits // 2
    while shift:
        v &= (v << shift) & mask
        shift //= 2
    return mask if v >> (bits - 1) else 0


def gte_mask(x: int, y: int, bits: int) -> int:
    """Return all-ones of ``bits`` width if ``x >= y``, else 0."""
    mask = _check_width(bits)
    _check_word(x, bits, "x")
    _check_word(y, bits, "y")
    # Sign of the wide difference decides the result.
    borrow = ((x - y) >> (bits + 1)) & 1
    return 0 if borrow else mask


def _check_rotation(x: int, n: int) -> None:
    _check_word(x, 32, "x")
    if not 0 <= n < 32:
        raise ValueError(f"rotation amount must be in 0..31: {n}")


def rotate32_left(x: int, n: int) -> int:
    """Rotate a 32-bit word left by ``n`` bits."""
    _check_rotation(x, n)
    return ((x << n) | (x >> (32 - n))) & MASK32


def rotate32_right(x: int, n: int) -> int:
    """Rotate a 32-bit word right by ``n`` bits."""
    _check_rotation(x, n)
    return ((x >> n) | (x << (32 - n))) & MASK32


def mul_wide(x: int, y: int) -> int:
    """Multiply two 64-bit words into a full 128-bit product."""
    _check_word(x, 64, "x")
    _check_word(y, 64, "y")
    return x * y


def add128(a: int, b: int) -> int:
    """Add two 128-bit words modulo 2**128."""
    _check_word(a, 128, "a")
    _check_word(b, 128, "b")
    return (a + b) & MASK128


def sub128(a: int, b: int) -> int:
    """Subtract two 128-bit words modulo 2**128."""
    _check_word(a, 128, "a")
    _check_word(b, 128, "b")
    return (a - b) & MASK128


def _check_shift(a: int, s: int) -> None:
    _check_word(a, 128, "a")
    if not 0 <= s < 128:
        raise ValueError(f"shift amount must be in 0..127: {s}")


def shift_left128(a: int, s: int) -> int:
    """Shift a 128-bit word left, dropping bits past the top."""
    _check_shift(a, s)
    return (a << s) & MASK128


def shift_right128(a: int, s: int) -> int:
    """Shift a 128-bit word right."""
    _check_shift(a, s)
    return a >> s


def eq_mask128(a: int, b: int) -> int:
    """Return all-ones (128 bits) if ``a == b``, else 0."""
    _check_word(a, 128, "a")
    _check_word(b, 128, "b")
    low = eq_mask(a & MASK64, b & MASK64, 64)
    high = eq_mask(a >> 64, b >> 64, 64)
    m = low & high
    return (m << 64) | m


def gte_mask128(a: int, b: int) -> int:
    """Return all-ones (128 bits) if ``a >= b``, else 0."""
    _check_word(a, 128, "a")
    _check_word(b, 128, "b")
    a_hi, a_lo = a >> 64, a & MASK64
    b_hi, b_lo = b >> 64, b & MASK64
    hi_eq = eq_mask(a_hi, b_hi, 64)
    hi_gt = gte_mask(a_hi, b_hi, 64) & (~hi_eq & MASK64)
    m = hi_gt | (hi_eq & gte_mask(a_lo, b_lo, 64))
    return (m << 64) | m
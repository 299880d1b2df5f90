import random

import pytest

from enclavekit.field25519 import (
    PRIME,
    crecip,
    fcontract,
    fdifference,
    fexpand,
    fmul,
    fscalar,
    fsquare_times,
    fsum,
)

P = 2**255 - 19


def _enc(n):
    return (n % P).to_bytes(32, "little")


def _elem(n):
    return fexpand(_enc(n))


_RNG = random.Random(25519)
VALUES = [0, 1, 2, 9, 121665, P - 1, P - 2, 2**254, 2**255 - 20] + [
    _RNG.randrange(P) for _ in range(6)
]
PAIRS = [(VALUES[i], VALUES[-1 - i]) for i in range(len(VALUES))]


def test_prime_constant_wraps_to_zero():
    assert PRIME == P
    assert fcontract(fsum(_elem(PRIME - 1), _elem(1))) == bytes(32)


def test_fexpand_small_value():
    assert fexpand(_enc(9)) == [9, 0, 0, 0, 0]


@pytest.mark.parametrize("value", VALUES)
def test_expand_contract_round_trip(value):
    limbs = fexpand(_enc(value))
    assert all(0 <= limb < 2**51 for limb in limbs)
    assert fcontract(limbs) == _enc(value)


def test_prime_contracts_to_zero():
    assert fcontract(fexpand(P.to_bytes(32, "little"))) == bytes(32)


def test_fexpand_ignores_top_bit():
    data = bytearray(_enc(123456789))
    plain = fexpand(bytes(data))
    data[31] |= 0x80
    assert fexpand(bytes(data)) == plain


@pytest.mark.parametrize("x,y", PAIRS)
def test_fmul_matches_modular_product(x, y):
    assert fcontract(fmul(_elem(x), _elem(y))) == _enc(x * y)


@pytest.mark.parametrize("x,y", PAIRS)
def test_fmul_commutes(x, y):
    assert fcontract(fmul(_elem(x), _elem(y))) == fcontract(fmul(_elem(y), _elem(x)))


@pytest.mark.parametrize("x,y", PAIRS)
def test_fsum(x, y):
    assert fcontract(fsum(_elem(x), _elem(y))) == _enc(x + y)


@pytest.mark.parametrize("x,y", PAIRS)
def test_fdifference_is_second_minus_first(x, y):
    assert fcontract(fdifference(_elem(x), _elem(y))) == _enc(y - x)


@pytest.mark.parametrize("value", VALUES)
def test_fscalar(value):
    assert fcontract(fscalar(_elem(value), 121665)) == _enc(value * 121665)


@pytest.mark.parametrize("count", [1, 2, 3, 10])
def test_fsquare_times(count):
    x = VALUES[-1]
    assert fcontract(fsquare_times(_elem(x), count)) == _enc(pow(x, 2**count, P))


@pytest.mark.parametrize("value", [1, 2, 9, P - 1, VALUES[-1], VALUES[-2]])
def test_crecip_is_inverse(value):
    z = _elem(value)
    assert fcontract(fmul(z, crecip(z))) == _enc(1)


def test_crecip_of_zero_is_zero():
    assert fcontract(crecip([0, 0, 0, 0, 0])) == bytes(32)


def test_inputs_not_mutated():
    a = _elem(VALUES[-1])
    b = _elem(VALUES[-2])
    a_copy, b_copy = list(a), list(b)
    fmul(a, b)
    fsum(a, b)
    fdifference(a, b)
    fcontract(a)
    crecip(b)
    assert a == a_copy
    assert b == b_copy


def test_fexpand_rejects_wrong_length():
    with pytest.raises(ValueError):
        fexpand(bytes(31))


def test_wrong_limb_count_rejected():
    with pytest.raises(ValueError):
        fmul([1, 2, 3], [1, 2, 3, 4, 5])


def test_oversized_limb_rejected():
    with pytest.raises(ValueError):
        fcontract([2**64, 0, 0, 0, 0])


def test_fsquare_times_rejects_zero_count():
    with pytest.raises(ValueError):
        fsquare_times(_elem(5), 0)


def test_fscalar_rejects_large_scalar():
    with pytest.raises(ValueError):
        fscalar(_elem(5), 2**64)
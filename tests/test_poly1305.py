import pytest

from enclavekit.poly1305 import (
    CLAMP,
    PRIME,
    Poly1305State,
    mul_div_16,
)


def _tag(message: bytes, key: bytes) -> bytes:
    """Poly1305 of a message whose length is a non-zero multiple of 16."""
    st = Poly1305State()
    st.blocks_init(message[:-16], key[:16])
    st.blocks_continue(b"")
    return st.blocks_finish(message[-16:], key[16:])


R_ONE = bytes([1]) + bytes(15)
R_TWO = bytes([2]) + bytes(15)


@pytest.mark.parametrize(
    "key, message, expected",
    [
        (R_TWO + bytes(16), b"\xff" * 16, bytes([3]) + bytes(15)),
        (
            R_ONE + bytes(16),
            b"\xff" * 16 + b"\xf0" + b"\xff" * 15 + b"\x11" + bytes(15),
            bytes([5]) + bytes(15),
        ),
        (R_TWO + bytes(16), b"\xfd" + b"\xff" * 15, b"\xfa" + b"\xff" * 15),
    ],
)
def test_known_vectors(key, message, expected):
    assert _tag(message, key) == expected


def test_zero_r_gives_s():
    s = bytes(range(100, 116))
    assert _tag(b"\x42" * 48, bytes(16) + s) == s


def test_mul_div_16_rounds_down():
    for length in (0, 1, 15, 16, 17, 31, 32, 100, 4095):
        result = mul_div_16(length)
        assert result % 16 == 0
        assert length - 16 < result <= length


def test_mul_div_16_exact_multiple():
    assert mul_div_16(64) == 64


def test_mul_div_16_rejects_negative():
    with pytest.raises(ValueError):
        mul_div_16(-1)


def test_init_clamps_r_and_resets_h():
    st = Poly1305State()
    st.h = 12345
    st.blocks_init(b"", b"\xff" * 16)
    assert st.r == CLAMP
    assert st.h == 0


def test_split_at_block_boundary_matches_whole():
    key = bytes(range(16))
    data = bytes(range(80))
    whole = Poly1305State()
    whole.blocks_init(data, key)
    split = Poly1305State()
    split.blocks_init(data[:32], key)
    split.blocks_continue(data[32:])
    assert split.h == whole.h


def test_partial_block_is_zero_padded():
    key = bytes(range(1, 17))
    data = bytes(range(21))
    a = Poly1305State()
    a.blocks_init(b"", key)
    a.blocks_continue(data)
    b = Poly1305State()
    b.blocks_init(b"", key)
    b.blocks_continue(data + bytes(11))
    assert a.h == b.h


def test_pad_last_empty_is_noop():
    st = Poly1305State()
    st.blocks_init(b"abc", bytes(range(16)))
    before = st.h
    st.pad_last(b"")
    assert st.h == before


def test_pad_last_rejects_long_data():
    st = Poly1305State()
    with pytest.raises(ValueError):
        st.pad_last(bytes(17))


def test_finish_accumulator_is_reduced_and_stored():
    st = Poly1305State()
    st.blocks_init(b"\xff" * 40, b"\xff" * 16)
    acc = st.blocks_finish_accumulator(b"\xee" * 16)
    assert 0 <= acc < PRIME
    assert st.h == acc


def test_finish_tag_is_accumulator_plus_s():
    key = bytes(range(32))
    a = Poly1305State()
    a.blocks_init(b"message", key[:16])
    acc = a.blocks_finish_accumulator(bytes(16))
    b = Poly1305State()
    b.blocks_init(b"message", key[:16])
    tag = b.blocks_finish(bytes(16), key[16:])
    expected = (acc + int.from_bytes(key[16:], "little")) % (1 << 128)
    assert int.from_bytes(tag, "little") == expected
    assert len(tag) == 16


def test_different_messages_give_different_tags():
    key = bytes(range(7, 39))
    first = _tag(b"A" * 32, key)
    second = _tag(b"B" * 32, key)
    assert first != second
    assert first == _tag(b"A" * 32, key)


def test_finish_rejects_short_block():
    st = Poly1305State()
    st.blocks_init(b"", bytes(16))
    with pytest.raises(ValueError):
        st.blocks_finish(bytes(15), bytes(16))


def test_finish_rejects_bad_key_s():
    st = Poly1305State()
    st.blocks_init(b"", bytes(16))
    with pytest.raises(ValueError):
        st.blocks_finish(bytes(16), bytes(8))


def test_init_rejects_bad_key():
    with pytest.raises(ValueError):
        Poly1305State().blocks_init(b"", bytes(32))
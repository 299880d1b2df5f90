import pytest

from enclavekit.monitor import (
    BUFFERS_START,
    KEY_LEN,
    SP,
    Buffer,
    BufferEnclave,
    Enclave,
    NotFoundError,
    SecurityMonitor,
)


def make_monitor(**kwargs):
    sm = SecurityMonitor(**kwargs)
    sm.enclaves = [Enclave(i, 10 + i, 20 + i) for i in range(1, 4)]
    sm.buffers = [
        Buffer(i, BUFFERS_START + 0x100 * i, BUFFERS_START + 0x100 * (i + 1))
        for i in range(1, 4)
    ]
    sm.sp_list = [SP(i) for i in range(1, 4)]
    return sm


def test_get_enclave():
    sm = make_monitor()
    enclave = sm.get_enclave(2)
    assert (enclave.id, enclave.text_id, enclave.data_id) == (2, 12, 22)


def test_get_buffer_and_sp():
    sm = make_monitor()
    assert sm.get_buffer(3).start == BUFFERS_START + 0x300
    assert sm.get_sp(1).id == 1


@pytest.mark.parametrize("getter", ["get_enclave", "get_buffer", "get_sp"])
def test_get_missing_raises(getter):
    sm = make_monitor()
    lookup = getattr(sm, getter)
    with pytest.raises(NotFoundError):
        lookup(99)
    assert lookup(1).id == 1


def test_delete_enclave_preserves_order():
    sm = make_monitor()
    removed = sm.delete_enclave(2)
    assert removed.id == 2
    assert [e.id for e in sm.enclaves] == [1, 3]


def test_delete_enclave_missing():
    sm = make_monitor()
    with pytest.raises(NotFoundError):
        sm.delete_enclave(42)
    assert len(sm.enclaves) == 3


def test_delete_buffer_releases_memory():
    released = []
    sm = make_monitor(on_free=lambda start, end: released.append((start, end)))
    removed = sm.delete_buffer(1)
    assert [b.id for b in sm.buffers] == [2, 3]
    assert released == [(removed.start, removed.end)]


def test_delete_buffer_missing():
    released = []
    sm = make_monitor(on_free=lambda start, end: released.append((start, end)))
    with pytest.raises(NotFoundError):
        sm.delete_buffer(7)
    assert released == []
    assert len(sm.buffers) == 3


def test_delete_enclave_buffer_removes_all_links():
    sm = make_monitor()
    sm.enclave_buffer = [
        BufferEnclave(1, 1, True),
        BufferEnclave(2, 2, True),
        BufferEnclave(1, 3),
        BufferEnclave(3, 3, True),
    ]
    sm.delete_enclave_buffer(1)
    assert [(l.enclave_id, l.buffer_id) for l in sm.enclave_buffer] == [(2, 2), (3, 3)]


def test_delete_enclave_buffer_unknown_is_noop():
    sm = make_monitor()
    sm.enclave_buffer = [BufferEnclave(2, 2)]
    sm.delete_enclave_buffer(5)
    assert [l.enclave_id for l in sm.enclave_buffer] == [2]


def test_key_lengths_enforced():
    with pytest.raises(ValueError):
        Enclave(1, 2, 3, key=bytes(KEY_LEN - 1))
    with pytest.raises(ValueError):
        SP(1, key=bytes(KEY_LEN + 1))
    with pytest.raises(ValueError):
        SecurityMonitor(k_n=b"")


def test_sp_id_must_fit_in_byte():
    with pytest.raises(ValueError):
        SP(256)
    assert SP(255).key == bytes(KEY_LEN)
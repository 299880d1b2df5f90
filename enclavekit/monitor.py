"""Security-monitor bookkeeping: enclaves, buffers and service providers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

__all__ = [
    "PMP_ENTRY_COUNT",
    "MAX_SP_LIST",
    "MAX_BUFFERS",
    "MAX_ENCLAVES",
    "MAX_ACTIVE_BUFFERS",
    "MAX_ENCLAVE_BUFFER",
    "SPACE_LIST_MAX",
    "BUFFERS_START",
    "END",
    "MSG_LEN",
    "KEY_LEN",
    "MAC_LEN",
    "NotFoundError",
    "Buffer",
    "Enclave",
    "Perm",
    "BufferEnclave",
    "SP",
    "Space",
    "SecurityMonitor",
]

PMP_ENTRY_COUNT = 16
MAX_SP_LIST = 10
MAX_BUFFERS = 40
MAX_ENCLAVES = 10
MAX_ACTIVE_BUFFERS = 7
MAX_ENCLAVE_BUFFER = MAX_ENCLAVES * MAX_ACTIVE_BUFFERS
SPACE_LIST_MAX = 100
BUFFERS_START = 0x80500000
END = 0x80505000
MSG_LEN = 13
KEY_LEN = 64
MAC_LEN = 32


def _check_configuration() -> None:
    checks = [
        (MAX_SP_LIST >= 1, "MAX_SP_LIST must at least be 1"),
        (MAX_BUFFERS >= 1, "MAX_BUFFERS must at least be 1"),
        (MAX_ENCLAVES >= 1, "MAX_ENCLAVES must at least be 1"),
        (MAX_ACTIVE_BUFFERS >= 1, "MAX_ACTIVE_BUFFERS must at least be 1"),
        (MAX_BUFFERS <= SPACE_LIST_MAX + 2,
         "MAX_BUFFERS must be at least 2 less than SPACE_LIST_MAX"),
        (MAX_ACTIVE_BUFFERS <= MAX_BUFFERS,
         "MAX_ACTIVE_BUFFERS cannot exceed MAX_BUFFERS"),
        (MAX_ENCLAVES <= MAX_BUFFERS, "MAX_ENCLAVES cannot exceed MAX_BUFFERS"),
        (BUFFERS_START + 0x400 < END,
         "END must be at least 1KB beyond BUFFERS_START"),
        (PMP_ENTRY_COUNT >= MAX_ACTIVE_BUFFERS * 2 + 1,
         "MAX_ACTIVE_BUFFERS must be less than PMP_ENTRY_COUNT/2 - 1"),
        (PMP_ENTRY_COUNT <= 64, "PMP_ENTRY_COUNT cannot exceed 64"),
    ]
    for ok, message in checks:
        if not ok:
            raise RuntimeError(message)


_check_configuration()


class NotFoundError(LookupError):
    """Raised when no record with the requested id exists."""


def _check_key(key: bytes) -> bytes:
    key = bytes(key)
    if len(key) != KEY_LEN:
        raise ValueError(f"key must be {KEY_LEN} bytes, got {len(key)}")
    return key


@dataclass
class Buffer:
    """A memory region ``[start, end)`` owned by the monitor."""

    id: int
    start: int
    end: int


@dataclass
class Enclave:
    """An enclave with its text and data buffers and its module key."""

    id: int
    text_id: int
    data_id: int
    key: bytes = bytes(KEY_LEN)

    def __post_init__(self) -> None:
        self.key = _check_key(self.key)


@dataclass
class Perm:
    """Access rights on a shared buffer."""

    rwx: int = 0
    hash: int = 0


@dataclass
class BufferEnclave:
    """Links an enclave to a buffer it may access."""

    enclave_id: int
    buffer_id: int
    is_owner: bool = False
    perm: Perm = field(default_factory=Perm)


@dataclass
class SP:
    """A service provider and its key."""

    id: int
    key: bytes = bytes(KEY_LEN)

    def __post_init__(self) -> None:
        if not 0 <= self.id <= 0xFF:
            raise ValueError(f"service provider id must fit in one byte: {self.id}")
        self.key = _check_key(self.key)


@dataclass
class Space:
    """A free memory range ``[start, end)``."""

    start: int
    end: int


@dataclass
class SecurityMonitor:
    """The monitor's tables.

    ``on_free`` is called with ``(start, end)`` whenever a buffer's memory
    is released by :meth:`delete_buffer`.
    """

    is_initialized: bool = False
    enclave_id_c: int = 0
    buffer_id_c: int = 0
    sp_id_c: int = 0
    k_n: bytes = bytes(KEY_LEN)
    enclaves: list[Enclave] = field(default_factory=list)
    enclave_buffer: list[BufferEnclave] = field(default_factory=list)
    sp_list: list[SP] = field(default_factory=list)
    free_list: list[Space] = field(default_factory=list)
    buffers: list[Buffer] = field(default_factory=list)
    on_free: Callable[[int, int], None] | None = None

    def __post_init__(self) -> None:
        self.k_n = _check_key(self.k_n)

    def get_enclave(self, enclave_id: int) -> Enclave:
        """Return the enclave with ``enclave_id``."""
        for enclave in self.enclaves:
            if enclave.id == enclave_id:
                return enclave
        raise NotFoundError(f"no enclave with id {enclave_id}")

    def get_buffer(self, buffer_id: int) -> Buffer:
        """Return the buffer with ``buffer_id``."""
        for buffer in self.buffers:
            if buffer.id == buffer_id:
                return buffer
        raise NotFoundError(f"no buffer with id {buffer_id}")

    def get_sp(self, sp_id: int) -> SP:
        """Return the service provider with ``sp_id``."""
        for sp in self.sp_list:
            if sp.id == sp_id:
                return sp
        raise NotFoundError(f"no service provider with id {sp_id}")

    def delete_enclave_buffer(self, enclave_id: int) -> None:
        """Drop every buffer link of ``enclave_id``, keeping the others in order."""
        self.enclave_buffer = [
            link for link in self.enclave_buffer if link.enclave_id != enclave_id
        ]

    def delete_enclave(self, enclave_id: int) -> Enclave:
        """Remove and return the first enclave with ``enclave_id``."""
        for index, enclave in enumerate(self.enclaves):
            if enclave.id == enclave_id:
                return self.enclaves.pop(index)
        raise NotFoundError(f"no enclave with id {enclave_id}")

    def delete_buffer(self, buffer_id: int) -> Buffer:
        """Remove the first buffer with ``buffer_id`` and release its memory."""
        for index, buffer in enumerate(self.buffers):
            if buffer.id == buffer_id:
                removed = self.buffers.pop(index)
                if self.on_free is not None:
                    self.on_free(removed.start, removed.end)
                return removed
        raise NotFoundError(f"no buffer with id {buffer_id}")
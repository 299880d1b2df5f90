"""Byte-oriented console output in the style of a memory-mapped UART."""

from __future__ import annotations

from typing import BinaryIO

__all__ = ["UART_BASE_ADDR", "Uart"]

UART_BASE_ADDR = 0x10000000
_ADDRESS_BYTES = 8
_ADDRESS_MASK = (1 << (_ADDRESS_BYTES * 8)) - 1


class Uart:
    """Writes characters, strings and numbers to a binary stream.

    Every string written with :meth:`print` is followed by a NUL byte, as
    the device-side reader expects NUL-terminated strings.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream

    def write_char(self, c: str | int) -> None:
        """Write one character (a one-character string or a byte value)."""
        if isinstance(c, str):
            if len(c) != 1:
                raise ValueError(f"expected a single character, got {c!r}")
            value = ord(c)
        else:
            value = c
        if not 0 <= value <= 0xFF:
            raise ValueError(f"character does not fit in one byte: {c!r}")
        self.stream.write(bytes((value,)))

    def print(self, text: str) -> None:
        """Write ``text`` up to its first NUL, then a terminating NUL."""
        for ch in text.split("\0", 1)[0]:
            self.write_char(ch)
        self.write_char(0)

    def test(self) -> None:
        """Write a single marker character."""
        self.write_char("f")

    def print_int(self, num: int) -> None:
        """Write a non-negative integer in decimal.

        Negative numbers are ignored. Zero is written as a bare digit;
        any other value is followed by a space.
        """
        if num < 0:
            return
        if num == 0:
            self.write_char("0")
            return
        for digit in str(num):
            self.write_char(digit)
        self.print(" ")

    def print_hex_digit(self, digit: int) -> None:
        """Write one hexadecimal digit in upper case."""
        if not 0 <= digit <= 0xFF:
            raise ValueError(f"digit must fit in one byte: {digit}")
        if digit < 10:
            self.write_char(ord("0") + digit)
        else:
            self.write_char((ord("A") + digit - 10) & 0xFF)

    def print_address(self, address: int) -> None:
        """Write a 64-bit address as ``0x`` followed by 16 hex digits."""
        if address < 0:
            raise ValueError(f"address must be non-negative: {address}")
        address &= _ADDRESS_MASK
        self.write_char("0")
        self.write_char("x")
        for shift in range(_ADDRESS_BYTES * 8 - 4, -1, -4):
            self.print_hex_digit((address >> shift) & 0xF)
        self.print(" ")
"""ChaCha20-Poly1305 authenticated encryption with associated data."""

from __future__ import annotations

import hmac
import struct

from .chacha20 import chacha20, chacha20_key_block
from .poly1305 import KEY_SIZE as _POLY_KEY_SIZE
from .poly1305 import Poly1305State

__all__ = [
    "KEY_LEN",
    "NONCE_LEN",
    "MAC_LEN",
    "AuthenticationError",
    "encode_length",
    "aead_encrypt",
    "aead_decrypt",
]

KEY_LEN = 32
NONCE_LEN = 12
MAC_LEN = 16
_MAX_LENGTH = 1 << 32


class AuthenticationError(ValueError):
    """Raised when a message fails tag verification."""


def _check_length(value: int, name: str) -> None:
    if not 0 <= value < _MAX_LENGTH:
        raise ValueError(f"{name} must be a 32-bit unsigned integer: {value}")


def encode_length(aad_len: int, mlen: int) -> bytes:
    """Return the 16-byte length block: both lengths as little-endian 64-bit words."""
    _check_length(aad_len, "aad length")
    _check_length(mlen, "message length")
    return struct.pack("<QQ", aad_len, mlen)


def _compute_tag(ciphertext: bytes, aad: bytes, key: bytes, nonce: bytes) -> bytes:
    block0 = chacha20_key_block(key, nonce, 0)
    r_key = block0[:_POLY_KEY_SIZE]
    s_key = block0[_POLY_KEY_SIZE:2 * _POLY_KEY_SIZE]
    state = Poly1305State()
    state.blocks_init(aad, r_key)
    state.blocks_continue(ciphertext)
    return state.blocks_finish(encode_length(len(aad), len(ciphertext)), s_key)


def aead_encrypt(message: bytes, aad: bytes, key: bytes, nonce: bytes) -> tuple[bytes, bytes]:
    """Encrypt ``message`` and authenticate it with ``aad``.

    Returns ``(ciphertext, mac)``; the ciphertext has the message's length
    and the mac is 16 bytes.
    """
    message = bytes(message)
    aad = bytes(aad)
    _check_length(len(aad), "aad length")
    _check_length(len(message), "message length")
    ciphertext = chacha20(message, key, nonce, 1)
    return ciphertext, _compute_tag(ciphertext, aad, key, nonce)


def aead_decrypt(ciphertext: bytes, mac: bytes, aad: bytes, key: bytes, nonce: bytes) -> bytes:
    """Verify ``mac`` over ``aad`` and ``ciphertext``, then return the plaintext.

    Raises :class:`AuthenticationError` if the tag does not match.
    """
    ciphertext = bytes(ciphertext)
    mac = bytes(mac)
    aad = bytes(aad)
    if len(mac) != MAC_LEN:
        raise ValueError(f"mac must be {MAC_LEN} bytes, got {len(mac)}")
    _check_length(len(aad), "aad length")
    _check_length(len(ciphertext), "message length")
    expected = _compute_tag(ciphertext, aad, key, nonce)
    if not hmac.compare_digest(mac, expected):
        raise AuthenticationError("message authentication failed")
    return chacha20(ciphertext, key, nonce, 1)
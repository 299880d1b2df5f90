"""ChaCha20, Poly1305, ChaCha20-Poly1305, X25519, word helpers, a UART writer and a security-monitor model."""

__version__ = "0.1.0"
__all__ = [
    "aead",
    "chacha20",
    "curve25519",
    "field25519",
    "monitor",
    "poly1305",
    "uart",
    "wordops",
]
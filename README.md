# enclavekit

Small, dependency-free building blocks for an enclave-style security
monitor, written in plain Python:

- `enclavekit.chacha20`: the ChaCha20 stream cipher with a 96-bit nonce and
  32-bit block counter (`chacha20`, `chacha20_key_block`, `quarter_round`).
- `enclavekit.poly1305`: the Poly1305 authenticator in the block layout used
  by the AEAD (`Poly1305State`, `mul_div_16`). A trailing partial block is
  zero-padded to 16 bytes.
- `enclavekit.aead`: ChaCha20-Poly1305 authenticated encryption
  (`aead_encrypt`, `aead_decrypt`, `encode_length`, `AuthenticationError`).
- `enclavekit.field25519`: arithmetic modulo 2**255 - 19 on five 51-bit
  limbs (`fsum`, `fdifference`, `fscalar`, `fmul`, `fsquare_times`,
  `crecip`, `fexpand`, `fcontract`).
- `enclavekit.curve25519`: X25519 scalar multiplication (`scalarmult`,
  `clamp_scalar`, `swap_conditional`, `fmonty`, `BASEPOINT`).
- `enclavekit.wordops`: mask-based comparisons and fixed-width word helpers
  (`eq_mask`, `gte_mask`, `rotate32_left`, `rotate32_right`, `mul_wide`,
  `add128`, `sub128`, `shift_left128`, `shift_right128`, `eq_mask128`,
  `gte_mask128`).
- `enclavekit.monitor`: in-memory tables of a security monitor for
  enclaves, buffers, service providers and their links (`SecurityMonitor`,
  `Enclave`, `Buffer`, `SP`, `BufferEnclave`, `Perm`, `Space`,
  `NotFoundError`), together with its configuration limits (`MAX_ENCLAVES`,
  `MAX_BUFFERS`, `KEY_LEN`, ...).
- `enclavekit.uart`: a character-output helper (`Uart`) that writes bytes,
  NUL-terminated strings, decimal numbers and hexadecimal addresses to a
  binary stream.

Everything here is pure Python and meant for modelling, testing and
teaching. It is not constant-time in practice and not tuned for speed.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

### ChaCha20

```python
from enclavekit.chacha20 import chacha20

key = bytes(range(32))
nonce = bytes(12)
ciphertext = chacha20(b"attack at dawn", key, nonce, 1)
assert chacha20(ciphertext, key, nonce, 1) == b"attack at dawn"
```

### ChaCha20-Poly1305

```python
from enclavekit.aead import aead_encrypt, aead_decrypt, AuthenticationError

key = bytes(range(32))
nonce = bytes(12)
ciphertext, mac = aead_encrypt(b"hello", b"header", key, nonce)
assert aead_decrypt(ciphertext, mac, b"header", key, nonce) == b"hello"
```

A changed ciphertext, tag or associated data makes `aead_decrypt` raise
`AuthenticationError` instead of returning plaintext. Wrong key, nonce or
tag sizes raise `ValueError`.

### X25519

```python
from enclavekit.curve25519 import BASEPOINT, scalarmult

alice_scalar = bytes(range(32))
bob_scalar = bytes(range(32, 64))

alice_public = scalarmult(alice_scalar, BASEPOINT)
bob_public = scalarmult(bob_scalar, BASEPOINT)
assert scalarmult(alice_scalar, bob_public) == scalarmult(bob_scalar, alice_public)
```

### Security monitor

```python
from enclavekit.monitor import Buffer, Enclave, NotFoundError, SecurityMonitor

released = []
sm = SecurityMonitor(on_free=lambda start, end: released.append((start, end)))
sm.buffers.append(Buffer(id=1, start=0x80500000, end=0x80500400))
sm.enclaves.append(Enclave(id=1, text_id=1, data_id=1))

assert sm.get_enclave(1).text_id == 1
sm.delete_buffer(1)
assert released == [(0x80500000, 0x80500400)]
```

Lookups by id (`get_enclave`, `get_buffer`, `get_sp`) raise `NotFoundError`
when nothing matches. `delete_enclave` and `delete_buffer` remove and return
the first matching entry (or raise `NotFoundError`); `delete_buffer` also
calls the monitor's `on_free(start, end)` callback if one is set.
`delete_enclave_buffer` drops every buffer link of one enclave and keeps
the others in order.

### UART output

```python
import io
from enclavekit.uart import Uart

out = io.BytesIO()
uart = Uart(out)
uart.print_int(1205)
uart.print_address(0x80500000)
assert out.getvalue() == b"1205 \x000x0000000080500000 \x00"
```

`print` writes its text followed by a NUL byte; `print_int` ignores
negative numbers and writes zero as a bare `0`.

## What this package does not do

- It has no command-line program; everything is used as a library.
- The monitor model only keeps, looks up and deletes records. It does not
  create enclaves or buffers, allocate memory from its free list, program
  memory protection, or run enclave code; `free_list` and the `on_free`
  callback are left for the caller to manage.
- `Uart` writes to an ordinary Python binary stream, not to a device.
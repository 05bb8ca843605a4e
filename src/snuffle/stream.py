"""
Snuffle - Stream Encryption Driver

XORs arbitrary-length input against the keystream. A StreamCursor keeps the
byte position inside the current 64-byte block so that data split over many
calls lines up with the same keystream as a single call would.
"""

from typing import Optional

from .cipher import BLOCK_SIZE, SnuffleCipher
from .core.codec import xor_bytes


class StreamCursor:
    # logical byte position into one cipher's keystream

    def __init__(self):
        self.position = 0
        self.block: Optional[bytes] = None
        self._owner = None
        self._epoch = None

    @property
    def offset(self) -> int:
        # byte offset (0-63) into the current block
        return self.position % BLOCK_SIZE

    def sync(self, cipher: SnuffleCipher):
        # drop a partial block left over from another cipher or an old counter
        if self._owner is not cipher or self._epoch != cipher.epoch:
            self.position = 0
            self.block = None
            self._owner = cipher
            self._epoch = cipher.epoch

    def reset(self):
        self.position = 0
        self.block = None
        self._owner = None
        self._epoch = None

    def __repr__(self):
        return f"StreamCursor(position={self.position}, offset={self.offset})"


def _keystream_segments(length: int, cursor: StreamCursor, cipher: SnuffleCipher):
    # yield (start, keystream) pairs covering length bytes of input
    cursor.sync(cipher)
    done = 0
    while done < length:
        offset = cursor.offset
        if offset == 0:
            cursor.block = cipher.generate_block()

        take = min(BLOCK_SIZE - offset, length - done)
        yield done, cursor.block[offset:offset + take]
        cursor.position += take
        done += take


def encrypt(data, cursor: StreamCursor, cipher: SnuffleCipher) -> bytes:
    """
    XOR data with the keystream at the cursor position.

    Decryption is the same call. The cipher's counter advances by one for
    every block that is started.
    """
    data = memoryview(data).tobytes()
    out = bytearray(len(data))
    for start, keystream in _keystream_segments(len(data), cursor, cipher):
        end = start + len(keystream)
        out[start:end] = xor_bytes(data[start:end], keystream)
    return bytes(out)


def encrypt_into(buffer: bytearray, cursor: StreamCursor, cipher: SnuffleCipher) -> None:
    # same as encrypt() but overwrites a writable buffer in place
    view = memoryview(buffer).cast("B")
    for start, keystream in _keystream_segments(len(view), cursor, cipher):
        end = start + len(keystream)
        view[start:end] = xor_bytes(view[start:end].tobytes(), keystream)


class StreamCipher:
    # a cipher together with its cursor, for callers that want one object

    def __init__(self, cipher: SnuffleCipher, cursor: Optional[StreamCursor] = None):
        self.cipher = cipher
        self.cursor = cursor or StreamCursor()

    @classmethod
    def create(cls, key, nonce, variant="salsa20", hex_key=False, counter=0):
        cipher = SnuffleCipher(key, variant=variant, hex_key=hex_key)
        cipher.set_nonce(nonce)
        if counter:
            cipher.set_counter(counter)
        return cls(cipher)

    def encrypt(self, data) -> bytes:
        return encrypt(data, self.cursor, self.cipher)

    def encrypt_into(self, buffer: bytearray) -> None:
        encrypt_into(buffer, self.cursor, self.cipher)

    @property
    def position(self) -> int:
        return self.cursor.position

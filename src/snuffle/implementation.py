import logging

from Crypto.Cipher import ChaCha20 as CryptoChaCha20
from Crypto.Cipher import Salsa20 as CryptoSalsa20

from .base import SnuffleImplementationBase
from .cipher import BLOCK_SIZE
from .core.errors import InvalidKeyLength
from .core.registry import ENCRYPTION_IMPLEMENTATIONS, register_implementation
from .core.utils import ChunkReader, ChunkWriter
from .key_utils import key_to_bytes, nonce_to_bytes, parse_counter
from .stream import StreamCipher

# setup logging
logger = logging.getLogger("Snuffle")

# pycryptodome's Salsa20 cannot seek, so start offsets are reached by discarding keystream
MAX_LIBRARY_SALSA20_SKIP = 1 << 20
_DISCARD_SIZE = 1024 * BLOCK_SIZE


@register_implementation("snuffle")
class SnuffleImplementation(SnuffleImplementationBase):
    # salsa20/chacha20 with both custom and pycryptodome backends

    def __init__(self, variant="salsa20", key_size="256", **kwargs):
        super().__init__(variant=variant, key_size=key_size, **kwargs)
        if self.is_custom:
            self.description = f"Custom {self.description}"
        else:
            self.description = f"PyCryptodome {self.description}"

    def new_stream(self, key, nonce, counter=0):
        if self.is_custom:
            return self._custom_stream(key, nonce, counter)
        return self._lib_stream(key, nonce, counter)

    def _custom_stream(self, key, nonce, counter):
        return StreamCipher.create(
            key, nonce, variant=self.variant, hex_key=self.hex_key, counter=counter
        )

    def _lib_stream(self, key, nonce, counter):
        # same validation as the custom backend, then hand raw bytes to pycryptodome
        key = key_to_bytes(key, self.hex_key)
        nonce = nonce_to_bytes(nonce)
        counter = parse_counter(counter)

        if self.variant.name == "chacha20":
            if len(key) != 32:
                raise InvalidKeyLength("PyCryptodome ChaCha20 requires a 32-byte key")
            cipher = CryptoChaCha20.new(key=key, nonce=nonce)
            if counter:
                cipher.seek(counter * BLOCK_SIZE)
            return cipher

        cipher = CryptoSalsa20.new(key=key, nonce=nonce)
        if counter:
            if counter > MAX_LIBRARY_SALSA20_SKIP:
                raise ValueError(
                    f"PyCryptodome Salsa20 cannot seek; counter {counter} exceeds "
                    f"{MAX_LIBRARY_SALSA20_SKIP} blocks, use the custom backend"
                )
            remaining = counter * BLOCK_SIZE
            while remaining:
                step = min(remaining, _DISCARD_SIZE)
                cipher.encrypt(bytes(step))
                remaining -= step
        return cipher

    def encrypt_file(self, infile, outfile, key, nonce, chunk_size=64 * 1024, counter=0, stream=None):
        # stream infile through the cipher into outfile, chunk by chunk
        # an already positioned stream from new_stream() is used as is
        if stream is None:
            stream = self.new_stream(key, nonce, counter)

        with ChunkReader(infile, chunk_size) as reader, ChunkWriter(outfile) as writer:
            logger.info(f"{self.description}: {infile} -> {outfile} ({len(reader)} bytes)")
            for chunk in reader:
                writer.write(stream.encrypt(chunk))

        logger.info(f"Wrote {writer.bytes_written} bytes to {outfile}")
        return writer.bytes_written


def create_custom_implementation(variant="salsa20", key_size="256", hex_key=False):
    # create an implementation backed by the snuffle engine
    return SnuffleImplementation(variant=variant, key_size=key_size, is_custom=True, hex_key=hex_key)


def create_library_implementation(variant="salsa20", key_size="256", hex_key=False):
    # create an implementation backed by pycryptodome
    return SnuffleImplementation(variant=variant, key_size=key_size, is_custom=False, hex_key=hex_key)


def create_implementation(variant="salsa20", backend="custom", key_size="256", hex_key=False):
    if backend == "library":
        return create_library_implementation(variant, key_size, hex_key)
    if backend == "custom":
        return create_custom_implementation(variant, key_size, hex_key)
    raise ValueError(f"Unknown backend {backend!r}")


def register_all_snuffle_variants():
    # register custom and library backends for both ciphers
    for variant in ("salsa20", "chacha20"):
        ENCRYPTION_IMPLEMENTATIONS[f"{variant}_custom"] = (
            lambda variant=variant, **kwargs: create_custom_implementation(
                variant, kwargs.get("key_size", "256"), kwargs.get("hex_key", False)
            )
        )
        ENCRYPTION_IMPLEMENTATIONS[f"{variant}_lib"] = (
            lambda variant=variant, **kwargs: create_library_implementation(
                variant, kwargs.get("key_size", "256"), kwargs.get("hex_key", False)
            )
        )
    return ENCRYPTION_IMPLEMENTATIONS


register_all_snuffle_variants()

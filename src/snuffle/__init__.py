"""
Snuffle - Salsa20 and ChaCha20 stream ciphers.

    >>> from snuffle import SnuffleCipher, StreamCipher
    >>> stream = StreamCipher.create(b"k" * 32, "0011223344556677", variant="chacha20")
    >>> ciphertext = stream.encrypt(b"attack at dawn")
"""

# import core modules
from .core import (
    SnuffleError,
    InvalidKeyLength,
    InvalidNonceLength,
    InvalidEncoding,
    OutOfRange,
    InvalidCounter,
    CounterExhausted,
    IOFailure,
    SnuffleVariant,
    get_variant,
    list_variants,
    get_implementation,
    list_implementations,
)

# import the cipher engine and stream driver
from .cipher import SnuffleCipher, new, salsa20, chacha20, BLOCK_SIZE
from .stream import StreamCursor, StreamCipher, encrypt, encrypt_into

# import the variants so they are registered
from .salsa import SALSA20
from .chacha import CHACHA20

# import backends
from .implementation import (
    SnuffleImplementation,
    create_custom_implementation,
    create_library_implementation,
    create_implementation,
)

__version__ = "1.0.0"

__all__ = [
    'SnuffleError',
    'InvalidKeyLength',
    'InvalidNonceLength',
    'InvalidEncoding',
    'OutOfRange',
    'InvalidCounter',
    'CounterExhausted',
    'IOFailure',
    'SnuffleVariant',
    'get_variant',
    'list_variants',
    'get_implementation',
    'list_implementations',
    'SnuffleCipher',
    'new',
    'salsa20',
    'chacha20',
    'BLOCK_SIZE',
    'StreamCursor',
    'StreamCipher',
    'encrypt',
    'encrypt_into',
    'SALSA20',
    'CHACHA20',
    'SnuffleImplementation',
    'create_custom_implementation',
    'create_library_implementation',
    'create_implementation',
]

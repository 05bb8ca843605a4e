import logging

# configure logging
logger = logging.getLogger("Snuffle")
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.WARNING)

# import components
from .errors import (
    SnuffleError,
    InvalidKeyLength,
    InvalidNonceLength,
    InvalidEncoding,
    OutOfRange,
    InvalidCounter,
    CounterExhausted,
    IOFailure,
)
from .variant import SnuffleVariant
from .registry import (
    register_variant,
    get_variant,
    list_variants,
    register_implementation,
    get_implementation,
    list_implementations,
)
from .config import load_config, DEFAULT_CONFIG
from .utils import iter_file_chunks, ChunkReader, ChunkWriter

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
    'register_variant',
    'get_variant',
    'list_variants',
    'register_implementation',
    'get_implementation',
    'list_implementations',
    'load_config',
    'DEFAULT_CONFIG',
    'iter_file_chunks',
    'ChunkReader',
    'ChunkWriter',
]

#!/usr/bin/env python3
"""
Snuffle - Command Line Entry Point
Encrypt or decrypt a file with Salsa20 or ChaCha20.

    snuffle infile outfile key nonce [--hex-key] [--chacha20]

The key is 16 or 32 ASCII characters, or 32/64 hex characters with
--hex-key. The nonce is always 16 hex characters (8 bytes, no 0x prefix).
Running the same command on the output restores the input.
"""

import sys
import argparse
import logging
import traceback

from .core.config import load_config
from .core.errors import (
    CounterExhausted,
    InvalidCounter,
    InvalidEncoding,
    InvalidKeyLength,
    InvalidNonceLength,
    IOFailure,
    SnuffleError,
)
from .implementation import create_implementation

# setup logging
logger = logging.getLogger("Snuffle")

EXIT_OK = 0
EXIT_CONFIG = 2

# error kind -> (exit status, message prefix)
ERROR_EXITS = {
    InvalidKeyLength: (3, "invalid key length"),
    InvalidNonceLength: (4, "invalid nonce length"),
    InvalidEncoding: (5, "invalid encoding"),
    InvalidCounter: (6, "invalid counter"),
    CounterExhausted: (7, "keystream exhausted"),
    IOFailure: (8, "i/o failure"),
}


def _int_arg(value):
    # decimal or 0x-prefixed integer
    try:
        return int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None


def build_parser():
    parser = argparse.ArgumentParser(
        prog="snuffle",
        description="Salsa20 / ChaCha20 stream encryption (the same call decrypts)",
    )
    parser.add_argument("infile", help="File to read")
    parser.add_argument("outfile", help="File to write")
    parser.add_argument("key", help="16 or 32 ASCII chars, or 32/64 hex chars with --hex-key")
    parser.add_argument("nonce", help="16 hex chars (8 bytes, no 0x prefix)")
    parser.add_argument("--hex-key", action="store_true", default=None,
                        help="Interpret the key as hex characters")
    parser.add_argument("--chacha20", action="store_true",
                        help="Use ChaCha20 instead of Salsa20")
    parser.add_argument("--counter", type=_int_arg, default=0,
                        help="Block counter to start from (default 0)")
    parser.add_argument("--skip-blocks", type=_int_arg, default=0,
                        help="Additional 64-byte blocks to skip before the first byte")
    parser.add_argument("--chunk-size", type=_int_arg, default=None,
                        help="Bytes read per chunk")
    parser.add_argument("--backend", choices=("custom", "library"), default=None,
                        help="custom engine or PyCryptodome")
    parser.add_argument("--config", dest="config_file", default=None,
                        help="JSON file with default settings")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    return parser


def _fail(status, message):
    # one-line diagnostic on stderr
    print(f"snuffle: error: {message}", file=sys.stderr)
    return status


def main(argv=None):
    # main entry point, returns the process exit status
    args = build_parser().parse_args(argv)

    overrides = {
        "variant": "chacha20" if args.chacha20 else None,
        "hex_key": args.hex_key,
        "chunk_size": args.chunk_size,
        "backend": args.backend,
        "log_level": "DEBUG" if args.verbose else ("ERROR" if args.quiet else None),
    }

    # load configuration
    try:
        config = load_config(args.config_file, overrides)
    except OSError as e:
        return _fail(EXIT_CONFIG, f"could not load configuration: {e}")
    except ValueError as e:
        return _fail(EXIT_CONFIG, f"bad configuration: {e}")

    logger.setLevel(str(config["log_level"]).upper())
    logger.debug(f"Configuration: {config}")

    try:
        if args.counter < 0 or args.skip_blocks < 0:
            raise InvalidCounter("counter and skip count must not be negative")
        counter = args.counter + args.skip_blocks

        impl = create_implementation(
            variant=config["variant"],
            backend=config["backend"],
            hex_key=bool(config["hex_key"]),
        )
        # validate key and nonce before touching any file
        stream = impl.new_stream(args.key, args.nonce, counter)
        if config["backend"] == "custom" and logger.isEnabledFor(logging.DEBUG):
            logger.debug(stream.cipher.format_matrix("initial matrix:"))

        impl.encrypt_file(args.infile, args.outfile, args.key, args.nonce,
                          chunk_size=config["chunk_size"], counter=counter, stream=stream)
    except SnuffleError as e:
        logger.debug(traceback.format_exc())
        for error_type, (status, prefix) in ERROR_EXITS.items():
            if isinstance(e, error_type):
                return _fail(status, f"{prefix}: {e}")
        return _fail(1, str(e))
    except ValueError as e:
        # library backend limits
        logger.debug(traceback.format_exc())
        return _fail(1, str(e))

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

"""
Snuffle - Error Taxonomy
Typed failures raised by the cipher core and its collaborators.
"""


class SnuffleError(Exception):
    # base class for every error raised by snuffle
    pass


class InvalidKeyLength(SnuffleError, ValueError):
    # key did not decode to exactly 16 or 32 bytes
    pass


class InvalidNonceLength(SnuffleError, ValueError):
    # nonce did not decode to exactly 8 bytes
    pass


class InvalidEncoding(SnuffleError, ValueError):
    # non-hex character where hex was expected, or non-ascii key text
    pass


class OutOfRange(SnuffleError, IndexError):
    # codec read past the end of its input
    pass


class InvalidCounter(SnuffleError, ValueError):
    # counter value outside [0, 2**64) or a negative skip
    pass


class CounterExhausted(SnuffleError, OverflowError):
    # all 2**64 keystream blocks for this key and nonce have been used
    pass


class IOFailure(SnuffleError, OSError):
    # file open/read/write failure in the chunked driver
    pass

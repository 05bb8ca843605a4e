from .core.registry import get_variant
from .key_utils import generate_key, generate_nonce


class SnuffleImplementationBase:
    # base class for salsa20/chacha20 backends

    def __init__(self, variant="salsa20", key_size="256", **kwargs):
        self.variant = get_variant(variant)
        self.key_size = int(key_size)
        self.name = self.variant.name
        self.description = f"{self.variant.description} with {key_size}-bit key"
        self.is_custom = kwargs.get("is_custom", True)
        self.hex_key = kwargs.get("hex_key", False)
        self.key = None
        self.nonce = None

    def generate_key(self):
        # generate a random key of the configured size
        self.key = generate_key(self.key_size)
        return self.key

    def generate_nonce(self):
        self.nonce = generate_nonce()
        return self.nonce

    def new_stream(self, key, nonce, counter=0):
        # stateful object whose encrypt() continues the keystream across calls
        raise NotImplementedError("Subclasses must implement this method")

    def encrypt(self, data, key, nonce, counter=0):
        # one-shot xor with the keystream; also decrypts
        return self.new_stream(key, nonce, counter).encrypt(data)

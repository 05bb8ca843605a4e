import logging

from .variant import SnuffleVariant

# setup logging
logger = logging.getLogger("Snuffle")

# cipher variants by name (salsa20, chacha20)
CIPHER_VARIANTS = {}

# encryption backends by name (salsa20_custom, chacha20_lib, ...)
ENCRYPTION_IMPLEMENTATIONS = {}


def register_variant(variant):
    # register a cipher variant descriptor and hand it back
    if not isinstance(variant, SnuffleVariant):
        raise TypeError(f"Expected a SnuffleVariant, got {type(variant).__name__}")
    CIPHER_VARIANTS[variant.name] = variant
    return variant


def register_implementation(name):
    # register an encryption implementation
    def decorator(impl_class):
        ENCRYPTION_IMPLEMENTATIONS[name] = impl_class
        return impl_class
    return decorator


def register_all_variants():
    # import here to avoid circular imports
    from snuffle.salsa.variant import SALSA20
    from snuffle.chacha.variant import CHACHA20

    for variant in (SALSA20, CHACHA20):
        CIPHER_VARIANTS.setdefault(variant.name, variant)

    logger.info(f"Registered cipher variants: {', '.join(CIPHER_VARIANTS.keys())}")
    return CIPHER_VARIANTS


def get_variant(name):
    # resolve a variant name (or pass a descriptor through)
    if isinstance(name, SnuffleVariant):
        return name

    key = str(name).lower()
    if key not in CIPHER_VARIANTS:
        register_all_variants()
    try:
        return CIPHER_VARIANTS[key]
    except KeyError:
        raise ValueError(
            f"Unknown cipher variant {name!r}, choose from {', '.join(list_variants())}"
        ) from None


def list_variants():
    # list all registered cipher variants
    register_all_variants()
    return list(CIPHER_VARIANTS.keys())


def get_implementation(name):
    # get an implementation by name
    if name not in ENCRYPTION_IMPLEMENTATIONS:
        register_all_implementations()
    return ENCRYPTION_IMPLEMENTATIONS.get(name)


def list_implementations():
    # list all registered implementations
    register_all_implementations()
    return list(ENCRYPTION_IMPLEMENTATIONS.keys())


def register_all_implementations():
    # importing the module registers its backends
    import snuffle.implementation  # noqa: F401

    logger.info(f"Registered implementations: {', '.join(ENCRYPTION_IMPLEMENTATIONS.keys())}")
    return ENCRYPTION_IMPLEMENTATIONS

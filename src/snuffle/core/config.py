import json
import logging

# setup logging
logger = logging.getLogger("Snuffle")

BACKENDS = ("custom", "library")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

DEFAULT_CONFIG = {
    "variant": "salsa20",
    "hex_key": False,
    "backend": "custom",
    "chunk_size": 64 * 1024,
    "log_level": "WARNING",
}


def validate_config(config):
    # check value ranges; raises ValueError on the first bad entry
    from .registry import list_variants

    if config["variant"] not in list_variants():
        raise ValueError(f"Unknown variant {config['variant']!r}")
    if config["backend"] not in BACKENDS:
        raise ValueError(f"Unknown backend {config['backend']!r}, choose from {', '.join(BACKENDS)}")

    chunk_size = config["chunk_size"]
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size < 1:
        raise ValueError(f"chunk_size must be a positive integer, got {chunk_size!r}")

    if str(config["log_level"]).upper() not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {config['log_level']!r}")
    return config


def load_config(config_file=None, overrides=None):
    # defaults, then the JSON file, then explicit overrides (e.g. CLI flags)
    config = dict(DEFAULT_CONFIG)

    if config_file:
        with open(config_file, 'r') as f:
            file_config = json.load(f)
        if not isinstance(file_config, dict):
            raise ValueError(f"Configuration in {config_file} must be a JSON object")

        for key, value in file_config.items():
            if key not in DEFAULT_CONFIG:
                logger.warning(f"Ignoring unknown configuration key: {key}")
                continue
            config[key] = value
        logger.debug(f"Loaded configuration from {config_file}")

    for key, value in (overrides or {}).items():
        if value is not None:
            config[key] = value

    config["variant"] = str(config["variant"]).lower()
    return validate_config(config)

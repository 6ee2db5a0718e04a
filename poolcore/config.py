"""Pool configuration management."""

import logging
import os
from functools import lru_cache
from pathlib import Path

from .schemas import GolfPoolSettings, PoolConfig
from .utils import load_json

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'data' / 'pool_config.json'

logger = logging.getLogger('poolcore.config')


def load_config(path: Path | str) -> PoolConfig:
    """Load and validate a configuration file without caching."""
    return load_json(path, schema=PoolConfig)


@lru_cache(maxsize=1)
def get_config() -> PoolConfig:
    """
    Load configuration from poolcore/data/pool_config.json.

    The path can be overridden with the POOLCORE_CONFIG environment
    variable. Configuration is cached after first load. When the file is
    missing the built-in defaults (``PoolConfig()``) are used.

    Raises:
        ValueError: If the config file has invalid structure

    Example:
        from poolcore.config import get_config
        config = get_config()
        print(config.golf.counted_golfers)
    """
    path = Path(os.environ.get('POOLCORE_CONFIG') or DEFAULT_CONFIG_PATH)
    if not path.exists():
        logger.warning(f'Config file {path} not found, using defaults')
        return PoolConfig()
    return load_config(path)


def get_golf_settings() -> GolfPoolSettings:
    """Get golf pool contest rules from config."""
    return get_config().golf


def get_timeouts() -> dict[str, float]:
    """Get provider request timeouts in seconds."""
    config = get_config()
    return {'espn': config.espn_timeout_seconds, 'golf': config.golf_timeout_seconds}


def get_sportradar_api_key() -> str:
    """Get the Sportradar API key from the environment ('' when unset)."""
    return os.environ.get('SPORTRADAR_API_KEY', '')


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file changes at runtime.
    """
    get_config.cache_clear()

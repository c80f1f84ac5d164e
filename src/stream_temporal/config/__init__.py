"""Configuration management for stream-temporal.

Provides global configuration and random seed management for reproducible sampling.
"""

from .settings import get_config, set_config, Settings
from .random_state import set_global_seed, get_random_state, get_rng
from .defaults import DEFAULT_CONFIG, QUICK_CONFIG, RESEARCH_CONFIGS, ENGINES, DefaultConfig

__all__ = [
    'get_config',
    'set_config',
    'set_global_seed',
    'get_random_state',
    'get_rng',
    'Settings',
    'DEFAULT_CONFIG',
    'QUICK_CONFIG',
    'RESEARCH_CONFIGS',
    'ENGINES',
    'DefaultConfig'
]

"""Main configuration settings with TOML loading support."""

from dataclasses import dataclass, asdict
from typing import Optional, Union
from pathlib import Path
import logging
import warnings

try:
    import tomllib  # Python 3.11+
except ImportError:
    try:
        import tomli as tomllib  # Fallback for older Python
    except ImportError:
        tomllib = None

try:
    import tomli_w
except ImportError:
    tomli_w = None

from .defaults import RESEARCH_CONFIGS, DefaultConfig, validate_config

logger = logging.getLogger(__name__)

@dataclass
class Settings:
    """Main configuration settings for stream-temporal.

    Can be loaded from TOML files for user customization while providing
    sensible defaults for different testing scenarios.
    """

    # Sampling parameters
    max_list_size: int = 20
    engine: str = "hypothesis"

    # Testing parameters
    max_examples: int = 100
    deadline_ms: Optional[int] = None

    # Reproducibility
    random_seed: Optional[int] = None

    # Advanced settings
    verbose: bool = False

    def __post_init__(self):
        """Validate settings after initialization."""
        temp_config = DefaultConfig(
            max_list_size=self.max_list_size,
            engine=self.engine,
            max_examples=self.max_examples,
            deadline_ms=self.deadline_ms
        )

        for warning in validate_config(temp_config):
            warnings.warn(f"Configuration warning: {warning}", UserWarning)

    @classmethod
    def from_preset(cls, preset: str, **overrides) -> 'Settings':
        """Create settings from a preset configuration.

        Parameters
        ----------
        preset : str
            Preset name ('default', 'quick', 'thorough')
        **overrides
            Settings fields replacing the preset values

        Returns
        -------
        Settings
            Settings object with preset values
        """
        if preset not in RESEARCH_CONFIGS:
            raise ValueError(f"Unknown preset '{preset}'. Available: {list(RESEARCH_CONFIGS.keys())}")

        config = asdict(RESEARCH_CONFIGS[preset])
        config.update(overrides)
        return cls(**config)

    @classmethod
    def from_toml(cls, toml_path: Union[str, Path]) -> 'Settings':
        """Load settings from TOML file.

        Parameters
        ----------
        toml_path : Union[str, Path]
            Path to TOML configuration file

        Returns
        -------
        Settings
            Settings object with values from TOML file

        Raises
        ------
        ImportError
            If tomllib is not available
        FileNotFoundError
            If TOML file doesn't exist
        """
        if tomllib is None:
            raise ImportError("tomllib not available. Install tomli for Python < 3.11")

        toml_path = Path(toml_path)
        if not toml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {toml_path}")

        with open(toml_path, 'rb') as f:
            config_data = tomllib.load(f)

        settings_data = {}

        # Nested sections
        for section in ('sampling', 'testing', 'advanced'):
            if section in config_data:
                settings_data.update(config_data[section])

        # Also handle flat structure
        for key, value in config_data.items():
            if not isinstance(value, dict):
                settings_data[key] = value

        return cls(**settings_data)

    def to_toml(self, toml_path: Union[str, Path]) -> None:
        """Save settings to TOML file.

        Unset optional values (``None``) are left out, TOML has no null.

        Raises
        ------
        ImportError
            If tomli_w is not available
        """
        if tomli_w is None:
            raise ImportError("tomli_w not available. Install tomli-w for TOML writing")

        config_data = {
            'sampling': {
                'max_list_size': self.max_list_size,
                'engine': self.engine
            },
            'testing': {
                'max_examples': self.max_examples,
                'deadline_ms': self.deadline_ms
            },
            'advanced': {
                'random_seed': self.random_seed,
                'verbose': self.verbose
            }
        }
        config_data = {
            section: {key: value for key, value in values.items() if value is not None}
            for section, values in config_data.items()
        }

        toml_path = Path(toml_path)
        with open(toml_path, 'wb') as f:
            tomli_w.dump(config_data, f)

    def update(self, **kwargs) -> 'Settings':
        """Create new Settings with updated values."""
        current_dict = asdict(self)
        current_dict.update(kwargs)
        return Settings(**current_dict)

    def hypothesis_settings(self, **kwargs):
        """Build a ``hypothesis.settings`` object from these settings.

        Parameters
        ----------
        **kwargs
            Extra ``hypothesis.settings`` arguments, taking precedence

        Usable as a test decorator::

            @get_config().hypothesis_settings()
            @given(bind_next(lists(integers()), 0, "X"))
            def test_next(sample): ...
        """
        from hypothesis import settings as hypothesis_settings

        options = {
            'max_examples': self.max_examples,
            'deadline': self.deadline_ms,
            'derandomize': self.random_seed is not None,
        }
        options.update(kwargs)
        return hypothesis_settings(**options)


# Global configuration instance
_GLOBAL_CONFIG: Optional[Settings] = None

def get_config(config_path: Optional[Union[str, Path]] = None,
               preset: Optional[str] = None,
               reload: bool = False) -> Settings:
    """Get global configuration settings.

    Parameters
    ----------
    config_path : Optional[Union[str, Path]]
        Path to TOML configuration file. If None, looks for default locations.
    preset : Optional[str]
        Preset configuration name ('default', 'quick', 'thorough').
        Ignored if config_path is provided.
    reload : bool
        Force reload configuration even if already loaded

    Returns
    -------
    Settings
        Global configuration settings
    """
    global _GLOBAL_CONFIG

    if _GLOBAL_CONFIG is not None and not reload:
        return _GLOBAL_CONFIG

    if config_path is not None:
        _GLOBAL_CONFIG = Settings.from_toml(config_path)
    else:
        default_paths = [
            'stream_temporal.toml',
            Path.home() / '.stream_temporal.toml',
        ]

        config_loaded = False
        for path in default_paths:
            if Path(path).exists():
                try:
                    _GLOBAL_CONFIG = Settings.from_toml(path)
                    config_loaded = True
                    break
                except (OSError, ValueError, TypeError) as e:
                    logger.warning("Could not load config from %s: %s", path, e)
                    continue

        if not config_loaded:
            _GLOBAL_CONFIG = Settings.from_preset(preset or 'default')

    if _GLOBAL_CONFIG.random_seed is not None:
        from .random_state import set_global_seed
        set_global_seed(_GLOBAL_CONFIG.random_seed)

    return _GLOBAL_CONFIG

def set_config(settings: Settings) -> None:
    """Set global configuration settings.

    Parameters
    ----------
    settings : Settings
        Settings object to use as global configuration
    """
    global _GLOBAL_CONFIG
    _GLOBAL_CONFIG = settings

    if settings.random_seed is not None:
        from .random_state import set_global_seed
        set_global_seed(settings.random_seed)

"""Default configuration parameters for different sampling and testing scenarios."""

from dataclasses import dataclass
from typing import List, Optional

@dataclass
class DefaultConfig:
    """Base configuration structure for temporal sequence generation."""

    # Sampling parameters
    max_list_size: int
    engine: str

    # Testing parameters
    max_examples: int
    deadline_ms: Optional[int]


# Everyday property runs
DEFAULT_CONFIG = DefaultConfig(
    max_list_size=20,
    engine="hypothesis",
    max_examples=100,
    deadline_ms=None
)

# Fast feedback while editing
QUICK_CONFIG = DefaultConfig(
    max_list_size=8,
    engine="hypothesis",
    max_examples=25,
    deadline_ms=200
)

# Research scenario configurations
RESEARCH_CONFIGS = {
    "default": DEFAULT_CONFIG,
    "quick": QUICK_CONFIG,
    "thorough": DefaultConfig(
        max_list_size=60,
        engine="hypothesis",
        max_examples=1000,
        deadline_ms=None
    )
}

# Engine options
ENGINES = [
    "hypothesis",  # Shrinking strategies for property tests
    "numpy"        # Seeded numpy sampling for fixtures and the CLI
]

# List size constraints
MIN_LIST_SIZE = 1  # always() needs room for one replacement
RECOMMENDED_MAX_LIST_SIZE = 200  # Beyond this examples get slow to shrink

def validate_config(config: DefaultConfig) -> List[str]:
    """Validate configuration parameters and return list of warnings."""
    warnings = []

    if config.max_list_size < MIN_LIST_SIZE:
        warnings.append(f"Max list size {config.max_list_size} is below minimum {MIN_LIST_SIZE}")

    if config.max_list_size > RECOMMENDED_MAX_LIST_SIZE:
        warnings.append(f"Max list size {config.max_list_size} may cause slow shrinking")

    if config.engine not in ENGINES:
        warnings.append(f"Engine '{config.engine}' not recognized")

    if config.max_examples < 1:
        warnings.append(f"max_examples {config.max_examples} runs no examples")

    if config.deadline_ms is not None and config.deadline_ms <= 0:
        warnings.append(f"Deadline {config.deadline_ms}ms must be positive or None")

    return warnings

"""Environment validation for stream-temporal dependencies."""

import sys
import warnings
from typing import Dict
from packaging import version


def check_environment(min_numpy: str = "1.24", min_hypothesis: str = "6.0") -> None:
    """Check that environment meets minimum dependency requirements.

    Parameters
    ----------
    min_numpy : str, default="1.24"
        Minimum required NumPy version (``Sampler`` needs ``default_rng``)
    min_hypothesis : str, default="6.0"
        Minimum required Hypothesis version

    Raises
    ------
    RuntimeError
        If any dependency requirements are not met

    Examples
    --------
    >>> check_environment()  # Uses default minimums
    >>> check_environment(min_numpy="1.22", min_hypothesis="6.50")
    """
    errors = []

    if sys.version_info < (3, 9):
        errors.append(f"Python 3.9+ required, found {sys.version_info.major}.{sys.version_info.minor}")

    try:
        import numpy as np
        numpy_version = np.__version__
        if version.parse(numpy_version) < version.parse(min_numpy):
            errors.append(f"NumPy {min_numpy}+ required, found {numpy_version}")
    except ImportError:
        errors.append("NumPy not installed - required for the numpy sampling engine")

    try:
        import hypothesis
        hypothesis_version = hypothesis.__version__
        if version.parse(hypothesis_version) < version.parse(min_hypothesis):
            errors.append(f"Hypothesis {min_hypothesis}+ required, found {hypothesis_version}")
    except ImportError:
        errors.append("Hypothesis not installed - required for the hypothesis sampling engine")

    optional_warnings = []

    try:
        import tomllib  # noqa: F401
    except ImportError:
        try:
            import tomli  # noqa: F401
        except ImportError:
            optional_warnings.append("tomli not found - TOML configuration files cannot be read")

    try:
        import tomli_w  # noqa: F401
    except ImportError:
        optional_warnings.append("tomli-w not found - TOML configuration files cannot be written")

    if errors:
        error_msg = "Environment validation failed:\n" + "\n".join(f"  - {err}" for err in errors)

        if optional_warnings:
            error_msg += "\n\nWarnings:\n" + "\n".join(f"  - {warn}" for warn in optional_warnings)

        error_msg += "\n\nTo install required dependencies:\n  pip install numpy hypothesis packaging"

        raise RuntimeError(error_msg)

    # Report warnings only if no errors
    if optional_warnings:
        warning_msg = "Environment warnings:\n" + "\n".join(f"  - {warn}" for warn in optional_warnings)
        warnings.warn(warning_msg, UserWarning)


def get_dependency_versions() -> Dict[str, str]:
    """Get versions of all relevant dependencies.

    Returns
    -------
    dict
        Dictionary mapping package names to version strings
    """
    versions = {
        'python': f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    }

    try:
        import numpy as np
        versions['numpy'] = np.__version__
    except ImportError:
        versions['numpy'] = 'not installed'

    try:
        import hypothesis
        versions['hypothesis'] = hypothesis.__version__
    except ImportError:
        versions['hypothesis'] = 'not installed'

    try:
        import packaging
        versions['packaging'] = packaging.__version__
    except ImportError:
        versions['packaging'] = 'not installed'

    # TOML support
    try:
        import tomllib  # noqa: F401
        versions['tomllib'] = 'built-in (3.11+)'
    except ImportError:
        try:
            import tomli
            versions['tomli'] = getattr(tomli, '__version__', 'installed')
        except ImportError:
            versions['tomli'] = 'not installed'

    try:
        import tomli_w
        versions['tomli_w'] = getattr(tomli_w, '__version__', 'installed')
    except ImportError:
        versions['tomli_w'] = 'not installed'

    return versions


def print_environment_info() -> None:
    """Print comprehensive environment information."""
    versions = get_dependency_versions()

    print("stream-temporal - Environment Information")
    print("=" * 50)

    print("\nCore Dependencies:")
    for pkg in ['python', 'numpy', 'hypothesis']:
        if pkg in versions:
            print(f"  {pkg:12}: {versions[pkg]}")

    print("\nConfiguration:")
    for pkg in ['packaging', 'tomllib', 'tomli', 'tomli_w']:
        if pkg in versions:
            print(f"  {pkg:12}: {versions[pkg]}")

    print("\nSystem Information:")
    print(f"  Platform     : {sys.platform}")
    print(f"  Architecture : {sys.maxsize > 2**32 and '64-bit' or '32-bit'}")

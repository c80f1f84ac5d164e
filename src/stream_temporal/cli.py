import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from . import core
from .analysis import (
    at_most_once,
    first_is,
    is_eventually_followed,
    is_followed_by,
    is_frozen_after,
    last_is,
)
from .config import Settings, get_config, set_global_seed
from .gen import combinators, eq, integers, lists


def _setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure root logger to log to stderr and, optionally, a log file.

    Args:
        verbose: If ``True`` set console log level to ``DEBUG`` else ``INFO``.
        log_file: Optional path to a log file, always written at ``DEBUG``.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    handlers = []

    # Console handler, stdout is reserved for command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter(log_format))
    handlers.append(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(log_format))
        handlers.append(file_handler)

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    logging.debug("Logging initialised. Log file: %s", log_file)


def _parse_scalar(text: str) -> Any:
    """Interpret a command-line token as JSON, falling back to the raw string."""
    try:
        return json.loads(text)
    except ValueError:
        return text


# -----------------------------------------------------------------------------
# Sub-command implementations
# -----------------------------------------------------------------------------

def _sample_generator(name: str, base, trigger: Any, value: Any):
    """Build the numpy generator for combinator *name* and its sample check."""
    pred = eq(trigger)
    table: Dict[str, Callable[[], tuple]] = {
        "always": lambda: (combinators.bind_always(base, pred, value),
                           lambda s: is_frozen_after(s, pred, value)),
        "eventually": lambda: (combinators.bind_eventually(base, pred, value),
                               lambda s: is_eventually_followed(s, pred, value)),
        "next": lambda: (combinators.bind_next(base, pred, value),
                         lambda s: is_followed_by(s, pred, value)),
        "none_after": lambda: (combinators.bind_none_after(base, pred),
                               lambda s: at_most_once(s, pred)),
        "starts_with": lambda: (combinators.bind_starts_with(base, value),
                                lambda s: not s or first_is(s, value)),
        "ends_with": lambda: (combinators.bind_ends_with(base, value),
                              lambda s: not s or last_is(s, value)),
    }
    return table[name]()


def _collides_with_base(value: Any, low: int, high: int) -> bool:
    """Whether *value* is a number the base integer range can produce."""
    return isinstance(value, (int, float)) and low <= value <= high


def _cmd_sample(args: argparse.Namespace) -> int:
    """Entry point for the ``sample`` sub-command."""
    logger = logging.getLogger(__name__)
    config = get_config()
    if args.seed is not None:
        set_global_seed(args.seed)

    max_size = args.max_size if args.max_size is not None else config.max_list_size
    base = lists(integers(args.low, args.high), max_size=max_size)
    trigger = _parse_scalar(args.trigger)
    value = _parse_scalar(args.value)
    if _collides_with_base(value, args.low, args.high) or value == trigger:
        logger.error("--value %r can also occur in the base lists [%d, %d] or equals the trigger; "
                     "inserted values would be indistinguishable", value, args.low, args.high)
        return 1

    gen, check = _sample_generator(args.combinator, base, trigger, value)
    logger.info("Sampling %d list(s) from %s", args.count, args.combinator)

    failures = 0
    for sample in gen.samples(args.count):
        if not check(sample):
            failures += 1
            logger.error("Sample violates %s: %s", args.combinator, sample)
        print(json.dumps(sample))

    logger.info("Sampling finished – violations=%d", failures)
    return 0 if failures == 0 else 2


def _cmd_apply(args: argparse.Namespace) -> int:
    """Entry point for the ``apply`` sub-command."""
    logger = logging.getLogger(__name__)
    items = [_parse_scalar(item) for item in args.items]
    value = _parse_scalar(args.value)

    if args.operator == "starts_with":
        result = core.starts_with(items, value)
    elif args.operator == "ends_with":
        pred = core.never if args.trigger is None else eq(_parse_scalar(args.trigger))
        result = core.ends_with(items, value, pred)
    elif args.operator == "next":
        if args.trigger is None:
            logger.error("next requires --trigger")
            return 1
        result = core.next(items, value, eq(_parse_scalar(args.trigger)))
    else:
        if args.after is None:
            logger.error("always requires --after")
            return 1
        result = core.always(items, value, lambda history: len(history) >= args.after)

    print(json.dumps(list(result)))
    return 0


def _cmd_config_show(args: argparse.Namespace) -> int:
    """Entry point for the ``config show`` sub-command."""
    logger = logging.getLogger(__name__)
    try:
        settings = get_config(config_path=args.config, preset=args.preset, reload=True)
    except (OSError, ValueError, TypeError, ImportError) as exc:
        logger.error("Failed to load configuration: %s", exc)
        return 1

    print(json.dumps(asdict(settings), indent=2))
    return 0


def _cmd_config_init(args: argparse.Namespace) -> int:
    """Entry point for the ``config init`` sub-command."""
    logger = logging.getLogger(__name__)
    path = Path(args.path)
    if path.exists() and not args.force:
        logger.error("%s already exists, use --force to overwrite", path)
        return 1

    try:
        Settings.from_preset(args.preset).to_toml(path)
    except (ValueError, ImportError) as exc:
        logger.error("Could not write configuration: %s", exc)
        return 1

    logger.info("Wrote %s preset to %s", args.preset, path)
    return 0


def _cmd_env(args: argparse.Namespace) -> int:
    """Entry point for the ``env`` sub-command."""
    from .config.validate import check_environment, print_environment_info

    print_environment_info()
    try:
        check_environment()
    except RuntimeError as exc:
        logging.getLogger(__name__).error("%s", exc)
        return 1
    return 0


# -----------------------------------------------------------------------------
# Argument parsing
# -----------------------------------------------------------------------------

COMBINATORS = ["always", "eventually", "next", "none_after", "starts_with", "ends_with"]
OPERATORS = ["starts_with", "ends_with", "next", "always"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stream-temporal",
        description="Temporal stream operators and sequence generators",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging output.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write DEBUG logs to this file.",
    )

    sub_parsers = parser.add_subparsers(dest="command", required=True)

    # sample ------------------------------------------------------------------
    sample_parser = sub_parsers.add_parser("sample", help="Print lists generated by a combinator")
    sample_parser.add_argument("combinator", choices=COMBINATORS)
    sample_parser.add_argument("--trigger", default="0", help="Element value that triggers the property.")
    sample_parser.add_argument("--value", default='"X"', help="Inserted value (JSON).")
    sample_parser.add_argument("--count", type=int, default=5, help="Number of lists to print.")
    sample_parser.add_argument("--max-size", type=int, default=None, help="Maximum base list length.")
    sample_parser.add_argument("--low", type=int, default=-3, help="Smallest base element.")
    sample_parser.add_argument("--high", type=int, default=3, help="Largest base element.")
    sample_parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    sample_parser.set_defaults(func=_cmd_sample)

    # apply -------------------------------------------------------------------
    apply_parser = sub_parsers.add_parser("apply", help="Run an operator over the given items")
    apply_parser.add_argument("operator", choices=OPERATORS)
    apply_parser.add_argument("items", nargs="*", help="Input elements (JSON scalars).")
    apply_parser.add_argument("--value", required=True, help="Inserted value (JSON).")
    apply_parser.add_argument("--trigger", default=None, help="Matching element for next/ends_with.")
    apply_parser.add_argument("--after", type=int, default=None,
                              help="History length that triggers always.")
    apply_parser.set_defaults(func=_cmd_apply)

    # config ------------------------------------------------------------------
    config_parser = sub_parsers.add_parser("config", help="Inspect or create configuration")
    config_sub = config_parser.add_subparsers(dest="config_command", required=True)

    show_parser = config_sub.add_parser("show", help="Display effective configuration")
    show_parser.add_argument("--config", type=str, default=None, help="TOML configuration file.")
    show_parser.add_argument("--preset", type=str, default=None, help="Preset used when no file is found.")
    show_parser.set_defaults(func=_cmd_config_show)

    init_parser = config_sub.add_parser("init", help="Write a preset to a TOML file")
    init_parser.add_argument("path", type=str)
    init_parser.add_argument("--preset", type=str, default="default")
    init_parser.add_argument("--force", action="store_true", help="Overwrite an existing file.")
    init_parser.set_defaults(func=_cmd_config_init)

    # env ---------------------------------------------------------------------
    env_parser = sub_parsers.add_parser("env", help="Show dependency versions")
    env_parser.set_defaults(func=_cmd_env)

    return parser


# -----------------------------------------------------------------------------
# Main entry point
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point. Parse ``argv`` and dispatch to sub-command implementation."""

    parser = _build_parser()
    args = parser.parse_args(argv)

    # Logging must be set up *after* parsing to respect --verbose flag.
    _setup_logging(verbose=args.verbose, log_file=args.log_file)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

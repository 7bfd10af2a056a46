import argparse
import logging
import sys
from typing import List, Optional

from inflect import engine as inflect_engine

from tsclean_generator.config_validation import load_config
from tsclean_generator.constants import DefaultConfig
from tsclean_generator.generator import add_feature, build_feature, create_project

# Import colored logging
from tsclean_generator.colored_logging import (
    setup_colored_logging,
    get_colored_logger,
    log_progress,
    log_success,
)
from tsclean_generator.exceptions import TscleanGeneratorError, UsageError

# Note: Colored logging will be configured after parsing args
logger = logging.getLogger(__name__)

FEATURE_COMMAND = "feature"

_INFLECT_ENGINE_ = inflect_engine()

USAGE = """\
Usage: tsclean <project-name> [path] [--feature <feature-name> --fields <field1:type1:rule1,field2:type2:rule2> ...]
       tsclean feature <feature-name> [--fields <field1:type1:rule1,field2:type2:rule2>]
Example: tsclean FoodStore ./ --feature products --fields name:string:minlength=3,price:number:min=0"""

FIELDS_REQUIRED_MESSAGE = "Error: --fields requires a comma-separated list of field:type:rule pairs"


class TscleanArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(f"Error: {message}")


class FeatureAction(argparse.Action):
    """Start a new [name, fields] entry for every --feature flag."""

    def __call__(self, parser, namespace, values, option_string=None):
        if not values:
            raise UsageError("Error: --feature requires a feature name")
        features = list(getattr(namespace, self.dest, None) or [])
        features.append([values, None])
        setattr(namespace, self.dest, features)


class FieldsAction(argparse.Action):
    """Attach a --fields value to the most recent --feature."""

    def __call__(self, parser, namespace, values, option_string=None):
        features = getattr(namespace, "features", None)
        if not features:
            raise UsageError("Error: --fields must follow a --feature flag")
        if not values:
            raise UsageError(FIELDS_REQUIRED_MESSAGE)
        features[-1][1] = values


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c",
        "--config",
        help="Path to a YAML configuration file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging for the generator tool.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Do not run 'npm install' in the new project.",
    )
    parser.add_argument(
        "--skip-checks",
        action="store_true",
        help="Skip the node/npm/tsc preflight.",
    )


def build_project_parser() -> argparse.ArgumentParser:
    """Parser for `tsclean <project-name> [path] [--feature ... [--fields ...]]...`."""
    parser = TscleanArgumentParser(
        prog="tsclean",
        usage="%(prog)s <project-name> [path] [--feature <name> [--fields <spec>]]... [options]",
        allow_abbrev=False,
        description="Scaffold an Express + TypeScript + MongoDB API with a clean architecture layout.",
    )
    parser.add_argument("project_name", help="Name of the project directory to create.")
    parser.add_argument(
        "path",
        nargs="?",
        default=DefaultConfig.PROJECT_PATH,
        help=f"Parent directory of the project (default: {DefaultConfig.PROJECT_PATH}).",
    )
    parser.add_argument(
        "--feature",
        dest="features",
        action=FeatureAction,
        nargs="?",
        default=[],
        help="Add a feature; may be repeated.",
    )
    parser.add_argument(
        "--fields",
        action=FieldsAction,
        nargs="?",
        help="Fields of the preceding --feature as name:type[:rule],...",
    )
    _add_common_options(parser)
    return parser


def build_feature_parser() -> argparse.ArgumentParser:
    """Parser for `tsclean feature <name> [--fields ...]`."""
    parser = TscleanArgumentParser(
        prog="tsclean feature",
        usage="%(prog)s <name> [--fields <spec>] [options]",
        allow_abbrev=False,
        description="Add a feature to the tsclean project in the current directory.",
    )
    parser.add_argument("name", nargs="?", help="Feature name.")
    parser.add_argument("--fields", nargs="?", const="", help="Fields as name:type[:rule],...")
    _add_common_options(parser)
    return parser


def parse_args(argv: List[str]) -> argparse.Namespace:
    """
    Parse the command line into a namespace.

    The namespace carries `command` ('project' or 'feature'). Unknown
    arguments are reported one at a time, like every other usage error.

    Raises:
        UsageError: for any argument that cannot be interpreted
    """
    if argv and argv[0] == FEATURE_COMMAND:
        args, unknown = build_feature_parser().parse_known_args(argv[1:])
        args.command = FEATURE_COMMAND
        if unknown:
            raise UsageError(f"Unknown argument: {unknown[0]}")
        if not args.name:
            raise UsageError("Error: feature command requires a feature name")
        if args.fields is not None and not args.fields:
            raise UsageError(FIELDS_REQUIRED_MESSAGE)
        return args

    args, unknown = build_project_parser().parse_known_args(argv)
    args.command = "project"
    if unknown:
        raise UsageError(f"Unknown argument: {unknown[0]}")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    if not argv:
        print(USAGE, file=sys.stderr)
        return 1

    # --- Argument Parsing ---
    try:
        args = parse_args(argv)
    except UsageError as e:
        setup_colored_logging(use_colors="--no-color" not in argv)
        logger.error(e.message)
        return 1

    # --- Logging Setup ---
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=not args.no_color)
    cli_logger = get_colored_logger(__name__)

    if args.verbose:
        cli_logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    # --- Main Execution Pipeline ---
    try:
        log_progress(cli_logger, "Loading configuration...")
        overrides = {
            "install_dependencies": False if args.skip_install else None,
            "check_environment": False if args.skip_checks else None,
        }
        config = load_config(args.config, overrides)
        cli_logger.debug(f"Effective configuration: {config}")

        if args.command == FEATURE_COMMAND:
            log_progress(cli_logger, f"Adding feature: {args.name}")
            result = add_feature(".", args.name, args.fields, config)
        else:
            features = [build_feature(name, fields, config) for name, fields in args.features]
            result = create_project(args.project_name, args.path, features, config)

        if result.warnings:
            count = len(result.warnings)
            cli_logger.warning(f"Completed with {count} {_INFLECT_ENGINE_.plural('warning', count)}")
        count = len(result.files)
        log_success(cli_logger, f"Wrote {count} {_INFLECT_ENGINE_.plural('file', count)} to {result.project_root}")
        return 0

    except TscleanGeneratorError as e:
        cli_logger.error(e.message)
        cli_logger.debug(str(e))
        return 1
    except Exception as e:
        cli_logger.critical(f"An unexpected error occurred: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())

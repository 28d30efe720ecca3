"""
Command line interface for algorithm configurations.

Usage:
    recconfig show itemitem.rec funksvd.rec
    recconfig validate --lenient configs/
    recconfig components --kind baseline
    recconfig render funksvd.rec
"""

import argparse
import json
import sys

from utils.common_utils import get_logger, set_log_level
from recconfig.core.config import create_config
from recconfig.core.errors import ConfigurationError, ConfigurationValidationError
from recconfig.components.registry import default_registry
from recconfig.components.spec import ComponentKind
from recconfig.loader.loader import load_algorithms, load_record
from recconfig.loader.script import render_script

logger = get_logger(__name__)


def _print_error(e: ConfigurationError):
    print(f"ERROR: {e.__class__.__name__}: {e}", file=sys.stderr)
    if isinstance(e, ConfigurationValidationError):
        for err in e.errors:
            print(f"  - {err}", file=sys.stderr)


def cmd_show(args, config) -> int:
    registry = default_registry(config.catalog_path)
    algorithms = load_algorithms(args.paths, registry=registry, config=config)
    payload = [algo.to_dict() for algo in algorithms.values()]
    print(json.dumps(payload, indent=2))
    return 0


def cmd_validate(args, config) -> int:
    registry = default_registry(config.catalog_path)
    failed = 0
    for path in args.paths:
        try:
            algorithms = load_algorithms(path, registry=registry, config=config)
        except ConfigurationError as e:
            failed += 1
            _print_error(e)
            continue
        for algo in algorithms.values():
            print(f"OK {algo.name} ({algo.module.name}) from {algo.source}")
    return 1 if failed else 0


def cmd_components(args, config) -> int:
    registry = default_registry(config.catalog_path)
    specs = registry.by_kind(args.kind) if args.kind else list(registry)
    for spec in specs:
        aliases = f" [{', '.join(spec.aliases)}]" if spec.aliases else ""
        print(f"{spec.kind.value:<11} {spec.name}{aliases}")
        if args.verbose:
            for param in spec.parameters:
                default = "" if param.default is None else f" = {param.default}"
                print(f"    module.{param.path} ({param.kind.value}){default}")
    return 0


def cmd_render(args, config) -> int:
    record = load_record(args.path, config)
    header = f"Rendered from {args.path}" if args.header else None
    sys.stdout.write(render_script(record, root=config.root_name, header=header))
    return 0


def build_parser() -> argparse.ArgumentParser:
    loading = argparse.ArgumentParser(add_help=False)
    loading.add_argument(
        "--lenient",
        action="store_true",
        help="Treat unknown properties as warnings instead of errors",
    )

    parser = argparse.ArgumentParser(
        prog="recconfig",
        description="Load and validate recommender algorithm configurations",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default from LOG_LEVEL, else INFO)",
    )
    parser.add_argument(
        "--catalog", default=None, help="JSON file with extra component definitions"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", parents=[loading], help="Print configured algorithms as JSON")
    show.add_argument("paths", nargs="+", help="Configuration files or directories")
    show.set_defaults(func=cmd_show)

    validate = sub.add_parser("validate", parents=[loading], help="Check configuration files")
    validate.add_argument("paths", nargs="+", help="Configuration files or directories")
    validate.set_defaults(func=cmd_validate)

    components = sub.add_parser("components", help="List known components")
    components.add_argument(
        "--kind", choices=[k.value for k in ComponentKind], default=None
    )
    components.add_argument("-v", "--verbose", action="store_true", help="Show parameters")
    components.set_defaults(func=cmd_components)

    render = sub.add_parser("render", help="Print a configuration in script syntax")
    render.add_argument("path", help="Configuration file")
    render.add_argument("--header", action="store_true", help="Add a source comment")
    render.set_defaults(func=cmd_render)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.log_level:
        set_log_level(args.log_level)

    config = create_config(
        strict=False if getattr(args, "lenient", False) else None,
        catalog_path=args.catalog,
    )
    try:
        return args.func(args, config)
    except ConfigurationError as e:
        logger.debug(f"{args.command} failed", exc_info=True)
        _print_error(e)
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""Command-line interface for record-mixins."""

import argparse
import importlib
import logging
import sys

from record_mixins import __version__
from record_mixins.config import get_settings


def _load_model(target: str):
    """Import a record type from a 'package.module:Name' reference."""
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Expected 'module:Name', got: {target!r}")
    module = importlib.import_module(module_name)
    return getattr(module, attr)


def describe(target: str) -> int:
    """Print a record type's attributes and behavior registrations."""
    from record_mixins.dispatch import describe_behaviors
    from record_mixins.host.model import Record

    try:
        model = _load_model(target)
    except (ImportError, AttributeError, ValueError) as e:
        print(f"Error: cannot load {target}: {e}", file=sys.stderr)
        return 1

    if not (isinstance(model, type) and issubclass(model, Record)):
        print(f"Error: {target} is not a record type", file=sys.stderr)
        return 1

    print(f"{model.__name__} (table '{model.__tablename__}')")
    print("Attributes:")
    for name, spec in model.__schema__.attributes.items():
        domain = f" [{', '.join(spec.values)}]" if spec.values else ""
        print(f"  {name}: {spec.type.value}{domain}")

    behaviors = describe_behaviors(model)
    print("Behaviors:" if behaviors else "Behaviors: none")
    for entry in behaviors:
        default = " (+default)" if entry["has_default"] else ""
        print(
            f"  {entry['strategy']} by {entry['attribute_name']}: "
            f"{', '.join(entry['operation_names'])} "
            f"for {', '.join(entry['values']) or '-'}{default}"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="record-mixins",
        description="Inspect discriminant-keyed behavior of record types",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command")
    describe_parser = subparsers.add_parser(
        "describe",
        help="Show the attributes and behaviors of a record type",
    )
    describe_parser.add_argument(
        "target",
        help="Record type as 'package.module:Name'",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "describe":
        return describe(args.target)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())

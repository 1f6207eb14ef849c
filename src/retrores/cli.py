import argparse
import logging
import sys
from pathlib import Path

from .errors import ResourceError
from .logging_config import configure_logging
from .persistence import CATEGORIES, ResourceSelection, read_resource, render
from .runtime import Runtime
from .settings import EngineSettings


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="retrores",
        description="Inspect and verify engine resource archives",
    )
    parser.add_argument(
        "--settings",
        dest="settings_path",
        type=Path,
        default=None,
        help="Path to an engine settings TOML file (pool sizes, palette).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    dump = sub.add_parser("dump", help="Print the TOML snapshot stored in an archive.")
    dump.add_argument("path", type=Path)

    check = sub.add_parser("check", help="Load an archive into a fresh runtime and report what applies.")
    check.add_argument("path", type=Path)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else logging.INFO)
    everything = ResourceSelection.only(*CATEGORIES)

    try:
        data = read_resource(args.path)
        if args.command == "dump":
            sys.stdout.write(render(data, everything))
            return 0
        settings = EngineSettings.from_sources(file_path=args.settings_path)
        applied = data.to_runtime(Runtime(settings), everything)
    except ResourceError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(f"format_version {data.format_version}: {', '.join(applied) or 'nothing to apply'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

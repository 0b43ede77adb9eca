"""Soffit CLI — render server and view-resolution check.

Entry point registered as ``soffit`` in ``pyproject.toml``::

    [project.scripts]
    soffit = "soffit.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``soffit`` command."""
    parser = argparse.ArgumentParser(
        prog="soffit",
        description="Soffit — server-side renderer for portal payloads.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- soffit run -------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the render server")
    run_parser.add_argument("--templates", default=None, help="Template directory")
    run_parser.add_argument(
        "--properties",
        default=None,
        help="Java-style .properties file with per-module cache settings",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--debug", action="store_true", help="Debug mode (auto-reload)")
    run_parser.add_argument("--log-level", default=None, help="Logging level (default: info)")

    # -- soffit resolve ---------------------------------------------------
    resolve_parser = subparsers.add_parser(
        "resolve", help="Show which view a module, mode and window state select"
    )
    resolve_parser.add_argument("module", help="Module name")
    resolve_parser.add_argument("--mode", default="view", help="Rendering mode (default: view)")
    resolve_parser.add_argument(
        "--state", default="normal", help="Window state (default: normal)"
    )
    resolve_parser.add_argument("--templates", default=None, help="Template directory")
    resolve_parser.add_argument("--views-location", default=None, help="Views prefix")
    resolve_parser.add_argument("--suffix", default=None, help="Template file extension")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from soffit.cli._run import run_server

        run_server(args)
    elif args.command == "resolve":
        from soffit.cli._resolve import run_resolve

        run_resolve(args)

"""``soffit run`` — start the render server.

Builds a RendererConfig from CLI flags, a property source from the
optional ``.properties`` file layered over the environment, and serves a
SoffitApp through pounce.
"""

import argparse
import logging
import sys
from dataclasses import replace

from soffit.config import RendererConfig
from soffit.properties import ChainProperties, EnvironProperties, PropertySource, load_properties


def build_config(args: argparse.Namespace, base: RendererConfig | None = None) -> RendererConfig:
    """Apply CLI overrides to *base* (defaults when omitted)."""
    config = base or RendererConfig()
    overrides: dict[str, object] = {}
    if args.templates:
        overrides["template_dir"] = args.templates
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    if args.debug:
        overrides["debug"] = True
    if args.log_level:
        overrides["log_level"] = args.log_level
    return replace(config, **overrides)


def build_properties(args: argparse.Namespace) -> PropertySource:
    """Environment variables, with the properties file (if any) taking precedence."""
    if not args.properties:
        return EnvironProperties()
    try:
        file_props = load_properties(args.properties)
    except OSError as exc:
        print(f"Error: cannot read {args.properties}: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    return ChainProperties(file_props, EnvironProperties())


def run_server(args: argparse.Namespace) -> None:
    """Start the render server."""
    from soffit.server.app import SoffitApp
    from soffit.server.dev import run_dev_server

    config = build_config(args)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = SoffitApp(config, build_properties(args))
    run_dev_server(
        app,
        config.host,
        config.port,
        reload=config.debug,
        reload_dirs=(str(config.template_dir),),
    )

"""``soffit resolve`` — report which view a request would render.

Runs the same selection as the server against the template directory,
without decoding a payload.  Exits 1 when no view matches.
"""

import argparse
import sys

from soffit.config import RendererConfig
from soffit.errors import ConfigurationError, NoMatchingView
from soffit.resources import FileSystemCatalog
from soffit.views import ViewSelector, module_path_for


def run_resolve(args: argparse.Namespace) -> None:
    """Print the selected view path for ``args.module``."""
    defaults = RendererConfig()
    template_dir = args.templates or defaults.template_dir
    views_location = args.views_location or defaults.views_location
    suffix = args.suffix or defaults.view_suffix

    try:
        selector = ViewSelector(FileSystemCatalog(template_dir), suffix=suffix)
        view = selector.resolve(module_path_for(views_location, args.module), args.mode, args.state)
    except (ConfigurationError, NoMatchingView) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(view)

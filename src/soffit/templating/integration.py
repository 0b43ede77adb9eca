"""Kida environment setup and view rendering.

Creates a kida Environment from the renderer config.  The template
loader is rooted at the same directory the file-system catalog lists,
so a selected view path is directly a template name.
"""

from kida import Environment, FileSystemLoader

from soffit.config import RendererConfig
from soffit.dispatch import DispatchResult


def create_environment(config: RendererConfig) -> Environment:
    """Create a kida Environment from renderer configuration.

    Called once at app startup.  Templates are reloaded from disk in
    debug mode.
    """
    return Environment(
        loader=FileSystemLoader(str(config.template_dir)),
        autoescape=config.autoescape,
        auto_reload=config.debug,
    )


def render_view(env: Environment, result: DispatchResult, model_name: str = "soffit") -> str:
    """Render the selected view with the payload exposed as *model_name*."""
    template = env.get_template(result.view_path)
    return template.render({model_name: result.payload})

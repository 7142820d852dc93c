"""Template adapter for rendering firmware sources with Jinja2."""

import logging
from typing import Any

import jinja2

from ergobox.core.errors import TemplateError
from ergobox.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)


class TemplateAdapter:
    """Jinja2 template adapter over the templates bundled with ergobox."""

    def __init__(
        self,
        package: str = "ergobox",
        template_dir: str = "templates",
        trim_blocks: bool = True,
        lstrip_blocks: bool = True,
    ):
        """Initialize the Jinja2 template adapter.

        Args:
            package: Package holding the template directory
            template_dir: Directory of ``.j2`` files inside the package
            trim_blocks: Remove newlines after block tags
            lstrip_blocks: Strip leading whitespace from block tags
        """
        self.env = jinja2.Environment(
            loader=jinja2.PackageLoader(package, template_dir),
            trim_blocks=trim_blocks,
            lstrip_blocks=lstrip_blocks,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,  # Raise errors for undefined variables
        )

    def render_template(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a bundled template with the given context.

        Raises:
            TemplateError: If the template is missing, invalid or refers to a
                variable the context does not provide
        """
        try:
            template = self.env.get_template(template_name)
            return template.render(context)
        except jinja2.TemplateError as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error(
                "template_render_error",
                template=template_name,
                context_keys=sorted(context),
                error=str(e),
                exc_info=exc_info,
            )
            raise TemplateError(
                f"Failed to render template {template_name}: {e}",
                context={"template": template_name, "context_keys": sorted(context)},
            ) from e

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render a Jinja2 template string with the given context."""
        try:
            return self.env.from_string(template_string).render(context)
        except jinja2.TemplateError as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error(
                "template_string_render_error", error=str(e), exc_info=exc_info
            )
            raise TemplateError(
                f"Failed to render template string: {e}",
                context={"template_length": len(template_string)},
            ) from e


def create_template_adapter() -> TemplateAdapter:
    """Create a template adapter over the bundled firmware templates."""
    return TemplateAdapter()

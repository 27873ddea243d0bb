"""Template compilation utilities."""

import logging
from typing import Any, Callable, Dict, Optional
from jinja2 import Environment, BaseLoader, StrictUndefined, Template, TemplateError


logger = logging.getLogger(__name__)


class StringTemplateLoader(BaseLoader):
    """Template loader for string templates."""

    def __init__(self, template_string: str):
        self.template_string = template_string

    def get_source(self, environment, template):
        return self.template_string, None, lambda: True


def compile_template(
    template_str: str,
    helpers: Optional[Dict[str, Callable[..., Any]]] = None,
) -> Template:
    """Compile a Jinja2 template string with helper functions bound as globals.

    Undefined names raise at render time instead of rendering as empty text.
    """
    try:
        env = Environment(
            loader=StringTemplateLoader(template_str),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )
        env.globals.update(helpers or {})
        return env.get_template("")

    except TemplateError as e:
        logger.error(f"Template compilation error: {e}")
        raise

"""
TemplateService Module

This module renders HTML email bodies from templates with literal
`{{name}}` placeholders. Template files are located and read through a
Jinja2 loader, but the text is not treated as Jinja2 source: each
placeholder is substituted in a single pass, values are expected to be
escaped by the caller, and any placeholder without a value renders as "-".
"""

import os
import re
import logging
from typing import Dict, List, Mapping, Optional

from jinja2 import Environment, FileSystemLoader

from app.models.contact import MISSING_VALUE_PLACEHOLDER, RenderedEmail

logger = logging.getLogger(__name__)

template_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")

# literal braces, no inner whitespace, case-sensitive names
PLACEHOLDER_PATTERN = re.compile(r"\{\{([^{}\s]+)\}\}")


class TemplateService:
    """Renders static HTML templates with pre-escaped placeholder values."""

    def __init__(self, directory: str = template_dir):
        self.env = Environment(loader=FileSystemLoader(directory))
        self._sources: Dict[str, str] = {}

    def load(self, template_name: str) -> str:
        """Read a template once and keep its text for the life of the process."""
        if template_name not in self._sources:
            source, filename, _ = self.env.loader.get_source(self.env, template_name)
            logger.info(f"Loaded template {template_name} from {filename}")
            self._sources[template_name] = source
        return self._sources[template_name]

    def render_string(
        self, source: str, values: Mapping[str, Optional[str]]
    ) -> RenderedEmail:
        """
        Substitute every placeholder of the given template text.

        Args:
            source: Template text containing `{{name}}` placeholders
            values: Placeholder name to already escaped value

        Returns:
            The rendered email body and the substituted values, in template order
        """
        rendered_values: List[str] = []

        def substitute(match: re.Match) -> str:
            value = values.get(match.group(1)) or MISSING_VALUE_PLACEHOLDER
            rendered_values.append(value)
            return value

        html = PLACEHOLDER_PATTERN.sub(substitute, source)
        return RenderedEmail(html=html, values=rendered_values)

    def render_template(
        self, template_name: str, values: Mapping[str, Optional[str]]
    ) -> RenderedEmail:
        """Render a template file from the template directory."""
        return self.render_string(self.load(template_name), values)


template_service = TemplateService()

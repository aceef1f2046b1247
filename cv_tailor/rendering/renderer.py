"""HTML renderer for CVs.

Renders a CV to a self-contained HTML document (styles inlined) with
Jinja2, ready for measurement and PDF export in Chromium.
"""

from __future__ import annotations

import logging
import re

from jinja2 import Environment, FileSystemLoader

from cv_tailor.cv.models import CV, Contact
from cv_tailor.rendering.config import RenderingConfig, get_rendering_config

logger = logging.getLogger(__name__)


def contact_href(contact: Contact) -> str | None:
    """Link target for a contact, or None for plain text."""
    if contact.type == "linkedin":
        return f"https://linkedin.com/in/{contact.value}"
    if contact.type == "github":
        return f"https://github.com/{contact.value}"
    if contact.type == "email":
        return f"mailto:{contact.value}"
    if contact.type == "phone":
        return "tel:+" + re.sub(r"[^0-9]", "", contact.value)
    return None


def contact_label(contact: Contact) -> str:
    """Visible text for a contact."""
    if contact.type == "linkedin":
        return f"linkedin.com/in/{contact.value}"
    if contact.type == "github":
        return f"github.com/{contact.value}"
    return contact.value


class HTMLRenderer:
    """Jinja2 renderer for the A4 CV template."""

    def __init__(self, config: RenderingConfig | None = None):
        """Initialize the renderer.

        Args:
            config: Optional RenderingConfig. Uses global config if not provided.
        """
        self.config = config or get_rendering_config()
        self._setup_jinja()

    def _setup_jinja(self) -> None:
        """Set up Jinja2 template environment."""
        self.template_dir = self.config.get_resume_template_dir()
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.jinja_env.filters["contact_href"] = contact_href
        self.jinja_env.filters["contact_label"] = contact_label

    def _load_styles(self) -> str:
        """Load CSS styles from template directory."""
        styles_path = self.template_dir / "styles.css"
        if styles_path.exists():
            return styles_path.read_text(encoding="utf-8")
        return ""

    def render(self, cv: CV) -> str:
        """Render a CV to HTML.

        Args:
            cv: CV to render.

        Returns:
            Rendered HTML string.
        """
        template = self.jinja_env.get_template(self.config.resume_template)
        html = template.render(
            cv=cv,
            styles=self._load_styles(),
            content_width_px=self.config.content_width_px,
        )
        logger.debug(f"Rendered CV with {cv.achievement_count()} achievements")
        return html

    __call__ = render

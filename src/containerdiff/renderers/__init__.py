"""
Renderers consume the laid-out table: text lines for the console or an HTML document.
Both share the cell views computed by containerdiff.layout.
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from .html_report import render as render_html
from .text import render as render_text

__all__ = ["make_env", "render_html", "render_text"]


def make_env() -> Environment:
    """Jinja2 environment loading the package templates."""
    templates_dir = Path(__file__).resolve().parent.parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=True,
    )

"""
Markdown rendering for markdown cells.
"""

import html
import logging
from typing import Iterable, Optional, Protocol

import markdown

from nbstate.config import DEFAULT_MARKDOWN_EXTENSIONS


logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def render(self, text: str) -> str:
        ...


class MarkdownRenderer:
    """
    Renders markdown to HTML with Python-Markdown.

    Fenced code blocks are highlighted with Pygments through the
    ``codehilite`` extension and headings get ``id`` anchors from ``toc``.
    Raw HTML in the source passes through.
    """

    def __init__(self, extensions: Optional[Iterable[str]] = None):
        self.extensions = list(DEFAULT_MARKDOWN_EXTENSIONS if extensions is None else extensions)
        self._md = markdown.Markdown(
            extensions=self.extensions,
            extension_configs={"codehilite": {"guess_lang": False, "css_class": "highlight"}},
        )

    def render(self, text: str) -> str:
        """
        Render markdown source to an HTML fragment.

        Never raises: if rendering fails the escaped source is returned in a
        ``<pre>`` block.
        """
        try:
            return self._md.reset().convert(text)
        except Exception:
            logger.warning("markdown rendering failed, falling back to escaped text", exc_info=True)
            return f"<pre>{html.escape(text)}</pre>"

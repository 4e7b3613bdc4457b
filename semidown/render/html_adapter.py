import asyncio
import logging
from typing import Optional

import markdown

from semidown.errors import RendererNotReadyError
from semidown.render.base import RendererAdapter, RenderResult, is_structurally_complete

logger = logging.getLogger(__name__)

_EXTENSIONS = ["fenced_code", "codehilite", "tables", "sane_lists"]


class HtmlMarkdownAdapter(RendererAdapter):
    """Renders block text to an HTML fragment with Python-Markdown."""

    def __init__(self, code_theme: str = "monokai", css_class: str = "highlight"):
        self._extension_configs = {
            "codehilite": {
                "css_class": css_class,
                "guess_lang": False,
                "pygments_style": code_theme,
            },
        }
        self._md: Optional[markdown.Markdown] = None

    async def initialize(self) -> None:
        loop = asyncio.get_event_loop()
        self._md = await loop.run_in_executor(None, self._build)
        logger.debug("HTML renderer ready")

    def _build(self) -> markdown.Markdown:
        md = markdown.Markdown(
            extensions=_EXTENSIONS, extension_configs=self._extension_configs
        )
        # Loads the highlighter and its lexers before the first real block.
        md.convert("```python\npass\n```")
        md.reset()
        return md

    async def render(self, text: str) -> RenderResult:
        if self._md is None:
            raise RendererNotReadyError("HTML markdown renderer")
        self._md.reset()
        html = self._md.convert(text)
        return RenderResult(rendered=html, is_complete=is_structurally_complete(text))

    @property
    def is_ready(self) -> bool:
        return self._md is not None

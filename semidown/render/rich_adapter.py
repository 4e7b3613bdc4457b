import asyncio
import io
import logging

from rich.console import Console
from rich.markdown import Markdown

from semidown.errors import RendererNotReadyError
from semidown.render.base import RendererAdapter, RenderResult, is_structurally_complete

logger = logging.getLogger(__name__)

_WARMUP_SAMPLE = "```python\nprint('ready')\n```"


class RichMarkdownAdapter(RendererAdapter):
    """Renders block text as a Rich ``Markdown`` renderable."""

    def __init__(self, code_theme: str = "monokai"):
        self._code_theme = code_theme
        self._ready = False

    async def initialize(self) -> None:
        loop = asyncio.get_event_loop()
        await loop.run_in_executor(None, self._warm_up)
        self._ready = True
        logger.debug("Rich renderer ready (theme=%s)", self._code_theme)

    def _warm_up(self) -> None:
        """Render a fenced sample once so the highlighter is loaded."""
        console = Console(file=io.StringIO(), width=80)
        console.print(Markdown(_WARMUP_SAMPLE, code_theme=self._code_theme))

    async def render(self, text: str) -> RenderResult:
        if not self._ready:
            raise RendererNotReadyError("Rich markdown renderer")
        return RenderResult(
            rendered=Markdown(text, code_theme=self._code_theme),
            is_complete=is_structurally_complete(text),
        )

    @property
    def is_ready(self) -> bool:
        return self._ready

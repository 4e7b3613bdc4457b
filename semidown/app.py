import asyncio
import logging

from semidown.config import SemidownConfig
from semidown.mount.base import MountSurface
from semidown.render.base import RendererAdapter
from semidown.stream.orchestrator import StreamingMarkdown

logger = logging.getLogger(__name__)


def build_renderer(config: SemidownConfig) -> RendererAdapter:
    if config.renderer == "rich":
        from semidown.render.rich_adapter import RichMarkdownAdapter
        return RichMarkdownAdapter(code_theme=config.code_theme)
    if config.renderer == "html":
        from semidown.render.html_adapter import HtmlMarkdownAdapter
        return HtmlMarkdownAdapter(code_theme=config.code_theme)
    raise ValueError(f"Unknown renderer: {config.renderer}")


def split_fragments(text: str, chunk_size: int) -> list[str]:
    """Cut text into fixed-size fragments, ignoring markdown structure."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    return [text[i:i + chunk_size] for i in range(0, len(text), chunk_size)]


class SemidownApp:
    """Replays a document as a fragment stream: text -> renderer -> surface."""

    def __init__(
        self,
        renderer: RendererAdapter,
        surface: MountSurface,
        config: SemidownConfig | None = None,
    ):
        self._renderer = renderer
        self._surface = surface
        self._config = config or SemidownConfig()
        self._stream: StreamingMarkdown | None = None

    @property
    def stream(self) -> StreamingMarkdown | None:
        return self._stream

    async def run(self, text: str) -> StreamingMarkdown:
        if not self._renderer.is_ready:
            await self._renderer.initialize()

        stream = StreamingMarkdown(self._renderer, self._surface, self._config)
        self._stream = stream
        fragments = split_fragments(text, self._config.chunk_size)
        logger.debug("Streaming %d chars as %d fragments", len(text), len(fragments))

        try:
            for fragment in fragments:
                await stream.write(fragment)
                if self._config.delay > 0:
                    await asyncio.sleep(self._config.delay)
            await stream.end()
        except asyncio.CancelledError:
            # Rendered blocks stay on the surface.
            stream.pause()
            raise
        return stream

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from semidown.config import PausePolicy, SemidownConfig
from semidown.mount.base import MountSurface
from semidown.render.base import RendererAdapter, RenderResult
from semidown.stream.events import BlockEvent, EventKind
from semidown.stream.segmenter import BOUNDARY, Segmenter

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    PAUSED = "paused"
    DESTROYED = "destroyed"


@dataclass
class _BlockRecord:
    block_id: str
    text: str = ""
    mounted: bool = False
    closed: bool = False
    finalized: bool = False
    # Bumped on every text update; ``applied`` is the version last shown.
    version: int = 0
    applied: int = 0
    close_settled: bool = False

    @property
    def needs_settle(self) -> bool:
        return self.applied < self.version or (self.closed and not self.close_settled)


@dataclass(frozen=True)
class BlockSnapshot:
    block_id: str
    text: str
    closed: bool
    finalized: bool


class StreamingMarkdown:
    """Streams markdown fragments through a segmenter, renderer and surface.

    ``write`` and ``end`` are coroutines because rendering is; ``pause``,
    ``resume`` and ``destroy`` take effect immediately. Calls made after
    ``destroy`` are ignored.
    """

    def __init__(
        self,
        renderer: RendererAdapter,
        surface: MountSurface,
        config: SemidownConfig | None = None,
    ):
        self._renderer = renderer
        self._surface = surface
        self._config = config or SemidownConfig()
        self._segmenter = Segmenter()
        self._blocks: dict[str, _BlockRecord] = {}
        self._held: list[str] = []
        self._handlers: dict[EventKind, Callable[[BlockEvent], None]] = {}
        self._end_pending = False
        self._state = SessionState.IDLE
        self._hookup()

    async def write(self, fragment: str) -> None:
        """Feed more markdown text into the pipeline."""
        if (
            self._state is SessionState.PAUSED
            and self._config.pause_policy is PausePolicy.BUFFER
        ):
            self._held.append(fragment)
            return
        if self._state is not SessionState.PROCESSING:
            logger.debug(
                "Dropping %d chars written while %s",
                len(fragment), self._state.value,
            )
            return
        events = self._segmenter.write(self._take_held() + fragment)
        await self._dispatch(events)

    async def end(self) -> None:
        """Signal that no more data is coming."""
        if self._state is not SessionState.PROCESSING:
            logger.debug("Ignoring end() while %s", self._state.value)
            return
        held = self._take_held()
        events = self._segmenter.write(held) if held else []
        events.extend(self._segmenter.end())
        await self._dispatch(events)

    def pause(self) -> None:
        if self._state is SessionState.PROCESSING:
            self._state = SessionState.PAUSED

    def resume(self) -> None:
        if self._state is SessionState.PAUSED:
            self._state = SessionState.PROCESSING

    def destroy(self) -> None:
        if self._state is SessionState.DESTROYED:
            return
        self._state = SessionState.DESTROYED
        self._handlers.clear()
        self._held.clear()
        self._blocks.clear()
        self._surface.clear_all()
        logger.debug("Stream destroyed")

    def get_state(self) -> SessionState:
        return self._state

    def snapshot(self) -> list[BlockSnapshot]:
        return [
            BlockSnapshot(
                block_id=r.block_id, text=r.text, closed=r.closed, finalized=r.finalized
            )
            for r in self._blocks.values()
        ]

    @property
    def markdown(self) -> str:
        """All block text accepted so far, joined by blank lines."""
        return BOUNDARY.join(r.text for r in self._blocks.values())

    def _hookup(self) -> None:
        self._handlers = {
            EventKind.BLOCK_START: self._on_block_start,
            EventKind.BLOCK_UPDATE: self._on_block_update,
            EventKind.BLOCK_CLOSE: self._on_block_close,
            EventKind.STREAM_END: self._on_stream_end,
        }
        self._state = SessionState.PROCESSING

    def _take_held(self) -> str:
        held = "".join(self._held)
        self._held.clear()
        return held

    async def _dispatch(self, events: list[BlockEvent]) -> None:
        """Record every event, then render the blocks they left out of date.

        Bookkeeping never awaits, so a failed render cannot lose later events.
        Blocks whose render failed stay pending and are retried next time.
        """
        for event in events:
            handler = self._handlers.get(event.kind)
            if handler is None:
                return
            handler(event)

        for record in list(self._blocks.values()):
            if self._state is SessionState.DESTROYED:
                return
            if record.needs_settle:
                await self._settle(record)

        if self._end_pending and self._state is not SessionState.DESTROYED:
            self._end_pending = False
            self._state = SessionState.IDLE
            logger.debug("Stream ended after %d blocks", len(self._blocks))

    def _on_block_start(self, event: BlockEvent) -> None:
        record = _BlockRecord(block_id=event.block_id)
        self._blocks[event.block_id] = record
        if self._config.mount_empty_blocks:
            self._surface.create_region(event.block_id)
            record.mounted = True
        logger.debug("Block %s started", event.block_id)

    def _on_block_update(self, event: BlockEvent) -> None:
        record = self._blocks.get(event.block_id)
        if record is None:
            return
        record.text = event.text
        record.version += 1

    def _on_block_close(self, event: BlockEvent) -> None:
        record = self._blocks.get(event.block_id)
        if record is not None:
            record.closed = True

    def _on_stream_end(self, event: BlockEvent) -> None:
        self._end_pending = True

    async def _settle(self, record: _BlockRecord) -> None:
        """Bring one block's region up to date and finalize it once closed."""
        result = await self._render_into(record)
        if not record.closed or record.close_settled:
            return
        if self._state is SessionState.DESTROYED:
            return
        if record.applied < record.version or (result is None and record.mounted):
            # Superseded; the render of the final text settles the close.
            return
        record.close_settled = True
        if result is not None and result.is_complete:
            self._surface.finalize_region(record.block_id)
            record.finalized = True
        logger.debug(
            "Block %s closed (%d chars, finalized=%s)",
            record.block_id, len(record.text), record.finalized,
        )

    async def _render_into(self, record: _BlockRecord) -> Optional[RenderResult]:
        """Render the record's current text and apply it unless superseded."""
        version = record.version
        if not record.mounted:
            if not record.text.strip():
                record.applied = version
                return None
            self._surface.create_region(record.block_id)
            record.mounted = True

        result = await self._renderer.render(record.text)

        if self._state is SessionState.DESTROYED:
            logger.debug("Discarding render for %s after destroy", record.block_id)
            return None
        if version < record.applied:
            logger.debug("Discarding stale render %d for %s", version, record.block_id)
            return None
        record.applied = version
        self._surface.update_region(record.block_id, result.rendered)
        return result

from typing import Optional

from semidown.stream.events import BlockEvent, EventKind

BOUNDARY = "\n\n"


class Segmenter:
    """Splits a stream of markdown text into blocks separated by blank lines.

    Each call returns the lifecycle events produced by that call. Update
    events carry the whole text of the block so far, so a consumer can
    re-render a block from scratch on every update.
    """

    def __init__(self, id_prefix: str = "block-"):
        self._buffer = ""
        self._id_prefix = id_prefix
        self._next_id = 1
        self._current_id: Optional[str] = None

    @property
    def buffered(self) -> str:
        return self._buffer

    @property
    def current_block_id(self) -> Optional[str]:
        return self._current_id

    def write(self, fragment: str) -> list[BlockEvent]:
        """Feed a fragment and return the events it produces."""
        data = self._buffer + fragment
        self._buffer = ""
        events: list[BlockEvent] = []

        while True:
            idx = data.find(BOUNDARY)
            if idx == -1:
                break
            part = data[:idx]
            data = data[idx + len(BOUNDARY):]
            self._update(part, events)
            self._close(events)

        if data:
            self._buffer = data
            self._update(data, events)

        return events

    def end(self) -> list[BlockEvent]:
        """Flush the open block, if any, and signal the end of the stream."""
        events: list[BlockEvent] = []
        if self._buffer:
            self._update(self._buffer, events)
            self._buffer = ""
            self._close(events)
        events.append(BlockEvent(kind=EventKind.STREAM_END))
        return events

    def _start(self, events: list[BlockEvent]) -> str:
        if self._current_id is None:
            self._current_id = f"{self._id_prefix}{self._next_id}"
            self._next_id += 1
            events.append(
                BlockEvent(kind=EventKind.BLOCK_START, block_id=self._current_id)
            )
        return self._current_id

    def _update(self, text: str, events: list[BlockEvent]) -> None:
        block_id = self._start(events)
        events.append(
            BlockEvent(kind=EventKind.BLOCK_UPDATE, block_id=block_id, text=text)
        )

    def _close(self, events: list[BlockEvent]) -> None:
        if self._current_id is None:
            return
        events.append(
            BlockEvent(kind=EventKind.BLOCK_CLOSE, block_id=self._current_id)
        )
        self._current_id = None

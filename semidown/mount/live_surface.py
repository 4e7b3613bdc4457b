import logging
from typing import Any

from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.text import Text

from semidown.mount.base import MountSurface

logger = logging.getLogger(__name__)


class LiveSurface(MountSurface):
    """Renders every block region into a single live-updating terminal view."""

    def __init__(self, console: Console, refresh_per_second: int = 10):
        self._console = console
        self._refresh_per_second = refresh_per_second
        self._regions: dict[str, RenderableType] = {}
        self._finalized: set[str] = set()
        self._live: Live | None = None

    def create_region(self, block_id: str) -> None:
        if self._live is None:
            self._live = Live(
                Group(),
                console=self._console,
                refresh_per_second=self._refresh_per_second,
            )
            self._live.start()
        self._regions.setdefault(block_id, Text(""))
        self._refresh()

    def update_region(self, block_id: str, rendered: Any) -> None:
        if block_id not in self._regions:
            logger.debug("Ignoring update for unknown region %s", block_id)
            return
        self._regions[block_id] = rendered
        self._refresh()

    def finalize_region(self, block_id: str) -> None:
        if block_id not in self._regions:
            logger.debug("Ignoring finalize for unknown region %s", block_id)
            return
        self._finalized.add(block_id)

    def clear_all(self) -> None:
        self._regions.clear()
        self._finalized.clear()
        if self._live is not None:
            self._live.update(Group(), refresh=True)
            self._live.stop()
            self._live = None

    def stop(self) -> None:
        """Stop live updates, leaving the last frame on screen."""
        if self._live is not None:
            self._live.stop()
            self._live = None

    def is_finalized(self, block_id: str) -> bool:
        return block_id in self._finalized

    @property
    def is_active(self) -> bool:
        return self._live is not None

    def _refresh(self) -> None:
        if self._live is not None:
            self._live.update(Group(*self._regions.values()))

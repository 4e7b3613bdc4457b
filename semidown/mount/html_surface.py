import html
import logging
from dataclasses import dataclass
from typing import Any

from semidown.mount.base import MountSurface

logger = logging.getLogger(__name__)

COMPLETE_CLASS = "md-block-complete"


@dataclass
class Region:
    block_id: str
    content: str = ""
    finalized: bool = False


class HtmlSurface(MountSurface):
    """Keeps one ``<div data-block-id>`` per block in document order."""

    def __init__(self):
        self._regions: dict[str, Region] = {}

    def create_region(self, block_id: str) -> None:
        if block_id in self._regions:
            return
        self._regions[block_id] = Region(block_id=block_id)

    def update_region(self, block_id: str, rendered: Any) -> None:
        region = self._regions.get(block_id)
        if region is None:
            logger.debug("Ignoring update for unknown region %s", block_id)
            return
        region.content = str(rendered)

    def finalize_region(self, block_id: str) -> None:
        region = self._regions.get(block_id)
        if region is None:
            logger.debug("Ignoring finalize for unknown region %s", block_id)
            return
        region.finalized = True

    def clear_all(self) -> None:
        self._regions.clear()

    def region(self, block_id: str) -> Region | None:
        return self._regions.get(block_id)

    @property
    def block_ids(self) -> list[str]:
        return list(self._regions)

    @property
    def html(self) -> str:
        parts = []
        for region in self._regions.values():
            attrs = f'data-block-id="{html.escape(region.block_id)}"'
            if region.finalized:
                attrs += f' class="{COMPLETE_CLASS}"'
            parts.append(f"<div {attrs}>{region.content}</div>")
        return "\n".join(parts)

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EventKind(Enum):
    BLOCK_START = "block_start"
    BLOCK_UPDATE = "block_update"
    BLOCK_CLOSE = "block_close"
    STREAM_END = "stream_end"


@dataclass(frozen=True)
class BlockEvent:
    kind: EventKind
    block_id: Optional[str] = None
    text: str = ""

from dataclasses import dataclass
from enum import Enum


class PausePolicy(Enum):
    DROP = "drop"
    BUFFER = "buffer"


@dataclass
class SemidownConfig:
    # Stream behavior
    pause_policy: PausePolicy = PausePolicy.DROP
    mount_empty_blocks: bool = True

    # Rendering
    renderer: str = "rich"
    code_theme: str = "monokai"
    refresh_per_second: int = 10

    # CLI demo pacing
    chunk_size: int = 16
    delay: float = 0.02

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

FENCE = "```"


def is_structurally_complete(text: str) -> bool:
    """True when no fenced code block is left open in ``text``."""
    return text.count(FENCE) % 2 == 0


@dataclass(frozen=True)
class RenderResult:
    rendered: Any
    is_complete: bool


class RendererAdapter(ABC):
    """Abstract base class for markdown renderers.

    ``render`` must depend only on ``text``: the orchestrator calls it again
    with the full block text on every update.
    """

    @abstractmethod
    async def initialize(self) -> None:
        ...

    @abstractmethod
    async def render(self, text: str) -> RenderResult:
        ...

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        ...

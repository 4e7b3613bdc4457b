from abc import ABC, abstractmethod
from typing import Any


class MountSurface(ABC):
    """Owns an output surface with one sub-region per block.

    ``update_region`` and ``finalize_region`` must ignore block ids they do
    not know, including ids removed by ``clear_all``.
    """

    @abstractmethod
    def create_region(self, block_id: str) -> None:
        ...

    @abstractmethod
    def update_region(self, block_id: str, rendered: Any) -> None:
        ...

    @abstractmethod
    def finalize_region(self, block_id: str) -> None:
        ...

    @abstractmethod
    def clear_all(self) -> None:
        ...

class SemidownError(Exception):
    """Base class for semidown errors."""


class RendererNotReadyError(SemidownError):
    """Raised when a renderer is used before initialize() has completed."""

    def __init__(self, renderer_name: str):
        super().__init__(f"{renderer_name} not initialized")
        self.renderer_name = renderer_name

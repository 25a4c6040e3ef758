"""Abstract base class for generation layers.

Each layer in the pipeline implements the GenerationLayer interface and
transforms the GenerationContext in some way: placing rooms, routing
corridors, solving the grid or decorating it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from .context import GenerationContext


class GenerationLayer(ABC):
    """Abstract base class for level generation layers.

    Layers are applied in order by a LevelGenerationRun. Work is done in
    bounded chunks: `advance()` is called repeatedly until it returns True,
    which lets a host pause between chunks. A layer keeps no state of its own
    between calls; everything lives in the context.

    Attributes:
        progress: Progress fraction reported once the layer has finished.
    """

    progress: ClassVar[float] = 0.0

    def begin(self, ctx: GenerationContext) -> None:
        """Prepare the context before the first `advance()` call."""

    @abstractmethod
    def advance(self, ctx: GenerationContext) -> bool:
        """Do one chunk of work.

        Args:
            ctx: The generation context to modify.

        Returns:
            True once the layer has finished.
        """
        raise NotImplementedError

    def apply(self, ctx: GenerationContext) -> None:
        """Run the layer to completion."""
        self.begin(ctx)
        while not self.advance(ctx):
            pass

"""Level generator that orchestrates the layer-based generation pipeline.

A LevelGenerator owns settings and a catalog and hands out one
LevelGenerationRun per generation. The run is an explicit state machine: each
`step()` does one bounded chunk of work in the current layer, so a host can
spread generation over several frames. Stepping in chunks and calling `run()`
straight through consume randomness in the same order and produce the same
result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import Enum
from typing import TypeAlias

from levelforge.environment.catalog import TileCatalog
from levelforge.environment.generators.base import GenerationResult
from levelforge.errors import GenerationIncomplete
from levelforge.settings import Settings

from .context import GenerationContext
from .layer import GenerationLayer
from .layers import (
    CorridorLayer,
    FurnitureLayer,
    GridSeedLayer,
    GridSolveLayer,
    OrientationLayer,
    RoomLayoutLayer,
)

logger = logging.getLogger(__name__)

ProgressCallback: TypeAlias = Callable[[float], None]
CompleteCallback: TypeAlias = Callable[[GenerationResult], None]


class GenerationStatus(Enum):
    RUNNING = "running"
    DONE = "done"


def default_layers() -> list[GenerationLayer]:
    """The standard layer sequence, in execution order."""
    return [
        # 1. Rooms on the XZ plane
        RoomLayoutLayer(),
        # 2. Corridors joining every room
        CorridorLayer(),
        # 3. Solver with room and corridor floors pre-seeded
        GridSeedLayer(),
        # 4. Collapse the rest of the grid
        GridSolveLayer(),
        # 5. Furniture above sampled floors
        FurnitureLayer(),
        # 6. Cosmetic yaw, then freeze the plan
        OrientationLayer(),
    ]


class LevelGenerationRun:
    """One in-progress generation.

    Attributes:
        context: The run's mutable state.
        layers: Layers applied in order.
    """

    def __init__(
        self,
        context: GenerationContext,
        layers: Sequence[GenerationLayer],
        on_progress: ProgressCallback | None = None,
        on_complete: CompleteCallback | None = None,
    ) -> None:
        self.context = context
        self.layers = list(layers)
        self.on_progress = on_progress
        self.on_complete = on_complete

        self._index = 0
        self._layer_begun = False
        self._started = False
        self._progress = 0.0
        self._result: GenerationResult | None = None

    @property
    def seed(self) -> int:
        return self.context.seed

    @property
    def progress(self) -> float:
        """Fraction of the run completed, in [0, 1]."""
        return self._progress

    @property
    def is_done(self) -> bool:
        return self._result is not None

    def step(self) -> GenerationStatus:
        """Advance the current layer by one chunk of work.

        Returns:
            DONE once every layer has finished, RUNNING otherwise. Calling
            step() on a finished run is a no-op that returns DONE.
        """
        if self._result is not None:
            return GenerationStatus.DONE

        if not self._started:
            self._started = True
            self._report_progress(0.0)

        if self._index < len(self.layers):
            layer = self.layers[self._index]
            if not self._layer_begun:
                logger.debug(f"Starting layer {type(layer).__name__}")
                layer.begin(self.context)
                self._layer_begun = True

            if layer.advance(self.context):
                self._index += 1
                self._layer_begun = False
                self._report_progress(max(self._progress, layer.progress))

        if self._index < len(self.layers):
            return GenerationStatus.RUNNING

        self._finish()
        return GenerationStatus.DONE

    def run(self) -> GenerationResult:
        """Step until the run is done and return its result."""
        while self.step() is GenerationStatus.RUNNING:
            pass
        return self.result()

    def result(self) -> GenerationResult:
        """Return the finished result.

        Raises:
            GenerationIncomplete: If the run has not reached DONE yet.
        """
        if self._result is None:
            raise GenerationIncomplete(
                f"Generation with seed {self.seed} is still running "
                f"({self._progress:.0%} complete)."
            )
        return self._result

    def _report_progress(self, fraction: float) -> None:
        self._progress = fraction
        if self.on_progress is not None:
            self.on_progress(fraction)

    def _finish(self) -> None:
        self._result = self.context.to_result()
        report = self._result.report
        logger.info(
            f"Level generated with seed {report.seed}: "
            f"{report.cells_resolved} tiles, {report.hole_count} holes"
        )
        if self.on_complete is not None:
            self.on_complete(self._result)


class LevelGenerator:
    """Generates levels from settings and a tile catalog.

    Example:
        generator = LevelGenerator(Settings(seed=42), default_catalog())
        result = generator.generate()
        print(result.plan.render_layer(0))

    Attributes:
        settings: Settings every run starts from.
        catalog: Tiles a run may place.
        on_progress: Called with a non-decreasing fraction as layers finish.
        on_complete: Called once with the result of each finished run.
    """

    def __init__(
        self,
        settings: Settings,
        catalog: TileCatalog,
        on_progress: ProgressCallback | None = None,
        on_complete: CompleteCallback | None = None,
        layers: Callable[[], list[GenerationLayer]] = default_layers,
    ) -> None:
        """Initialize the generator.

        Args:
            settings: Settings every run starts from.
            catalog: Tiles a run may place.
            on_progress: Optional progress callback.
            on_complete: Optional completion callback.
            layers: Builds the layer sequence for each new run.
        """
        self.settings = settings
        self.catalog = catalog
        self.on_progress = on_progress
        self.on_complete = on_complete
        self._layers = layers

    def start(self) -> LevelGenerationRun:
        """Validate the inputs and return a fresh run.

        Raises:
            ConfigurationError: If the settings or catalog are unusable. No
                randomness is drawn in that case.
        """
        self.settings.validate()
        self.catalog.validate()

        seed = self.settings.resolve_seed()
        logger.info(
            f"Generating level {self.settings.level_size} with seed {seed}"
        )
        context = GenerationContext.create(self.settings, self.catalog, seed)
        return LevelGenerationRun(
            context,
            self._layers(),
            on_progress=self.on_progress,
            on_complete=self.on_complete,
        )

    def generate(self) -> GenerationResult:
        """Run a full generation and return its result."""
        return self.start().run()

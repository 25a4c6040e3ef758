"""Result container shared by the generation pipeline and its callers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from levelforge.environment.level_plan import GenerationReport, LevelPlan
    from levelforge.util.coordinates import Rect

    from .corridors import CorridorNetwork


@dataclass(frozen=True)
class GenerationResult:
    """Everything a finished generation run produces.

    Attributes:
        plan: Resolved grid position to tile mapping.
        report: Summary of the run (seed, densities, holes, caps).
        rooms: Rooms placed on the XZ plane, in placement order.
        corridors: Corridor connections and their cells.
    """

    plan: LevelPlan
    report: GenerationReport
    rooms: tuple[Rect, ...]
    corridors: CorridorNetwork

    @property
    def seed(self) -> int:
        return self.report.seed

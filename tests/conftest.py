from __future__ import annotations

import pytest

from levelforge.environment.catalog import TileCatalog, default_catalog
from levelforge.settings import Settings


@pytest.fixture
def catalog() -> TileCatalog:
    """The stock tile catalog."""
    return default_catalog()


@pytest.fixture
def small_settings() -> Settings:
    """Settings small enough for a full run to stay fast."""
    return Settings(
        level_size=(15, 3, 15),
        seed=42,
        min_room_size=3,
        max_room_size=6,
        room_density=0.4,
    )

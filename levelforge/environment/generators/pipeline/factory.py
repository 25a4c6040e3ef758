"""Factory functions for creating pre-configured level generators."""

from __future__ import annotations

from typing import Any

from levelforge.environment.catalog import TileCatalog, default_catalog
from levelforge.settings import Settings

from .pipeline import CompleteCallback, LevelGenerator, ProgressCallback


def create_level_generator(
    preset: str = "default",
    catalog: TileCatalog | None = None,
    on_progress: ProgressCallback | None = None,
    on_complete: CompleteCallback | None = None,
    **overrides: Any,
) -> LevelGenerator:
    """Create a generator from a named preset.

    Available presets are the keys of config.PRESETS: "default",
    "small_dungeon", "large_complex" and "sparse_layout".

    Args:
        preset: Name of the preset to start from.
        catalog: Tiles to place. Defaults to default_catalog().
        on_progress: Optional progress callback.
        on_complete: Optional completion callback.
        **overrides: Settings fields that replace the preset's values.

    Returns:
        A configured LevelGenerator.

    Raises:
        ConfigurationError: If the preset is unknown or an override is
            not a settings field.
    """
    settings = Settings.from_preset(preset, **overrides)
    if catalog is None:
        catalog = default_catalog()
    return LevelGenerator(
        settings, catalog, on_progress=on_progress, on_complete=on_complete
    )

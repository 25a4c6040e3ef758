"""Exceptions raised by level generation.

Only configuration problems abort a run. Recoverable conditions (a room
density target that was not reached, cells left as holes, exhausted
instance caps) are recorded in the GenerationReport instead.
"""


class LevelGenerationError(Exception):
    """Base class for errors raised on purpose by levelforge."""

    pass


class ConfigurationError(LevelGenerationError):
    """Raised when settings or the tile catalog make generation impossible.

    Reported before any randomness is drawn; no generation is attempted.
    """

    pass


class GenerationIncomplete(LevelGenerationError):
    """Raised when a result is requested from a run that has not finished."""

    pass

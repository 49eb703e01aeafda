"""Exceptions raised at the boundary of the fretboard engine."""


class CagedError(Exception):
    """Base class for every validation failure the engine reports."""


class InvalidNote(CagedError, ValueError):
    """A note name outside the 12-symbol chromatic alphabet."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Invalid note name: {name!r}")


class InvalidConfiguration(CagedError, ValueError):
    """Quiz settings, display ranges or catalog data that cannot be used."""


class OutOfRangeIndex(CagedError, IndexError):
    """A string index outside [0, 5] or a negative fret."""

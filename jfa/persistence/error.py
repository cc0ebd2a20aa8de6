"""Persistence layer errors."""


class PersistenceError(Exception):
    """A data file could not be read or written."""

    pass

# /app/services/errors.py

"""
Error taxonomy shared by the need computation and the data-access layer.

The routers translate these into HTTP responses; the service layer itself
never catches them.
"""


class InvalidArgumentError(ValueError):
    """A query option failed validation before any data was read."""


class DataAccessError(RuntimeError):
    """Reading supply requests or students from the data source failed."""

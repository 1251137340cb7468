# housepoints/errors.py
from __future__ import annotations


class HousePointsError(Exception):
    """Base class for errors the handler layer is expected to translate."""


class SchemaMissingError(HousePointsError):
    """
    The store is unreachable or a table is missing.
    Callers report remediation instead of retrying.
    """

    def __init__(self, table: str) -> None:
        self.table = table
        super().__init__(
            f"Table {table!r} is missing or the database is unreachable. "
            "Run Database.init_models() (or python -m housepoints.scripts.seed_houses)."
        )


class ConflictError(HousePointsError):
    def __init__(self, resource: str, field: str, value: object) -> None:
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"{resource} with {field}={value!r} already exists")


class NotFoundError(HousePointsError):
    def __init__(self, resource: str, ident: object) -> None:
        self.resource = resource
        self.ident = ident
        super().__init__(f"{resource} {ident!r} not found")


class EntryValidationError(HousePointsError):
    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")

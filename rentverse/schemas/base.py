"""Shared pydantic base classes for records exchanged with the core service."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model for wire records.

    The core service speaks camelCase; attributes stay snake_case in Python.
    Both spellings are accepted on input. Dump with ``by_alias=True`` for the wire.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_wire(self) -> dict:
        """Serialize for a request body: camelCase keys, unset optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Pagination(CamelModel):
    """Pagination metadata attached to list responses."""

    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = 0

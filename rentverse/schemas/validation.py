"""Validation result value objects.

A result is either fully valid or carries at least one error entry; ``is_valid``
is derived from the errors and cannot disagree with them.
"""

from pydantic import BaseModel, Field, computed_field


class ValidationResult(BaseModel):
    """List-style result used by the auth and AI prediction validators."""

    errors: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.errors


class FieldValidationResult(BaseModel):
    """Field-keyed result used by the listing form validator."""

    errors: dict[str, str] = Field(default_factory=dict)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.errors

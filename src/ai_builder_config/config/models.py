"""Models returned by the config manager."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ai_builder_config.crypto import DecryptError, KeyMaterialError
from ai_builder_config.store import PersistenceError, ScopeNotConfiguredError

ENCRYPTED_PLACEHOLDER = "[ENCRYPTED]"


class ConfigValueError(BaseModel):
    """Value handed to ``set`` cannot be stored as JSON."""

    model_config = ConfigDict(extra="forbid")

    key: str
    message: str


type ConfigManagerError = (
    ScopeNotConfiguredError | PersistenceError | KeyMaterialError | DecryptError | ConfigValueError
)


class ValidationReport(BaseModel):
    """Outcome of ``validate_config``. Warnings never affect ``valid``."""

    model_config = ConfigDict(extra="forbid")

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def valid(self) -> bool:
        return not self.errors

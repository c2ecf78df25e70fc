# addonkeeper/config/model.py
from __future__ import annotations
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .columns import ColumnSchema, defaultColumnSchema, fromLegacyShape
from .flavor import DEFAULT_FLAVOR, Flavor
from .paths import resolveAddonDir, resolveSettingsDir, resolveStagingDir

__all__ = ["InstallationSettings", "AddonPreferences", "Config"]



def _fromVariantName(value: Any) -> Any:
    # Older documents stored the variant name ("Retail", "ClassicPTR") instead of the identifier
    if isinstance(value, str) and value in Flavor.__members__:
        return Flavor[value]
    return value



class InstallationSettings(BaseModel):
    """Where the game client lives and which flavor is active. Changed only by explicit user action."""
    model_config = ConfigDict(extra="ignore")

    directory: Path | None = None
    flavor: Flavor = DEFAULT_FLAVOR

    @field_validator("flavor", mode="before")
    @classmethod
    def _acceptVariantName(cls, value: Any) -> Any:
        return _fromVariantName(value)



class AddonPreferences(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Add-on ids the user chose not to update, per flavor
    ignored: dict[Flavor, list[str]] = Field(default_factory=dict)

    @field_validator("ignored", mode="before")
    @classmethod
    def _acceptVariantNameKeys(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {_fromVariantName(key): ids for key, ids in value.items()}
        return value

    def isIgnored(self, flavor: Flavor, addonId: str) -> bool:
        return addonId in self.ignored.get(flavor, [])

    def ignore(self, flavor: Flavor, addonId: str) -> None:
        ids = self.ignored.setdefault(flavor, [])
        if addonId not in ids:
            ids.append(addonId)

    def unignore(self, flavor: Flavor, addonId: str) -> None:
        ids = self.ignored.get(flavor)
        if not ids or addonId not in ids:
            return
        ids.remove(addonId)
        if not ids:
            del self.ignored[flavor]



class Config(BaseModel):
    """
    Persisted configuration document. Every field has a default so an empty
    document (or a missing file) yields a usable config.

    Documents written by the previous generation use snake_case keys and call the
    installation block `wow`; those names are accepted on load, never written.
    """
    model_config = ConfigDict(extra="ignore")

    installation: InstallationSettings = Field(
        default_factory=InstallationSettings,
        validation_alias=AliasChoices("installation", "wow"),
    )
    addons: AddonPreferences = Field(default_factory=AddonPreferences)
    theme: str | None = None
    columnConfig: ColumnSchema = Field(
        default_factory=defaultColumnSchema,
        validation_alias=AliasChoices("columnConfig", "column_config"),
    )
    windowSize: tuple[int, int] | None = Field(
        default=None,
        validation_alias=AliasChoices("windowSize", "window_size"),
    )
    scale: float | None = Field(default=None, gt=0)
    backupDirectory: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("backupDirectory", "backup_directory"),
    )

    @field_validator("columnConfig", mode="before")
    @classmethod
    def _acceptLegacyColumns(cls, value: Any) -> Any:
        return fromLegacyShape(value)

    @field_validator("windowSize")
    @classmethod
    def _positiveWindowSize(cls, value: tuple[int, int] | None) -> tuple[int, int] | None:
        if value is not None and (value[0] <= 0 or value[1] <= 0):
            raise ValueError("windowSize entries must be positive")
        return value

    def getAddonDirectoryForFlavor(self, flavor: Flavor) -> Path | None:
        """None when no installation directory is configured."""
        return resolveAddonDir(self.installation.directory, flavor)

    def getSettingsDirectoryForFlavor(self, flavor: Flavor) -> Path | None:
        return resolveSettingsDir(self.installation.directory, flavor)

    def getStagingDirectory(self) -> Path | None:
        """Temporary archive directory for the active flavor."""
        return resolveStagingDir(self.installation.directory, self.installation.flavor)

    def toDocument(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

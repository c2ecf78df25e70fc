# addonkeeper/catalog/models.py
from __future__ import annotations
from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator

from addonkeeper.config.flavor import Flavor

__all__ = ["CatalogSource", "CatalogAddon", "Catalog"]



class CatalogSource(str, Enum):
    Curse = "curse"

    def __str__(self) -> str:
        return self.value



class CatalogAddon(BaseModel):
    """One record of the catalog document. Wire names are camelCase and case-sensitive."""
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: int
    name: str
    categories: list[str] = Field(default_factory=list)
    summary: str
    downloadCount: int = Field(alias="numberOfDownloads", ge=0)
    source: CatalogSource
    supportedFlavors: list[Flavor] = Field(alias="flavors")



class Catalog(RootModel[list[CatalogAddon]]):
    """Ordered add-on listing, unique by id. Never persisted."""

    @field_validator("root")
    @classmethod
    def _uniqueIds(cls, value: list[CatalogAddon]) -> list[CatalogAddon]:
        seen: set[int] = set()
        for addon in value:
            if addon.id in seen:
                raise ValueError(f"Duplicate catalog addon id {addon.id}")
            seen.add(addon.id)
        return value

    @property
    def addons(self) -> list[CatalogAddon]:
        return self.root

    def __iter__(self) -> Iterator[CatalogAddon]: # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def byId(self, addonId: int) -> CatalogAddon | None:
        for addon in self.root:
            if addon.id == addonId:
                return addon
        return None

    def forFlavor(self, flavor: Flavor) -> list[CatalogAddon]:
        return [addon for addon in self.root if flavor in addon.supportedFlavors]

# addonkeeper/config/columns.py
from __future__ import annotations
from typing import Annotated, Any, ClassVar, Literal, Protocol, Union, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

__all__ = [
    "ColumnLayout", "ColumnSpec", "SchemaV1", "SchemaV2", "ColumnSchema",
    "defaultColumnSchema", "parseColumnSchema", "fromLegacyShape",
]



@runtime_checkable
class ColumnLayout(Protocol):
    """Accessor contract shared by every stored column schema generation."""
    def setWidth(self, key: str, width: int) -> None: ...
    def getWidth(self, key: str) -> int | None: ...
    def getOrder(self, key: str) -> int | None: ...



def _checkWidth(width: int) -> int:
    if isinstance(width, bool) or not isinstance(width, int):
        raise TypeError(f"Column width must be an int, not '{type(width).__name__}'")
    if width < 0:
        raise ValueError(f"Column width must not be negative, got {width}")
    return width



class SchemaV1(BaseModel):
    """
    First generation: three fixed columns with stored widths and a hardcoded order.
    Written by older releases, still loadable as-is.
    """
    model_config = ConfigDict(extra="forbid")

    WIDTH_FIELDS: ClassVar[dict[str, str]] = {
        "local": "localVersionWidth",
        "remote": "remoteVersionWidth",
        "status": "statusWidth",
    }
    ORDER: ClassVar[dict[str, int]] = {"local": 1, "remote": 2, "status": 3}

    version: Literal["v1"] = "v1"
    localVersionWidth: int = Field(default=150, ge=0)
    remoteVersionWidth: int = Field(default=150, ge=0)
    statusWidth: int = Field(default=85, ge=0)

    def setWidth(self, key: str, width: int) -> None:
        _checkWidth(width)
        field = self.WIDTH_FIELDS.get(key)
        if field is None:
            return
        setattr(self, field, width)

    def getWidth(self, key: str) -> int | None:
        field = self.WIDTH_FIELDS.get(key)
        if field is None:
            return None
        return getattr(self, field)

    def getOrder(self, key: str) -> int | None:
        # Fixed layout, stored state never changes it
        return self.ORDER.get(key)



class ColumnSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    key: str = Field(min_length=1)
    width: int | None = Field(default=None, ge=0)
    hidden: bool = False



class SchemaV2(BaseModel):
    """
    Second generation: open, ordered, hideable column set. Order is the list order.
    """
    model_config = ConfigDict(extra="forbid")

    version: Literal["v2"] = "v2"
    columns: list[ColumnSpec] = Field(default_factory=list)

    @field_validator("columns")
    @classmethod
    def _uniqueKeys(cls, value: list[ColumnSpec]) -> list[ColumnSpec]:
        seen: set[str] = set()
        for spec in value:
            if spec.key in seen:
                raise ValueError(f"Duplicate column key '{spec.key}'")
            seen.add(spec.key)
        return value

    def _find(self, key: str) -> ColumnSpec | None:
        for spec in self.columns:
            if spec.key == key:
                return spec
        return None

    def setWidth(self, key: str, width: int) -> None:
        _checkWidth(width)
        spec = self._find(key)
        if spec is not None:
            spec.width = width

    def getWidth(self, key: str) -> int | None:
        spec = self._find(key)
        return spec.width if spec is not None else None

    def getOrder(self, key: str) -> int | None:
        for idx, spec in enumerate(self.columns):
            if spec.key == key:
                return idx
        return None



ColumnSchema = Annotated[Union[SchemaV1, SchemaV2], Field(discriminator="version")]

_ADAPTER: TypeAdapter[SchemaV1 | SchemaV2] = TypeAdapter(ColumnSchema)

# Field names used by the externally tagged {"V1": {...}} documents of the previous generation
_LEGACY_V1_FIELDS = {
    "local_version_width": "localVersionWidth",
    "remote_version_width": "remoteVersionWidth",
    "status_width": "statusWidth",
}



def defaultColumnSchema() -> SchemaV1:
    return SchemaV1()



def fromLegacyShape(data: Any) -> Any:
    """
    Rewrites older persisted shapes into the tagged form:
      {"V1": {"local_version_width": 150, ...}} -> {"version": "v1", "localVersionWidth": 150, ...}
      {"V2": {"columns": [...]}}                -> {"version": "v2", "columns": [...]}
      untagged objects are tagged by their fields.
    Anything else is returned unchanged for the validator to reject.
    """
    if not isinstance(data, dict):
        return data

    if len(data) == 1 and "V1" in data and isinstance(data["V1"], dict):
        body = {_LEGACY_V1_FIELDS.get(key, key): value for key, value in data["V1"].items()}
        return {"version": "v1", **body}
    if len(data) == 1 and "V2" in data and isinstance(data["V2"], dict):
        return {"version": "v2", **data["V2"]}

    if "version" not in data:
        if "columns" in data:
            return {"version": "v2", **data}
        if any(key in data for key in (*SchemaV1.WIDTH_FIELDS.values(), *_LEGACY_V1_FIELDS)):
            body = {_LEGACY_V1_FIELDS.get(key, key): value for key, value in data.items()}
            return {"version": "v1", **body}
    return data



def parseColumnSchema(data: Any) -> SchemaV1 | SchemaV2:
    """Validates a persisted column schema (current or legacy shape). Raises pydantic.ValidationError."""
    if isinstance(data, (SchemaV1, SchemaV2)):
        return data
    return _ADAPTER.validate_python(fromLegacyShape(data))

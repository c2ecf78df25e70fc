# addonkeeper/core/errors.py
from __future__ import annotations

__all__ = [
    "AddonKeeperError",
    "UnknownFlavorError",
    "ConfigFileError",
    "CatalogError",
    "CatalogConnectionError",
    "CatalogHTTPError",
    "CatalogDecodeError",
]



class AddonKeeperError(Exception):
    """Base class for every error raised by addonkeeper."""
    pass



class UnknownFlavorError(AddonKeeperError, ValueError):
    def __init__(self, value: object):
        super().__init__(f"Unknown flavor '{value}'")
        self.value = value



class ConfigFileError(AddonKeeperError):
    """Config document exists but cannot be used (wrong shape, invalid values, not writable)."""
    pass



class CatalogError(AddonKeeperError):
    """Base class for catalog fetch failures. No partial catalog is ever returned."""
    pass



class CatalogConnectionError(CatalogError):
    """Catalog host could not be reached, or the request timed out."""
    pass



class CatalogHTTPError(CatalogError):
    def __init__(self, status: int, body: str = ""):
        message = f"Couldn't fetch catalog: HTTP {status}"
        if body:
            message += f": {body}"
        super().__init__(message)
        self.status = status
        self.body = body



class CatalogDecodeError(CatalogError):
    """Catalog body is not valid JSON or does not match the catalog document schema."""
    pass

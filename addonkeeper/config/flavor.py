# addonkeeper/config/flavor.py
from __future__ import annotations
from enum import Enum

from addonkeeper.core.errors import UnknownFlavorError

__all__ = ["Flavor", "ALL_FLAVORS", "DEFAULT_FLAVOR"]



class Flavor(str, Enum):
    """
    Game-client build/channel. The value is the canonical identifier used for
    serialization, display and the on-disk `_<identifier>_` folder name.
    """
    Retail = "retail"
    Classic = "classic"
    RetailPTR = "ptr"
    ClassicPTR = "classic_ptr"
    Beta = "beta"

    def __str__(self) -> str:
        return self.value

    @property
    def folderName(self) -> str:
        # _retail_, _classic_, _ptr_, ...
        return f"_{self.value}_"

    @classmethod
    def parse(cls, text: str) -> "Flavor":
        """Parses a flavor identifier. Case-sensitive; surrounding whitespace is ignored."""
        if isinstance(text, Flavor):
            return text
        try:
            return cls(str(text).strip())
        except ValueError:
            raise UnknownFlavorError(text) from None



ALL_FLAVORS: tuple[Flavor, ...] = tuple(Flavor)
DEFAULT_FLAVOR = Flavor.Retail

# addonkeeper/app/settings.py
from __future__ import annotations
import json5
from pydantic import JsonValue
from pathlib import Path
from typing import Any, cast
from functools import lru_cache

from addonkeeper.app.paths import PACKAGE_DIR, userDir
from addonkeeper.core.dictpath import getByPath

import logging
logger = logging.getLogger(__name__)

__all__ = [
    "SETTINGS_DEFAULT_PATH", "SETTINGS", "loadUserSettings",
    "loadSettings", "reloadSettings", "deepMerge",
    "settings", "settingsBool", "configFilePath",
]


SETTINGS_DEFAULT_PATH = PACKAGE_DIR / "settings_default.json5"
SETTINGS: JsonValue = (
    json5.loads(SETTINGS_DEFAULT_PATH.read_text(encoding="utf-8"))
    if SETTINGS_DEFAULT_PATH.exists()
    else {
        "__source": "PACKAGE_DEFAULTS",
        "catalog": {
            "url": "https://raw.githubusercontent.com/casperstorm/ajour-catalog/master/curse.json",
            "timeoutSeconds": 30,
            "maxConnectionsPerHost": 6,
        },
        "config": {"path": "addonkeeper.json5"},
        "debug": {"devModeEnabled": False},
        "logging": {"file": "addonkeeper.log", "maxBytes": 10 * 1024 * 1024, "backupCount": 5},
    }
)



def loadUserSettings() -> JsonValue:
    filePath = userDir() / "settings.json5"
    if filePath.exists():
        try:
            return json5.loads(filePath.read_text(encoding="utf-8"))
        except Exception as err:
            logger.error("Failed to parse '%s': %s", filePath, err)
    return {}



@lru_cache(maxsize=1)
def loadSettings() -> JsonValue:
    return deepMerge(SETTINGS, loadUserSettings())



def reloadSettings() -> JsonValue:
    """Drops the cached merge so the user file is read again."""
    loadSettings.cache_clear()
    return loadSettings()



def deepMerge(first: JsonValue, second: JsonValue) -> JsonValue:
    """
    Returns a new JsonValue where keys from `second` override/extend `first`.
    Only merges recursively when BOTH sides are JSON objects (dicts).
    For all other JSON types (lists, strings, numbers, booleans, null),
    the right-hand value `second` replaces `first`.
    """
    if isinstance(first, dict) and isinstance(second, dict):
        out: dict[str, JsonValue] = {}
        for key, value in first.items():
            out[key] = cast(JsonValue, value)
        for key, value in second.items():
            if key in out:
                out[key] = deepMerge(out[key], cast(JsonValue, value))
            else:
                out[key] = cast(JsonValue, value)
        return cast(JsonValue, out)

    return cast(JsonValue, second)

# ---------- Ergonomic accessors over merged settings ----------

def settings(path: str, default: Any = None) -> Any:
    """Returns value at `path` from merged settings, or `default` if missing."""
    val = getByPath(loadSettings(), path)
    return default if val is None else val



def settingsBool(path: str, default: bool = False) -> bool:
    """Returns bool value at `path` or `default` if missing."""
    val = getByPath(loadSettings(), path)
    if isinstance(val, bool):
        return val
    if val is None:
        return default
    return bool(val)

# --------------------------------------------------------------

def configFilePath() -> Path:
    """Location of the persisted configuration document. Relative settings resolve under the user dir."""
    raw = Path(str(settings("config.path", "addonkeeper.json5"))).expanduser()
    return raw if raw.is_absolute() else userDir() / raw

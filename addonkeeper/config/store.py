# addonkeeper/config/store.py
from __future__ import annotations
import logging
import os
from collections.abc import Mapping
from pathlib import Path

import json5
from pydantic import ValidationError

from addonkeeper.app.settings import configFilePath
from addonkeeper.core.errors import ConfigFileError
from .model import Config

logger = logging.getLogger(__name__)

__all__ = ["loadConfig", "saveConfig"]



def loadConfig(path: str | Path | None = None) -> Config:
    """
    Loads the configuration document, or defaults.

    Behavior:
        • Missing file → default Config
        • Unreadable, non-UTF-8 or unparsable text → logs warning, default Config (file is left untouched)
        • Non-object JSON or invalid values → raises ConfigFileError
    """
    filePath = Path(path) if path is not None else configFilePath()
    logger.debug("Loading config from '%s'", filePath)

    if not filePath.exists():
        logger.debug("'%s' is missing → using defaults", filePath)
        return Config()

    if not filePath.is_file():
        raise ConfigFileError(f"'{filePath}' exists but is not a file")

    try:
        text = filePath.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        logger.warning("Failed to read '%s': %s → using defaults", filePath, err)
        return Config()

    try:
        parsed = json5.loads(text)
    except ValueError as err:
        logger.warning("Parse failed for '%s': %s → using defaults", filePath, err)
        return Config()

    if parsed is None:
        return Config()

    if not isinstance(parsed, Mapping):
        raise ConfigFileError(f"'{filePath}' must contain a JSON object, not '{type(parsed).__name__}'")

    try:
        return Config.model_validate(dict(parsed))
    except ValidationError as err:
        raise ConfigFileError(f"Invalid config in '{filePath}': {err}") from err



def saveConfig(config: Config, path: str | Path | None = None) -> Path:
    """Writes `config` as JSON5 with an atomic replace. Returns the written path."""
    filePath = Path(path) if path is not None else configFilePath()

    try:
        filePath.parent.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise ConfigFileError(f"Cannot create parent directory '{filePath.parent}': {err}") from err

    out = json5.dumps(config.toDocument(), indent=2, quote_keys=True)

    tmpPath = filePath.with_suffix(filePath.suffix + ".tmp")
    try:
        with open(tmpPath, "w", encoding="utf-8") as fl:
            fl.write(out)
            if not out.endswith("\n"):
                fl.write("\n")
        os.replace(tmpPath, filePath)
    except OSError as err:
        raise ConfigFileError(f"Cannot write '{filePath}': {err}") from err

    logger.debug("Saved config to '%s'", filePath)
    return filePath

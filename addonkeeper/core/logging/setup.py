# addonkeeper/core/logging/setup.py
from __future__ import annotations
import logging
import logging.handlers
from pathlib import Path

from addonkeeper.app.paths import userDir
from addonkeeper.app.settings import settings, settingsBool
from .formatters import DevFormatter, JsonFormatter, RedactingFormatter

__all__ = [
    "NO_PROPAGATE",
    "configureLogging",
]



# Disable propagation from chatty libraries
NO_PROPAGATE = [
    "asyncio",
    "httpcore.connection", "httpcore.http11",
    "httpx",
]



def configureLogging(logFile: str | Path | None = None) -> None:
    """
    Initiate the global logging configuration.

    Dev:
      - Console pretty logs (DEBUG)
      - JSON file log (DEBUG)

    Prod:
      - Console INFO
      - JSON file logs INFO with rotation
      - Credential scrubbing active in both
    """
    devMode = settingsBool("debug.devModeEnabled", False)
    rootLevel = logging.DEBUG if devMode else logging.INFO

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(rootLevel)

    for name in NO_PROPAGATE:
        logging.getLogger(name).propagate = False

    devFmt = RedactingFormatter(DevFormatter())
    jsonFmt = RedactingFormatter(JsonFormatter())

    consoleHandler = logging.StreamHandler()
    consoleHandler.setLevel(rootLevel)
    consoleHandler.setFormatter(devFmt)
    root.addHandler(consoleHandler)

    filePath = Path(logFile) if logFile is not None else Path(str(settings("logging.file", "addonkeeper.log")))
    if not filePath.is_absolute():
        filePath = userDir() / filePath
    try:
        filePath.parent.mkdir(parents=True, exist_ok=True)
        fileHandler = logging.handlers.RotatingFileHandler(
            filePath,
            maxBytes=int(settings("logging.maxBytes", 10 * 1024 * 1024)),
            backupCount=int(settings("logging.backupCount", 5)),
            encoding="utf-8"
        )
    except OSError as err:
        # Console logging still works without the file
        logging.getLogger(__name__).warning("Cannot open log file '%s': %s", filePath, err)
    else:
        fileHandler.setLevel(rootLevel)
        fileHandler.setFormatter(jsonFmt)
        root.addHandler(fileHandler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

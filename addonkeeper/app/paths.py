# addonkeeper/app/paths.py
from __future__ import annotations
import os
from pathlib import Path



# Root directory structure constants
PACKAGE_DIR = Path(__file__).resolve().parent.parent # addonkeeper/



def userDir() -> Path:
    """Per-user data directory. ADDONKEEPER_HOME overrides the default ~/.addonkeeper."""
    override = os.environ.get("ADDONKEEPER_HOME", "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".addonkeeper"

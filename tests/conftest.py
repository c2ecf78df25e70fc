import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from addonkeeper.app import settings as app_settings



def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")



@pytest.fixture(autouse=True)
def isolatedUserDir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point the user directory at a temp dir so tests never read ~/.addonkeeper."""
    home = tmp_path / "addonkeeper-home"
    monkeypatch.setenv("ADDONKEEPER_HOME", str(home))
    app_settings.loadSettings.cache_clear()
    yield home
    app_settings.loadSettings.cache_clear()

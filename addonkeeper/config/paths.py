# addonkeeper/config/paths.py
from __future__ import annotations
import logging
from os import PathLike
from pathlib import Path

from .flavor import Flavor

logger = logging.getLogger(__name__)

__all__ = [
    "ADDONS_SUBPATH", "SETTINGS_SUBPATH",
    "flavorDir", "resolveAddonDir", "resolveSettingsDir", "resolveStagingDir",
]

ADDONS_SUBPATH: tuple[str, ...] = ("Interface", "AddOns")
SETTINGS_SUBPATH: tuple[str, ...] = ("WTF",)



def flavorDir(root: str | PathLike[str], flavor: Flavor) -> Path:
    """`root/_<flavor>_`, e.g. `/games/wow/_retail_`."""
    return Path(root) / Flavor.parse(flavor).folderName



def resolveAddonDir(root: str | PathLike[str] | None, flavor: Flavor) -> Path | None:
    """
    Returns the add-on directory for `flavor` under `root`, or None when no root is configured.
    The returned path may not exist yet.
    """
    return _resolve(root, flavor, ADDONS_SUBPATH)



def resolveSettingsDir(root: str | PathLike[str] | None, flavor: Flavor) -> Path | None:
    """Returns the WTF (client settings) directory for `flavor` under `root`, or None without a root."""
    return _resolve(root, flavor, SETTINGS_SUBPATH)



def resolveStagingDir(root: str | PathLike[str] | None, flavor: Flavor) -> Path | None:
    """
    Directory holding temporary downloaded archives: the parent of the add-on directory.
    """
    addonDir = resolveAddonDir(root, flavor)
    if addonDir is None:
        return None
    return addonDir.parent



def _resolve(root: str | PathLike[str] | None, flavor: Flavor, subpath: tuple[str, ...]) -> Path | None:
    if root is None:
        return None

    base = flavorDir(root, flavor)
    candidate = base.joinpath(*subpath)
    if candidate.exists():
        return candidate

    # Folder casing may have drifted (user rename, other tools) on a case-sensitive filesystem
    matches = _caseInsensitiveMatches(base, subpath)
    if not matches:
        return candidate
    if len(matches) > 1:
        logger.debug(
            "Found %d case variants of '%s', picking the lexicographically smallest: %s",
            len(matches),
            candidate,
            [str(match) for match in matches],
        )
    # Smallest full path string wins so the pick never depends on directory enumeration order
    return min(matches, key=str)



def _caseInsensitiveMatches(base: Path, segments: tuple[str, ...]) -> list[Path]:
    """
    Walks `segments` below `base`, keeping every directory whose name equals the
    expected segment under casefold(). Unreadable directories count as no match.
    """
    current = [base]
    for segment in segments:
        expected = segment.casefold()
        found: list[Path] = []
        for directory in current:
            try:
                entries = list(directory.iterdir())
            except OSError as err:
                logger.debug("Cannot list '%s' while resolving '%s': %s", directory, segment, err)
                continue
            for entry in entries:
                if entry.name.casefold() != expected:
                    continue
                try:
                    if entry.is_dir():
                        found.append(entry)
                except OSError as err:
                    logger.debug("Cannot stat '%s': %s", entry, err)
        if not found:
            return []
        current = found
    return current

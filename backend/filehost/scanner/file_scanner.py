from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Tuple

from .models import DirectoryListing, ScanConfig, ScanIssue, ScanResult

logger = logging.getLogger(__name__)

DEFAULT_SCAN_CONFIG = ScanConfig.create()


def is_downloadable(name: str, config: ScanConfig = DEFAULT_SCAN_CONFIG) -> bool:
    # endswith rather than Path.suffix so compound suffixes like .tar.gz match.
    lowered = name.lower()
    return any(lowered.endswith(ext) for ext in config.extensions)


def _is_skipped_name(name: str, config: ScanConfig) -> bool:
    return name.startswith(".") or name in config.excluded_dirs


def list_directory(path: Path) -> DirectoryListing:
    """
    Read one directory without following symlinks.

    Read failures are captured on the returned listing instead of raised, so
    a single unreadable folder never aborts the surrounding scan.
    """
    listing = DirectoryListing(path=path)
    try:
        with os.scandir(path) as it:
            for entry in it:
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                    is_file = entry.is_file(follow_symlinks=False)
                except OSError as exc:
                    logger.debug("Could not stat %s: %s", entry.path, exc)
                    continue
                listing.entries.append((entry.name, is_dir, is_file))
    except OSError as exc:
        listing.entries.clear()
        listing.skipped = ScanIssue(
            path=str(path),
            code="DIRECTORY_UNREADABLE",
            message=exc.strerror or str(exc),
        )
    listing.entries.sort(key=lambda item: item[0])
    return listing


def scan_tree(root: Path | str, config: ScanConfig = DEFAULT_SCAN_CONFIG) -> ScanResult:
    """
    Walk ``root`` and collect every publicly downloadable file.

    Returned paths are POSIX style, relative to ``root`` and carry a leading
    slash (``/1.1.0/App.msi``). Hidden and excluded directories are pruned at
    any depth; a file is kept only when its extension is downloadable and its
    name is not project metadata.
    """
    root_path = Path(root)
    files: List[str] = []
    issues: List[ScanIssue] = []

    # (directory, relative prefix, depth)
    stack: List[Tuple[Path, str, int]] = [(root_path, "", 0)]
    while stack:
        directory, prefix, depth = stack.pop()
        listing = list_directory(directory)
        if not listing.ok:
            logger.warning("Error scanning directory %s: %s", directory, listing.skipped.message)
            issues.append(listing.skipped)
            continue

        for name, is_dir, is_file in listing.entries:
            if _is_skipped_name(name, config):
                continue
            rel_path = f"{prefix}/{name}" if prefix else name
            if is_dir:
                if depth + 1 > config.max_depth:
                    issues.append(
                        ScanIssue(
                            path=str(directory / name),
                            code="MAX_DEPTH",
                            message=f"Directory nesting exceeds {config.max_depth} levels.",
                        )
                    )
                    continue
                stack.append((directory / name, rel_path, depth + 1))
            elif is_file:
                if name in config.excluded_files:
                    continue
                if is_downloadable(name, config):
                    files.append(f"/{rel_path}")

    files.sort()
    return ScanResult(files=files, issues=issues)


def scan(root: Path | str, config: ScanConfig = DEFAULT_SCAN_CONFIG) -> List[str]:
    """Return the sorted downloadable paths under ``root``."""
    return scan_tree(root, config).files

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Tuple

DOWNLOADABLE_EXTENSIONS = (
    ".msi",
    ".exe",
    ".dmg",
    ".pkg",
    ".deb",
    ".rpm",
    ".zip",
    ".tar.gz",
    ".appimage",
)

EXCLUDED_DIRS = ("node_modules", "public", ".git", ".vscode", ".idea")

# Project metadata that sits next to the server and must never be listed.
EXCLUDED_FILES = (
    "pyproject.toml",
    "requirements.txt",
    "poetry.lock",
    "README.md",
    "main.py",
    ".env",
    ".gitignore",
    "package.json",
    "package-lock.json",
    "server.js",
)

DEFAULT_MAX_DEPTH = 32


def _extension_tokens(values: Iterable[str]) -> Tuple[str, ...]:
    # Lower-case ".ext" form; compound suffixes such as tar.gz keep their inner dot.
    tokens: List[str] = []
    for raw in values:
        token = raw.strip().lower() if isinstance(raw, str) else ""
        if not token:
            continue
        token = token if token.startswith(".") else f".{token}"
        if token not in tokens:
            tokens.append(token)
    return tuple(tokens)


def _name_set(values: Iterable[str]) -> FrozenSet[str]:
    return frozenset(raw.strip() for raw in values if isinstance(raw, str) and raw.strip())


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """
    Inclusion and exclusion rules for the downloadable-file scan.

    Build custom instances with :meth:`create` so extensions are normalized.
    """

    extensions: Tuple[str, ...] = DOWNLOADABLE_EXTENSIONS
    excluded_dirs: FrozenSet[str] = frozenset(EXCLUDED_DIRS)
    excluded_files: FrozenSet[str] = frozenset(EXCLUDED_FILES)
    max_depth: int = DEFAULT_MAX_DEPTH

    @classmethod
    def create(
        cls,
        *,
        extensions: Optional[List[str]] = None,
        excluded_dirs: Optional[List[str]] = None,
        excluded_files: Optional[List[str]] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> "ScanConfig":
        return cls(
            extensions=_extension_tokens(DOWNLOADABLE_EXTENSIONS if extensions is None else extensions),
            excluded_dirs=_name_set(EXCLUDED_DIRS if excluded_dirs is None else excluded_dirs),
            excluded_files=_name_set(EXCLUDED_FILES if excluded_files is None else excluded_files),
            max_depth=max_depth,
        )


@dataclass(slots=True)
class ScanIssue:
    path: str
    code: str
    message: str


@dataclass(slots=True)
class DirectoryListing:
    """Outcome of reading a single directory: its entries, or why it was skipped."""

    path: Path
    entries: List[Tuple[str, bool, bool]] = field(default_factory=list)
    skipped: Optional[ScanIssue] = None

    @property
    def ok(self) -> bool:
        return self.skipped is None


@dataclass(slots=True)
class ScanResult:
    files: List[str] = field(default_factory=list)
    issues: List[ScanIssue] = field(default_factory=list)

from __future__ import annotations

import fnmatch
import re
from collections.abc import Callable, Iterable
from pathlib import Path

from themesync.errors import IgnoreFileError

DEFAULT_IGNORE_PATTERNS = (
    ".git/",
    ".hg/",
    ".bzr/",
    ".svn/",
    "_darcs/",
    "CVS/",
    "/\\.sublime-(project|workspace)$/",
    ".DS_Store",
    ".sass-cache/",
    "Thumbs.db",
    "desktop.ini",
    "config.yml",
    ".env",
    ".env.*",
    "node_modules/",
)

_LIQUID_SUFFIX = ".liquid"


def _read_ignore_file(path: str | Path) -> list[str]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise IgnoreFileError(f"Could not read ignore file {path}: {exc}") from exc
    patterns: list[str] = []
    for line in text.splitlines():
        cleaned = line.strip()
        if cleaned and not cleaned.startswith("#"):
            patterns.append(cleaned)
    return patterns


def _compile_rule(pattern: str) -> Callable[[str], re.Match[str] | None]:
    if len(pattern) > 2 and pattern.startswith("/") and pattern.endswith("/"):
        try:
            return re.compile(pattern[1:-1]).search
        except re.error as exc:
            raise IgnoreFileError(f"Invalid ignore expression {pattern!r}: {exc}") from exc

    glob = pattern.lstrip("/")
    if glob.endswith("/"):
        glob = f"{glob}*"
    translated = fnmatch.translate(glob)
    # Anchor at the start of the key or right after any "/" so that bare
    # file names match in every directory.
    return re.compile(rf"(?:^|.*/){translated}").match


class FileFilter:
    """Decides which asset keys or local paths are worked on."""

    def __init__(
        self,
        patterns: Iterable[str] = (),
        *,
        ignore_files: Iterable[str | Path] = (),
        include_defaults: bool = True,
    ) -> None:
        all_patterns: list[str] = list(DEFAULT_IGNORE_PATTERNS) if include_defaults else []
        all_patterns.extend(pattern.strip() for pattern in patterns if pattern and pattern.strip())
        for ignore_file in ignore_files:
            all_patterns.extend(_read_ignore_file(ignore_file))
        self.patterns = tuple(all_patterns)
        self._rules = [_compile_rule(pattern) for pattern in self.patterns]

    def match(self, path: str) -> bool:
        normalized = path.replace("\\", "/")
        if normalized.startswith("./"):
            normalized = normalized[2:]
        return any(rule(normalized) for rule in self._rules)

    def filter_keys(self, keys: Iterable[str]) -> list[str]:
        kept = [key for key in keys if not self.match(key)]
        return drop_shadowed_keys(kept)


def drop_shadowed_keys(keys: list[str]) -> list[str]:
    """Drop ``X`` whenever ``X.liquid`` is also present, keeping the order."""
    present = set(keys)
    return [key for key in keys if f"{key}{_LIQUID_SUFFIX}" not in present]

# src/server/listing.py — v1
"""Bounded directory listing used by the summarize_directory tool.

Directories sort before files, then case-insensitively by name. Contents of
well-known build/vendor directories are skipped. Depth, total-file and
per-directory caps emit marker lines instead of silently truncating.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

IGNORED_DIRECTORIES: frozenset[str] = frozenset({
    "node_modules",
    "build",
    "dist",
    "coverage",
    ".git",
    ".idea",
    ".vscode",
    "out",
    "public",
    "tmp",
    "temp",
    "vendor",
    "logs",
})


@dataclass
class _WalkState:
    """Counters for a single list() call."""

    total_files: int = 0
    truncated: bool = False


@dataclass
class DirectoryLister:
    """Render a directory tree as one relative path per line."""

    max_depth: int = 5
    max_files: int = 1000
    max_files_per_dir: int = 100
    ignored: frozenset[str] = IGNORED_DIRECTORIES

    def list(self, root: Path, recursive: bool = False) -> str:
        """Return the listing for ``root``.

        Raises:
            OSError: If a directory cannot be read.
        """
        state = _WalkState()
        listing = self._walk(state, root, root, recursive, depth=0)
        if state.truncated:
            listing += (
                f"\n[Output truncated: Reached maximum file limit of {self.max_files}]\n"
            )
        return listing

    def _walk(
        self,
        state: _WalkState,
        root: Path,
        directory: Path,
        recursive: bool,
        depth: int,
    ) -> str:
        if depth >= self.max_depth:
            return f"[Directory depth limit ({self.max_depth}) reached]\n"

        with os.scandir(directory) as it:
            entries = sorted(
                it,
                key=lambda e: (not e.is_dir(follow_symlinks=False), e.name.casefold()),
            )
        file_total = sum(1 for e in entries if not e.is_dir(follow_symlinks=False))

        lines: list[str] = []
        shown = 0
        for entry in entries:
            if state.total_files >= self.max_files:
                state.truncated = True
                break

            rel = os.path.relpath(entry.path, root)
            if entry.is_dir(follow_symlinks=False):
                lines.append(f"{rel}/\n")
                if entry.name in self.ignored:
                    lines.append(f"[{entry.name}/ contents skipped]\n")
                    continue
                if recursive:
                    lines.append(self._walk(state, root, Path(entry.path), recursive, depth + 1))
                continue

            if shown >= self.max_files_per_dir:
                lines.append(f"[{file_total - shown} more files in this directory]\n")
                break
            lines.append(f"{rel}\n")
            shown += 1
            state.total_files += 1

        return "".join(lines)

"""
SourceDiscovery — turns command-line paths into an ordered list of .cs files
and loads them into a Compilation.

Directory walk rules (first match wins):
  1. Hidden directories (".git", ".vs", ...)      → skipped
  2. Build output directories ("bin", "obj")     → skipped
  3. Generated files (*.g.cs, *.generated.cs)    → skipped
  4. Any other *.cs file                          → included

The result is sorted so that a pass over unchanged input always sees the
files, and therefore the enums, in the same order.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from enum_string_gen.exceptions import SourceError
from .cs_parser import CSharpDeclarationParser
from .models import Compilation

__all__ = ["SourceDiscovery"]

logger = logging.getLogger(__name__)

_SKIPPED_DIRS = {"bin", "obj"}
_GENERATED_SUFFIXES = (".g.cs", ".generated.cs")


class SourceDiscovery:
    """
    Collect C# sources for a generation pass.

    Usage::

        discovery = SourceDiscovery()
        compilation = discovery.load_compilation(["src/MyApp"])
    """

    def __init__(
        self,
        parser: Optional[CSharpDeclarationParser] = None,
        exclude: Iterable[Path] = (),
    ) -> None:
        self._parser = parser or CSharpDeclarationParser()
        self._exclude = [Path(p).resolve() for p in exclude]

    def collect(self, paths: Iterable[str]) -> list[Path]:
        """
        Expand files and directories to a sorted, de-duplicated list of .cs files.

        Raises:
            FileNotFoundError: One of the given paths does not exist.
        """
        found: dict[Path, None] = {}
        for raw in paths:
            path = Path(raw)
            if not path.exists():
                raise FileNotFoundError(f"Source path not found: {path}")
            if path.is_file():
                found[path] = None
                continue
            for candidate in sorted(path.rglob("*.cs")):
                if self._is_skipped(candidate, root=path):
                    continue
                found[candidate] = None

        files = sorted(found)
        logger.debug("Collected %d source files", len(files))
        return files

    def load_compilation(self, paths: Iterable[str]) -> Compilation:
        """
        Parse every collected file into one Compilation.

        Raises:
            FileNotFoundError: A given path does not exist.
            SourceError:       A file could not be read or parsed.
        """
        compilation = Compilation()
        for path in self.collect(paths):
            try:
                compilation.files.append(self._parser.parse_file(path))
            except SourceError:
                logger.debug("Failed to load %s", path, exc_info=True)
                raise
        logger.info(
            "Loaded %d files (%d enums, %d types)",
            len(compilation.files), len(compilation.enums()), len(compilation.types()),
        )
        return compilation

    # ── helpers ───────────────────────────────────────────────────────────────

    def _is_skipped(self, candidate: Path, root: Path) -> bool:
        relative_dirs = candidate.relative_to(root).parts[:-1]
        if any(part.startswith(".") or part.lower() in _SKIPPED_DIRS for part in relative_dirs):
            return True
        if candidate.name.lower().endswith(_GENERATED_SUFFIXES):
            return True
        resolved = candidate.resolve()
        return any(resolved == ex or ex in resolved.parents for ex in self._exclude)

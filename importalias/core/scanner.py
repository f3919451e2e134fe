"""
Import Scanner Module

This module finds the Python source files of a package directory and
extracts the import statements of each file, together with the local
alias each import is bound to.
"""

import ast
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional
import logging

from .exceptions import ExtractionError

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".py"
SUPPORT_FILES = ("conftest.py",)
SKIPPED_DIRECTORIES = ("__pycache__",)


class AliasKind(Enum):
    """How an import binds its local name."""
    EXPLICIT = "explicit"    # import numpy as np
    DEFAULT = "default"      # import numpy
    BLANK = "blank"          # import numpy as _
    DOT = "dot"              # from numpy import *


@dataclass(frozen=True)
class ImportOccurrence:
    """A single import of a module at a position in a source file."""
    filepath: str
    line: int
    column: int
    kind: AliasKind
    import_path: str
    alias: Optional[str] = None

    @property
    def is_explicit(self) -> bool:
        return self.kind is AliasKind.EXPLICIT

    @property
    def position(self) -> str:
        return f"{self.filepath}:{self.line}:{self.column}"


@dataclass
class SourceFiles:
    """Source file names of one package directory, grouped by role."""
    regular: List[str] = field(default_factory=list)
    tests: List[str] = field(default_factory=list)
    support: List[str] = field(default_factory=list)

    def ordered(self) -> List[str]:
        """Regular sources, then tests, then test support files."""
        return self.regular + self.tests + self.support

    def __len__(self):
        return len(self.regular) + len(self.tests) + len(self.support)


def is_test_file(filename: str) -> bool:
    stem = filename[:-len(SOURCE_SUFFIX)]
    return stem.startswith("test_") or stem.endswith("_test")


def classify_alias(asname: Optional[str]) -> AliasKind:
    """Classify the `as` clause of an import."""
    if asname is None:
        return AliasKind.DEFAULT
    if asname == "_":
        return AliasKind.BLANK
    return AliasKind.EXPLICIT


def _occurrence(filepath: str, node: ast.alias, import_path: str, kind: AliasKind) -> ImportOccurrence:
    return ImportOccurrence(
        filepath=filepath,
        line=node.lineno,
        column=node.col_offset + 1,
        kind=kind,
        import_path=import_path,
        alias=node.asname if kind is AliasKind.EXPLICIT else None,
    )


def collect_imports(tree: ast.AST, filepath: str) -> List[ImportOccurrence]:
    """
    Collect the import occurrences of a parsed module in source order.

    The tree is walked iteratively, so nesting depth is bounded only by
    the parser.
    """
    statements = sorted(
        (node for node in ast.walk(tree) if isinstance(node, (ast.Import, ast.ImportFrom))),
        key=lambda node: (node.lineno, node.col_offset),
    )

    occurrences = []
    for node in statements:
        if isinstance(node, ast.Import):
            for name in node.names:
                occurrences.append(_occurrence(filepath, name, name.name, classify_alias(name.asname)))
            continue

        # Relative imports name a module relative to their own package, so the
        # same text means different modules in different directories.
        if node.level:
            logger.debug(f"Skipping relative import at {filepath}:{node.lineno}")
            continue

        for name in node.names:
            if name.name == "*":
                occurrences.append(_occurrence(filepath, name, node.module, AliasKind.DOT))
            else:
                occurrences.append(_occurrence(
                    filepath, name, f"{node.module}.{name.name}", classify_alias(name.asname)
                ))

    return occurrences


class ImportScanner:
    """
    Scanner for the import statements of Python packages.

    This class provides methods to:
    - List the source files of a package directory in a fixed order
    - Extract the import occurrences of a single file
    - Extract the import occurrences of a whole package
    """

    def list_source_files(self, directory: str) -> SourceFiles:
        """
        List the Python source files directly inside a directory.

        Args:
            directory: Path to the package directory

        Returns:
            SourceFiles with each group sorted lexicographically
        """
        files = SourceFiles()
        path = Path(directory)

        if not directory or not path.is_dir():
            logger.warning(f"Not a package directory, skipping: {directory!r}")
            return files

        for entry in sorted(p.name for p in path.iterdir() if p.is_file()):
            if not entry.endswith(SOURCE_SUFFIX):
                continue
            if entry in SUPPORT_FILES:
                files.support.append(entry)
            elif is_test_file(entry):
                files.tests.append(entry)
            else:
                files.regular.append(entry)

        logger.debug(f"Found {len(files)} source files in {directory}")
        return files

    def scan_file(self, filepath: str) -> List[ImportOccurrence]:
        """
        Extract the imports of a single source file.

        Args:
            filepath: Path to the Python source file

        Returns:
            List of ImportOccurrence objects in source order

        Raises:
            ExtractionError: If the file cannot be read or parsed
        """
        try:
            source = Path(filepath).read_bytes()
            tree = ast.parse(source, filename=filepath)
        except (OSError, SyntaxError, ValueError, RecursionError, MemoryError) as e:
            raise ExtractionError(filepath, e) from e

        return collect_imports(tree, filepath)

    def scan_package(self, directory: str) -> List[ImportOccurrence]:
        """
        Extract the imports of every source file in a package directory.

        Files are scanned in SourceFiles.ordered() order and the first file
        that cannot be processed aborts the scan.
        """
        occurrences = []
        for filename in self.list_source_files(directory).ordered():
            occurrences.extend(self.scan_file(os.path.join(directory, filename)))
        return occurrences


def discover_packages(root: str) -> Iterator[str]:
    """
    Yield root and every sub-directory below it that holds Python sources.

    Hidden directories and __pycache__ are not descended into.
    """
    if not root or not os.path.isdir(root):
        logger.warning(f"Not a package directory, skipping: {root!r}")
        return

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            d for d in dirnames
            if not d.startswith(".") and d not in SKIPPED_DIRECTORIES
        )
        if dirpath == root or any(f.endswith(SOURCE_SUFFIX) for f in filenames):
            yield dirpath

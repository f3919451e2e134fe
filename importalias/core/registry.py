"""
Alias Registry Module

This module accumulates the import occurrences of every scanned file and
exposes sorted views of them: aliases per imported path and occurrences
per file.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List
import logging

from .scanner import ImportOccurrence

logger = logging.getLogger(__name__)


def occurrence_sort_key(occurrence: ImportOccurrence):
    return occurrence.filepath, occurrence.line, occurrence.column


@dataclass
class RegistrySummary:
    """Summary statistics for a populated registry."""
    total_occurrences: int
    explicit_occurrences: int
    files: int
    import_paths: int
    conflicted_paths: int


class AliasRegistry:
    """
    Registry of every import occurrence seen during a run.

    Only the flat list of occurrences is stored. The per-path and per-file
    views are derived from it on every call, so they can never disagree.
    """

    def __init__(self):
        self._occurrences: List[ImportOccurrence] = []

    def __len__(self):
        return len(self._occurrences)

    def record(self, occurrence: ImportOccurrence):
        """
        Add an occurrence to the registry.

        Args:
            occurrence: ImportOccurrence to record; duplicates are kept

        Raises:
            ValueError: If the occurrence has no file path or import path
        """
        if not occurrence.filepath:
            raise ValueError("import occurrence has an empty file path")
        if not occurrence.import_path:
            raise ValueError(f"import occurrence at {occurrence.position} has an empty import path")

        self._occurrences.append(occurrence)

    def record_all(self, occurrences: Iterable[ImportOccurrence]):
        for occurrence in occurrences:
            self.record(occurrence)

    def imports_to_aliases(self) -> Dict[str, Dict[str, List[ImportOccurrence]]]:
        """
        Group explicit aliases by import path.

        Returns:
            Mapping of import path to alias to occurrences sorted by
            file, line and column. Paths and aliases are in sorted order.
        """
        grouped: Dict[str, Dict[str, List[ImportOccurrence]]] = {}
        for occurrence in sorted(self._occurrences, key=occurrence_sort_key):
            if not occurrence.is_explicit:
                continue
            aliases = grouped.setdefault(occurrence.import_path, {})
            aliases.setdefault(occurrence.alias, []).append(occurrence)

        return {
            path: {alias: grouped[path][alias] for alias in sorted(grouped[path])}
            for path in sorted(grouped)
        }

    def paths_with_conflicts(self) -> List[str]:
        """Import paths imported under two or more distinct explicit aliases, sorted."""
        return [
            path for path, aliases in self.imports_to_aliases().items()
            if len(aliases) > 1
        ]

    def aliases_for_path(self, import_path: str) -> Dict[str, List[ImportOccurrence]]:
        """Explicit aliases used for an import path, each with its sorted occurrences."""
        return self.imports_to_aliases().get(import_path, {})

    def occurrences_by_file(self) -> Dict[str, List[ImportOccurrence]]:
        """
        Group occurrences by file.

        Returns:
            Mapping of file path (sorted) to the occurrences of that file in
            the order they were recorded
        """
        by_file: Dict[str, List[ImportOccurrence]] = {}
        for occurrence in self._occurrences:
            by_file.setdefault(occurrence.filepath, []).append(occurrence)
        return {filepath: by_file[filepath] for filepath in sorted(by_file)}

    def summary(self) -> RegistrySummary:
        return RegistrySummary(
            total_occurrences=len(self._occurrences),
            explicit_occurrences=sum(1 for o in self._occurrences if o.is_explicit),
            files=len({o.filepath for o in self._occurrences}),
            import_paths=len({o.import_path for o in self._occurrences}),
            conflicted_paths=len(self.paths_with_conflicts()),
        )

"""
Report Formatter Module

This module renders the findings of the consensus resolver as text, either
as one line per offending import (the default) or as a verbose listing of
every alias used for each conflicted import path.
"""

from typing import List
import logging

from .registry import AliasRegistry
from .resolver import ConsensusResolver

logger = logging.getLogger(__name__)


def quote_path(import_path: str) -> str:
    return f'"{import_path}"'


def files_phrase(count: int) -> str:
    return "(1 file)" if count == 1 else f"({count} files)"


class ReportFormatter:
    """
    Formatter for import alias reports.

    Both render modes produce newline-terminated lines in a fully
    deterministic order, so identical inputs give identical output.
    """

    def __init__(self, registry: AliasRegistry, resolver: ConsensusResolver):
        self.registry = registry
        self.resolver = resolver

    def has_violations(self) -> bool:
        """True whenever any import path is imported under multiple aliases."""
        return bool(self.resolver.votes())

    def render(self, verbose: bool = False) -> str:
        lines = self.verbose_lines() if verbose else self.violation_lines()
        return "".join(f"{line}\n" for line in lines)

    def violation_lines(self) -> List[str]:
        """
        One line per import that does not use the recommended alias.

        Files are visited in sorted order and the imports of each file in
        source order.
        """
        conflicted = {vote.import_path for vote in self.resolver.votes()}
        lines = []

        for filepath, occurrences in self.registry.occurrences_by_file().items():
            for occurrence in occurrences:
                if occurrence.import_path not in conflicted:
                    continue
                status = self.resolver.get_alias_status(occurrence.alias, occurrence.import_path)
                if status.ok:
                    continue
                lines.append(
                    f'{occurrence.position}: uses alias "{occurrence.alias}" to import package '
                    f'{quote_path(occurrence.import_path)}. {status.recommendation}.'
                )

        logger.debug(f"Rendered {len(lines)} violations")
        return lines

    def verbose_lines(self) -> List[str]:
        """
        Every alias of every conflicted import path with all its occurrences.

        Aliases are listed by descending number of occurrences, ties broken
        alphabetically.
        """
        lines = []

        for import_path, aliases in self.registry.imports_to_aliases().items():
            if len(aliases) < 2:
                continue
            lines.append(f"{quote_path(import_path)} is imported using multiple different aliases:")

            for alias in sorted(aliases, key=lambda a: (-len(aliases[a]), a)):
                occurrences = aliases[alias]
                num_files = len({o.filepath for o in occurrences})
                lines.append(f"\t{alias} {files_phrase(num_files)}:")
                lines.extend(f"\t\t{o.position}" for o in occurrences)

        return lines

"""
Runner Module

This module ties the scanner, registry, resolver and formatter together into
a single analysis run over a list of package directories.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, TextIO
import logging

from .exceptions import ExtractionError
from .formatter import ReportFormatter
from .registry import AliasRegistry
from .resolver import ConsensusResolver
from .scanner import ImportScanner, discover_packages

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """Overall outcome of a run."""
    SUCCESS = "success"
    VIOLATIONS_FOUND = "violations_found"
    EXTRACTION_FAILED = "extraction_failed"


EXIT_CODES = {
    Outcome.SUCCESS: 0,
    Outcome.VIOLATIONS_FOUND: 1,
    Outcome.EXTRACTION_FAILED: 2,
}


@dataclass
class RunConfig:
    """Options for a single run."""
    package_paths: List[str]
    verbose: bool = False
    recursive: bool = False

    def resolved_package_paths(self) -> List[str]:
        """Package paths to scan, expanding sub-directories when recursive."""
        if not self.recursive:
            return list(self.package_paths)

        resolved = []
        for path in self.package_paths:
            for package in discover_packages(path):
                if package not in resolved:
                    resolved.append(package)
        return resolved


@dataclass
class RunResult:
    """Result of a run: the outcome, the rendered report and any error."""
    outcome: Outcome
    output: str = ""
    error: Optional[ExtractionError] = None
    conflicted_paths: List[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return EXIT_CODES[self.outcome]


def build_registry(package_paths: List[str], scanner: Optional[ImportScanner] = None) -> AliasRegistry:
    """
    Scan every package and record all of its imports.

    Raises:
        ExtractionError: On the first file that cannot be processed
    """
    scanner = scanner or ImportScanner()
    registry = AliasRegistry()

    for package_path in package_paths:
        logger.debug(f"Scanning package {package_path}")
        registry.record_all(scanner.scan_package(package_path))

    return registry


def run(config: RunConfig, stream: Optional[TextIO] = None,
        scanner: Optional[ImportScanner] = None) -> RunResult:
    """
    Check that every imported module uses one alias across all packages.

    Args:
        config: RunConfig with the packages to check and the report mode
        stream: Optional stream the report is written to
        scanner: Optional ImportScanner, mainly for tests

    Returns:
        RunResult; on extraction failure no report is produced
    """
    try:
        registry = build_registry(config.resolved_package_paths(), scanner)
    except ExtractionError as e:
        logger.debug(f"Aborting run: {e}")
        return RunResult(Outcome.EXTRACTION_FAILED, error=e)

    resolver = ConsensusResolver(registry)
    formatter = ReportFormatter(registry, resolver)
    logger.debug(f"Registry summary: {registry.summary()}")

    if not formatter.has_violations():
        return RunResult(Outcome.SUCCESS)

    output = formatter.render(verbose=config.verbose)
    if stream is not None:
        stream.write(output)

    return RunResult(
        Outcome.VIOLATIONS_FOUND,
        output=output,
        conflicted_paths=registry.paths_with_conflicts(),
    )

"""
importalias

Verifies that every import of a module uses the same alias across a project.
"""

__version__ = "1.0.0"

from .core.scanner import ImportScanner, ImportOccurrence, AliasKind
from .core.registry import AliasRegistry
from .core.resolver import ConsensusResolver, AliasStatus, PathVote
from .core.formatter import ReportFormatter
from .core.runner import RunConfig, RunResult, Outcome, run

__all__ = [
    'ImportScanner',
    'ImportOccurrence',
    'AliasKind',
    'AliasRegistry',
    'ConsensusResolver',
    'AliasStatus',
    'PathVote',
    'ReportFormatter',
    'RunConfig',
    'RunResult',
    'Outcome',
    'run',
]

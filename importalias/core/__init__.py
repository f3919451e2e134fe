"""
Core modules for import scanning, alias consensus and reporting.
"""

from .scanner import ImportScanner
from .registry import AliasRegistry
from .resolver import ConsensusResolver
from .formatter import ReportFormatter

__all__ = [
    'ImportScanner',
    'AliasRegistry',
    'ConsensusResolver',
    'ReportFormatter'
]

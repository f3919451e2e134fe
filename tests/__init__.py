"""
Test package for importalias.

This package contains:
- Unit tests for the scanner, registry, resolver, formatter and runner
- Property-based tests using Hypothesis
- Integration tests running whole packages and the command line
"""

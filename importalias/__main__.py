"""
Main entry point for the importalias package.

This allows the package to be run as a module:
python -m importalias
"""

from .cli.commands import main

if __name__ == '__main__':
    main()

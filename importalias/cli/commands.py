"""
Command-line interface for importalias.

This module provides the command that checks import alias consistency
across one or more package directories.
"""

import sys
import click
import logging
from rich.console import Console
from rich.text import Text

from .. import __version__
from ..core.runner import Outcome, RunConfig, run

# Diagnostics only; the report itself goes to stdout unstyled
console = Console(stderr=True)

logger = logging.getLogger(__name__)


def configure_logging(debug: bool):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.version_option(version=__version__)
@click.argument('package_paths', nargs=-1, required=True)
@click.option('--verbose', '-v', is_flag=True,
              help='Print verbose analysis of all imports that have multiple aliases')
@click.option('--recursive', '-r', is_flag=True,
              help='Also check every sub-directory of the given paths that contains Python files')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def main(package_paths, verbose, recursive, debug):
    """Verify that import aliases are consistent across files and packages."""
    configure_logging(debug)

    config = RunConfig(package_paths=list(package_paths), verbose=verbose, recursive=recursive)
    result = run(config)

    if result.outcome is Outcome.EXTRACTION_FAILED:
        console.print(Text(f"Error: {result.error}", style="red"), soft_wrap=True)
    elif result.outcome is Outcome.VIOLATIONS_FOUND:
        click.echo(result.output, nl=False)
        logger.debug(f"Conflicting aliases for {len(result.conflicted_paths)} import paths")

    sys.exit(result.exit_code)


if __name__ == '__main__':
    main()

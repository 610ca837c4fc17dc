"""
Version command for gitversioning.

Prints the version derived from the git history of a work tree.
"""

import click

from ..api import create
from ..cli_utils import standard_command


@click.command('version')
@click.argument('path', default='.', required=False,
                type=click.Path(exists=True, file_okay=False))
@click.option('--sub-dir', '-d', 'sub_dir', help='Sub-directory whose changes make the version dirty')
@click.option('--prefix', '-p', help='Prefix version tags must have (regex, e.g. "v")')
@click.option('--pattern', help='Version pattern with one capture group')
@click.option('--processor', help='Tag processor to use (e.g. maven, pep440)')
@click.option('--suffix', help='Suffix for development versions (maven processor)')
@click.option('--json', 'json_output', is_flag=True, help='Output version details as JSON')
@standard_command
def version_cmd(path, sub_dir, prefix, pattern, processor, suffix, json_output):
    """Print the version of the repository at PATH.

    The version is taken from the latest tag reachable from HEAD whose
    name contains a version. Unless the tagged commit is checked out
    without changes (below --sub-dir), the version is marked as a
    development version.

    Examples:

    \b
        gitversioning version
        gitversioning version --prefix v
        gitversioning version ~/projects/app --sub-dir core --json
        gitversioning version --processor pep440
    """
    evaluator = create(
        path,
        sub_directory=sub_dir,
        tag_prefix=prefix,
        pattern=pattern,
        processor=processor,
        suffix=suffix,
    )
    if json_output:
        return evaluator.describe().to_dict()
    return evaluator.version()

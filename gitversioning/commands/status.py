"""
Status command for gitversioning.

Reports whether the work tree has changes that would mark the
version as a development version.
"""

import click

from ..cli_utils import standard_command
from ..dirty import as_prefix
from ..infra import Repository
from ..render import render_status
from ..config import load_config


def dirty_report(repository, sub_dir=None):
    """
    Collect changed paths below sub_dir, grouped by category.

    Returns:
        Dictionary with sub_directory, dirty and changes keys
    """
    prefix = as_prefix(repository.relative_path(sub_dir) if sub_dir else None)
    status = repository.status()
    under = set(status.paths_under(prefix))
    changes = {
        category: sorted(p for p in paths if p in under)
        for category, paths in status.categories()
    }
    changes = {category: paths for category, paths in changes.items() if paths}
    return {
        'sub_directory': prefix or None,
        'dirty': bool(under),
        'changes': changes,
    }


@click.command('status')
@click.argument('path', default='.', required=False,
                type=click.Path(exists=True, file_okay=False))
@click.option('--sub-dir', '-d', 'sub_dir', help='Only consider changes below this sub-directory')
@click.option('--json', 'json_output', is_flag=True, help='Output as JSON')
@standard_command
def status_cmd(path, sub_dir, json_output):
    """Show whether the work tree at PATH is dirty.

    Every kind of change counts: modified, untracked, staged, missing,
    conflicting, added and removed files.

    Examples:

    \b
        gitversioning status
        gitversioning status --sub-dir core --json
    """
    repository = Repository.open(path)
    if sub_dir is None:
        sub_dir = load_config(repository.work_tree).get('sub_directory')
    try:
        report = dirty_report(repository, sub_dir)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--sub-dir') from e

    if json_output:
        return report
    render_status(report)
    return None

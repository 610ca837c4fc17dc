"""
Tags command for gitversioning.

Lists the version tags of a repository in the order they are
considered, showing which of them are reachable from HEAD.
"""

import json

import click

from ..config import load_config, build_tag_filter
from ..cli_utils import standard_command
from ..infra import Repository
from ..reachability import default_index
from ..render import render_tags_table
from ..services import TagResolver


def collect_tags(repository, tag_filter, include_all=False):
    """
    Build tag rows, highest version first.

    Args:
        repository: Repository to inspect
        tag_filter: Filter extracting versions from tag names
        include_all: Also list tags without a version (at the end)

    Returns:
        Tuple of (rows, name of the winning tag or None)
    """
    resolver = TagResolver(repository, tag_filter)
    reachable = default_index().reachable(repository, repository.head())
    winner = resolver.latest_version_tagged(reachable)

    rows = []
    for candidate in resolver.candidates():
        commit = resolver.find_commit(candidate.ref)
        rows.append({
            'tag': candidate.tag,
            'version': candidate.raw,
            'commit': commit,
            'reachable': commit is not None and commit in reachable,
        })

    if include_all:
        versioned = {row['tag'] for row in rows}
        for ref in repository.tag_refs():
            if ref.short_name not in versioned:
                rows.append({
                    'tag': ref.short_name,
                    'version': None,
                    'commit': resolver.find_commit(ref),
                    'reachable': None,
                })

    return rows, winner.tag


@click.command('tags')
@click.argument('path', default='.', required=False,
                type=click.Path(exists=True, file_okay=False))
@click.option('--prefix', '-p', help='Prefix version tags must have (regex, e.g. "v")')
@click.option('--pattern', help='Version pattern with one capture group')
@click.option('--all', 'include_all', is_flag=True, help='Also list tags without a version')
@click.option('--json', 'json_output', is_flag=True, help='Output as JSONL')
@standard_command
def tags_cmd(path, prefix, pattern, include_all, json_output):
    """List version tags of the repository at PATH.

    Tags are listed highest version first. The tag that determines the
    version is the first one reachable from HEAD.

    Examples:

    \b
        gitversioning tags
        gitversioning tags --prefix v --all
        gitversioning tags --json
    """
    repository = Repository.open(path)
    config = load_config(repository.work_tree, overrides={
        'tag_prefix': prefix,
        'pattern': pattern,
    })
    rows, winner = collect_tags(repository, build_tag_filter(config), include_all)

    if json_output:
        for row in rows:
            row['selected'] = row['tag'] == winner
            print(json.dumps(row))
        return None

    render_tags_table(rows, winner)
    return None

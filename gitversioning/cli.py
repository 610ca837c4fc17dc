#!/usr/bin/env python3

import click

from gitversioning.commands.version import version_cmd
from gitversioning.commands.tags import tags_cmd
from gitversioning.commands.status import status_cmd


@click.group()
@click.version_option(package_name='gitversioning')
def cli():
    """gitversioning - Derive project versions from git tags.

    Finds the latest version tag reachable from HEAD and turns it into
    a version string, marking it as a development version when the
    work tree has changes since the tagged commit.
    """
    pass


cli.add_command(version_cmd)
cli.add_command(tags_cmd)
cli.add_command(status_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()

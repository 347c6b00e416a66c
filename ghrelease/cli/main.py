"""Main CLI entry point for ghrelease."""

import logging
import sys

import click

from .. import __version__
from ..config import get_config, Config
from ..errors import ReleaseError
from ..github import GitHubClient
from .action import action
from .notes import notes, init_config


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--config-file', '-c', help='Path to JSON settings file')
@click.version_option(version=__version__, prog_name="ghrelease")
@click.pass_context
def cli(ctx, debug, config_file):
    """ghrelease - GitHub release automation driven by a RELEASE file."""

    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    ctx.ensure_object(dict)
    ctx.obj['logger'] = logging.getLogger('ghrelease')
    try:
        ctx.obj['base_config'] = get_config(config_file)
    except ReleaseError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def resolve_config(ctx, **overrides) -> Config:
    """Apply command-line overrides on top of the loaded settings."""
    base_config = ctx.obj['base_config']
    values = {k: v for k, v in overrides.items() if v}
    return base_config.model_copy(update=values)


def create_github_client(ctx, config: Config, require_token: bool = True) -> GitHubClient:
    """Create a GitHub client, exiting when a required token is missing."""
    if require_token and not config.github_token:
        click.echo("Error: GitHub token is required. Set INPUT_TOKEN, GHRELEASE_GITHUB_TOKEN, or use --token", err=True)
        sys.exit(1)
    return GitHubClient(config, ctx.obj['logger'])


@cli.command()
def version():
    """Show version information."""
    click.echo(f"ghrelease version {__version__}")


cli.add_command(action)
cli.add_command(notes)
cli.add_command(init_config)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == '__main__':
    main()

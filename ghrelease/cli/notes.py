"""Local release note preview and sample release file commands."""

import json
import os
import sys

import click
import yaml

from ..errors import ReleaseError
from ..git import GitClient
from ..github import GitHubEvent
from ..releasenote import build_release_proposal


SAMPLE_RELEASE_CONFIG = {
    'tag': 'v0.1.0',
    'title': 'Release v0.1.0',
    'prerelease': False,
    'commitExclude': {
        'prefixes': ['Merge pull request #', 'chore:'],
    },
    'commitCategories': [
        {'id': 'feat', 'title': 'Features', 'prefixes': ['feat:']},
        {'id': 'fix', 'title': 'Bug Fixes', 'prefixes': ['fix:']},
        {'title': 'Other Changes'},
    ],
    'releaseNoteGenerator': {
        'showAbbrevHash': True,
        'showCommitter': True,
        'useReleaseNoteBlock': True,
    },
}


@click.command()
@click.option('--base', '-b', required=True, help='Base commit (where the previous tag is declared)')
@click.option('--head', '-h', 'head', default='HEAD', show_default=True, help='Head commit')
@click.option('--release-file', '-f', help='Release file path (default: RELEASE)')
@click.option('--repo-dir', '-d', help='Repository directory (default: workspace or current directory)')
@click.option('--owner', default='', help='Repository owner, used for commit links')
@click.option('--repo', default='', help='Repository name, used for commit links')
@click.option('--json', 'as_json', is_flag=True, help='Print the release proposal as JSON')
@click.option('--output', '-o', help='Write output to file instead of stdout')
@click.pass_context
def notes(ctx, base, head, release_file, repo_dir, owner, repo, as_json, output):
    """Render the release note for a commit range of a local repository."""

    # Import here to avoid circular dependency
    from .main import resolve_config

    config = resolve_config(ctx, release_file=release_file)
    logger = ctx.obj['logger']

    git = GitClient(config.git_path, repo_dir or config.workspace or os.getcwd(), logger)
    event = GitHubEvent(name="local", owner=owner, repo=repo, base_commit=base, head_commit=head)

    try:
        proposal = build_release_proposal(config.release_file, git, event)
    except ReleaseError as e:
        logger.error(f"Error generating release notes: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    text = json.dumps(proposal.to_dict(), indent=2) if as_json else proposal.release_note

    if output:
        try:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(text)
        except OSError as e:
            click.echo(f"Error writing to file {output}: {e}", err=True)
            sys.exit(1)
        click.echo(f"Release notes saved to: {output}")
    else:
        click.echo(text)


@click.command('init-config')
@click.option('--path', '-p', default='RELEASE', help='Path for the release file')
@click.option('--force', is_flag=True, help='Overwrite an existing file')
def init_config(path, force):
    """Create a sample release file."""
    if os.path.exists(path) and not force:
        click.echo(f"Error: {path} already exists (use --force to overwrite)", err=True)
        sys.exit(1)

    try:
        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(SAMPLE_RELEASE_CONFIG, f, sort_keys=False)
    except OSError as e:
        click.echo(f"Error creating release file: {e}", err=True)
        sys.exit(1)

    click.echo(f"Sample release file created at: {path}")
    click.echo("Edit the tag before committing; a release is created when the tag changes.")

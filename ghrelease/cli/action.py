"""GitHub Actions command implementation."""

import json
import sys

import click

from ..errors import ReleaseError
from ..git import GitClient
from ..github import EVENT_PUSH, parse_github_event
from ..releasenote import build_release_proposal, make_comment_body, match_release_files


def set_output(config, name: str, value: str) -> None:
    """Expose a step output to later workflow steps."""
    if config.output_file:
        delimiter = f"ghrelease_{name}_eof"
        with open(config.output_file, 'a', encoding='utf-8') as f:
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
    else:
        click.echo(f"::set-output name={name}::{value}")


@click.command()
@click.option('--release-file', '-f', help='Release file name or glob pattern (default: RELEASE)')
@click.option('--token', help='GitHub token (overrides INPUT_TOKEN)')
@click.option('--dry-run', is_flag=True, help='Build proposals without creating releases or comments')
@click.pass_context
def action(ctx, release_file, token, dry_run):
    """Create GitHub releases for changed release files, or preview them on pull requests."""

    # Import here to avoid circular dependency
    from .main import create_github_client, resolve_config

    config = resolve_config(ctx, release_file=release_file, github_token=token)
    logger = ctx.obj['logger']
    logger.info("Start running ghrelease action")

    if not config.workspace:
        click.echo("Error: GITHUB_WORKSPACE was not defined", err=True)
        sys.exit(1)

    client = create_github_client(ctx, config, require_token=not dry_run)

    try:
        event = parse_github_event(config.event_name, config.event_path, client)
        if not event.supported:
            click.echo(f"Error: this action does not support {event.name or 'unknown'} event", err=True)
            sys.exit(1)
        logger.info(
            f"Parsed GitHub event {event.name}: base-commit {event.base_commit}, head-commit {event.head_commit}"
        )

        git = GitClient(config.git_path, config.workspace, logger)
        changed = git.changed_files(event.base_commit, event.head_commit)
        release_files = match_release_files(changed, [config.release_file])
        if not release_files:
            logger.info("Nothing to do since there were no modified release files")
            return

        proposals = []
        for f in release_files:
            logger.info(f"Building release proposal for {f}")
            proposals.append(build_release_proposal(f, git, event))

        set_output(config, 'releases', json.dumps([p.to_dict() for p in proposals]))

        if dry_run:
            for p in proposals:
                click.echo(p.release_note)
            click.echo("(Dry run - no changes made)")
            return

        if event.name == EVENT_PUSH:
            logger.info(f"Will create {len(proposals)} GitHub releases")
            for p in proposals:
                r = client.upsert_release(event.owner, event.repo, p)
                logger.info(f"Successfully created GitHub release {r.get('tag_name')}: {r.get('html_url')}")
            logger.info(f"Successfully created all {len(proposals)} GitHub releases")
            return

        comment = client.create_comment(event.owner, event.repo, event.pr_number, make_comment_body(proposals))
        logger.info(f"Successfully commented release preview on pull request: {comment.get('html_url')}")

    except ReleaseError as e:
        logger.error(f"Release run failed: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

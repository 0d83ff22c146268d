"""
Command-line entry point.

Usage:
    pr-commentator --repo-url https://github.com/myorg/myrepo --token $TOKEN \\
        --ref refs/heads/my_branch --comment "Build passed"

Environment variables:
    PR_COMMENTATOR_TOKEN: GitHub token used when --token is not given
    PR_COMMENTATOR_API_URL: GitHub API base URL (default: https://api.github.com)
    PR_COMMENTATOR_DRY_RUN: Log create/edit calls instead of sending them
    PR_COMMENTATOR_LOG_LEVEL: Logging level (default: INFO)
"""

import asyncio
import logging
from pathlib import Path

import click

from .commentator import (
    CommentAction,
    CommentSource,
    OverwriteMode,
    OverwritePolicy,
    RunConfig,
    SourceReadError,
    run,
)
from .config import settings
from .dry_run import DryRunCommentApi
from .github import ApiError, GitHubClient, InvalidRepoUrl, RepoCoordinates, parse_repo_url
from .github.public_api import CommentApi

logger = logging.getLogger("pr_commentator.cli")


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Keep request logging to our own DEBUG lines
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _overwrite_mode(value: str | None) -> OverwriteMode | None:
    if value is None:
        return None
    return next(m for m in OverwriteMode if m.value.lower() == value.lower())


def build_config(
    repo_url: str | None,
    api_url: str | None,
    token: str | None,
    org: str | None,
    repo: str | None,
    ref: str,
    comment: str | None,
    comment_file: Path | None,
    use_stdin: bool,
    overwrite: str | None,
    overwrite_id: str | None,
    dry_run: bool,
) -> RunConfig:
    """Turn CLI options and settings into a RunConfig, or raise a usage error."""
    repo_info = None
    if repo_url:
        try:
            repo_info = parse_repo_url(repo_url)
        except InvalidRepoUrl as e:
            raise click.BadParameter(str(e), param_hint="'--repo-url'") from e

    owner = org or (repo_info.owner if repo_info else None)
    name = repo or (repo_info.name if repo_info else None)
    if not owner:
        raise click.UsageError("Missing repository owner: use --org or --repo-url")
    if not name:
        raise click.UsageError("Missing repository name: use --repo or --repo-url")

    token = token or settings.token
    if not token:
        raise click.UsageError("Missing GitHub token: use --token or PR_COMMENTATOR_TOKEN")

    if comment is not None:
        source = CommentSource.literal(comment)
    elif comment_file is not None:
        source = CommentSource.file(comment_file)
    elif use_stdin:
        source = CommentSource.stdin()
    else:
        raise click.UsageError("No comment given: use --comment, --comment-file or --use-stdin")

    return RunConfig(
        repo=RepoCoordinates(owner=owner, name=name),
        api_url=api_url or (repo_info.api_url if repo_info else settings.api_url),
        token=token,
        ref_name=ref,
        comment_source=source,
        overwrite=OverwritePolicy.from_options(_overwrite_mode(overwrite), overwrite_id),
        dry_run=dry_run or settings.dry_run,
    )


async def execute(config: RunConfig, api: CommentApi | None = None) -> CommentAction:
    """Run with a GitHub client built from ``config`` and close it afterwards."""
    if api is None:
        api = GitHubClient(base_url=config.api_url, token=config.token)
    if config.dry_run:
        api = DryRunCommentApi(api)
    try:
        return await run(config, api)
    finally:
        await api.close()


@click.command(
    epilog=(
        "The comment content is taken from --comment if present, otherwise "
        "from the file given with --comment-file, otherwise from stdin when "
        "--use-stdin is set."
    )
)
@click.option(
    "--repo-url",
    help="Repository url, used to deduce the api url, organization and repo name. "
    "--api-url, --org and --repo override the deduced values.",
)
@click.option("--api-url", help="The GitHub api base url.")
@click.option("--token", help="The GitHub token to use (default: $PR_COMMENTATOR_TOKEN).")
@click.option("--org", help="The GitHub organization or username owning the repo.")
@click.option("--repo", help="The repository name.")
@click.option(
    "--ref",
    required=True,
    help="The reference used to find the PR (e.g. 'refs/heads/my_branch').",
)
@click.option("--comment", help="The content of the comment.")
@click.option(
    "--comment-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="A file containing the content of the comment.",
)
@click.option("--use-stdin", is_flag=True, help="Read the comment from stdin.")
@click.option(
    "--overwrite",
    type=click.Choice([m.value for m in OverwriteMode], case_sensitive=False),
    help="Whether a previous generated comment on the PR should be overwritten "
    "(default: Always).",
)
@click.option(
    "--overwrite-id",
    help="An arbitrary string identifying the comment to overwrite "
    "(e.g. commit hash, build number). Implies --overwrite UsingIdentifier.",
)
@click.option("--dry-run", is_flag=True, help="Log the create/edit call instead of sending it.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool, **options) -> None:
    """Post or update a comment on the pull request of a branch."""
    setup_logging(verbose)

    logger.debug("Parsing command line")
    config = build_config(**options)
    logger.debug(f"Config parsed as: {config!r} (token: {config.masked_token})")

    try:
        asyncio.run(execute(config))
    except (ApiError, SourceReadError) as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    cli()

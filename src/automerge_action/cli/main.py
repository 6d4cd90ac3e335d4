"""Main CLI entry point."""

import asyncio
import json
import tempfile
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from automerge_action.config import Settings
from automerge_action.errors import CollaboratorError, ConfigurationError
from automerge_action.git.local import DEFAULT_USER_EMAIL, DEFAULT_USER_NAME, LocalGit
from automerge_action.github.client import GitHubClient
from automerge_action.log import setup_logging
from automerge_action.merge import ApiMergeStrategy
from automerge_action.models.pr import PullRequest
from automerge_action.models.result import UpdateResult
from automerge_action.updater import Updater

# GitHub Actions treats exit code 78 as "neutral"
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIGURATION = 2
EXIT_NEUTRAL = 78

app = typer.Typer(
    name="automerge-action",
    help="Merge or rebase pull requests based on their labels",
)
console = Console()


def _settings(
    github_token: str | None,
    api_url: str,
    server_url: str,
    merge_method: str | None,
    git_user_name: str,
    git_user_email: str,
    log_level: str,
) -> Settings:
    try:
        return Settings(
            github_token=github_token,
            api_url=api_url,
            server_url=server_url,
            merge_method=merge_method or None,
            git_user_name=git_user_name,
            git_user_email=git_user_email,
            log_level=log_level,
        )
    except ValidationError as e:
        console.print(f"[red]✗ Invalid settings: {e}[/red]")
        raise typer.Exit(EXIT_CONFIGURATION)


def _build_updater(settings: Settings, client: GitHubClient) -> Updater:
    git = LocalGit(user_name=settings.git_user_name, user_email=settings.git_user_email)
    strategy = None
    if settings.merge_method:
        strategy = ApiMergeStrategy(client, settings.merge_method)
    return Updater(client, git, strategy)


async def _run_update(
    settings: Settings,
    client: GitHubClient,
    pull_request: PullRequest,
    directory: Path | None,
    url: str | None,
) -> UpdateResult:
    if url is None and pull_request.base.repo is not None:
        url = settings.clone_url(pull_request.base.repo.full_name)

    updater = _build_updater(settings, client)
    if directory is not None:
        return await updater.update(str(directory), url, pull_request)

    with tempfile.TemporaryDirectory(prefix="automerge-") as tmp:
        # git clone wants a path that does not exist yet
        return await updater.update(str(Path(tmp) / "repo"), url, pull_request)


def _report(pull_request: PullRequest, result: UpdateResult) -> int:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="yellow")

    table.add_row("PR", f"#{pull_request.number} {pull_request.title}")
    table.add_row("Head", f"{pull_request.head.ref} @ {pull_request.head.sha[:7]}")
    table.add_row("Base", pull_request.base.ref)
    table.add_row("Action", result.action.value)
    table.add_row("Status", result.status.value)
    if result.reason:
        table.add_row("Reason", result.reason.value)
    console.print(table)

    if result.skipped:
        console.print(f"[yellow]• Nothing to do: {result.reason.value}[/yellow]")
        return EXIT_NEUTRAL

    console.print(f"[green]✓ {result.action.value} done[/green]")
    return EXIT_OK


def _execute(
    settings: Settings,
    client: GitHubClient,
    pull_request: PullRequest,
    directory: Path | None,
    url: str | None,
) -> None:
    try:
        result = asyncio.run(_run_update(settings, client, pull_request, directory, url))
    except ConfigurationError as e:
        console.print(f"[red]✗ Configuration error: {e}[/red]")
        raise typer.Exit(EXIT_CONFIGURATION)
    except CollaboratorError as e:
        console.print(f"[red]✗ {type(e).__name__}: {e}[/red]")
        raise typer.Exit(EXIT_FAILURE)
    except NotImplementedError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(EXIT_FAILURE)

    raise typer.Exit(_report(pull_request, result))


def _banner(subtitle: str) -> None:
    console.print(
        Panel.fit(
            f"[bold blue]automerge-action[/bold blue]\n{subtitle}",
            border_style="blue",
        )
    )


@app.command()
def run(
    event_path: Path = typer.Option(
        ..., "--event-path", envvar="GITHUB_EVENT_PATH", help="GitHub event payload (JSON)"
    ),
    directory: Path = typer.Option(
        None, "--dir", help="Working directory for the clone (temporary if not set)"
    ),
    url: str = typer.Option(None, "--url", help="Remote URL (derived from the PR if not set)"),
    github_token: str = typer.Option(
        None, "--token", envvar="GITHUB_TOKEN", help="GitHub API token"
    ),
    api_url: str = typer.Option(
        "https://api.github.com", "--api-url", envvar="GITHUB_API_URL", help="GitHub API URL"
    ),
    server_url: str = typer.Option(
        "https://github.com", "--server-url", envvar="GITHUB_SERVER_URL", help="GitHub web URL"
    ),
    merge_method: str = typer.Option(
        None, "--merge-method", envvar="MERGE_METHOD", help="merge, squash or rebase"
    ),
    git_user_name: str = typer.Option(
        DEFAULT_USER_NAME, "--git-user-name", envvar="GIT_USER_NAME", help="Committer name"
    ),
    git_user_email: str = typer.Option(
        DEFAULT_USER_EMAIL, "--git-user-email", envvar="GIT_USER_EMAIL", help="Committer email"
    ),
    log_level: str = typer.Option("INFO", "--log-level", envvar="LOG_LEVEL"),
):
    """
    Process the pull request from a GitHub Actions event.

    Example:
        GITHUB_EVENT_PATH=event.json automerge-action run
    """
    settings = _settings(
        github_token, api_url, server_url, merge_method, git_user_name, git_user_email, log_level
    )
    setup_logging(settings.log_level)
    _banner("Pull request from event payload")

    try:
        event = json.loads(event_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        console.print(f"[red]✗ Cannot read event {event_path}: {e}[/red]")
        raise typer.Exit(EXIT_CONFIGURATION)

    if "pull_request" not in event:
        console.print("[yellow]• Event has no pull request, skipping[/yellow]")
        raise typer.Exit(EXIT_NEUTRAL)

    try:
        pull_request = PullRequest.model_validate(event["pull_request"])
    except ValidationError as e:
        console.print(f"[red]✗ Invalid pull request payload: {e}[/red]")
        raise typer.Exit(EXIT_CONFIGURATION)

    client = GitHubClient(
        token=settings.github_token, base_url=settings.api_url, timeout=settings.timeout_sec
    )
    _execute(settings, client, pull_request, directory, url)


@app.command()
def update(
    pr_url: str = typer.Option(..., "--pr-url", help="GitHub PR URL"),
    directory: Path = typer.Option(
        None, "--dir", help="Working directory for the clone (temporary if not set)"
    ),
    url: str = typer.Option(None, "--url", help="Remote URL (derived from the PR if not set)"),
    github_token: str = typer.Option(
        None, "--token", envvar="GITHUB_TOKEN", help="GitHub API token"
    ),
    api_url: str = typer.Option(
        "https://api.github.com", "--api-url", envvar="GITHUB_API_URL", help="GitHub API URL"
    ),
    server_url: str = typer.Option(
        "https://github.com", "--server-url", envvar="GITHUB_SERVER_URL", help="GitHub web URL"
    ),
    merge_method: str = typer.Option(
        None, "--merge-method", envvar="MERGE_METHOD", help="merge, squash or rebase"
    ),
    git_user_name: str = typer.Option(
        DEFAULT_USER_NAME, "--git-user-name", envvar="GIT_USER_NAME", help="Committer name"
    ),
    git_user_email: str = typer.Option(
        DEFAULT_USER_EMAIL, "--git-user-email", envvar="GIT_USER_EMAIL", help="Committer email"
    ),
    log_level: str = typer.Option("INFO", "--log-level", envvar="LOG_LEVEL"),
):
    """
    Process a single PR by URL.

    Example:
        automerge-action update --pr-url https://github.com/owner/repo/pull/123
    """
    settings = _settings(
        github_token, api_url, server_url, merge_method, git_user_name, git_user_email, log_level
    )
    setup_logging(settings.log_level)
    _banner("Pull request from URL")

    try:
        owner, repo, number = GitHubClient.parse_pr_url(pr_url)
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(EXIT_CONFIGURATION)

    client = GitHubClient(
        token=settings.github_token, base_url=settings.api_url, timeout=settings.timeout_sec
    )
    try:
        pull_request = asyncio.run(client.get_pull_request(owner, repo, number))
    except (CollaboratorError, ValidationError) as e:
        console.print(f"[red]✗ Failed to fetch PR info: {e}[/red]")
        raise typer.Exit(EXIT_FAILURE)

    console.print(f"✓ PR #{pull_request.number}: {pull_request.title}")
    _execute(settings, client, pull_request, directory, url)


@app.command()
def version():
    """Show version information."""
    from automerge_action import __version__

    console.print(f"automerge-action version {__version__}")


if __name__ == "__main__":
    app()

"""Preconditions that must hold before anything touches git or the API."""

import logging

from automerge_action.errors import InvalidArgumentsError
from automerge_action.github.base import BaseRepositoryHost
from automerge_action.models.action import Action
from automerge_action.models.pr import PullRequest
from automerge_action.models.result import SkipReason, UpdateResult
from automerge_action.resolver import resolve_action

logger = logging.getLogger(__name__)


def check_pull_request(pull_request: PullRequest) -> UpdateResult | None:
    """Skip merged PRs and PRs from forks. Returns None when the PR may be processed."""
    if pull_request.merged:
        logger.info("PR is already merged!")
        return UpdateResult.skip(SkipReason.ALREADY_MERGED)

    if pull_request.is_external:
        logger.info("PR branch is from external repository, skipping")
        return UpdateResult.skip(SkipReason.EXTERNAL_REPOSITORY)

    return None


def check_action(action: Action) -> UpdateResult | None:
    """Skip when no action label was found."""
    if action is Action.NONE:
        logger.info("No matching labels found on PR, skipping")
        return UpdateResult.skip(SkipReason.NO_MATCHING_LABEL)
    return None


def require_arguments(
    host: BaseRepositoryHost | None, directory: str | None, url: str | None
) -> None:
    """
    Ensure every collaborator needed to run an action was supplied.

    Raises:
        InvalidArgumentsError: If the host client, directory or URL is missing
    """
    missing = [
        name
        for name, value in (("host client", host), ("directory", directory), ("url", url))
        if not value
    ]
    if missing:
        raise InvalidArgumentsError(f"invalid arguments: missing {', '.join(missing)}")


def check_preconditions(
    pull_request: PullRequest,
    host: BaseRepositoryHost | None,
    directory: str | None,
    url: str | None,
) -> tuple[Action, UpdateResult | None]:
    """
    Run all precondition checks in order.

    Merged and fork PRs are skipped before the labels are looked at, so a
    merged PR with conflicting labels is still skipped.

    Returns:
        The resolved action, and a skipped UpdateResult or None when the
        action may run

    Raises:
        AmbiguousLabelsError: If two different action labels are present
        InvalidArgumentsError: If a required collaborator is missing
    """
    skipped = check_pull_request(pull_request)
    if skipped is not None:
        return Action.NONE, skipped

    action = resolve_action(pull_request.labels)
    skipped = check_action(action)
    if skipped is not None:
        return action, skipped

    require_arguments(host, directory, url)
    return action, None

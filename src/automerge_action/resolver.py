"""Label to action resolution."""

from collections.abc import Iterable

from automerge_action.errors import AmbiguousLabelsError
from automerge_action.models.action import LABEL_ACTIONS, Action
from automerge_action.models.pr import Label


def resolve_action(labels: Iterable[Label]) -> Action:
    """
    Determine the single action requested by a PR's labels.

    Args:
        labels: Labels attached to the PR, in order

    Returns:
        The requested action, or Action.NONE when no action label is present

    Raises:
        AmbiguousLabelsError: If two different action labels are present
    """
    found: str | None = None
    for label in labels:
        action = LABEL_ACTIONS.get(label.name, Action.NONE)
        if action is Action.NONE or label.name == found:
            continue
        if found is not None:
            raise AmbiguousLabelsError(found, label.name)
        found = label.name

    return LABEL_ACTIONS[found] if found is not None else Action.NONE

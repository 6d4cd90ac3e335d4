"""Actions a pull request label can request."""

from enum import Enum


class Action(str, Enum):
    """Supported actions."""

    NONE = "none"
    MERGE = "merge"
    REBASE = "rebase"


# Label name -> action. Labels not listed here map to Action.NONE.
LABEL_ACTIONS: dict[str, Action] = {
    "automerge": Action.MERGE,
    "autorebase": Action.REBASE,
}

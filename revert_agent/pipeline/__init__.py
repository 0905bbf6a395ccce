"""Revert workflow stages.

Stages run in this order:
1. resolve: PR URL -> metadata
2. fork: find or create the user's fork
3. working_copy: clone (or reuse) and branch
4. revert: revert the merge commit and push
5. body: render the revert PR
6. statuses: list the CI contexts that can be overridden
"""

from .resolve import parse_pr_url, ReferenceResolver
from .statuses import classify, format_override_comment, StatusClassifier
from .fork import ForkAcquirer
from .working_copy import WorkingCopyManager
from .revert import RevertOperation
from .body import render_revert_body, render_revert_title

__all__ = [
    "parse_pr_url",
    "ReferenceResolver",
    "classify",
    "format_override_comment",
    "StatusClassifier",
    "ForkAcquirer",
    "WorkingCopyManager",
    "RevertOperation",
    "render_revert_body",
    "render_revert_title",
]

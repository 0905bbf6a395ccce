"""Render the revert PR title and body."""

from ..models import ChangeMetadata


REVERT_TEMPLATE = """
Reverts #{original_pr} ; tracked by {jira_issue}

Per [OpenShift policy](https://github.com/openshift/enhancements/blob/master/enhancements/release/improving-ci-signal.md#quick-revert), we are reverting this breaking change to get CI and/or nightly payloads flowing again.

{context}

To unrevert this, revert this PR, and layer an additional separate commit on top that addresses the problem. Before merging the unrevert, please run these jobs on the PR and check the result of these jobs to confirm the fix has corrected the problem:

```
{jobs}
```

CC: @{original_author}
"""


def render_revert_body(
    metadata: ChangeMetadata,
    jira_ticket: str,
    rationale: str,
    verification_jobs: str,
) -> str:
    """
    Render the body of the revert PR.

    Args:
        metadata: The PR being reverted
        jira_ticket: Tracking ticket, e.g. "OCPBUGS-1234"
        rationale: Why the PR is being reverted
        verification_jobs: Jobs to run before un-reverting, usually one per line

    Returns:
        Rendered markdown body
    """
    return REVERT_TEMPLATE.format(
        original_pr=metadata.number,
        jira_issue=jira_ticket,
        context=rationale,
        jobs=verification_jobs,
        original_author=metadata.author,
    )


def render_revert_title(metadata: ChangeMetadata, jira_ticket: str) -> str:
    """Title in format '<ticket>: Revert #<n> "<original title>"'."""
    return f'{jira_ticket}: Revert #{metadata.number} "{metadata.title}"'

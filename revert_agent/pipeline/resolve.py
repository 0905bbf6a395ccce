"""Resolve a PR URL into repository coordinates and PR metadata."""

from urllib.parse import urlparse

from ..errors import ParseError
from ..models import ChangeReference, ChangeMetadata
from ..utils import get_logger


def parse_pr_url(url: str) -> ChangeReference:
    """
    Parse a GitHub PR URL.

    Args:
        url: URL in format "https://<host>/<owner>/<repo>/pull/<number>"

    Returns:
        ChangeReference with owner, repository and number

    Raises:
        ParseError: If the URL does not point at a pull request
    """
    try:
        path = urlparse(url).path
    except ValueError as e:
        raise ParseError(url, str(e)) from e

    segments = path.strip("/").split("/")
    if len(segments) < 4 or segments[2] != "pull":
        raise ParseError(url, "expected <owner>/<repo>/pull/<number>")

    number_text = segments[3]
    if not number_text.isdigit() or not number_text.isascii():
        raise ParseError(url, f"PR number {number_text!r} is not an integer")

    number = int(number_text)
    if number <= 0:
        raise ParseError(url, f"PR number {number} is not positive")

    return ChangeReference(owner=segments[0], repository=segments[1], number=number)


class ReferenceResolver:
    """Turns a PR URL into ChangeMetadata with a single platform lookup."""

    def __init__(self, github):
        """
        Args:
            github: Platform client exposing get_pull(owner, repository, number)
        """
        self.github = github
        self.logger = get_logger()

    def resolve(self, url: str) -> ChangeMetadata:
        """
        Parse `url` and fetch the PR it points at.

        Raises:
            ParseError: If the URL is malformed (no remote call is made)
            RemoteLookupError: If the PR cannot be fetched
        """
        ref = parse_pr_url(url)
        metadata = self.github.get_pull(ref.owner, ref.repository, ref.number)

        self.logger.info(
            f"Found info for PR {url} "
            f"(owner={ref.owner}, repo={ref.repository}, pr_number={ref.number})"
        )
        return metadata

"""Parse the "Targets:" line that links a pull request to its issue.

Accepted forms, on any line of the PR body:
  - Targets: owner/repo#123
  - Targets: #123  (issue in the configured issue repository)
"""

import re
from dataclasses import dataclass

_TARGETS_FULL = re.compile(
    r"^\s*Targets:\s*([^\s#/]+)/([^\s#]+)\s*#\s*(\d+)\s*$", re.IGNORECASE | re.MULTILINE
)
_TARGETS_SHORT = re.compile(r"^\s*Targets:\s*#\s*(\d+)\s*$", re.IGNORECASE | re.MULTILINE)


@dataclass(frozen=True)
class TargetReference:
    owner: str
    repo: str
    number: int


@dataclass(frozen=True)
class TargetParseResult:
    """Either a target or the reason there is none."""

    target: TargetReference | None = None
    error: str | None = None


def parse_target_reference(
    body: str | None, expected_owner: str, expected_repo: str
) -> TargetParseResult:
    """Extract the target issue from a PR body.

    A reference into any repository other than the configured issue repository
    is rejected rather than followed.

    Examples:
        >>> parse_target_reference("Targets: acme/tracker#12", "acme", "tracker").target
        TargetReference(owner='acme', repo='tracker', number=12)
        >>> parse_target_reference("Targets: other/repo#12", "acme", "tracker").error
        'Targets line does not match configured issue repo'
    """
    if not body:
        return TargetParseResult(error="PR body is empty")

    full_match = _TARGETS_FULL.search(body)
    short_match = _TARGETS_SHORT.search(body)

    if full_match is not None:
        owner, repo, number_text = full_match.group(1), full_match.group(2), full_match.group(3)
    elif short_match is not None:
        owner, repo, number_text = expected_owner, expected_repo, short_match.group(1)
    else:
        return TargetParseResult(error="Missing Targets line")

    number = int(number_text)
    if number <= 0:
        return TargetParseResult(error="Invalid issue number in Targets line")

    if owner != expected_owner or repo != expected_repo:
        return TargetParseResult(error="Targets line does not match configured issue repo")

    return TargetParseResult(target=TargetReference(owner=owner, repo=repo, number=number))

"""Tests for FakeGitHub test infrastructure.

The sync tests rely on FakeGitHub behaving like the real API where it
matters: pagination, items created for an issue becoming visible to later
lookups, and status updates being readable back.
"""

import pytest

from board_sync.core.errors import GitHubAPIError
from board_sync.core.github.fake import FakeGitHub
from board_sync.core.github.types import FieldValue, ProjectRef
from tests.test_utils.builders import PROJECT_ID, STATUS_FIELD_ID, make_github


def test_fake_github_initialization() -> None:
    github = FakeGitHub()

    assert github.get_project_by_number("acme", "organization", 1) is None
    assert github.list_projects("acme", "user", "", None).nodes == []
    assert github.call_counts == {"get_project_by_number": 1, "list_projects": 1}


def test_list_projects_paginates_with_cursor() -> None:
    projects = [ProjectRef(id=f"PVT_{i}", title=f"Board {i}") for i in range(3)]
    github = FakeGitHub(projects={("organization", "acme"): projects}, page_size=2)

    first = github.list_projects("acme", "organization", "board", None)
    second = github.list_projects("acme", "organization", "board", first.end_cursor)

    assert [p.id for p in first.nodes] == ["PVT_0", "PVT_1"]
    assert first.has_next_page
    assert [p.id for p in second.nodes] == ["PVT_2"]
    assert not second.has_next_page
    assert second.end_cursor is None


def test_created_item_is_visible_to_issue_lookup() -> None:
    github = make_github()

    item_id = github.add_project_item(PROJECT_ID, "I_7")
    page = github.list_issue_project_items("acme", "tracker", 7, None)

    assert item_id == "PVTI_1"
    assert [(item.item_id, item.project_id) for item in page.nodes] == [(item_id, PROJECT_ID)]


def test_status_update_is_readable() -> None:
    github = make_github(current_status="Ready")

    github.update_item_status(PROJECT_ID, "PVTI_existing", STATUS_FIELD_ID, "opt_3")

    assert github.get_item_field_values("PVTI_existing") == [
        FieldValue(field_name="Status", value_name="In review")
    ]


def test_unknown_issue_raises_not_found() -> None:
    github = make_github()

    with pytest.raises(GitHubAPIError) as exc:
        github.get_issue("acme", "tracker", 404)

    assert exc.value.status == 404


def test_configured_errors_are_raised_in_order() -> None:
    github = make_github(
        errors={"create_comment": [GitHubAPIError("first"), GitHubAPIError("second")]}
    )

    for expected in ("first", "second"):
        with pytest.raises(GitHubAPIError, match=expected):
            github.create_comment("acme", "app", 10, "hi")
    github.create_comment("acme", "app", 10, "hi")

    assert github.call_counts["create_comment"] == 3
    assert github.comments == [(("acme", "app", 10), "hi")]

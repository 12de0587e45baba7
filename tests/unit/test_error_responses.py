import pytest

from bitbucket_cloud_cli.errors import BitbucketAPIError
from bitbucket_cloud_cli.models.bitbucket import CommitCommentRequest
from bitbucket_cloud_cli.models.options import SearchCodeOptions

OPERATIONS = {
    "approve": lambda api: api.commits.approve("acme", "widgets", "abc123"),
    "unapprove": lambda api: api.commits.unapprove("acme", "widgets", "abc123"),
    "list_comments": lambda api: api.commits.list_comments("acme", "widgets", "abc123"),
    "create_comment": lambda api: api.commits.create_comment(
        "acme", "widgets", "abc123", CommitCommentRequest.text("hi", parent_id=42)
    ),
    "get_comment": lambda api: api.commits.get_comment("acme", "widgets", "abc123", 42),
    "list_components": lambda api: api.components.list("acme", "widgets"),
    "get_component": lambda api: api.components.get("acme", "widgets", 17),
    "list_permissions": lambda api: api.teams.list_permissions("acme-team"),
    "list_repository_permissions": lambda api: api.teams.list_repository_permissions("acme-team"),
    "get_repository_permissions": lambda api: api.teams.get_repository_permissions("acme-team", "widgets"),
    "search_code": lambda api: api.teams.search_code("acme-team", SearchCodeOptions(search_query="foo")),
}


@pytest.mark.parametrize("status_code", [400, 401, 404, 500])
@pytest.mark.parametrize("operation", list(OPERATIONS.values()), ids=list(OPERATIONS))
def test_non_success_status_raises_and_returns_nothing(recorder, api, operation, status_code) -> None:
    recorder.reply(status_code=status_code, json={"type": "error", "error": {"message": "Nope"}})
    result = None

    with pytest.raises(BitbucketAPIError) as excinfo:
        result = operation(api)

    assert result is None
    assert excinfo.value.status_code == status_code
    assert excinfo.value.message == "Nope"
    assert len(recorder.requests) == 1

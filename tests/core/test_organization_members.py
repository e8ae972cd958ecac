from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from buildkite_provider.core.client import BuildkiteClient
from buildkite_provider.core.exceptions import BackendInvariantError, ErrorKind, NotFoundError
from buildkite_provider.core.models import OrganizationMember, OrganizationMemberRole

MEMBER_NODE = {
    "id": "T3JnYW5pemF0aW9uTWVtYmVyLS0tbTE=",
    "uuid": "m1",
    "role": "ADMIN",
    "createdAt": "2020-01-01T00:00:00Z",
    "user": {"id": "VXNlci0tLXUx", "name": "Ada", "email": "ada@acme.test"},
}


def test_create_always_fails(client: BuildkiteClient, mock_request: MagicMock) -> None:
    """Test that creating an organization member is rejected without a request."""
    with pytest.raises(BackendInvariantError) as exc_info:
        client.organization_members.create(OrganizationMember())

    if exc_info.value.kind is not ErrorKind.BACKEND_INVARIANT:
        pytest.fail(f"Unexpected kind: {exc_info.value.kind}")
    if mock_request.called:
        pytest.fail("Expected no request")


def test_get_member(
    client: BuildkiteClient,
    mock_request: MagicMock,
    graphql_data: Callable[..., MagicMock],
    request_body: Callable,
) -> None:
    """Test reading a member by UUID."""
    mock_request.return_value = graphql_data({"organizationMember": MEMBER_NODE})

    member = client.organization_members.get("m1")

    if request_body(mock_request.call_args)["variables"] != {"slug": "acme/m1"}:
        pytest.fail("Expected the org/uuid slug")
    if member.role is not OrganizationMemberRole.ADMIN or member.user.email != "ada@acme.test":
        pytest.fail(f"Unexpected member: {member}")


def test_get_missing_member(
    client: BuildkiteClient,
    mock_request: MagicMock,
    graphql_data: Callable[..., MagicMock],
) -> None:
    """Test that a null member is promoted to NotFoundError."""
    mock_request.return_value = graphql_data({"organizationMember": None})

    with pytest.raises(NotFoundError):
        client.organization_members.get("m1")


def test_update_role_and_delete(
    client: BuildkiteClient,
    mock_request: MagicMock,
    graphql_data: Callable[..., MagicMock],
    request_body: Callable,
) -> None:
    """Test the update and delete inputs."""
    mock_request.side_effect = [
        graphql_data({"organizationMemberUpdate": {"organizationMember": MEMBER_NODE}}),
        graphql_data({"organizationMemberDelete": {"deletedOrganizationMemberID": MEMBER_NODE["id"]}}),
    ]

    updated = client.organization_members.update(
        OrganizationMember(id=MEMBER_NODE["id"], uuid="m1", role=OrganizationMemberRole.ADMIN),
    )
    client.organization_members.delete(MEMBER_NODE["id"])

    update, delete = mock_request.call_args_list
    if request_body(update)["variables"]["input"] != {"id": MEMBER_NODE["id"], "role": "ADMIN"}:
        pytest.fail("Unexpected update input")
    if updated.uuid != "m1":
        pytest.fail(f"Unexpected member: {updated}")
    if request_body(delete)["variables"]["input"] != {"id": MEMBER_NODE["id"]}:
        pytest.fail("Unexpected delete input")

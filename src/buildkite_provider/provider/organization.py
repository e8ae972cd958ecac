"""buildkite_org_member resource.

Organization members can only be imported and then managed; creating one
fails because users join an organization by invitation. The ID is the member
UUID.
"""

import logging

from buildkite_provider.core.client import BuildkiteClient
from buildkite_provider.core.models import OrganizationMember, OrganizationMemberRole, User

from .resource import Resource, read_or_forget
from .state import ResourceData

DEFAULTS = {"role": OrganizationMemberRole.MEMBER.value}


def member_from_state(data: ResourceData) -> OrganizationMember:
    """Build the desired OrganizationMember from resource state."""
    return OrganizationMember(
        id=data.get("member_id") or "",
        uuid=data.get("uuid") or data.id,
        role=OrganizationMemberRole.from_string(data.get("role"), "role"),
        created_at=data.get("created_at") or "",
        user=User(
            id=data.get("user_id") or "",
            name=data.get("user_name") or "",
            email=data.get("user_email") or "",
        ),
    )


def update_state(data: ResourceData, member: OrganizationMember) -> None:
    """Record an observed OrganizationMember in resource state."""
    data.set_id(member.uuid)
    logging.info("organization: member ID '%s'", data.id)

    data.set("member_id", member.id)
    data.set("uuid", member.uuid)
    data.set("role", member.role.value)
    data.set("created_at", member.created_at)
    data.set("user_id", member.user.id)
    data.set("user_name", member.user.name)
    data.set("user_email", member.user.email)


### Operations
def create_member(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("organization: create member")
    client.organization_members.create(member_from_state(data))


def read_member(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("organization: read member")
    member = read_or_forget(data, client.organization_members.get)
    if member is not None:
        update_state(data, member)


def update_member(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("organization: update member")
    update_state(data, client.organization_members.update(member_from_state(data)))


def delete_member(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("organization: delete member")
    client.organization_members.delete(data.get("member_id"))


ORG_MEMBER = Resource(
    name="buildkite_org_member",
    create=create_member,
    read=read_member,
    update=update_member,
    delete=delete_member,
    defaults=DEFAULTS,
)

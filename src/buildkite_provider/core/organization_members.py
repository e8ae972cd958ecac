"""Organization member reconciler.

Members join an organization by accepting an invitation, so the API offers no
way to create one. Only reading, changing the role and removal are supported.
"""

import logging

from .exceptions import BackendInvariantError, NotFoundError
from .models import OrganizationMember
from .reconciler import Reconciler
from .schemas import (
    OrganizationMemberDeleteResponse,
    OrganizationMemberResponse,
    OrganizationMemberUpdateResponse,
)

ORGANIZATION_MEMBER_FIELDS = """
      id
      uuid
      role
      createdAt
      user {
        id
        name
        email
      }"""

ORGANIZATION_MEMBER_QUERY = f"""
query GetOrganizationMember($slug: ID!) {{
  organizationMember(slug: $slug) {{{ORGANIZATION_MEMBER_FIELDS}
  }}
}}"""

ORGANIZATION_MEMBER_UPDATE_MUTATION = f"""
mutation OrganizationMemberUpdate($input: OrganizationMemberUpdateInput!) {{
  organizationMemberUpdate(input: $input) {{
    organizationMember {{{ORGANIZATION_MEMBER_FIELDS}
    }}
  }}
}}"""

ORGANIZATION_MEMBER_DELETE_MUTATION = """
mutation OrganizationMemberDelete($input: OrganizationMemberDeleteInput!) {
  organizationMemberDelete(input: $input) {
    deletedOrganizationMemberID
  }
}"""


class OrganizationMemberReconciler(Reconciler):
    """Get/update/delete organization members."""

    def get(self, member_uuid: str) -> OrganizationMember:
        """Read an organization member by UUID."""
        with self.error_context(f"failed to get organization member {member_uuid}"):
            response = self.graphql.execute(
                ORGANIZATION_MEMBER_QUERY,
                {"slug": self.scoped_slug(member_uuid)},
                OrganizationMemberResponse,
            )
            if response.organization_member is None:
                raise NotFoundError(f"organization member {member_uuid} not found")
        return response.organization_member.to_organization_member()

    def create(self, member: OrganizationMember) -> OrganizationMember:
        """Always fails: Buildkite has no API for adding organization members."""
        raise BackendInvariantError(
            "organization members cannot be created through the API; invite the user instead",
        )

    def update(self, member: OrganizationMember) -> OrganizationMember:
        """Change the role of an organization member."""
        logging.info("organization: setting role of member '%s' to %s", member.uuid or member.id, member.role)
        with self.error_context(f"failed to update organization member {member.uuid or member.id}"):
            response = self.graphql.execute(
                ORGANIZATION_MEMBER_UPDATE_MUTATION,
                {"input": {"id": member.id, "role": member.role.value}},
                OrganizationMemberUpdateResponse,
            )
        return response.organization_member_update.organization_member.to_organization_member()

    def delete(self, member_id: str) -> None:
        """Remove a member from the organization by global ID."""
        logging.info("organization: removing member '%s'", member_id)
        with self.error_context(f"failed to delete organization member {member_id}"):
            self.graphql.execute(
                ORGANIZATION_MEMBER_DELETE_MUTATION,
                {"input": {"id": member_id}},
                OrganizationMemberDeleteResponse,
            )

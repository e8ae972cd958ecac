"""Team member reconciler.

Buildkite always creates a team member with the MEMBER role. Any other desired
role is applied by a follow-up update, so a create is one backend call for the
default role and two otherwise.
"""

import logging

from .exceptions import NotFoundError
from .models import TeamMember, TeamMemberRole
from .reconciler import Reconciler
from .schemas import (
    TeamMemberCreateResponse,
    TeamMemberDeleteResponse,
    TeamMemberResponse,
    TeamMemberUpdateResponse,
)

TEAM_MEMBER_FIELDS = """
      id
      uuid
      role
      createdAt
      user {
        id
      }
      team {
        id
      }"""

TEAM_MEMBER_QUERY = f"""
query GetTeamMember($teamMemberId: ID!) {{
  teamMember: node(id: $teamMemberId) {{
    ... on TeamMember {{{TEAM_MEMBER_FIELDS}
    }}
  }}
}}"""

TEAM_MEMBER_CREATE_MUTATION = f"""
mutation TeamMemberCreate($input: TeamMemberCreateInput!) {{
  teamMemberCreate(input: $input) {{
    teamMemberEdge {{
      node {{{TEAM_MEMBER_FIELDS}
      }}
    }}
  }}
}}"""

TEAM_MEMBER_UPDATE_MUTATION = f"""
mutation TeamMemberUpdate($input: TeamMemberUpdateInput!) {{
  teamMemberUpdate(input: $input) {{
    teamMember {{{TEAM_MEMBER_FIELDS}
    }}
  }}
}}"""

TEAM_MEMBER_DELETE_MUTATION = """
mutation TeamMemberDelete($input: TeamMemberDeleteInput!) {
  teamMemberDelete(input: $input) {
    deletedTeamMemberID
  }
}"""


class TeamMemberReconciler(Reconciler):
    """Get/create/update/delete team memberships."""

    DEFAULT_ROLE = TeamMemberRole.MEMBER

    def get(self, member_id: str) -> TeamMember:
        """Read a team member by global ID."""
        with self.error_context(f"failed to get team member {member_id}"):
            response = self.graphql.execute(TEAM_MEMBER_QUERY, {"teamMemberId": member_id}, TeamMemberResponse)
            if response.team_member is None:
                raise NotFoundError(f"team member {member_id} not found")
        return response.team_member.to_team_member()

    def create(self, member: TeamMember) -> TeamMember:
        """Add a user to a team, then raise the role if a non-default one is wanted."""
        logging.info("team: adding user '%s' to team '%s'", member.user.id, member.team.id)
        message = f"failed to create team member for user {member.user.id}"
        with self.error_context(message):
            response = self.graphql.execute(
                TEAM_MEMBER_CREATE_MUTATION,
                {"input": {"teamID": member.team.id, "userID": member.user.id}},
                TeamMemberCreateResponse,
            )
        created = response.team_member_create.team_member_edge.node.to_team_member()

        if member.role is self.DEFAULT_ROLE:
            return created

        created.role = member.role
        with self.error_context(message, phase="update"):
            return self._update_role(created)

    def update(self, member: TeamMember) -> TeamMember:
        """Change the role of a team member."""
        with self.error_context(f"failed to update team member {member.id}"):
            return self._update_role(member)

    def _update_role(self, member: TeamMember) -> TeamMember:
        logging.debug("team: setting role of member '%s' to %s", member.id, member.role)
        response = self.graphql.execute(
            TEAM_MEMBER_UPDATE_MUTATION,
            {"input": {"id": member.id, "role": member.role.value}},
            TeamMemberUpdateResponse,
        )
        return response.team_member_update.team_member.to_team_member()

    def delete(self, member_id: str) -> None:
        """Remove a user from a team."""
        logging.info("team: removing member '%s'", member_id)
        with self.error_context(f"failed to delete team member {member_id}"):
            self.graphql.execute(TEAM_MEMBER_DELETE_MUTATION, {"input": {"id": member_id}}, TeamMemberDeleteResponse)

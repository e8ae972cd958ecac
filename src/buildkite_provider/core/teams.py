"""Team reconciler. Teams are only reachable through GraphQL."""

import logging
from typing import Any

from .exceptions import NotFoundError
from .models import Team
from .reconciler import Reconciler
from .schemas import TeamCreateResponse, TeamDeleteResponse, TeamResponse, TeamUpdateResponse

TEAM_FIELDS = """
      id
      uuid
      slug
      name
      description
      createdAt
      privacy
      isDefaultTeam
      defaultMemberRole
      membersCanCreatePipelines"""

TEAM_QUERY = f"""
query GetTeam($slug: ID!) {{
  team(slug: $slug) {{{TEAM_FIELDS}
  }}
}}"""

TEAM_CREATE_MUTATION = f"""
mutation TeamCreate($input: TeamCreateInput!) {{
  teamCreate(input: $input) {{
    teamEdge {{
      node {{{TEAM_FIELDS}
      }}
    }}
  }}
}}"""

TEAM_UPDATE_MUTATION = f"""
mutation TeamUpdate($input: TeamUpdateInput!) {{
  teamUpdate(input: $input) {{
    team {{{TEAM_FIELDS}
    }}
  }}
}}"""

TEAM_DELETE_MUTATION = """
mutation TeamDelete($input: TeamDeleteInput!) {
  teamDelete(input: $input) {
    deletedTeamID
  }
}"""


def team_input(team: Team) -> dict[str, Any]:
    """Mutation input fields shared by create and update."""
    return {
        "name": team.name,
        "description": team.description,
        "privacy": team.privacy.value,
        "isDefaultTeam": team.is_default_team,
        "defaultMemberRole": team.default_member_role.value,
        "membersCanCreatePipelines": team.members_can_create_pipelines,
    }


class TeamReconciler(Reconciler):
    """Get/create/update/delete teams."""

    def get(self, slug: str) -> Team:
        """Read a team by slug."""
        logging.debug("team: reading '%s'", slug)
        with self.error_context(f"failed to get team {slug}"):
            response = self.graphql.execute(TEAM_QUERY, {"slug": self.scoped_slug(slug)}, TeamResponse)
            if response.team is None:
                raise NotFoundError(f"team {slug} not found")
        return response.team.to_team()

    def create(self, team: Team) -> Team:
        """Create a team in the client's organization."""
        logging.info("team: creating '%s'", team.name)
        with self.error_context(f"failed to create team {team.name}"):
            create_input = {"organizationID": self.client.organization_id(), **team_input(team)}
            response = self.graphql.execute(TEAM_CREATE_MUTATION, {"input": create_input}, TeamCreateResponse)
        return response.team_create.team_edge.node.to_team()

    def update(self, team: Team) -> Team:
        """Update a team by global ID."""
        logging.info("team: updating '%s'", team.slug or team.id)
        with self.error_context(f"failed to update team {team.slug or team.id}"):
            update_input = {"id": team.id, **team_input(team)}
            response = self.graphql.execute(TEAM_UPDATE_MUTATION, {"input": update_input}, TeamUpdateResponse)
        return response.team_update.team.to_team()

    def delete(self, team_id: str) -> None:
        """Delete a team by global ID."""
        logging.info("team: deleting '%s'", team_id)
        with self.error_context(f"failed to delete team {team_id}"):
            self.graphql.execute(TEAM_DELETE_MUTATION, {"input": {"id": team_id}}, TeamDeleteResponse)

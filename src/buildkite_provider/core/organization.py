"""Organization identity cache.

Mutations that create pipelines and teams need the organization's GraphQL
global ID. It never changes, so it is resolved once per client and memoized.
The cache belongs to a client instance rather than the process, so isolated
clients (and tests) never share it.
"""

import logging
import threading
from collections.abc import Callable

from .exceptions import NotFoundError
from .graphql import GraphQLClient
from .schemas import OrganizationIdResponse

ORGANIZATION_ID_QUERY = """
query Organization($orgSlug: ID!) {
  organization(slug: $orgSlug) {
    id
  }
}"""


def fetch_organization_id(graphql: GraphQLClient, slug: str) -> str:
    """Look up an organization's global ID."""
    response = graphql.execute(ORGANIZATION_ID_QUERY, {"orgSlug": slug}, OrganizationIdResponse)
    if response.organization is None or not response.organization.id:
        raise NotFoundError(f"organization {slug} not found")
    return response.organization.id


class OrganizationIdCache:
    """
    Maps organization slugs to global IDs.

    The lock is held across the fetch, so a slug is fetched at most once per
    cache even when many threads miss at the same time. Failed lookups are not
    cached.
    """

    def __init__(self, fetch: Callable[[str], str]) -> None:
        self._fetch = fetch
        self._ids: dict[str, str] = {}
        self._lock = threading.Lock()

    def resolve(self, slug: str) -> str:
        """Return the global ID for `slug`, fetching it on first use."""
        with self._lock:
            if slug in self._ids:
                return self._ids[slug]

            logging.debug("client: resolving organization id for '%s'", slug)
            organization_id = self._fetch(slug)
            self._ids[slug] = organization_id
            return organization_id

    def __contains__(self, slug: str) -> bool:
        with self._lock:
            return slug in self._ids

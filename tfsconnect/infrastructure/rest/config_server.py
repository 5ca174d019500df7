"""
Configuration server client over the TFS REST API
"""
from typing import Callable

from ...core.client import TfsHttpClient
from ...core.constants import PROJECT_COLLECTIONS_PATH, CONNECTION_DATA_PATH
from ...core.exceptions import AuthenticationError, TransportError
from ...core.interfaces import ConfigServerClient
from ...core.logging import get_logger
from ...core.utils import join_url, name_matches, normalize_url
from ...domain.connection.models import CollectionHandle, CollectionInfo, Credential, ServerHandle

logger = get_logger(__name__)

UNAUTHENTICATED_DESCRIPTOR = "Microsoft.TeamFoundation.UnauthenticatedIdentity"

HttpClientFactory = Callable[[Credential], TfsHttpClient]


def authenticate_collection(http: TfsHttpClient, handle: CollectionHandle) -> CollectionHandle:
    """
    Run the connectionData handshake against a collection.

    Returns:
        Authenticated copy of handle, with the server's instance id

    Raises:
        AuthenticationError: Credential rejected or anonymous identity
        TransportError: Network or HTTP failure
    """
    data = http.get_json(
        join_url(handle.url, CONNECTION_DATA_PATH),
        params={"connectOptions": "none"},
    )

    user = data.get("authenticatedUser") or {}
    if str(user.get("descriptor", "")).startswith(UNAUTHENTICATED_DESCRIPTOR):
        raise AuthenticationError(f"Anonymous access to {handle.url} is not allowed")

    logger.debug(f"Authenticated to {handle.url} as {user.get('providerDisplayName', 'unknown')}")
    return handle.as_authenticated(instance_id=data.get("instanceId"))


class RestConfigServerClient(ConfigServerClient):
    """Catalog queries against {server}/_apis/projectCollections"""

    def __init__(self, server: ServerHandle, http_factory: HttpClientFactory):
        self.server = server
        self.http_factory = http_factory

    def query_collections(self, name_pattern: str) -> list[CollectionInfo]:
        """
        List project collections whose name matches name_pattern.

        The endpoint has no name filter, so matching happens here.
        """
        url = join_url(self.server.url, PROJECT_COLLECTIONS_PATH)
        with self.http_factory(self.server.credential) as http:
            data = http.get_json(url)

        collections = []
        for item in data.get("value", []):
            if "name" not in item or "id" not in item:
                raise TransportError(f"Malformed collection entry from {url}: {item}")
            if not name_matches(item["name"], name_pattern):
                continue
            web_url = item.get("_links", {}).get("web", {}).get("href")
            collections.append(CollectionInfo(
                instance_id=item["id"],
                name=item["name"],
                url=normalize_url(web_url) if web_url else join_url(self.server.url, item["name"]),
            ))

        logger.debug(f"{len(collections)} collection(s) on {self.server.url} match '{name_pattern}'")
        return collections

    def authenticate(self, handle: CollectionHandle) -> CollectionHandle:
        with self.http_factory(handle.credential) as http:
            return authenticate_collection(http, handle)

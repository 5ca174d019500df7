import pytest

from tfsconnect.core.exceptions import AuthenticationError
from tfsconnect.core.interfaces import ConfigServerClient, ConnectionFactory
from tfsconnect.domain.connection import (
    CollectionInfo,
    ConnectionService,
    ConnectionSession,
)
from tfsconnect.infrastructure.registry import RegisteredConnectionStore

SERVER_URL = "http://tfs:8080/tfs"


class FakeServerClient(ConfigServerClient):
    def __init__(self, factory, server):
        self.factory = factory
        self.server = server

    def query_collections(self, name_pattern):
        self.factory.queries.append((self.server.url, name_pattern))
        # Unfiltered on purpose: the resolver does the matching
        return list(self.factory.catalog)

    def authenticate(self, handle):
        if self.factory.fail_auth:
            raise AuthenticationError(f"Authentication failed for {handle.url}")
        self.factory.server_authenticated.append(handle)
        return handle.as_authenticated()


class FakeFactory(ConnectionFactory):
    def __init__(self, catalog=None):
        self.catalog = catalog or []
        self.queries = []
        self.authenticated = []
        self.server_authenticated = []
        self.fail_auth = False

    def open_server(self, server):
        return FakeServerClient(self, server)

    def authenticate(self, handle):
        if self.fail_auth:
            raise AuthenticationError(f"Authentication failed for {handle.url}")
        self.authenticated.append(handle)
        return handle.as_authenticated()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("SERVER", "COLLECTION", "USERNAME", "PASSWORD", "API_VERSION",
                "TIMEOUT", "VERIFY_SSL", "STATE_DIR", "REGISTRY_PATH"):
        monkeypatch.delenv(f"TFS_{var}", raising=False)
    return home


@pytest.fixture
def catalog():
    return [
        CollectionInfo("11111111-aaaa", "DefaultCollection", f"{SERVER_URL}/DefaultCollection"),
        CollectionInfo("22222222-bbbb", "DevCollection", f"{SERVER_URL}/DevCollection"),
        CollectionInfo("33333333-cccc", "Archive", f"{SERVER_URL}/Archive"),
    ]


@pytest.fixture
def factory(catalog):
    return FakeFactory(catalog)


@pytest.fixture
def session():
    return ConnectionSession()


@pytest.fixture
def registry(tmp_path):
    return RegisteredConnectionStore(tmp_path / "registered.json")


@pytest.fixture
def service(session, factory, registry):
    return ConnectionService(session, factory, registry, default_server_url=SERVER_URL)

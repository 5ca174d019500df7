from unittest.mock import MagicMock

import pytest
import requests

from tfsconnect.core.client import ClientConfig, TfsHttpClient
from tfsconnect.core.exceptions import AuthenticationError, TransportError
from tfsconnect.domain.connection import CollectionHandle, Credential, ServerHandle
from tfsconnect.infrastructure.rest import RestConnectionFactory

SERVER_URL = "http://tfs:8080/tfs"


def make_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    if payload is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return response


def make_factory(*responses):
    session = MagicMock()
    session.headers = {}
    session.get.side_effect = list(responses)
    factory = RestConnectionFactory(ClientConfig(api_version="5.0", timeout=7), lambda: session)
    return factory, session


CONNECTION_DATA = {
    "instanceId": "11111111-aaaa",
    "authenticatedUser": {
        "descriptor": "System.Security.Principal.WindowsIdentity;S-1-5-21",
        "providerDisplayName": "Me",
    },
}


def test_http_client_sets_basic_auth_and_api_version():
    session = MagicMock()
    session.headers = {}
    session.get.return_value = make_response(payload={"ok": True})
    client = TfsHttpClient("me", "pw", ClientConfig(api_version="5.0", timeout=7), session=session)

    assert client.get_json("http://tfs/x", params={"a": "b"}) == {"ok": True}
    assert isinstance(session.auth, requests.auth.HTTPBasicAuth)
    assert session.auth.username == "me"
    session.get.assert_called_once_with(
        "http://tfs/x", params={"api-version": "5.0", "a": "b"}, timeout=7
    )


def test_http_client_default_identity_sends_no_auth():
    session = requests.Session()
    client = TfsHttpClient(session=session)

    assert session.auth is None
    assert client.session.headers["Accept"] == "application/json"
    client.close()


@pytest.mark.parametrize("status", [401, 403])
def test_http_client_auth_failures(status):
    session = MagicMock()
    session.headers = {}
    session.get.return_value = make_response(status_code=status)

    with pytest.raises(AuthenticationError):
        TfsHttpClient(session=session).get_json("http://tfs/x")


def test_http_client_server_error_is_transport_error():
    session = MagicMock()
    session.headers = {}
    session.get.return_value = make_response(status_code=500)

    with pytest.raises(TransportError):
        TfsHttpClient(session=session).get_json("http://tfs/x")


def test_http_client_network_error_is_transport_error():
    session = MagicMock()
    session.headers = {}
    session.get.side_effect = requests.ConnectionError("refused")

    with pytest.raises(TransportError, match="refused"):
        TfsHttpClient(session=session).get_json("http://tfs/x")


def test_http_client_html_response_is_auth_error():
    session = MagicMock()
    session.headers = {}
    session.get.return_value = make_response(payload=None)

    with pytest.raises(AuthenticationError):
        TfsHttpClient(session=session).get_json("http://tfs/x")


def test_factory_authenticate_handshake():
    factory, session = make_factory(make_response(payload=CONNECTION_DATA))
    handle = CollectionHandle.from_url(f"{SERVER_URL}/DefaultCollection", Credential("me", "pw"))

    authed = factory.authenticate(handle)

    assert authed.authenticated is True
    assert authed.instance_id == "11111111-aaaa"
    assert authed.credential == handle.credential
    url = session.get.call_args.args[0]
    assert url == f"{SERVER_URL}/DefaultCollection/_apis/connectionData"
    assert session.get.call_args.kwargs["params"]["connectOptions"] == "none"
    session.close.assert_called_once()


def test_factory_authenticate_rejects_anonymous():
    anonymous = {
        "instanceId": "x",
        "authenticatedUser": {"descriptor": "Microsoft.TeamFoundation.UnauthenticatedIdentity;S-1-0-0"},
    }
    factory, _ = make_factory(make_response(payload=anonymous))

    with pytest.raises(AuthenticationError):
        factory.authenticate(CollectionHandle.from_url(f"{SERVER_URL}/DefaultCollection"))


def test_server_client_query_collections_filters_and_builds_urls():
    catalog = {
        "count": 3,
        "value": [
            {"id": "1", "name": "DefaultCollection", "url": f"{SERVER_URL}/_apis/projectCollections/1"},
            {"id": "2", "name": "DevCollection",
             "_links": {"web": {"href": "http://alias:8080/tfs/DevCollection/"}}},
            {"id": "3", "name": "Archive"},
        ],
    }
    factory, session = make_factory(make_response(payload=catalog))
    client = factory.open_server(ServerHandle.from_url(SERVER_URL))

    infos = client.query_collections("*Collection")

    assert [(i.instance_id, i.name, i.url) for i in infos] == [
        ("1", "DefaultCollection", f"{SERVER_URL}/DefaultCollection"),
        ("2", "DevCollection", "http://alias:8080/tfs/DevCollection"),
    ]
    assert session.get.call_args.args[0] == f"{SERVER_URL}/_apis/projectCollections"


def test_server_client_malformed_entry():
    factory, _ = make_factory(make_response(payload={"value": [{"name": "NoId"}]}))
    client = factory.open_server(ServerHandle.from_url(SERVER_URL))

    with pytest.raises(TransportError):
        client.query_collections("*")


def test_server_client_authenticate():
    factory, _ = make_factory(make_response(payload=CONNECTION_DATA))
    client = factory.open_server(ServerHandle.from_url(SERVER_URL))

    authed = client.authenticate(CollectionHandle(url=f"{SERVER_URL}/DefaultCollection", name="DefaultCollection"))

    assert authed.authenticated is True

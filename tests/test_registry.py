import json

import pytest

from tfsconnect.core.exceptions import ConfigError, NotFoundError
from tfsconnect.domain.connection import RegisteredConnection
from tfsconnect.infrastructure.registry import RegisteredConnectionStore


def test_missing_file_lists_nothing(tmp_path):
    assert RegisteredConnectionStore(tmp_path / "none.json").list() == []


def test_register_and_list(registry):
    registry.register(RegisteredConnection("Default", "HTTP://TFS:8080/tfs/Default/"))
    registry.register(RegisteredConnection("tfs", "http://tfs:8080/tfs", kind="server"))

    entries = registry.list()
    assert [e.name for e in entries] == ["Default", "tfs"]
    assert entries[0].url == "http://tfs:8080/tfs/Default"


def test_register_leaves_callers_entry_alone(registry):
    entry = RegisteredConnection("Default", "HTTP://TFS:8080/tfs/Default/")
    registry.register(entry)

    assert entry.url == "HTTP://TFS:8080/tfs/Default/"
    assert registry.get("Default").url == "http://tfs:8080/tfs/Default"


def test_register_replaces_same_name(registry):
    registry.register(RegisteredConnection("Default", "http://a/tfs/Default"))
    registry.register(RegisteredConnection("default", "http://b/tfs/Default"))

    entries = registry.list()
    assert len(entries) == 1
    assert entries[0].url == "http://b/tfs/Default"


def test_register_rejects_invalid(registry):
    with pytest.raises(ConfigError):
        registry.register(RegisteredConnection("Bad", "nope"))


def test_get_is_case_insensitive(registry):
    registry.register(RegisteredConnection("Default", "http://a/tfs/Default"))

    assert registry.get("DEFAULT").name == "Default"
    assert registry.get("Other") is None


def test_unregister(registry):
    registry.register(RegisteredConnection("Default", "http://a/tfs/Default"))
    registry.unregister("Default")

    assert registry.list() == []
    with pytest.raises(NotFoundError):
        registry.unregister("Default")


def test_list_pattern_and_kind(registry):
    registry.register(RegisteredConnection("ProdCollection", "http://p/tfs/ProdCollection"))
    registry.register(RegisteredConnection("DevCollection", "http://d/tfs/DevCollection"))
    registry.register(RegisteredConnection("prod", "http://p/tfs", kind="server"))

    assert [e.name for e in registry.list("prod*")] == ["prod", "ProdCollection"]
    assert [e.name for e in registry.list("prod*", kind="collection")] == ["ProdCollection"]
    assert [e.name for e in registry.list("?ev*")] == ["DevCollection"]


def test_corrupt_file_raises_config_error(tmp_path):
    path = tmp_path / "registered.json"
    path.write_text("[oops", encoding="utf-8")

    with pytest.raises(ConfigError):
        RegisteredConnectionStore(path).list()


@pytest.mark.parametrize("content", [
    [],
    {"connections": {"name": "x"}},
    {"connections": [{"name": "x"}]},
    {"connections": ["x"]},
    {"connections": [{"name": 1, "url": 2}]},
])
def test_unexpected_layout_raises_config_error(tmp_path, content):
    path = tmp_path / "registered.json"
    path.write_text(json.dumps(content), encoding="utf-8")

    with pytest.raises(ConfigError):
        RegisteredConnectionStore(path).list()


def test_file_layout(registry):
    registry.register(RegisteredConnection("Default", "http://a/tfs/Default", server_url="http://a/tfs"))

    data = json.loads(registry.path.read_text(encoding="utf-8"))
    assert data == {"connections": [{
        "name": "Default",
        "url": "http://a/tfs/Default",
        "kind": "collection",
        "server_url": "http://a/tfs",
    }]}

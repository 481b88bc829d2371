from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from result import is_err, is_ok

from ai_builder_config.config import (
    DEFAULT_CONFIG,
    ENCRYPTED_PLACEHOLDER,
    ConfigManager,
    ConfigValueError,
)
from ai_builder_config.crypto import DecryptError
from ai_builder_config.store import ConfigScope, ScopedStoreSettings, ScopeNotConfiguredError


def make_clock(start: datetime) -> Callable[[], datetime]:
    ticks: Iterator[datetime] = (start + timedelta(seconds=i) for i in range(10_000))
    return lambda: next(ticks)


@pytest.fixture
def settings(tmp_path: Path) -> ScopedStoreSettings:
    return ScopedStoreSettings(config_root=tmp_path / "home" / ".ai-builder")


@pytest.fixture
def manager(settings: ScopedStoreSettings) -> ConfigManager:
    return ConfigManager.open(settings, clock=make_clock(datetime(2026, 1, 1, tzinfo=UTC))).unwrap()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


def read_document(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def test_open_creates_config_root_and_key(settings: ScopedStoreSettings) -> None:
    result = ConfigManager.open(settings)

    assert is_ok(result)
    assert settings.config_root.is_dir()
    assert len(settings.key_path.read_text(encoding="utf-8")) == 64


def test_sensitive_value_is_encrypted_at_rest(manager: ConfigManager, settings: ScopedStoreSettings) -> None:
    assert is_ok(manager.set("api_key", "abc123"))

    stored = read_document(settings.global_path)["api_key"]
    assert stored["encrypted"] is True
    assert stored["value"] != json.dumps("abc123")
    assert "abc123" not in settings.global_path.read_text(encoding="utf-8")
    assert manager.get("api_key").unwrap() == "abc123"


def test_plain_value_is_stored_literally(manager: ConfigManager, settings: ScopedStoreSettings) -> None:
    assert is_ok(manager.set("cli.verbose", True))

    stored = read_document(settings.global_path)["cli.verbose"]
    assert stored["encrypted"] is False
    assert stored["value"] is True
    assert stored["scope"] == "global"
    assert manager.get("cli.verbose").unwrap() is True


@pytest.mark.parametrize(
    "value",
    [
        "plain string",
        42,
        3.5,
        False,
        None,
        ["a", 1, None],
        {"user": "admin", "ports": [80, 443], "nested": {"tls": True}},
    ],
)
def test_encrypted_values_round_trip(manager: ConfigManager, value: object) -> None:
    manager.set("db.password", value)

    assert manager.get("db.password").unwrap() == value


def test_setting_twice_produces_distinct_envelopes(manager: ConfigManager, settings: ScopedStoreSettings) -> None:
    manager.set("github.token", "ghp_same")
    first = read_document(settings.global_path)["github.token"]["value"]

    manager.set("github.token", "ghp_same")
    second = read_document(settings.global_path)["github.token"]["value"]

    assert first != second
    assert manager.get("github.token").unwrap() == "ghp_same"


def test_tampered_tag_is_a_decrypt_error(manager: ConfigManager, settings: ScopedStoreSettings) -> None:
    manager.set("api_key", "abc123")
    document = read_document(settings.global_path)
    nonce, tag, ciphertext = document["api_key"]["value"].split(":")
    flipped = "1" if tag[-1] == "0" else "0"
    document["api_key"]["value"] = ":".join((nonce, tag[:-1] + flipped, ciphertext))
    settings.global_path.write_text(json.dumps(document), encoding="utf-8")

    result = manager.get("api_key")

    assert is_err(result)
    error = result.unwrap_err()
    assert isinstance(error, DecryptError)
    assert error.key == "api_key"


def test_encrypted_entry_without_envelope_is_a_decrypt_error(
    manager: ConfigManager, settings: ScopedStoreSettings
) -> None:
    manager.set("api_key", "abc123")
    document = read_document(settings.global_path)
    document["api_key"]["value"] = {"not": "an envelope"}
    settings.global_path.write_text(json.dumps(document), encoding="utf-8")

    assert isinstance(manager.get("api_key").unwrap_err(), DecryptError)


def test_regenerated_key_cannot_decrypt_old_values(settings: ScopedStoreSettings) -> None:
    ConfigManager.open(settings).unwrap().set("api_key", "abc123")
    settings.key_path.write_text("corrupted", encoding="utf-8")

    reopened = ConfigManager.open(settings).unwrap()

    assert isinstance(reopened.get("api_key").unwrap_err(), DecryptError)


def test_created_at_is_preserved_and_updated_at_advances(
    manager: ConfigManager, settings: ScopedStoreSettings
) -> None:
    manager.set("cli.default_region", "us-east-1")
    first = read_document(settings.global_path)["cli.default_region"]

    manager.set("cli.default_region", "eu-west-1")
    second = read_document(settings.global_path)["cli.default_region"]

    assert second["createdAt"] == first["createdAt"]
    assert datetime.fromisoformat(second["updatedAt"]) > datetime.fromisoformat(first["updatedAt"])
    assert second["value"] == "eu-west-1"


def test_get_returns_none_for_absent_key(manager: ConfigManager) -> None:
    result = manager.get("missing")

    assert is_ok(result)
    assert result.unwrap() is None


def test_scopes_are_isolated(manager: ConfigManager, project_root: Path) -> None:
    manager.set_project_path(project_root)
    manager.set("x", 1, ConfigScope.GLOBAL)

    assert manager.get("x", ConfigScope.PROJECT).unwrap() is None

    manager.set("x", 2, ConfigScope.PROJECT)

    assert manager.get("x", ConfigScope.GLOBAL).unwrap() == 1
    assert manager.get("x", ConfigScope.PROJECT).unwrap() == 2
    assert read_document(project_root / ".ai-builder" / "config.json")["x"]["scope"] == "project"


def test_project_scope_operations_require_project_path(manager: ConfigManager) -> None:
    results = [
        manager.set("x", 1, ConfigScope.PROJECT),
        manager.get("x", ConfigScope.PROJECT),
        manager.list(ConfigScope.PROJECT),
        manager.delete("x", ConfigScope.PROJECT),
        manager.reset_config(ConfigScope.PROJECT),
        manager.export_config(ConfigScope.PROJECT),
        manager.import_config({"x": 1}, ConfigScope.PROJECT),
    ]

    for result in results:
        assert is_err(result)
        assert isinstance(result.unwrap_err(), ScopeNotConfiguredError)


def test_list_returns_all_entries(manager: ConfigManager) -> None:
    manager.set("cli.verbose", True)
    manager.set("api_key", "abc123")

    entries = manager.list().unwrap()

    assert {entry.key: entry.encrypted for entry in entries} == {"cli.verbose": False, "api_key": True}


def test_delete_removes_entry_and_ignores_absent_keys(manager: ConfigManager) -> None:
    manager.set("a", 1)
    manager.set("b", 2)

    assert is_ok(manager.delete("a"))
    assert is_ok(manager.delete("never-set"))

    assert [entry.key for entry in manager.list().unwrap()] == ["b"]


def test_export_masks_encrypted_values(manager: ConfigManager) -> None:
    manager.set("cli.verbose", True)
    manager.set("api_key", "abc123")

    exported = manager.export_config().unwrap()

    assert exported == {"cli.verbose": True, "api_key": ENCRYPTED_PLACEHOLDER}


def test_export_with_encrypted_yields_envelope_not_plaintext(
    manager: ConfigManager, settings: ScopedStoreSettings
) -> None:
    manager.set("api_key", "abc123")

    exported = manager.export_config(include_encrypted=True).unwrap()

    assert exported["api_key"] == read_document(settings.global_path)["api_key"]["value"]
    assert exported["api_key"].count(":") == 2


def test_import_of_export_skips_placeholders(manager: ConfigManager, settings: ScopedStoreSettings) -> None:
    manager.set("cli.verbose", True)
    manager.set("api_key", "abc123")
    envelope_before = read_document(settings.global_path)["api_key"]["value"]
    exported = manager.export_config().unwrap()
    exported["cli.verbose"] = False

    assert is_ok(manager.import_config(exported))

    document = read_document(settings.global_path)
    assert document["api_key"]["value"] == envelope_before
    assert manager.get("api_key").unwrap() == "abc123"
    assert manager.get("cli.verbose").unwrap() is False


def test_import_encrypts_sensitive_keys(manager: ConfigManager, settings: ScopedStoreSettings) -> None:
    manager.import_config({"service.auth_token": "t0k3n", "deploy.max_retries": 5})

    document = read_document(settings.global_path)
    assert document["service.auth_token"]["encrypted"] is True
    assert document["deploy.max_retries"]["value"] == 5


def test_reset_deletes_scope_document(manager: ConfigManager, settings: ScopedStoreSettings) -> None:
    manager.set("a", 1)

    assert is_ok(manager.reset_config())

    assert not settings.global_path.exists()
    assert manager.list().unwrap() == []
    assert is_ok(manager.reset_config())


def test_set_default_config_never_overwrites(manager: ConfigManager) -> None:
    manager.set("cli.default_region", "eu-central-1")

    assert is_ok(manager.set_default_config())

    assert manager.get("cli.default_region").unwrap() == "eu-central-1"
    assert manager.get("build.timeout").unwrap() == 300000
    assert {entry.key for entry in manager.list().unwrap()} == set(DEFAULT_CONFIG)


def test_corrupted_document_reads_empty_and_recovers_on_write(
    manager: ConfigManager, settings: ScopedStoreSettings
) -> None:
    settings.global_path.write_text("{not json", encoding="utf-8")

    assert manager.get("anything").unwrap() is None
    assert manager.list().unwrap() == []

    assert is_ok(manager.set("cli.verbose", True))

    assert read_document(settings.global_path)["cli.verbose"]["value"] is True


def test_unserializable_value_is_rejected(manager: ConfigManager, settings: ScopedStoreSettings) -> None:
    result = manager.set("cli.verbose", object())

    assert is_err(result)
    assert isinstance(result.unwrap_err(), ConfigValueError)
    assert not settings.global_path.exists()


def test_key_material_never_written_to_documents(manager: ConfigManager, settings: ScopedStoreSettings) -> None:
    manager.set("api_key", "abc123")
    manager.set("cli.verbose", True)

    key = settings.key_path.read_text(encoding="utf-8")

    assert key not in settings.global_path.read_text(encoding="utf-8")


def test_independent_managers_coexist(tmp_path: Path) -> None:
    first = ConfigManager.open(ScopedStoreSettings(config_root=tmp_path / "one")).unwrap()
    second = ConfigManager.open(ScopedStoreSettings(config_root=tmp_path / "two")).unwrap()

    first.set("api_key", "first")
    second.set("api_key", "second")

    assert first.get("api_key").unwrap() == "first"
    assert second.get("api_key").unwrap() == "second"


def test_unreadable_document_reads_as_absent(manager: ConfigManager, settings: ScopedStoreSettings) -> None:
    settings.global_path.write_bytes(b'{"cli.verbose": "\xff"}')

    result = manager.get("cli.verbose")

    assert is_ok(result)
    assert result.unwrap() is None
    assert manager.list().unwrap() == []


def test_oversized_integer_document_reads_as_absent_and_recovers(
    manager: ConfigManager, settings: ScopedStoreSettings
) -> None:
    settings.global_path.write_text('{"a": 1' + "0" * 5000 + "}", encoding="utf-8")

    assert manager.get("a").unwrap() is None
    assert is_ok(manager.delete("a"))
    assert is_ok(manager.set("a", 1))

    assert manager.get("a").unwrap() == 1

"""Tests for API key lookup."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from google.api_core import exceptions as gcp_exceptions

from conftest import FakeFetcher, dialogflow_body
from services import runtime_config
from services.errors import ConfigResolutionError
from services.pipeline import EventQueryHandler
from services.runtime_config import EnvSecretStore, FirestoreSecretStore


def fake_db(data=None, exists=True, error=None):
    doc = MagicMock()
    doc.exists = exists
    doc.to_dict.return_value = data
    db = MagicMock()
    document = db.collection.return_value.document.return_value
    if error is not None:
        document.get = AsyncMock(side_effect=error)
    else:
        document.get = AsyncMock(return_value=doc)
    return db


@pytest.mark.asyncio
async def test_firestore_reads_field():
    db = fake_db({"api-key": "abc123"})
    store = FirestoreSecretStore(db_factory=lambda: db, collection="runtimeconfig")
    assert await store.get_variable("dev-config", "api-key") == "abc123"
    db.collection.assert_called_once_with("runtimeconfig")
    db.collection.return_value.document.assert_called_once_with("dev-config")


@pytest.mark.asyncio
async def test_firestore_missing_document():
    store = FirestoreSecretStore(db_factory=lambda: fake_db(exists=False))
    with pytest.raises(ConfigResolutionError, match="not found"):
        await store.get_variable("dev-config", "api-key")


@pytest.mark.asyncio
async def test_firestore_missing_key():
    store = FirestoreSecretStore(db_factory=lambda: fake_db({"other": "x"}))
    with pytest.raises(ConfigResolutionError, match="missing"):
        await store.get_variable("dev-config", "api-key")


@pytest.mark.asyncio
async def test_firestore_unreachable():
    db = fake_db(error=gcp_exceptions.ServiceUnavailable("no route"))
    store = FirestoreSecretStore(db_factory=lambda: db)
    with pytest.raises(ConfigResolutionError, match="unreachable"):
        await store.get_variable("dev-config", "api-key")


@pytest.mark.asyncio
async def test_env_store(monkeypatch):
    monkeypatch.setenv("MEETUP_API_KEY", "from-env")
    assert await EnvSecretStore().get_variable("dev-config", "api-key") == "from-env"


@pytest.mark.asyncio
async def test_env_store_unset(monkeypatch):
    monkeypatch.delenv("MEETUP_API_KEY", raising=False)
    with pytest.raises(ConfigResolutionError):
        await EnvSecretStore().get_variable("dev-config", "api-key")


@pytest.mark.asyncio
async def test_firestore_client_cannot_be_built():
    def no_project():
        raise OSError("Project was not passed and could not be determined from the environment.")

    store = FirestoreSecretStore(db_factory=no_project)
    with pytest.raises(ConfigResolutionError, match="unreachable"):
        await store.get_variable("dev-config", "api-key")


@pytest.mark.asyncio
async def test_firestore_no_project_is_config_error_in_pipeline():
    def no_project():
        raise OSError("Project was not passed")

    handler = EventQueryHandler(FirestoreSecretStore(db_factory=no_project), fetcher=FakeFetcher([]))
    result = await handler.handle(dialogflow_body({}))
    assert result.status == 500
    assert result.payload["error"] == "ConfigResolutionError"


@pytest.mark.asyncio
@pytest.mark.parametrize("kwargs", [
    {"data": {"api-key": "abc123"}},
    {"exists": False},
    {"error": gcp_exceptions.ServiceUnavailable("no route")},
])
async def test_firestore_client_closed_after_lookup(kwargs):
    db = fake_db(**kwargs)
    db.close = AsyncMock()
    store = FirestoreSecretStore(db_factory=lambda: db)
    for _ in range(3):
        try:
            await store.get_variable("dev-config", "api-key")
        except ConfigResolutionError:
            pass
    assert db.close.await_count == 3


def test_secret_store_by_backend(monkeypatch):
    monkeypatch.setattr(runtime_config, "SECRET_BACKEND", "env")
    assert isinstance(runtime_config.get_secret_store(), EnvSecretStore)
    monkeypatch.setattr(runtime_config, "SECRET_BACKEND", "firestore")
    assert isinstance(runtime_config.get_secret_store(), FirestoreSecretStore)


def test_unknown_secret_backend(monkeypatch):
    monkeypatch.setattr(runtime_config, "SECRET_BACKEND", "vault")
    with pytest.raises(ValueError, match="vault"):
        runtime_config.get_secret_store()

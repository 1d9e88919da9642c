"""Tests for connection profiles and the connection manager."""

import pytest

from erpbridge.adapters.connection_manager import ConnectionManager, profile_from_env_fields
from erpbridge.adapters.mock import MockAdapter
from erpbridge.adapters.registry import SourceAdapterRegistry
from erpbridge.adapters.sap import SapAdapter
from erpbridge.errors import RuleValidationError, SourceConnectionError
from erpbridge.models.profile import AdapterProfile, AuthKind, RunMode


class FailingAdapter(MockAdapter):
    async def _mock_system_info(self):
        raise ConnectionResetError("gone")


@pytest.fixture
def registry():
    registry = SourceAdapterRegistry()
    registry.register("FIXTURE", MockAdapter)
    registry.register("BROKEN", FailingAdapter)
    return registry


class TestProfiles:
    """Test profile models."""

    def test_url_from_host_and_port(self):
        assert AdapterProfile(name="a", host="erp.local", port=8443).url == "https://erp.local:8443"
        assert AdapterProfile(name="a", base_url="https://x/").url == "https://x"
        assert AdapterProfile(name="a").url is None

    def test_to_dict_never_contains_credentials(self):
        profile = AdapterProfile.from_dict({
            "name": "dev",
            "baseUrl": "https://dev",
            "authKind": "basic",
            "credentials": {"username": "u", "password": "secret"},
        })
        data = profile.to_dict()

        assert profile.auth_kind == AuthKind.BASIC
        assert "credentials" not in data
        assert "secret" not in repr(profile)
        assert "secret" not in str(data)


class TestLoadFromEnv:
    """Test profile discovery from environment variables."""

    def test_basic_profile(self):
        manager = ConnectionManager()
        names = manager.load_from_env(environ={
            "SAP_CONN_DEV_BASE_URL": "https://dev.example.com",
            "SAP_CONN_DEV_USERNAME": "user",
            "SAP_CONN_DEV_PASSWORD": "pw",
            "SAP_CONN_DEV_CLIENT": "200",
        })

        assert names == ["dev"]
        profile = manager.get_profile("dev")
        assert profile.auth_kind == AuthKind.BASIC
        assert profile.mode == RunMode.LIVE
        assert profile.client == "200"
        assert profile.credential_ref == "env:SAP_CONN_DEV"

    def test_oauth_profile_with_underscored_name(self):
        manager = ConnectionManager()
        names = manager.load_from_env(environ={
            "SAP_CONN_PROD_EU_BASE_URL": "https://prod.example.com",
            "SAP_CONN_PROD_EU_TOKEN_URL": "https://auth.example.com/token",
            "SAP_CONN_PROD_EU_CLIENT_ID": "id",
            "SAP_CONN_PROD_EU_CLIENT_SECRET": "secret",
        })

        assert names == ["prod_eu"]
        profile = manager.get_profile("prod_eu")
        assert profile.auth_kind == AuthKind.OAUTH2
        assert profile.credentials.client_secret == "secret"
        assert profile.client is None

    def test_incomplete_profile_skipped(self):
        manager = ConnectionManager()
        names = manager.load_from_env(environ={
            "SAP_CONN_QA_BASE_URL": "https://qa.example.com",
            "SAP_CONN_QA_USERNAME": "user",
        })

        assert names == []
        assert manager.profile_count == 0

    def test_non_numeric_timeout_skips_profile(self):
        manager = ConnectionManager()
        names = manager.load_from_env(environ={
            "SAP_CONN_QA_BASE_URL": "https://qa.example.com",
            "SAP_CONN_QA_USERNAME": "user",
            "SAP_CONN_QA_PASSWORD": "pw",
            "SAP_CONN_QA_TIMEOUT_MS": "soon",
            "SAP_CONN_DEV_BASE_URL": "https://dev.example.com",
            "SAP_CONN_DEV_USERNAME": "user",
            "SAP_CONN_DEV_PASSWORD": "pw",
            "SAP_CONN_DEV_TIMEOUT_MS": "5000",
        })

        assert names == ["dev"]
        assert not manager.has("qa")
        assert manager.get_profile("dev").timeout_ms == 5000

    def test_profile_from_env_fields_rejects_bad_timeout(self):
        values = {"BASE_URL": "https://qa", "USERNAME": "u", "PASSWORD": "p", "TIMEOUT_MS": "1.5s"}

        with pytest.raises(RuleValidationError) as exc_info:
            profile_from_env_fields("QA", values, "SAP_CONN")
        assert exc_info.value.errors == ["SAP_CONN_QA_TIMEOUT_MS is not an integer: '1.5s'"]

    def test_custom_prefix_and_mode(self):
        manager = ConnectionManager()
        names = manager.load_from_env(prefix="ERP_", environ={
            "ERP_SANDBOX_BASE_URL": "https://sandbox",
            "ERP_SANDBOX_USERNAME": "u",
            "ERP_SANDBOX_PASSWORD": "p",
            "ERP_SANDBOX_MODE": "MOCK",
            "ERP_SANDBOX_SYSTEM": "infor_ln",
            "SAP_CONN_OTHER_BASE_URL": "ignored",
        })

        assert names == ["sandbox"]
        profile = manager.get_profile("sandbox")
        assert profile.mode == RunMode.MOCK
        assert profile.source_system == "INFOR_LN"


class TestConnectionManager:
    """Test adapter caching, health and shutdown."""

    def test_get_unknown_profile(self):
        with pytest.raises(SourceConnectionError):
            ConnectionManager().get("missing")

    def test_get_caches_adapter(self):
        manager = ConnectionManager()
        manager.add_profile(AdapterProfile(name="s4", source_system="SAP"))

        adapter = manager.get("s4")
        assert isinstance(adapter, SapAdapter)
        assert manager.get("s4") is adapter
        assert manager.size == 1
        assert manager.list_profiles() == ["s4"]
        assert manager.has("s4")

    def test_default_timeout_applies_to_profiles_without_one(self, registry):
        manager = ConnectionManager(registry, default_timeout_ms=1234)
        manager.load_profiles({
            "plain": {"source_system": "FIXTURE"},
            "tuned": {"source_system": "FIXTURE", "timeout_ms": 500},
        })

        plain = manager.get("plain")
        assert plain.timeout_ms == 1234
        assert plain.profile.timeout_ms == 1234
        assert manager.get_profile("plain").timeout_ms is None
        assert manager.get("tuned").timeout_ms == 500

    @pytest.mark.asyncio
    async def test_health_check_no_connections(self):
        assert (await ConnectionManager().health_check())["overall"] == "no_connections"

    @pytest.mark.asyncio
    async def test_health_check_degraded(self, registry):
        manager = ConnectionManager(registry)
        manager.load_profiles({
            "good": {"source_system": "FIXTURE"},
            "bad": {"source_system": "BROKEN"},
        })
        health = await manager.health_check()

        assert health["overall"] == "degraded"
        assert health["total"] == 2
        assert health["healthy"] == 1
        assert health["perProfile"]["good"]["healthy"] is True
        assert health["perProfile"]["bad"]["healthy"] is False
        assert "checkedAt" in health["perProfile"]["bad"]

    @pytest.mark.asyncio
    async def test_health_check_all_down(self, registry):
        manager = ConnectionManager(registry)
        manager.load_profiles({"bad": {"source_system": "BROKEN"}})

        assert (await manager.health_check())["overall"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_connect_all_reports_per_profile(self, registry):
        manager = ConnectionManager(registry)
        manager.load_profiles({
            "good": {"source_system": "FIXTURE"},
            "bad": {"source_system": "BROKEN"},
        })
        results = await manager.connect_all()

        assert results["good"] == {"status": "connected"}
        assert results["bad"]["status"] == "error"
        telemetry = manager.telemetry()
        assert telemetry["good"]["successCount"] == 1
        assert telemetry["bad"]["failureCount"] == 1

    @pytest.mark.asyncio
    async def test_disconnect_all(self, registry):
        manager = ConnectionManager(registry)
        manager.load_profiles({"good": {"source_system": "FIXTURE"}})
        adapter = manager.get("good")
        await adapter.connect()
        await manager.disconnect_all()

        assert not adapter.connected
        assert manager.size == 0
        assert manager.profile_count == 1

"""Tests for source adapters, the HTTP transport and the adapter registry."""

import asyncio

import pytest
import requests

from erpbridge.adapters.base import BaseSourceAdapter
from erpbridge.adapters.http import HttpTransport
from erpbridge.adapters.infor_ln import InforLNAdapter
from erpbridge.adapters.infor_m3 import InforM3Adapter, decode_mi_records
from erpbridge.adapters.mock import MockAdapter
from erpbridge.adapters.registry import SourceAdapterRegistry
from erpbridge.adapters.sap import SapAdapter, decode_odata
from erpbridge.errors import (
    AuthenticationError,
    RemoteProtocolError,
    RuleValidationError,
    SourceConnectionError,
    TransportTimeout,
)
from erpbridge.models.profile import AdapterProfile, AuthKind, Credentials


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload


class FakeSession:
    """Stands in for ``requests.Session``; answers by URL suffix."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        for suffix, response in self.routes.items():
            if url.endswith(suffix):
                if isinstance(response, Exception):
                    raise response
                return response
        return FakeResponse(404, text="not found")

    def post(self, url, **kwargs):
        return self.request("POST", url, **kwargs)

    def close(self):
        self.closed = True


def live_profile(**overrides):
    values = dict(
        name="dev",
        base_url="https://sap.example.com/",
        auth_kind=AuthKind.BASIC,
        credentials=Credentials(username="user", password="pw"),
        mode="live",
        client="100",
    )
    values.update(overrides)
    return AdapterProfile(**values)


CVERS = {"d": {"results": [{"COMPONENT": "S4CORE", "RELEASE": "107"}]}}


class TestMockAdapter:
    """Test the fixture-backed adapter."""

    @pytest.mark.asyncio
    async def test_read_table(self, mock_adapter):
        data = await mock_adapter.read_table("t001", fields=["BUKRS"], max_rows=1)

        assert data.rows == [{"BUKRS": "1000"}]
        assert data.fields == ["BUKRS"]
        assert data.row_count == 1

    @pytest.mark.asyncio
    async def test_missing_table(self, mock_adapter):
        with pytest.raises(RemoteProtocolError) as exc_info:
            await mock_adapter.read_table("NOPE")

        assert exc_info.value.status_code == 404
        assert mock_adapter.telemetry.failure_count == 1

    @pytest.mark.asyncio
    async def test_connect_is_idempotent(self, mock_adapter):
        first = await mock_adapter.connect()
        second = await mock_adapter.connect()

        assert first == second == {"systemId": "MOCK", "release": "1.0"}
        assert mock_adapter.telemetry.total_requests == 1
        await mock_adapter.disconnect()
        assert not mock_adapter.connected

    @pytest.mark.asyncio
    async def test_always_mock_mode(self):
        adapter = MockAdapter(profile=live_profile(), tables={"A": []})

        assert adapter.is_mock

    @pytest.mark.asyncio
    async def test_query_entities(self, mock_adapter):
        result = await mock_adapter.query_entities("Customers", {"top": 2})

        assert result["totalCount"] == 2
        assert result["entities"][0] == {"id": "Customers_1", "entitySet": "Customers"}

    @pytest.mark.asyncio
    async def test_health_check(self, mock_adapter):
        health = await mock_adapter.health_check()

        assert health["healthy"] is True
        assert health["details"]["systemId"] == "MOCK"


class SlowAdapter(MockAdapter):
    async def _mock_read_table(self, name, fields, max_rows, filter):
        await asyncio.sleep(1)
        return []


class UnreachableAdapter(MockAdapter):
    async def _mock_read_table(self, name, fields, max_rows, filter):
        raise ConnectionRefusedError("refused")


class GarbledAdapter(MockAdapter):
    async def _mock_read_table(self, name, fields, max_rows, filter):
        raise KeyError("results")


class NoneIteratingAdapter(MockAdapter):
    async def _mock_read_table(self, name, fields, max_rows, filter):
        return [dict(item) for item in None]


class TestErrorMapping:
    """Test the timeout and error envelope around adapter calls."""

    @pytest.mark.asyncio
    async def test_timeout(self):
        adapter = SlowAdapter(timeout_ms=20)
        await adapter.connect()

        with pytest.raises(TransportTimeout):
            await adapter.read_table("ANY")
        assert adapter.telemetry.last_status == "timeout"

    @pytest.mark.asyncio
    async def test_os_error_becomes_connection_error(self):
        adapter = UnreachableAdapter()

        with pytest.raises(SourceConnectionError):
            await adapter.read_table("ANY")
        assert adapter.telemetry.last_status == "connection_error"

    @pytest.mark.asyncio
    async def test_bad_payload_becomes_protocol_error(self):
        with pytest.raises(RemoteProtocolError):
            await GarbledAdapter().read_table("ANY")

    @pytest.mark.asyncio
    async def test_any_other_failure_becomes_protocol_error(self):
        adapter = NoneIteratingAdapter()

        with pytest.raises(RemoteProtocolError, match="TypeError"):
            await adapter.read_table("ANY")
        assert adapter.telemetry.last_status == "protocol_error"

    @pytest.mark.asyncio
    async def test_telemetry_average(self, mock_adapter):
        await mock_adapter.read_table("T001")
        await mock_adapter.read_table("SKA1")
        telemetry = mock_adapter.telemetry.to_dict()

        assert telemetry["totalRequests"] == 3
        assert telemetry["successCount"] == 3
        assert telemetry["failureCount"] == 0
        assert telemetry["lastStatus"] == "ok"
        assert telemetry["avgLatencyMs"] >= 0


class TestSapAdapter:
    """Test the SAP adapter in mock and live mode."""

    @pytest.mark.asyncio
    async def test_mock_rows(self):
        adapter = SapAdapter()
        data = await adapter.read_table("MARA", max_rows=3)

        assert data.row_count == 3
        assert data.rows[0] == {
            "FIELD1": "MARA_FIELD1_VALUE",
            "FIELD2": "MARA_FIELD2_VALUE",
            "FIELD3": "MARA_FIELD3_VALUE",
            "ROW_INDEX": 1,
        }

    @pytest.mark.asyncio
    async def test_mock_caps_at_five_rows(self):
        data = await SapAdapter().read_table("KNA1", fields=["KUNNR"])

        assert data.row_count == 5
        assert data.rows[4] == {"KUNNR": "KNA1_KUNNR_VALUE", "ROW_INDEX": 5}

    @pytest.mark.asyncio
    async def test_mock_system_info(self):
        info = await SapAdapter().system_info()

        assert info["systemId"] == "S4H"
        assert "FI" in info["modules"]

    @pytest.mark.asyncio
    async def test_live_read_table(self):
        session = FakeSession({
            "/CVERS": FakeResponse(200, CVERS),
            "/T001": FakeResponse(200, {"d": {"results": [
                {"__metadata": {"uri": "x"}, "BUKRS": "1000"},
                {"__metadata": {"uri": "y"}, "BUKRS": "2000"},
            ]}}),
        })
        profile = live_profile()
        adapter = SapAdapter(profile=profile, transport=HttpTransport(profile, session=session))

        data = await adapter.read_table("T001", fields=["BUKRS"], max_rows=10)

        assert data.rows == [{"BUKRS": "1000"}, {"BUKRS": "2000"}]
        method, url, kwargs = session.calls[-1]
        assert method == "GET"
        assert url == "https://sap.example.com/sap/opu/odata/sap/ZTABLE_READER_SRV/T001"
        assert kwargs["params"]["$select"] == "BUKRS"
        assert kwargs["params"]["$top"] == 10
        assert kwargs["headers"]["sap-client"] == "100"
        assert kwargs["auth"] == ("user", "pw")
        info = await adapter.system_info()
        assert info["release"] == "107"

    @pytest.mark.asyncio
    async def test_live_auth_failure(self):
        session = FakeSession({"/CVERS": FakeResponse(401, text="denied")})
        profile = live_profile()
        adapter = SapAdapter(profile=profile, transport=HttpTransport(profile, session=session))

        with pytest.raises(AuthenticationError):
            await adapter.connect()
        health = await adapter.health_check()
        assert health["healthy"] is False
        assert health["details"]["code"] == "AUTHENTICATION_ERROR"

    @pytest.mark.asyncio
    async def test_live_unreachable(self):
        session = FakeSession({"/CVERS": requests.exceptions.ConnectionError("no route")})
        profile = live_profile()
        adapter = SapAdapter(profile=profile, transport=HttpTransport(profile, session=session))

        with pytest.raises(SourceConnectionError):
            await adapter.connect()

    @pytest.mark.asyncio
    async def test_disconnect_closes_transport(self):
        session = FakeSession({"/CVERS": FakeResponse(200, CVERS)})
        profile = live_profile()
        adapter = SapAdapter(profile=profile, transport=HttpTransport(profile, session=session))
        await adapter.connect()
        await adapter.disconnect()

        assert session.closed

    def test_decode_odata_shapes(self):
        assert decode_odata({"d": {"results": [{"A": 1}]}}) == [{"A": 1}]
        assert decode_odata({"d": {"A": 1}}) == [{"A": 1}]
        assert decode_odata({"value": [{"A": 2}]}) == [{"A": 2}]
        assert decode_odata([{"A": 3}]) == [{"A": 3}]
        with pytest.raises(RemoteProtocolError):
            decode_odata({"unexpected": True})

    @pytest.mark.parametrize("payload", [
        {"value": None},
        {"value": [1, 2]},
        {"d": {"results": None}},
        {"d": "text"},
        ["row"],
    ])
    def test_decode_odata_rejects_malformed_entity_lists(self, payload):
        with pytest.raises(RemoteProtocolError):
            decode_odata(payload)

    @pytest.mark.asyncio
    async def test_live_malformed_body_is_protocol_error(self):
        session = FakeSession({
            "/CVERS": FakeResponse(200, CVERS),
            "/BAD": FakeResponse(200, {"value": None}),
        })
        profile = live_profile()
        adapter = SapAdapter(profile=profile, transport=HttpTransport(profile, session=session))

        with pytest.raises(RemoteProtocolError):
            await adapter.read_table("BAD")


class TestHttpTransport:
    """Test authentication and status mapping."""

    def test_requires_base_url(self):
        with pytest.raises(SourceConnectionError):
            HttpTransport(AdapterProfile(name="empty"))

    def test_oauth_token_cached(self):
        session = FakeSession({
            "/token": FakeResponse(200, {"access_token": "abc", "expires_in": 3600}),
            "/ping": FakeResponse(200, {"ok": True}),
        })
        profile = live_profile(
            auth_kind=AuthKind.OAUTH2,
            credentials=Credentials(client_id="id", client_secret="secret", token_url="https://auth.example.com/token"),
        )
        transport = HttpTransport(profile, session=session)

        assert transport.request("GET", "/ping") == {"ok": True}
        assert transport.request("GET", "/ping") == {"ok": True}
        token_calls = [c for c in session.calls if c[1].endswith("/token")]
        assert len(token_calls) == 1
        assert session.calls[-1][2]["headers"]["Authorization"] == "Bearer abc"

    def test_rejected_token(self):
        session = FakeSession({"/token": FakeResponse(401, text="bad client")})
        profile = live_profile(
            auth_kind=AuthKind.OAUTH2,
            credentials=Credentials(client_id="id", client_secret="wrong", token_url="https://auth.example.com/token"),
        )

        with pytest.raises(AuthenticationError):
            HttpTransport(profile, session=session).request("GET", "/ping")

    def test_server_error(self):
        session = FakeSession({"/boom": FakeResponse(500, text="kaput")})
        transport = HttpTransport(live_profile(), session=session)

        with pytest.raises(RemoteProtocolError) as exc_info:
            transport.request("GET", "/boom")
        assert exc_info.value.status_code == 500

    def test_invalid_json(self):
        session = FakeSession({"/html": FakeResponse(200, None, text="<html>")})

        with pytest.raises(RemoteProtocolError):
            HttpTransport(live_profile(), session=session).request("GET", "/html")

    def test_timeout(self):
        session = FakeSession({"/slow": requests.exceptions.Timeout("slow")})

        with pytest.raises(TransportTimeout):
            HttpTransport(live_profile(), session=session).request("GET", "/slow")


class TestInforAdapters:
    """Test the Infor adapters in mock mode."""

    @pytest.mark.asyncio
    async def test_ln_mock(self):
        adapter = InforLNAdapter()
        data = await adapter.read_table("tcibd001", max_rows=2)
        info = await adapter.system_info()

        assert data.rows[0]["ITEM"] == "ITEM-001"
        assert data.row_count == 2
        assert info["systemId"] == "LN-100"
        assert adapter.full_table_name("tcibd001") == "tcibd001100"

    @pytest.mark.asyncio
    async def test_ln_company_option(self):
        adapter = InforLNAdapter(company="5")

        assert adapter.full_table_name("tccom100") == "tccom100005"

    @pytest.mark.asyncio
    async def test_m3_mock(self):
        data = await InforM3Adapter().read_table("OCUSMA", fields=["CUNO"])

        assert data.rows == [{"CUNO": "CUST001"}, {"CUNO": "CUST002"}]

    def test_m3_decoder(self):
        payload = {"MIRecord": [{"NameValue": [{"Name": "CUNO", "Value": "C1  "}, {"Name": "STAT", "Value": 20}]}]}

        assert decode_mi_records(payload) == [{"CUNO": "C1", "STAT": "20"}]
        assert decode_mi_records({}) == []

    @pytest.mark.parametrize("payload", [
        {"MIRecord": [1, 2]},
        {"MIRecord": {"NameValue": []}},
        {"MIRecord": [{"NameValue": [{"Value": "x"}]}]},
        None,
    ])
    def test_m3_decoder_rejects_malformed_records(self, payload):
        with pytest.raises(RemoteProtocolError):
            decode_mi_records(payload)


class TestAdapterRegistry:
    """Test the source-system registry."""

    def test_builtins(self):
        registry = SourceAdapterRegistry()

        assert registry.list_systems() == ["INFOR_LN", "INFOR_M3", "SAP"]
        assert registry.get("sap") is SapAdapter
        assert registry.has(" Infor_M3 ")

    def test_create(self):
        adapter = SourceAdapterRegistry().create("SAP", mode="mock")

        assert isinstance(adapter, SapAdapter)
        assert adapter.is_mock

    def test_create_unknown(self):
        with pytest.raises(RuleValidationError):
            SourceAdapterRegistry().create("ORACLE_EBS")

    def test_register_validation(self):
        registry = SourceAdapterRegistry(builtins=False)

        with pytest.raises(RuleValidationError):
            registry.register("", MockAdapter)
        with pytest.raises(RuleValidationError):
            registry.register("X", dict)

    def test_register_and_unregister(self):
        registry = SourceAdapterRegistry(builtins=False)
        registry.register("fixture", MockAdapter)

        assert registry.get("FIXTURE") is MockAdapter
        assert issubclass(registry.get("fixture"), BaseSourceAdapter)
        assert registry.unregister("Fixture")
        assert not registry.has("fixture")

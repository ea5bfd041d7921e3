"""Tests for VipRequestClient in isolation"""

import threading

import pytest
import requests
import responses

from vipbalance.infrastructure.api.requests import (
    VipRequestClient,
    build_url,
    mask_body,
)
from vipbalance.shared.exceptions import (
    DecodeError,
    OperationCancelled,
    TransportError,
)

API_SITE = "https://api.example.test"


@pytest.mark.unit
class TestBuildUrl:
    def test_endpoint_appended_to_host(self):
        assert (
            build_url(API_SITE, "/vip/v1/authUser")
            == "https://api.example.test/vip/v1/authUser"
        )

    def test_existing_path_and_query_replaced(self):
        assert (
            build_url("https://api.example.test:8443/base/?x=1", "/vip/v1/a")
            == "https://api.example.test:8443/vip/v1/a"
        )

    def test_relative_site_rejected(self):
        with pytest.raises(TransportError):
            build_url("api.example.test", "/vip/v1/a")


@pytest.mark.unit
class TestMaskBody:
    def test_session_id_hidden(self):
        body = '{"data": {"client_id": "1", "session_id": "sess-0001"}}'

        masked = mask_body(body)

        assert "sess-0001" not in masked
        assert '"session_id": "***"' in masked
        assert '"client_id": "1"' in masked

    def test_body_without_session_id_unchanged(self):
        body = '{"status": {"code": 200}}'
        assert mask_body(body) == body


@pytest.mark.unit
class TestVipRequestClient:
    @responses.activate
    def test_post_form_sends_form_body_and_headers(self):
        responses.post(f"{API_SITE}/auth", json={"ok": True}, status=200)
        client = VipRequestClient(API_SITE, timeout=5)

        body = client.post_form(
            "/auth",
            data={"login": "u", "password": "p"},
            headers={"api_key": "k"},
        )

        assert body == {"ok": True}
        request = responses.calls[0].request
        assert request.headers["api_key"] == "k"
        assert request.body == "login=u&password=p"

    @responses.activate
    def test_get_sends_query_params(self):
        responses.get(f"{API_SITE}/data", json={"ok": 1}, status=200)
        client = VipRequestClient(API_SITE, timeout=5)

        client.get("/data", params={"contract_id": "c1"})

        request = responses.calls[0].request
        assert request.url == f"{API_SITE}/data?contract_id=c1"

    @responses.activate
    def test_non_200_http_status_still_decoded(self):
        """The API reports its own status inside the body"""
        responses.get(
            f"{API_SITE}/data", json={"status": {"code": 401}}, status=401
        )
        client = VipRequestClient(API_SITE, timeout=5)

        assert client.get("/data") == {"status": {"code": 401}}

    @responses.activate
    def test_connection_error_raises_transport_error(self):
        responses.get(
            f"{API_SITE}/data",
            body=requests.exceptions.ConnectionError("refused"),
        )
        client = VipRequestClient(API_SITE, timeout=5)

        with pytest.raises(TransportError):
            client.get("/data")

    @responses.activate
    def test_timeout_raises_transport_error(self):
        responses.get(
            f"{API_SITE}/data", body=requests.exceptions.ReadTimeout("slow")
        )
        client = VipRequestClient(API_SITE, timeout=5)

        with pytest.raises(TransportError) as exc_info:
            client.get("/data")

        assert "timed out" in str(exc_info.value)

    @responses.activate
    def test_invalid_json_raises_decode_error(self):
        responses.get(f"{API_SITE}/data", body="<html>oops</html>", status=502)
        client = VipRequestClient(API_SITE, timeout=5)

        with pytest.raises(DecodeError):
            client.get("/data")

    @responses.activate
    def test_non_object_json_raises_decode_error(self):
        responses.get(f"{API_SITE}/data", json=[1, 2, 3], status=200)
        client = VipRequestClient(API_SITE, timeout=5)

        with pytest.raises(DecodeError):
            client.get("/data")

    def test_timeout_passed_to_session(self, mocker):
        session = mocker.MagicMock()
        session.request.return_value.json.return_value = {}
        client = VipRequestClient(API_SITE, timeout=7.5, session=session)

        client.get("/data")

        assert session.request.call_args.kwargs["timeout"] == 7.5

    def test_cancelled_client_makes_no_request(self, mocker):
        session = mocker.MagicMock()
        event = threading.Event()
        client = VipRequestClient(
            API_SITE, timeout=5, session=session, cancel_event=event
        )

        client.cancel()

        assert event.is_set()
        with pytest.raises(OperationCancelled):
            client.get("/data")
        session.request.assert_not_called()

    @responses.activate
    def test_sensitive_values_masked_in_logs(self, captured_logs):
        responses.post(f"{API_SITE}/auth", json={}, status=200)
        client = VipRequestClient(API_SITE, timeout=5)

        client.post_form(
            "/auth",
            data={"login": "u", "password": "hunter2"},
            headers={"api_key": "topsecret"},
        )

        joined = "".join(captured_logs)
        assert "hunter2" not in joined
        assert "'password': '***'" in joined
        assert "topsecret" not in joined

    @responses.activate
    def test_session_id_in_response_body_masked_in_logs(
        self, captured_logs, load_fixture
    ):
        responses.post(
            f"{API_SITE}/auth", json=load_fixture("auth_success.json")
        )
        client = VipRequestClient(API_SITE, timeout=5)

        body = client.post_form("/auth", data={"login": "u", "password": "p"})

        assert body["data"]["session_id"] == "sess-0001"
        joined = "".join(captured_logs)
        assert "sess-0001" not in joined
        assert '"session_id": "***"' in joined

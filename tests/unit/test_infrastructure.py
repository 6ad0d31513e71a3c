"""Unit tests for the infrastructure layer: HTTP client, reCAPTCHA gate, credential stores."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from errors import ServiceUnavailableError
from infrastructure.captcha.recaptcha import RECAPTCHA_VERIFY_URL, RecaptchaProvider
from infrastructure.credentials.memory import InMemoryCredentialStore
from infrastructure.credentials.redis_store import RedisCredentialStore
from infrastructure.http_client import HttpClient
from schemas.models.verification import (
    CredentialKey,
    RejectionReason,
    VerificationCredentials,
    VerificationRequest,
)


# ── Helpers ───────────────────────────────────────────────────────────────────


def _json_response(payload, status_code=200) -> MagicMock:
    resp = MagicMock(status_code=status_code, text=str(payload))
    resp.json.return_value = payload
    return resp


def _request(token="valid-token", remote_address="203.0.113.7") -> VerificationRequest:
    return VerificationRequest(token=token, remote_address=remote_address)


# ── HttpClient ────────────────────────────────────────────────────────────────


class TestHttpClient:
    async def test_post_delegates_to_httpx(self, mocker):
        client = HttpClient()
        fake_resp = MagicMock(status_code=200)
        mocker.patch.object(client._client, "post", return_value=fake_resp)
        resp = await client.post("http://example.com", data={"a": "b"})
        assert resp.status_code == 200
        client._client.post.assert_awaited_once_with(
            "http://example.com", data={"a": "b"}
        )
        await client.aclose()

    async def test_post_propagates_exception(self, mocker):
        client = HttpClient()
        mocker.patch.object(
            client._client, "post", side_effect=httpx.ConnectError("refused")
        )
        with pytest.raises(httpx.ConnectError):
            await client.post("http://example.com")
        await client.aclose()

    async def test_timeout_is_applied(self):
        async with HttpClient(timeout=2.5) as client:
            assert client.timeout.read == 2.5
            assert client.timeout.connect == 2.5


# ── RecaptchaProvider ─────────────────────────────────────────────────────────


class TestRecaptchaProvider:
    def _make(self, verify_url=RECAPTCHA_VERIFY_URL):
        http = MagicMock()
        return RecaptchaProvider(http_client=http, verify_url=verify_url), http

    async def test_accepts_on_success(self, credentials):
        provider, http = self._make()
        http.post = AsyncMock(return_value=_json_response({"success": True}))
        result = await provider.verify(_request(), credentials)
        assert result.accepted is True
        assert result.reason is None

    async def test_posts_form_fields_to_siteverify(self, credentials):
        provider, http = self._make()
        http.post = AsyncMock(return_value=_json_response({"success": True}))
        await provider.verify(_request("tok", "198.51.100.1"), credentials)
        http.post.assert_awaited_once_with(
            "https://www.google.com/recaptcha/api/siteverify",
            data={"secret": "abc", "response": "tok", "remoteip": "198.51.100.1"},
        )

    async def test_custom_verify_url(self, credentials):
        provider, http = self._make(verify_url="http://stub/siteverify")
        http.post = AsyncMock(return_value=_json_response({"success": True}))
        await provider.verify(_request(), credentials)
        assert http.post.await_args.args[0] == "http://stub/siteverify"

    async def test_rejects_with_error_codes_on_failure(self, credentials):
        provider, http = self._make()
        http.post = AsyncMock(
            return_value=_json_response(
                {"success": False, "error-codes": ["invalid-input-response"]}
            )
        )
        result = await provider.verify(_request("bad-token"), credentials)
        assert result.accepted is False
        assert result.reason is RejectionReason.VERIFICATION_FAILED
        assert result.error_codes == ("invalid-input-response",)

    @pytest.mark.parametrize(
        "error_codes, expected",
        [
            (5, ()),
            (True, ()),
            (1.5, ()),
            (None, ()),
            ({"code": "x"}, ()),
            ("bad-request", ("bad-request",)),
            (["timeout-or-duplicate", 7], ("timeout-or-duplicate", "7")),
        ],
        ids=["int", "bool", "float", "null", "object", "string", "mixed_list"],
    )
    async def test_malformed_error_codes_never_raise(
        self, credentials, error_codes, expected
    ):
        provider, http = self._make()
        http.post = AsyncMock(
            return_value=_json_response({"success": False, "error-codes": error_codes})
        )
        result = await provider.verify(_request("bad-token"), credentials)
        assert result.reason is RejectionReason.VERIFICATION_FAILED
        assert result.error_codes == expected

    @pytest.mark.parametrize(
        "payload",
        [{}, {"success": "true"}, {"success": 1}, {"success": None}],
        ids=["missing", "string", "int", "null"],
    )
    async def test_only_boolean_true_is_success(self, credentials, payload):
        provider, http = self._make()
        http.post = AsyncMock(return_value=_json_response(payload))
        result = await provider.verify(_request(), credentials)
        assert result.reason is RejectionReason.VERIFICATION_FAILED

    async def test_empty_secret_rejects_without_network_call(self):
        provider, http = self._make()
        http.post = AsyncMock()
        creds = VerificationCredentials(site_key="site", secret_key="")
        result = await provider.verify(_request(), creds)
        assert result.accepted is False
        assert result.reason is RejectionReason.CONFIGURATION_ERROR
        http.post.assert_not_awaited()

    @pytest.mark.parametrize(
        "exc",
        [
            httpx.ConnectError("connection refused"),
            httpx.ReadTimeout("timed out"),
            httpx.ConnectTimeout("timed out"),
            RuntimeError("unexpected"),
        ],
        ids=["refused", "read_timeout", "connect_timeout", "other"],
    )
    async def test_transport_error_rejects_without_raising(self, credentials, exc):
        provider, http = self._make()
        http.post = AsyncMock(side_effect=exc)
        result = await provider.verify(_request(), credentials)
        assert result.accepted is False
        assert result.reason is RejectionReason.TRANSPORT_ERROR

    @pytest.mark.parametrize("status_code", [301, 400, 500, 503])
    async def test_non_2xx_is_transport_error(self, credentials, status_code):
        provider, http = self._make()
        http.post = AsyncMock(
            return_value=_json_response({"success": True}, status_code=status_code)
        )
        result = await provider.verify(_request(), credentials)
        assert result.reason is RejectionReason.TRANSPORT_ERROR

    async def test_unparseable_body_is_transport_error(self, credentials):
        provider, http = self._make()
        resp = MagicMock(status_code=200, text="<html>")
        resp.json.side_effect = ValueError("Expecting value")
        http.post = AsyncMock(return_value=resp)
        result = await provider.verify(_request(), credentials)
        assert result.reason is RejectionReason.TRANSPORT_ERROR

    async def test_non_object_body_is_transport_error(self, credentials):
        provider, http = self._make()
        http.post = AsyncMock(return_value=_json_response([True]))
        result = await provider.verify(_request(), credentials)
        assert result.reason is RejectionReason.TRANSPORT_ERROR

    async def test_no_memoisation_of_tokens(self, credentials):
        provider, http = self._make()
        http.post = AsyncMock(
            side_effect=[
                _json_response({"success": True}),
                _json_response({"success": False, "error-codes": ["timeout-or-duplicate"]}),
            ]
        )
        first = await provider.verify(_request("same-token"), credentials)
        second = await provider.verify(_request("same-token"), credentials)
        assert first.accepted is True
        assert second.reason is RejectionReason.VERIFICATION_FAILED
        assert http.post.await_count == 2

    async def test_missing_credentials_is_programmer_error(self):
        provider, _ = self._make()
        with pytest.raises(TypeError):
            await provider.verify(_request(), None)


# ── InMemoryCredentialStore ───────────────────────────────────────────────────


class TestInMemoryCredentialStore:
    async def test_missing_key_is_none(self):
        store = InMemoryCredentialStore()
        assert await store.get(CredentialKey.SECRET_KEY) is None

    async def test_seed_skips_empty_values(self):
        store = InMemoryCredentialStore(
            {CredentialKey.SITE_KEY: "site", CredentialKey.SECRET_KEY: ""}
        )
        assert await store.get(CredentialKey.SITE_KEY) == "site"
        assert await store.get(CredentialKey.SECRET_KEY) is None

    async def test_last_write_wins(self):
        store = InMemoryCredentialStore()
        await store.set(CredentialKey.SECRET_KEY, "one")
        await store.set(CredentialKey.SECRET_KEY, "two")
        assert await store.get(CredentialKey.SECRET_KEY) == "two"


# ── RedisCredentialStore ──────────────────────────────────────────────────────


class TestRedisCredentialStore:
    async def test_get_uses_option_key(self):
        r = AsyncMock()
        r.get.return_value = "site"
        store = RedisCredentialStore(r)
        assert await store.get(CredentialKey.SITE_KEY) == "site"
        r.get.assert_awaited_once_with("recaptcha_comments:option:rc_recaptcha_site_key")

    async def test_get_decodes_bytes(self):
        r = AsyncMock()
        r.get.return_value = b"secret"
        store = RedisCredentialStore(r)
        assert await store.get(CredentialKey.SECRET_KEY) == "secret"

    @pytest.mark.parametrize("raw", [None, ""])
    async def test_get_absent(self, raw):
        r = AsyncMock()
        r.get.return_value = raw
        assert await RedisCredentialStore(r).get(CredentialKey.SECRET_KEY) is None

    async def test_get_error_reads_as_absent(self):
        r = AsyncMock()
        r.get.side_effect = ConnectionError("redis down")
        assert await RedisCredentialStore(r).get(CredentialKey.SECRET_KEY) is None

    async def test_set_writes_value(self):
        r = AsyncMock()
        store = RedisCredentialStore(r, prefix="test")
        await store.set(CredentialKey.SECRET_KEY, "new-secret")
        r.set.assert_awaited_once_with(
            "test:option:rc_recaptcha_secret_key", "new-secret"
        )

    async def test_set_error_raises_service_unavailable(self):
        r = AsyncMock()
        r.set.side_effect = ConnectionError("redis down")
        with pytest.raises(ServiceUnavailableError):
            await RedisCredentialStore(r).set(CredentialKey.SITE_KEY, "x")

    async def test_seed_missing_never_overwrites(self, seeded_keys):
        r = AsyncMock()
        r.set.return_value = None
        await RedisCredentialStore(r).seed_missing(seeded_keys)
        assert r.set.await_count == 2
        for call in r.set.await_args_list:
            assert call.kwargs == {"nx": True}

    async def test_seed_missing_skips_empty_values(self):
        r = AsyncMock()
        await RedisCredentialStore(r).seed_missing({CredentialKey.SECRET_KEY: ""})
        r.set.assert_not_awaited()

    async def test_seed_missing_tolerates_errors(self, seeded_keys):
        r = AsyncMock()
        r.set.side_effect = ConnectionError("redis down")
        await RedisCredentialStore(r).seed_missing(seeded_keys)  # must not raise

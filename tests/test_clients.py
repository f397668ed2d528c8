"""Transport-level tests for the REST clients."""

import base64

import httpx
import pytest
from oauthlib.common import Request
from oauthlib.oauth1.rfc5849 import signature

from commerce_sync.rest.client import RestClient
from commerce_sync.rest.commerce import CommerceClient
from commerce_sync.rest.exceptions import RateLimitError, RemoteHTTPError, ResponseFormatError, SyncClientError
from commerce_sync.rest.models import ContactIdentifiers, ContactPayload
from commerce_sync.rest.oauth import BearerAuth, OAuth1Auth

from conftest import COMMERCE_URL


def _client(handler) -> RestClient:
    return RestClient("https://api.test/", transport=httpx.MockTransport(handler))


class TestRestClient:
    def test_url_for_joins_slashes(self) -> None:
        client = RestClient("https://api.test/v1/")
        assert client.url_for("/items") == "https://api.test/v1/items"
        assert client.url_for("items") == "https://api.test/v1/items"
        client.close()

    def test_error_carries_code_and_description(self) -> None:
        client = _client(lambda r: httpx.Response(400, json={"errorCode": "ERROR_BAD", "description": "Bad thing"}))
        with pytest.raises(RemoteHTTPError) as err:
            client.get("items")

        assert err.value.status == 400
        assert err.value.code == "ERROR_BAD"
        assert err.value.description == "Bad thing"
        assert str(err.value) == "HTTP error 400 [ERROR_BAD]: Bad thing"

    def test_commerce_style_error_message(self) -> None:
        client = _client(lambda r: httpx.Response(404, json={"message": "No such entity"}))
        with pytest.raises(RemoteHTTPError) as err:
            client.get("items/1")
        assert str(err.value) == "HTTP error 404: No such entity"

    def test_non_json_error_body(self) -> None:
        client = _client(lambda r: httpx.Response(502, text="Bad Gateway"))
        with pytest.raises(RemoteHTTPError) as err:
            client.get("items")
        assert err.value.status == 502
        assert err.value.description == "Bad Gateway"

    def test_rate_limit(self) -> None:
        client = _client(lambda r: httpx.Response(429, json={}))
        with pytest.raises(RateLimitError) as err:
            client.get("items")
        assert err.value.status == 429

    def test_network_failure(self) -> None:
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SyncClientError) as err:
            _client(handler).get("items")
        assert not isinstance(err.value, RemoteHTTPError)
        assert err.value.status is None

    def test_invalid_json_body(self) -> None:
        client = _client(lambda r: httpx.Response(200, content=b"<html>"))
        with pytest.raises(ResponseFormatError):
            client.get("items")

    def test_empty_body_is_none(self) -> None:
        assert _client(lambda r: httpx.Response(204)).delete("items/1") is None

    def test_json_body_and_params(self) -> None:
        seen = {}

        def handler(request):
            seen["query"] = request.url.params.get("mode")
            seen["content"] = request.content
            return httpx.Response(200, json={"ok": True})

        assert _client(handler).post("items", {"a": 1}, params={"mode": "x"}) == {"ok": True}
        assert seen["query"] == "x"
        assert seen["content"] == b'{"a":1}' or seen["content"] == b'{"a": 1}'


class TestOAuth1Auth:
    URL = "https://shop.test/rest/V1/store/storeViews?b=2&a=1"

    @staticmethod
    def _verify(header, method, uri, client_secret="cs", token_secret="ats") -> bool:
        """Check the header the way a provider does, from the request alone."""
        params = signature.collect_parameters(
            uri_query=httpx.URL(uri).query.decode(),
            headers={"Authorization": header},
            exclude_oauth_signature=False,
        )
        request = Request(uri, http_method=method, headers={"Authorization": header})
        request.signature = dict(params)["oauth_signature"]
        request.params = [(k, v) for k, v in params if k != "oauth_signature"]
        return signature.verify_hmac_sha256(request, client_secret, token_secret)

    def test_header_fields(self) -> None:
        auth = OAuth1Auth("ck", "cs", "at", "ats")
        header = auth.authorization_header("GET", httpx.URL("https://shop.test/rest/V1/customers/7"), nonce="n1", timestamp=1700000000)

        assert header.startswith("OAuth ")
        for part in ('oauth_consumer_key="ck"', 'oauth_token="at"', 'oauth_nonce="n1"',
                     'oauth_timestamp="1700000000"', 'oauth_signature_method="HMAC-SHA256"', 'oauth_version="1.0"'):
            assert part in header

    def test_signature_verifies_with_query_parameters(self) -> None:
        header = OAuth1Auth("ck", "cs", "at", "ats").authorization_header("GET", httpx.URL(self.URL))
        assert self._verify(header, "GET", self.URL)

    def test_signature_rejected_for_wrong_secret(self) -> None:
        header = OAuth1Auth("ck", "cs", "at", "ats").authorization_header("GET", httpx.URL(self.URL))
        assert not self._verify(header, "GET", self.URL, token_secret="other")

    def test_signature_bound_to_method(self) -> None:
        header = OAuth1Auth("ck", "cs", "at", "ats").authorization_header("GET", httpx.URL(self.URL))
        assert not self._verify(header, "PUT", self.URL)

    def test_fixed_nonce_and_timestamp_are_deterministic(self) -> None:
        auth = OAuth1Auth("ck", "cs", "at", "ats")
        url = httpx.URL("https://shop.test/rest/V1/customers/7")
        first = auth.authorization_header("GET", url, nonce="n1", timestamp=1700000000)
        assert first == auth.authorization_header("GET", url, nonce="n1", timestamp=1700000000)
        assert first != auth.authorization_header("GET", url, nonce="n2", timestamp=1700000000)

    def test_applied_to_requests(self, commerce, fake_api) -> None:
        fake_api.add("GET", "/rest/V1/customers/7", {"id": 7})
        commerce.get_customer(7)
        header = fake_api.calls[0].headers["Authorization"]
        assert header.startswith("OAuth ")
        assert self._verify(header, "GET", "https://shop.test/rest/V1/customers/7")


class TestCommerceClient:
    def test_base_path(self, commerce) -> None:
        assert commerce.url_for("customers/7") == "https://shop.test/rest/V1/customers/7"

    def test_admin_token_uses_bearer(self, transport, fake_api) -> None:
        fake_api.add("GET", "/rest/V1/customers/7", {"id": 7})
        client = CommerceClient.from_credentials(COMMERCE_URL, admin_token="tok", transport=transport)
        assert isinstance(client._client.auth, BearerAuth)

        client.get_customer(7)
        assert fake_api.calls[0].headers["Authorization"] == "Bearer tok"
        client.close()

    def test_store_url_prefers_secure_and_caches(self, commerce, fake_api) -> None:
        fake_api.add("GET", "/rest/V1/store/storeConfigs", [
            {
                "id": 1,
                "base_link_url": "http://shop.test/",
                "secure_base_link_url": "https://shop.test/",
                "base_media_url": "http://shop.test/media/",
            },
            {"id": 2, "base_link_url": "http://fr.shop.test/"},
        ])

        assert commerce.get_store_url(1, "link") == "https://shop.test/"
        assert commerce.get_store_url("1", "media") == "http://shop.test/media/"
        assert commerce.get_store_url(1, "link", secure=False) == "http://shop.test/"
        assert commerce.get_store_url(2, "link") == "http://fr.shop.test/"
        assert commerce.get_store_url(3, "link") is None
        assert len(fake_api.calls_to("GET", "/rest/V1/store/storeConfigs")) == 1

    def test_store_details(self, commerce, reference_data) -> None:
        reference_data.add("GET", "/rest/V1/store/storeConfigs", [{"id": 1}])
        details = commerce.get_store_details()
        assert set(details) == {"storeConfigs", "storeViews", "websites"}
        assert details["websites"][0]["name"] == "Main Website"

    def test_names_by_id(self, commerce, reference_data) -> None:
        assert commerce.get_store_view_name("2") == "French"
        assert commerce.get_website_name(1) == "Main Website"
        assert commerce.get_website_name(9) is None


class TestDotdigitalClient:
    def test_basic_auth(self, dotdigital, fake_api) -> None:
        fake_api.add("GET", "/v2/data-fields", [])
        dotdigital.get_contact_data_fields()
        expected = "Basic " + base64.b64encode(b"apiuser:secret").decode()
        assert fake_api.calls[0].headers["Authorization"] == expected

    def test_patch_contact(self, dotdigital, fake_api) -> None:
        path = "/contacts/v3/email/ada@example.com"
        fake_api.add("PATCH", path, {"contactId": 1})
        payload = ContactPayload(identifiers=ContactIdentifiers(email="ada@example.com"), dataFields={"FIRSTNAME": "Ada"})

        assert dotdigital.patch_contact_by_email("ada@example.com", payload) == {"contactId": 1}

        call = fake_api.calls_to("PATCH", path)[0]
        assert call.url.params["merge-option"] == "overwrite"
        assert fake_api.body(call) == {
            "matchIdentifier": "email",
            "identifiers": {"email": "ada@example.com"},
            "dataFields": {"FIRSTNAME": "Ada"},
        }

    def test_import_accepts_plain_dict(self, dotdigital, fake_api) -> None:
        fake_api.add("POST", "/insightData/v3/import", {"importId": "1"})
        dotdigital.import_insight_data({
            "collectionName": "Catalog",
            "collectionScope": "account",
            "collectionType": "catalog",
            "records": [{"key": "1", "json": {"name": "x"}}],
        })
        body = fake_api.body(fake_api.calls[0])
        assert body["records"] == [{"key": "1", "json": {"name": "x"}}]

"""Shared test fixtures: an in-memory HTTP stand-in for both remote APIs."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Tuple, Union

import httpx
import pytest

from commerce_sync.rest.commerce import CommerceClient
from commerce_sync.rest.dotdigital import DotdigitalClient

COMMERCE_URL = "https://shop.test/"
DOTDIGITAL_URL = "https://dd.test"

Route = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeApi:
    """Answers requests from a (method, path) route table and records every call."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.calls: List[httpx.Request] = []

    def add(self, method: str, path: str, json: Any = None, status: int = 200) -> "FakeApi":
        self.routes[(method, path)] = httpx.Response(status, json=json)
        return self

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> "FakeApi":
        self.routes[(method, path)] = handler
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(501, json={"message": f"no route for {request.method} {request.url.path}"})
        if callable(route):
            return route(request)
        return route

    def calls_to(self, method: str, path: str) -> List[httpx.Request]:
        return [c for c in self.calls if c.method == method and c.url.path == path]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def transport(fake_api: FakeApi) -> httpx.MockTransport:
    return httpx.MockTransport(fake_api.handler)


@pytest.fixture
def commerce(transport: httpx.MockTransport) -> CommerceClient:
    client = CommerceClient.from_credentials(
        COMMERCE_URL,
        consumer_key="ck",
        consumer_secret="cs",
        access_token="at",
        access_token_secret="ats",
        transport=transport,
    )
    yield client
    client.close()


@pytest.fixture
def dotdigital(transport: httpx.MockTransport) -> DotdigitalClient:
    client = DotdigitalClient.from_credentials(DOTDIGITAL_URL, "apiuser", "secret", transport=transport)
    yield client
    client.close()


@pytest.fixture
def env() -> Dict[str, Any]:
    return {
        "COMMERCE_BASE_URL": COMMERCE_URL,
        "COMMERCE_CONSUMER_KEY": "ck",
        "COMMERCE_CONSUMER_SECRET": "cs",
        "COMMERCE_ACCESS_TOKEN": "at",
        "COMMERCE_ACCESS_TOKEN_SECRET": "ats",
        "DOTDIGITAL_API_URL": DOTDIGITAL_URL,
        "DOTDIGITAL_API_USER": "apiuser",
        "DOTDIGITAL_API_PASSWORD": "secret",
        "DOTDIGITAL_LIST_CUSTOMER": "11",
        "DOTDIGITAL_LIST_SUBSCRIBER": "22",
        "DOTDIGITAL_CATALOG_COLLECTION_NAME": "Catalog_Default",
        "DOTDIGITAL_DATAFIELD_MAPPING": json.dumps({
            "FIRSTNAME": "firstname",
            "LASTNAME": "lastname",
            "STORE": "store_name",
            "GROUP": "group",
            "BILLING_CITY": "billing_address.city",
            "BILLING_STREET": "billing_address.street.0",
            "SUBSCRIBED": "extension_attributes.is_subscribed",
            "UNKNOWN_FIELD": "firstname",
        }),
        "LOG_LEVEL": "debug",
    }


@pytest.fixture
def commerce_customer() -> Dict[str, Any]:
    return {
        "id": 7,
        "email": "ada@example.com",
        "firstname": "Ada",
        "lastname": "Lovelace",
        "group_id": 1,
        "store_id": 1,
        "website_id": 1,
        "default_billing": "3",
        "default_shipping": "4",
        "addresses": [
            {"id": 3, "street": ["1 Analytical Rd"], "city": "London", "postcode": "N1"},
            {"id": 4, "street": ["2 Engine St"], "city": "Leeds", "postcode": "LS1"},
        ],
        "extension_attributes": {"is_subscribed": True},
    }


@pytest.fixture
def reference_data(fake_api: FakeApi) -> FakeApi:
    fake_api.add("GET", "/rest/V1/store/storeViews", [{"id": 1, "name": "Default Store View"}, {"id": 2, "name": "French"}])
    fake_api.add("GET", "/rest/V1/store/websites", [{"id": 1, "name": "Main Website"}])
    fake_api.add("GET", "/rest/V1/customerGroups/1", {"id": 1, "code": "General"})
    fake_api.add("GET", "/v2/data-fields", [
        {"name": "FIRSTNAME", "type": "String"},
        {"name": "LASTNAME", "type": "String"},
        {"name": "STORE", "type": "String"},
        {"name": "GROUP", "type": "String"},
        {"name": "BILLING_CITY", "type": "String"},
        {"name": "BILLING_STREET", "type": "String"},
        {"name": "SUBSCRIBED", "type": "String"},
        {"name": "SUBSCRIBER_STATUS", "type": "String"},
        {"name": "STORE_NAME", "type": "String"},
        {"name": "WEBSITE_NAME", "type": "String"},
    ])
    return fake_api

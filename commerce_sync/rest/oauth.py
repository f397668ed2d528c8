from typing import Optional

import httpx
from oauthlib.oauth1 import Client, SIGNATURE_HMAC_SHA256


class OAuth1Auth(httpx.Auth):
    """
    OAuth 1.0a request signing (HMAC-SHA256) for the commerce REST API.

    Only query parameters take part in the signature; request bodies are JSON.
    """

    signature_method = SIGNATURE_HMAC_SHA256

    def __init__(self, consumer_key: str, consumer_secret: str, token: str, token_secret: str) -> None:
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.token = token
        self.token_secret = token_secret

    def auth_flow(self, request: httpx.Request):
        request.headers["Authorization"] = self.authorization_header(request.method, request.url)
        yield request

    def authorization_header(
        self,
        method: str,
        url: httpx.URL,
        *,
        nonce: Optional[str] = None,
        timestamp: Optional[int] = None,
    ) -> str:
        client = Client(
            self.consumer_key,
            client_secret=self.consumer_secret,
            resource_owner_key=self.token,
            resource_owner_secret=self.token_secret,
            signature_method=self.signature_method,
            nonce=nonce,
            timestamp=None if timestamp is None else str(timestamp),
        )
        _, headers, _ = client.sign(str(url), http_method=method.upper())
        return headers["Authorization"]


class BearerAuth(httpx.Auth):
    """Integration/admin token authentication, used instead of OAuth when configured."""

    def __init__(self, token: str) -> None:
        self.token = token

    def auth_flow(self, request: httpx.Request):
        request.headers["Authorization"] = f"Bearer {self.token}"
        yield request

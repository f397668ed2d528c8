from typing import Any, Dict, List, Optional
import logging

import httpx

from ..core.utils import same_id
from .client import RestClient
from .oauth import OAuth1Auth, BearerAuth

STORE_URL_PROPERTIES = {
    "base": "base_url",
    "link": "base_link_url",
    "static": "base_static_url",
    "media": "base_media_url",
}


class CommerceClient(RestClient):
    """
    Client for the commerce platform REST API (``{base_url}rest/V1/...``).

    Store configurations are fetched lazily once and kept for the lifetime of
    the instance; one instance serves exactly one invocation.

    Example:
        >>> client = CommerceClient.from_credentials(
        ...     "https://shop.example/", consumer_key="ck", consumer_secret="cs",
        ...     access_token="at", access_token_secret="ats",
        ... )
        >>> client.get_customer(42)["email"]
    """

    api_version = "V1"

    def __init__(self, base_url: str, *, auth: Optional[httpx.Auth] = None, **kwargs):
        base_url = base_url.rstrip("/") + f"/rest/{self.api_version}"
        super().__init__(base_url, auth=auth, **kwargs)
        self._store_configs: Optional[List[Dict[str, Any]]] = None

    @classmethod
    def from_credentials(
        cls,
        base_url: str,
        *,
        consumer_key: Optional[str] = None,
        consumer_secret: Optional[str] = None,
        access_token: Optional[str] = None,
        access_token_secret: Optional[str] = None,
        admin_token: Optional[str] = None,
        **kwargs,
    ) -> "CommerceClient":
        if admin_token:
            auth: httpx.Auth = BearerAuth(admin_token)
        else:
            auth = OAuth1Auth(consumer_key or "", consumer_secret or "", access_token or "", access_token_secret or "")

        return cls(base_url, auth=auth, **kwargs)

    def get_customer(self, customer_id: Any) -> Dict[str, Any]:
        return self.get(f"customers/{customer_id}")

    def get_customer_group(self, group_id: Any) -> Dict[str, Any]:
        return self.get(f"customerGroups/{group_id}")

    def get_store_views(self) -> List[Dict[str, Any]]:
        return self.get("store/storeViews")

    def get_websites(self) -> List[Dict[str, Any]]:
        return self.get("store/websites")

    def get_store_configs(self) -> List[Dict[str, Any]]:
        return self.get("store/storeConfigs")

    def get_store_details(self) -> Dict[str, Any]:
        return {
            "storeConfigs": self.get_store_configs(),
            "storeViews": self.get_store_views(),
            "websites": self.get_websites(),
        }

    def get_store_url(self, store_id: Any, url_type: str = "base", secure: bool = True) -> Optional[str]:
        if self._store_configs is None:
            self._store_configs = self.get_store_configs() or []

        prop = STORE_URL_PROPERTIES.get(url_type, "base_url")
        for config in self._store_configs:
            if same_id(config.get("id"), store_id):
                if secure:
                    return config.get(f"secure_{prop}") or config.get(prop)
                return config.get(prop)

        return None

    def get_store_view_name(self, store_id: Any) -> Optional[str]:
        return _name_by_id(self.get_store_views(), store_id)

    def get_website_name(self, website_id: Any) -> Optional[str]:
        return _name_by_id(self.get_websites(), website_id)


def _name_by_id(entries: Optional[List[Dict[str, Any]]], entry_id: Any) -> Optional[str]:
    for entry in entries or []:
        if same_id(entry.get("id"), entry_id):
            return entry.get("name")

    return None

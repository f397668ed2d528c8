from __future__ import annotations
import copy
from typing import TYPE_CHECKING, Any, Dict, List, Optional
import logging

from ..rest.exceptions import SyncClientError
from .utils import to_int

if TYPE_CHECKING:
    from ..rest.commerce import CommerceClient

TRANSIENT_CUSTOMER_KEYS = ("default_billing", "default_shipping", "addresses", "website_id", "store_id")
SUBSCRIBED = "Subscribed"


class StoreDirectory:
    """
    Reference-data lookups on the commerce side. Failures here are never
    fatal: they are logged and the lookup yields None.
    """

    def __init__(self, commerce: CommerceClient, *, logger: Optional[logging.Logger] = None) -> None:
        self._commerce = commerce
        self._logger = logger or logging.getLogger(__name__)

    def store_view_name(self, store_id: Any) -> Optional[str]:
        return self._lookup("store view", self._commerce.get_store_view_name, store_id)

    def website_name(self, website_id: Any) -> Optional[str]:
        return self._lookup("website", self._commerce.get_website_name, website_id)

    def group_code(self, group_id: Any) -> Optional[str]:
        if group_id is None:
            return None

        try:
            group = self._commerce.get_customer_group(group_id)
        except SyncClientError as exc:
            self._logger.warning("Customer group %s lookup failed: %s", group_id, exc)
            return None

        if not group:
            return None

        return group.get("code")

    def _lookup(self, label: str, fetch, entry_id: Any) -> Optional[str]:
        if entry_id is None:
            return None

        try:
            return fetch(entry_id)
        except SyncClientError as exc:
            self._logger.warning("Resolving %s %s failed: %s", label, entry_id, exc)
            return None


def select_address(addresses: Optional[List[Dict[str, Any]]], address_id: Any) -> Dict[str, Any]:
    """Return the address with the given id, or an empty dict."""
    wanted = to_int(address_id)
    if wanted is None:
        return {}

    for address in addresses or []:
        if to_int(address.get("id")) == wanted:
            return copy.deepcopy(address)

    return {}


def normalize_subscription(extension_attributes: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if extension_attributes is None:
        return None

    attrs = dict(extension_attributes)
    if attrs.get("is_subscribed"):
        attrs["is_subscribed"] = SUBSCRIBED
    else:
        attrs.pop("is_subscribed", None)

    return attrs


class CustomerEnricher:
    """
    Build the enriched customer record that feeds the data-field mapper.

    The event payload is merged over the canonical customer (event data
    wins), names are resolved from ids, default addresses are selected and
    lookup-only keys are dropped. Inputs are never mutated.
    """

    def __init__(
        self,
        commerce: CommerceClient,
        *,
        directory: Optional[StoreDirectory] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._commerce = commerce
        self._logger = logger or logging.getLogger(__name__)
        self._directory = directory or StoreDirectory(commerce, logger=self._logger)

    def enrich(self, customer_id: Any, event_payload: Dict[str, Any]) -> Dict[str, Any]:
        canonical = self._commerce.get_customer(customer_id) or {}
        customer = copy.deepcopy(canonical)
        customer.update(copy.deepcopy(event_payload))

        store_name = self._directory.store_view_name(customer.get("store_id"))
        if store_name is not None:
            customer["store_name"] = store_name

        website_name = self._directory.website_name(customer.get("website_id"))
        if website_name is not None:
            customer["website_name"] = website_name

        group = self._directory.group_code(customer.get("group_id"))
        if group:
            customer["group"] = group

        addresses = customer.get("addresses")
        customer["billing_address"] = select_address(addresses, customer.get("default_billing"))
        customer["shipping_address"] = select_address(addresses, customer.get("default_shipping"))

        if "extension_attributes" in customer:
            customer["extension_attributes"] = normalize_subscription(customer["extension_attributes"])

        for key in TRANSIENT_CUSTOMER_KEYS:
            customer.pop(key, None)

        return customer

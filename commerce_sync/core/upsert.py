from __future__ import annotations
from typing import Any, Dict, Optional
import logging

from ..rest.dotdigital import DotdigitalClient
from ..rest.exceptions import RemoteHTTPError
from ..rest.models import ContactIdentity, InsightImportRequest, InsightRecord

ORDERS_COLLECTION = "Orders"
NOT_FOUND = 404


class UpsertClient:
    """
    Replace-or-create semantics on top of the destination's insight-data API.

    A direct replace of a record whose collection does not exist yet fails
    with 404. That status, and only that status, is answered with a single
    import call that declares the collection and carries the record as its
    sole element. Any other failure propagates unchanged.
    """

    def __init__(
        self,
        client: DotdigitalClient,
        *,
        orders_collection: str = ORDERS_COLLECTION,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._client = client
        self._orders_collection = orders_collection
        self._logger = logger or logging.getLogger(__name__)

    def upsert_catalog_record(self, collection_name: str, key: Any, payload: Dict[str, Any]) -> Any:
        try:
            return self._client.put_account_insight_record(collection_name, key, payload)
        except RemoteHTTPError as exc:
            if exc.status != NOT_FOUND:
                raise

        self._logger.info("Collection '%s' not found, importing record %s", collection_name, key)
        request = InsightImportRequest(
            collectionName=collection_name,
            collectionScope="account",
            collectionType="catalog",
            records=[InsightRecord(key=str(key), data=payload)],
        )
        return self._client.import_insight_data(request)

    def upsert_contact_order(self, contact_email: str, order_payload: Dict[str, Any]) -> Any:
        key = order_payload["id"]
        try:
            return self._client.put_contact_insight_record(self._orders_collection, contact_email, key, order_payload)
        except RemoteHTTPError as exc:
            if exc.status != NOT_FOUND:
                raise

        self._logger.info("Collection '%s' not found, importing order %s", self._orders_collection, key)
        request = InsightImportRequest(
            collectionName=self._orders_collection,
            collectionScope="contact",
            collectionType="orders",
            records=[
                InsightRecord(
                    key=str(key),
                    contactIdentity=ContactIdentity(identifier="email", value=contact_email),
                    data=order_payload,
                )
            ],
        )
        return self._client.import_insight_data(request)

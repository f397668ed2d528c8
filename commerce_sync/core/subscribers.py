from __future__ import annotations
from typing import Any, Dict

from .enrichment import StoreDirectory
from .utils import to_int

STATUS_NAMES = {
    1: "Subscribed",
    2: "Not Active",
    3: "Unsubscribed",
    4: "Unconfirmed",
}

DEFAULT_SUBSCRIBER_MAPPING = {
    "SUBSCRIBER_STATUS": "subscriber_status",
    "STORE_NAME": "store_name",
    "WEBSITE_NAME": "website_name",
}


def subscriber_status_name(status_code: Any) -> str:
    return STATUS_NAMES.get(to_int(status_code), "")


def build_subscriber_record(subscriber: Dict[str, Any], metadata: Dict[str, Any], directory: StoreDirectory) -> Dict[str, Any]:
    """Flat record for the subscriber data-field mapping."""
    return {
        "subscriber_email": subscriber.get("subscriber_email"),
        "subscriber_status": subscriber_status_name(subscriber.get("subscriber_status")),
        "store_name": directory.store_view_name(subscriber.get("store_id")),
        "website_name": directory.website_name((metadata or {}).get("websiteId")),
    }

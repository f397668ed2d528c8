from typing import Any, Dict

from ..core import OrderTransformer, SyncValidationError, UpsertClient
from ..rest.models import ContactIdentifiers, ContactPayload
from .base import BaseConsumer


class OrderConsumer(BaseConsumer):
    """Push a commerce order into the contact-scoped orders collection."""

    required_inputs = [
        "entity_id", "grand_total", "order_currency_code", "created_at", "subtotal", "items",
        "customer_email", "increment_id", "quote_id", "status", "addresses", "store_name",
        "discount_amount", "payment", "shipping_description", "shipping_amount",
    ]

    def process(self, event: Dict[str, Any], metadata: Dict[str, Any]) -> Dict[str, Any]:
        if not isinstance(event["items"], list):
            raise SyncValidationError("Order does not contain any items")

        order = OrderTransformer.build_order(event)
        email = event["customer_email"]

        self.dotdigital.patch_contact_by_email(email, ContactPayload(identifiers=ContactIdentifiers(email=email)))
        response = UpsertClient(self.dotdigital, logger=self.logger).upsert_contact_order(email, order)
        return {"message": "Order synchronised successfully", "order": order, "response": response}


def main(params: Dict[str, Any]) -> Dict[str, Any]:
    return OrderConsumer.invoke(params)

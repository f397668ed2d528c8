from typing import Any, Dict

from ..core import ProductTransformer, SyncValidationError, UpsertClient
from .base import BaseConsumer


class ProductConsumer(BaseConsumer):
    """Replace the product in the catalog collection, creating the collection when needed."""

    required_inputs = [
        "entity_id", "name", "sku", "stock_data", "price", "status",
        "type_id", "url_key", "image", "created_at", "store_ids",
    ]
    extra_env = ["DOTDIGITAL_CATALOG_COLLECTION_NAME"]

    def process(self, event: Dict[str, Any], metadata: Dict[str, Any]) -> Dict[str, Any]:
        store_ids = event["store_ids"]
        if not isinstance(store_ids, list) or not store_ids:
            raise SyncValidationError("Product is not assigned to any store")

        store_id = store_ids[0]
        link_url = self.commerce.get_store_url(store_id, "link")
        media_url = self.commerce.get_store_url(store_id, "media")
        product = ProductTransformer.build_product_entry(event, link_url, media_url)

        response = UpsertClient(self.dotdigital, logger=self.logger).upsert_catalog_record(
            self.settings.dotdigital_catalog_collection_name, event["entity_id"], product
        )
        return {"message": "Product synchronised successfully", "product": product, "response": response}


def main(params: Dict[str, Any]) -> Dict[str, Any]:
    return ProductConsumer.invoke(params)

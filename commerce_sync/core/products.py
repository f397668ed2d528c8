from __future__ import annotations
from typing import Any, Dict, Optional

from .utils import capitalize_first, to_iso_instant

ENABLED_STATUS = "1"
VARIANT_TYPE = "Variant"


class ProductTransformer:
    @staticmethod
    def build_product_entry(product: Dict[str, Any], store_link_url: Optional[str], store_media_url: Optional[str]) -> Dict[str, Any]:
        stock = product.get("stock_data") or {}
        entry: Dict[str, Any] = {
            "id": product.get("entity_id"),
            "name": product.get("name"),
            "type": capitalize_first(product.get("type_id")),
            "status": "Enabled" if product.get("status") == ENABLED_STATUS else "Disabled",
            "stock": stock.get("qty"),
            "sku": product.get("sku"),
            "created_date": to_iso_instant(product.get("created_at")),
            "price": product.get("price"),
            "url": f"{store_link_url or ''}{product.get('url_key') or ''}.html",
            "imagePath": f"{store_media_url or ''}catalog/product{product.get('image') or ''}",
        }

        if product.get("parent_id"):
            entry["parent_id"] = product["parent_id"]
            entry["type"] = VARIANT_TYPE

        return entry

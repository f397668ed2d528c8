from __future__ import annotations
import copy
from typing import Any, Dict, List, Optional

from .utils import to_float, to_iso_instant, last_line

ADDRESS_TARGETS = {
    "shipping": "deliveryAddress",
    "billing": "billingAddress",
}


def _find_item(items: List[Dict[str, Any]], item_id: Any) -> Optional[Dict[str, Any]]:
    for item in items:
        if item.get("item_id") == item_id:
            return item

    return None


def _find_entry(products: List[Dict[str, Any]], product_id: Any) -> Optional[Dict[str, Any]]:
    for product in products:
        if product["productId"] == product_id:
            return product

    return None


def _strip_suffix(sku: Any, child_sku: Any) -> Any:
    if not isinstance(sku, str) or child_sku is None:
        return sku

    suffix = f"-{child_sku}"
    return sku[: -len(suffix)] if sku.endswith(suffix) else sku


class OrderTransformer:
    """Turn a commerce order event into the destination's order payload."""

    @staticmethod
    def build_line_items(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Rebuild the product hierarchy from a flat line-item list.

        Configurable items are structural and never emitted. A simple item
        under a bundle is nested into the bundle's ``subItems`` and the
        bundle's SKU loses the ``-<childSku>`` suffix; a simple item under any
        other parent is emitted with the parent's id, name and price.
        """
        products: List[Dict[str, Any]] = []
        for item in items:
            if item.get("product_type") == "configurable":
                continue

            product: Dict[str, Any] = {
                "productId": item.get("product_id"),
                "parentId": "",
                "name": item.get("name"),
                "price": to_float(item.get("price")),
                "sku": item.get("sku"),
                "quantity": item.get("qty_ordered"),
            }

            if item.get("product_type") == "simple" and item.get("parent_item_id"):
                parent = _find_item(items, item["parent_item_id"])
                if parent is not None and parent.get("product_type") == "bundle":
                    product["parentId"] = parent.get("product_id")
                    product["parentName"] = parent.get("name")
                    entry = _find_entry(products, parent.get("product_id"))
                    if entry is not None:
                        entry.setdefault("subItems", []).append(product)
                        # parent sku carries the child sku as a suffix
                        entry["sku"] = _strip_suffix(entry["sku"], product["sku"])
                    continue

                if parent is not None:
                    product["parentId"] = parent.get("product_id")
                    product["parentName"] = parent.get("name")
                    product["price"] = to_float(parent.get("price"))

            products.append(product)

        return products

    @staticmethod
    def project_address(address: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "address1": address.get("street"),
            "address2": "",
            "city": address.get("city"),
            "region": address.get("region"),
            "country": address.get("country_id"),
            "postcode": address.get("postcode"),
        }

    @classmethod
    def apply_addresses(cls, order: Dict[str, Any], addresses: Optional[List[Dict[str, Any]]]) -> Dict[str, Any]:
        out = copy.deepcopy(order)
        for address in addresses or []:
            target = ADDRESS_TARGETS.get(address.get("address_type"))
            if target:
                out[target] = cls.project_address(address)

        return out

    @classmethod
    def build_order(cls, order: Dict[str, Any]) -> Dict[str, Any]:
        payment = order.get("payment") or {}
        info = payment.get("additional_information") or {}
        coupon = order.get("coupon_code")

        data = {
            "id": order.get("increment_id"),
            "quoteId": order.get("quote_id"),
            "orderStatus": order.get("status"),
            "orderTotal": to_float(order.get("grand_total")),
            "currency": order.get("order_currency_code"),
            "purchaseDate": to_iso_instant(order.get("created_at")),
            "orderSubtotal": to_float(order.get("subtotal")),
            "products": cls.build_line_items(order.get("items") or []),
            "storeName": last_line(order.get("store_name")),
            "discountAmount": to_float(order.get("discount_amount")),
            "payment": info.get("method_title") if isinstance(info, dict) else None,
            "deliveryMethod": order.get("shipping_description"),
            "deliveryTotal": to_float(order.get("shipping_amount")),
            "couponCode": "" if coupon is None else coupon,
        }
        return cls.apply_addresses(data, order.get("addresses"))

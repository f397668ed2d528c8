"""
Order line items
Use case: Turn a commerce order event with bundle and configurable items into the destination order payload.
- Configurable parents disappear, their variants carry the parent's price
- Bundle children are nested under the bundle as sub items
- Billing and shipping addresses become billingAddress / deliveryAddress
"""

import json

import pandas as pd

from commerce_sync.core import OrderTransformer

order_json = r'''
{
  "entity_id": 10,
  "increment_id": "000000010",
  "quote_id": 55,
  "status": "processing",
  "grand_total": "64.50",
  "subtotal": "59.00",
  "discount_amount": "0.00",
  "shipping_amount": "5.50",
  "order_currency_code": "GBP",
  "created_at": "2024-05-01 10:20:30",
  "store_name": "Main Website\nMain Website Store\nDefault Store View",
  "payment": {"additional_information": {"method_title": "Check / Money order"}},
  "shipping_description": "Flat Rate - Fixed",
  "customer_email": "ada@example.com",
  "items": [
    {"item_id": 1, "product_id": 5, "product_type": "configurable", "name": "Shirt", "price": "19.00", "sku": "SHIRT-M", "qty_ordered": 1},
    {"item_id": 2, "product_id": 51, "product_type": "simple", "parent_item_id": 1, "name": "Shirt M", "price": "0.00", "sku": "SHIRT-M", "qty_ordered": 1},
    {"item_id": 3, "product_id": 8, "product_type": "bundle", "name": "Desk Kit", "price": "40.00", "sku": "KIT-PEN-PAD", "qty_ordered": 1},
    {"item_id": 4, "product_id": 81, "product_type": "simple", "parent_item_id": 3, "name": "Pad", "price": "0.00", "sku": "PAD", "qty_ordered": 1},
    {"item_id": 5, "product_id": 82, "product_type": "simple", "parent_item_id": 3, "name": "Pen", "price": "0.00", "sku": "PEN", "qty_ordered": 1}
  ],
  "addresses": [
    {"address_type": "billing", "street": "1 Analytical Rd", "city": "London", "region": "LDN", "country_id": "GB", "postcode": "N1"},
    {"address_type": "shipping", "street": "2 Engine St", "city": "Leeds", "region": "WY", "country_id": "GB", "postcode": "LS1"}
  ]
}
'''


def main():
    order = OrderTransformer.build_order(json.loads(order_json))

    top = pd.DataFrame(order["products"]).drop(columns=["subItems"], errors="ignore")
    print(top.to_string())

    for product in order["products"]:
        if product.get("subItems"):
            print(f"Bundle {product['sku']}:")
            print(pd.DataFrame(product["subItems"]).to_string())

    print(json.dumps({k: v for k, v in order.items() if k != "products"}, indent=2))


if __name__ == "__main__":
    main()

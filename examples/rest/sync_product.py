from commerce_sync.core import ProductTransformer, UpsertClient
from commerce_sync.rest.commerce import CommerceClient
from commerce_sync.rest.dotdigital import DotdigitalClient
from commerce_sync.rest.exceptions import SyncClientError


def main():
    commerce = CommerceClient.from_credentials(
        "https://shop.example/",
        admin_token="",        # Your integration token here
    )
    dotdigital = DotdigitalClient.from_credentials(
        "https://r1-api.dotdigital.com",
        "",                    # Your API user here
        "",                    # Your API password here
    )

    product = {
        "entity_id": 5,
        "name": "Blue Pen",
        "sku": "PEN-BLUE",
        "stock_data": {"qty": 40},
        "price": "1.50",
        "status": "1",
        "type_id": "simple",
        "url_key": "blue-pen",
        "image": "/b/p/blue-pen.jpg",
        "created_at": "2024-03-02 08:00:00",
        "store_ids": [1],
    }

    try:
        entry = ProductTransformer.build_product_entry(
            product,
            commerce.get_store_url(1, "link"),
            commerce.get_store_url(1, "media"),
        )
        print(entry)

        response = UpsertClient(dotdigital).upsert_catalog_record("Catalog_Default", product["entity_id"], entry)
        print(f"Upsert successful: {response}")

    except SyncClientError as e:
        print(f"Error: {e}")

    finally:
        commerce.close()
        dotdigital.close()


if __name__ == "__main__":
    main()

import logging

from commerce_sync.core import DataFieldMapper, is_not_none


def main():
    logging.basicConfig(level=logging.DEBUG)

    record = {
        "firstname": "Ada",
        "lastname": "",
        "group": "General",
        "billing_address": {"city": "London", "street": ["1 Analytical Rd"]},
        "shipping_address": {},
        "extension_attributes": {"is_subscribed": "Subscribed"},
    }
    mapping = {
        "FIRSTNAME": "firstname",
        "LASTNAME": "lastname",
        "BILLING_STREET": "billing_address.street.0",
        "DELIVERY_CITY": "shipping_address.city",
        "LOYALTY": "extension_attributes.loyalty.tier.gold",
        "GENDER": "gender",
    }
    allowed = ["FIRSTNAME", "LASTNAME", "BILLING_STREET", "DELIVERY_CITY", "LOYALTY"]

    # default: empty strings and empty objects count as absent
    mapper = DataFieldMapper()
    print(mapper.resolve_fields(mapping, allowed, record))
    for name, node in mapper.trace(mapping, allowed, record).items():
        print(name, node)

    # only None counts as absent, so LASTNAME is sent as ""
    lenient = DataFieldMapper(is_present=is_not_none)
    print(lenient.resolve_fields(mapping, allowed, record))
    print([w.message for w in lenient.warnings])


if __name__ == "__main__":
    main()

"""
Customer data-field mapping
Use case: Check a data-field mapping table against a sample enriched customer before deploying it.
- Structural validation of every source path
- Fields the destination does not define are reported and skipped
- Trace shows what happened to each configured field
"""

import json

import pandas as pd

from commerce_sync.validation import dry_run, validate_with_warnings

mapping_json = r'''
{
  "FIRSTNAME": "firstname",
  "LASTNAME": "lastname",
  "STORE": "store_name",
  "GROUP": "group",
  "BILLING_CITY": "billing_address.city",
  "BILLING_STREET": "billing_address.street.0",
  "DELIVERY_STREET": "shipping_address.street.1",
  "SUBSCRIBED": "extension_attributes.is_subscribed",
  "LOYALTY_TIER": "extension_attributes.loyalty.tier.gold"
}
'''

customer_json = r'''
{
  "id": 7,
  "email": "ada@example.com",
  "firstname": "Ada",
  "lastname": "Lovelace",
  "store_name": "Default Store View",
  "website_name": "Main Website",
  "group": "General",
  "billing_address": {"city": "London", "street": ["1 Analytical Rd"], "postcode": "N1"},
  "shipping_address": {"city": "Leeds", "street": ["2 Engine St"], "postcode": "LS1"},
  "extension_attributes": {"is_subscribed": "Subscribed"}
}
'''

allowed = ["FIRSTNAME", "LASTNAME", "STORE", "BILLING_CITY", "BILLING_STREET", "DELIVERY_STREET", "SUBSCRIBED", "LOYALTY_TIER"]


def main():
    mapping = json.loads(mapping_json)
    customer = json.loads(customer_json)

    report = validate_with_warnings(mapping, allowed)
    for error in report["errors"]:
        print(f"Error: {error}")
    for warning in report["warnings"]:
        print(f"Warning: {warning}")

    result = dry_run({k: v for k, v in mapping.items() if k != "LOYALTY_TIER"}, allowed, customer)
    print(json.dumps(result["fields"], indent=2))

    trace = pd.DataFrame.from_dict(result["trace"], orient="index")
    print(trace.to_string())


if __name__ == "__main__":
    main()

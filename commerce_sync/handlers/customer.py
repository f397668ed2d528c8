from typing import Any, Dict

from ..core import AllowedDataFields, CustomerEnricher, DataFieldMapper
from ..rest.models import ContactIdentifiers, ContactPayload
from ..validation import parse_mapping_table
from .base import BaseConsumer


class CustomerConsumer(BaseConsumer):
    """Create or update the contact behind a commerce customer event."""

    required_inputs = ["id", "email"]
    extra_env = ["DOTDIGITAL_DATAFIELD_MAPPING"]

    def process(self, event: Dict[str, Any], metadata: Dict[str, Any]) -> Dict[str, Any]:
        mapping = parse_mapping_table(self.settings.dotdigital_datafield_mapping)

        record = CustomerEnricher(self.commerce, logger=self.logger).enrich(event["id"], event)
        allowed = AllowedDataFields(self.dotdigital.get_contact_data_fields)
        data_fields = DataFieldMapper(logger=self.logger).resolve_fields(mapping, allowed.names(), record)

        lists = event.get("lists")
        if not lists and self.settings.dotdigital_list_customer is not None:
            lists = [self.settings.dotdigital_list_customer]

        contact = ContactPayload(
            identifiers=ContactIdentifiers(email=event["email"]),
            dataFields=data_fields,
            lists=lists or None,
        )
        response = self.dotdigital.patch_contact_by_email(event["email"], contact)
        return {"message": "Contact created successfully", "contact": response}


def main(params: Dict[str, Any]) -> Dict[str, Any]:
    return CustomerConsumer.invoke(params)

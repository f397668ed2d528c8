from typing import Any, Dict

from ..core import (
    AllowedDataFields, DataFieldMapper, StoreDirectory, is_not_none,
    build_subscriber_record, DEFAULT_SUBSCRIBER_MAPPING,
)
from ..rest.models import ContactIdentifiers, ContactPayload
from .base import BaseConsumer


class SubscriberConsumer(BaseConsumer):
    """Sync newsletter subscription state onto the contact."""

    required_inputs = ["subscriber_email"]

    def process(self, event: Dict[str, Any], metadata: Dict[str, Any]) -> Dict[str, Any]:
        self.logger.info("Subscriber event for store %s", event.get("store_id"))
        email = event["subscriber_email"]

        record = build_subscriber_record(event, metadata, StoreDirectory(self.commerce, logger=self.logger))
        allowed = AllowedDataFields(self.dotdigital.get_contact_data_fields)
        # empty status strings are sent, None values are not
        mapper = DataFieldMapper(logger=self.logger, is_present=is_not_none)
        data_fields = mapper.resolve_fields(DEFAULT_SUBSCRIBER_MAPPING, allowed.names(), record)

        lists = [self.settings.dotdigital_list_subscriber] if self.settings.dotdigital_list_subscriber is not None else None
        contact = ContactPayload(identifiers=ContactIdentifiers(email=email), dataFields=data_fields, lists=lists)
        self.logger.debug("Payload: %s", contact.model_dump_json(exclude_none=True))

        response = self.dotdigital.patch_contact_by_email(email, contact)
        return {"message": "Contact created successfully", "contact": response}


def main(params: Dict[str, Any]) -> Dict[str, Any]:
    return SubscriberConsumer.invoke(params)

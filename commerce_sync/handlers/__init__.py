from .base import BaseConsumer, error_response, missing_inputs
from .customer import CustomerConsumer
from .order import OrderConsumer
from .product import ProductConsumer
from .subscriber import SubscriberConsumer

CONSUMERS = {
    "customer": CustomerConsumer,
    "order": OrderConsumer,
    "product": ProductConsumer,
    "subscriber": SubscriberConsumer,
}

__all__ = [
    "BaseConsumer",
    "error_response",
    "missing_inputs",
    "CustomerConsumer",
    "OrderConsumer",
    "ProductConsumer",
    "SubscriberConsumer",
    "CONSUMERS",
]

from .exceptions import MappingError, PathSyntaxError, SyncValidationError
from .path import SourcePathResolver
from .mapper import DataFieldMapper, AllowedDataFields, MappingWarning, is_truthy, is_not_none
from .enrichment import CustomerEnricher, StoreDirectory
from .orders import OrderTransformer
from .products import ProductTransformer
from .subscribers import subscriber_status_name, build_subscriber_record, DEFAULT_SUBSCRIBER_MAPPING
from .upsert import UpsertClient

__all__ = [
    "MappingError",
    "PathSyntaxError",
    "SyncValidationError",
    "SourcePathResolver",
    "DataFieldMapper",
    "AllowedDataFields",
    "MappingWarning",
    "is_truthy",
    "is_not_none",
    "CustomerEnricher",
    "StoreDirectory",
    "OrderTransformer",
    "ProductTransformer",
    "subscriber_status_name",
    "build_subscriber_record",
    "DEFAULT_SUBSCRIBER_MAPPING",
    "UpsertClient",
]

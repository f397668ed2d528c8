from __future__ import annotations
from typing import Any, Dict, Optional
import logging

from pydantic import BaseModel, ConfigDict, Field

LOGGER_NAME = "commerce_sync"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class SyncSettings(BaseModel):
    """
    Invocation environment. Field aliases are the environment variable names
    handed to every entry function next to the event data.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    commerce_base_url: Optional[str] = Field(None, alias="COMMERCE_BASE_URL")
    commerce_consumer_key: Optional[str] = Field(None, alias="COMMERCE_CONSUMER_KEY")
    commerce_consumer_secret: Optional[str] = Field(None, alias="COMMERCE_CONSUMER_SECRET")
    commerce_access_token: Optional[str] = Field(None, alias="COMMERCE_ACCESS_TOKEN")
    commerce_access_token_secret: Optional[str] = Field(None, alias="COMMERCE_ACCESS_TOKEN_SECRET")
    commerce_admin_token: Optional[str] = Field(None, alias="COMMERCE_ADMIN_TOKEN")

    dotdigital_api_url: Optional[str] = Field(None, alias="DOTDIGITAL_API_URL")
    dotdigital_api_user: Optional[str] = Field(None, alias="DOTDIGITAL_API_USER")
    dotdigital_api_password: Optional[str] = Field(None, alias="DOTDIGITAL_API_PASSWORD")
    dotdigital_list_customer: Optional[int] = Field(None, alias="DOTDIGITAL_LIST_CUSTOMER")
    dotdigital_list_subscriber: Optional[int] = Field(None, alias="DOTDIGITAL_LIST_SUBSCRIBER")
    dotdigital_catalog_collection_name: Optional[str] = Field(None, alias="DOTDIGITAL_CATALOG_COLLECTION_NAME")
    dotdigital_datafield_mapping: Optional[str] = Field(None, alias="DOTDIGITAL_DATAFIELD_MAPPING")

    log_level: str = Field("info", alias="LOG_LEVEL")
    http_timeout: float = Field(10.0, alias="HTTP_TIMEOUT")

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> "SyncSettings":
        return cls.model_validate({k: v for k, v in params.items() if isinstance(k, str) and k.isupper()})


def get_logger(level: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level or "info").upper(), logging.INFO))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger

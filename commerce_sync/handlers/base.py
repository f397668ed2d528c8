from __future__ import annotations
import json
from typing import Any, Dict, Iterable, List, Optional
import logging

import httpx
from pydantic import ValidationError

from ..config import SyncSettings, get_logger
from ..core.exceptions import MappingError
from ..rest.commerce import CommerceClient
from ..rest.dotdigital import DotdigitalClient

COMMERCE_OAUTH_ENV = [
    "COMMERCE_BASE_URL",
    "COMMERCE_CONSUMER_KEY",
    "COMMERCE_CONSUMER_SECRET",
    "COMMERCE_ACCESS_TOKEN",
    "COMMERCE_ACCESS_TOKEN_SECRET",
]
DOTDIGITAL_ENV = ["DOTDIGITAL_API_URL", "DOTDIGITAL_API_USER", "DOTDIGITAL_API_PASSWORD"]


def missing_inputs(obj: Dict[str, Any], required: Iterable[str]) -> Optional[str]:
    """Return an error message naming the required keys that are absent or empty."""
    missing = [key for key in required if obj.get(key) is None or obj.get(key) == ""]
    if not missing:
        return None

    return f"missing parameter(s) '{','.join(missing)}'"


def error_response(status: int, message: str, logger: Optional[logging.Logger] = None) -> Dict[str, Any]:
    if logger is not None:
        logger.info("%s: %s", status, message)
    return {"statusCode": status, "body": {"error": message}}


class BaseConsumer:
    """
    Entry point shared by the entity consumers.

    ``invoke(params)`` receives the environment keys plus
    ``data: {value: <event payload>, _metadata: {...}}`` and always returns
    ``{"statusCode", "body"}``. Subclasses implement ``process``.
    """

    required_inputs: List[str] = []
    uses_commerce = True
    extra_env: List[str] = []

    def __init__(
        self,
        settings: SyncSettings,
        *,
        logger: Optional[logging.Logger] = None,
        commerce: Optional[CommerceClient] = None,
        dotdigital: Optional[DotdigitalClient] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.logger = logger or get_logger(settings.log_level)
        self._commerce = commerce
        self._dotdigital = dotdigital
        self._transport = transport

    @classmethod
    def invoke(cls, params: Dict[str, Any], *, transport: Optional[httpx.BaseTransport] = None) -> Dict[str, Any]:
        logger = get_logger(params.get("LOG_LEVEL"))
        try:
            settings = SyncSettings.from_params(params)
        except ValidationError as exc:
            return error_response(400, f"Invalid configuration: {exc}", logger)

        handler = cls(settings, logger=logger, transport=transport)
        return handler.main(params)

    @property
    def commerce(self) -> CommerceClient:
        if self._commerce is None:
            s = self.settings
            self._commerce = CommerceClient.from_credentials(
                s.commerce_base_url,
                consumer_key=s.commerce_consumer_key,
                consumer_secret=s.commerce_consumer_secret,
                access_token=s.commerce_access_token,
                access_token_secret=s.commerce_access_token_secret,
                admin_token=s.commerce_admin_token,
                timeout=s.http_timeout,
                logger=self.logger,
                transport=self._transport,
            )
        return self._commerce

    @property
    def dotdigital(self) -> DotdigitalClient:
        if self._dotdigital is None:
            s = self.settings
            self._dotdigital = DotdigitalClient.from_credentials(
                s.dotdigital_api_url,
                s.dotdigital_api_user,
                s.dotdigital_api_password,
                timeout=s.http_timeout,
                logger=self.logger,
                transport=self._transport,
            )
        return self._dotdigital

    def required_env(self) -> List[str]:
        env: List[str] = []
        if self.uses_commerce:
            env += ["COMMERCE_BASE_URL"] if self.settings.commerce_admin_token else COMMERCE_OAUTH_ENV
        return env + DOTDIGITAL_ENV + self.extra_env

    def main(self, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            data = params.get("data") or {}
            event = data.get("value") or {}
            message = missing_inputs(event, self.required_inputs)
            if message:
                return error_response(400, message + " " + json.dumps(event, default=str), self.logger)

            message = missing_inputs(params, self.required_env())
            if message:
                return error_response(400, message, self.logger)

            body = self.process(event, data.get("_metadata") or {})
            return {"statusCode": 200, "body": body}

        except MappingError as exc:
            self.logger.error(exc)
            return error_response(400, str(exc), self.logger)

        except Exception as exc:
            self.logger.exception(exc)
            return error_response(getattr(exc, "status", None) or 500, str(exc), self.logger)

        finally:
            self.close()

    def process(self, event: Dict[str, Any], metadata: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def close(self) -> None:
        for client in (self._commerce, self._dotdigital):
            if client is not None:
                client.close()

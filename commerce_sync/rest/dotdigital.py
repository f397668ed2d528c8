from typing import Any, Dict, List, Union
from urllib.parse import quote

import httpx

from .client import RestClient
from .models import ContactPayload, InsightImportRequest


class DotdigitalClient(RestClient):
    """
    Client for the Dotdigital marketing-automation API (basic authentication).

    Example:
        >>> client = DotdigitalClient.from_credentials("https://r1-api.dotdigital.com", "apiuser", "secret")
        >>> [f["name"] for f in client.get_contact_data_fields()]
    """

    @classmethod
    def from_credentials(cls, base_url: str, username: str, password: str, **kwargs) -> "DotdigitalClient":
        return cls(base_url, auth=httpx.BasicAuth(username, password), **kwargs)

    def get_contact_data_fields(self) -> List[Dict[str, Any]]:
        return self.get("/v2/data-fields")

    def patch_contact_by_email(
        self,
        email: str,
        payload: Union[ContactPayload, Dict[str, Any]],
        merge_option: str = "overwrite",
    ) -> Dict[str, Any]:
        if isinstance(payload, ContactPayload):
            payload = payload.model_dump(exclude_none=True)
        return self.patch(f"/contacts/v3/email/{quote(email, safe='@')}", payload, params={"merge-option": merge_option})

    def put_account_insight_record(self, collection: str, key: Any, data: Dict[str, Any]) -> Any:
        return self.put(f"/insightData/v3/account/{quote(collection)}/{quote(str(key))}", data)

    def put_contact_insight_record(self, collection: str, email: str, key: Any, data: Dict[str, Any]) -> Any:
        return self.put(
            f"/insightData/v3/contact/{quote(collection)}/email/{quote(email, safe='@')}/{quote(str(key))}",
            data,
        )

    def import_insight_data(self, request: Union[InsightImportRequest, Dict[str, Any]]) -> Any:
        if isinstance(request, dict):
            request = InsightImportRequest(**request)
        return self.post("/insightData/v3/import", request.model_dump(by_alias=True, exclude_none=True))

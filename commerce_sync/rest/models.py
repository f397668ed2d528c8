from typing import Dict, Any, Optional, List, Literal
from pydantic import BaseModel, ConfigDict, Field


class ContactIdentifiers(BaseModel):
    email: str


class ContactPayload(BaseModel):
    matchIdentifier: str = "email"
    identifiers: ContactIdentifiers
    dataFields: Optional[Dict[str, Any]] = None
    lists: Optional[List[int]] = None


class ContactIdentity(BaseModel):
    identifier: str = "email"
    value: str


class InsightRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    key: str
    contactIdentity: Optional[ContactIdentity] = None
    data: Dict[str, Any] = Field(alias="json")


class InsightImportRequest(BaseModel):
    collectionName: str
    collectionScope: Literal["account", "contact"]
    collectionType: Literal["catalog", "orders"]
    records: List[InsightRecord]

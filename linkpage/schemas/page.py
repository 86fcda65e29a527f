from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, List
from linkpage.schemas.link import Link

# Schemas pour les pages

class PageRecord(BaseModel):
    """Document stocké dans le store distant, clé = username"""
    links: List[Link] = []
    password: Optional[str] = None
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def has_password(self) -> bool:
        return bool(self.password)

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")

class PageWrite(BaseModel):
    """Body du PUT: remplace tout le document"""
    links: List[Link] = []
    password: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

class VerifyRequest(BaseModel):
    password: str

class VerifyResponse(BaseModel):
    valid: bool

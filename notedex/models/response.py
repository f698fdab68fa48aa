from typing import Dict, List, Optional

from pydantic import BaseModel

from notedex.models.page import MetadataValue


class SearchResult(BaseModel):
    slug: str
    title: str
    description: Optional[str] = None


class PageResponse(BaseModel):
    slug: str
    title: str
    content: str  # sanitized HTML body
    metadata: Dict[str, MetadataValue]
    tags: List[str]


class ReloadResponse(BaseModel):
    pages: int


class HealthResponse(BaseModel):
    status: str
    pages: int

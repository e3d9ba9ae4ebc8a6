"""
Shared JSON:API models for asc-client.

These are the building blocks every resource module reuses: links, paging
information, relationship linkage, error documents and upload descriptors.
Field names are snake_case in Python and camelCase on the wire.

Reference: https://developer.apple.com/documentation/appstoreconnectapi
"""

from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlparse

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ASCModel(BaseModel):
    """Base model: camelCase aliases, construction by field name allowed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Links and paging
# ---------------------------------------------------------------------------


class ResourceLinks(ASCModel):
    self_link: Optional[str] = Field(default=None, alias="self")


class DocumentLinks(ASCModel):
    self_link: Optional[str] = Field(default=None, alias="self")


class PagedDocumentLinks(ASCModel):
    """Links of a paged response. A ``next`` link means more pages exist."""

    self_link: Optional[str] = Field(default=None, alias="self")
    first: Optional[str] = None
    next: Optional[str] = None

    @property
    def has_next(self) -> bool:
        return bool(self.next)

    @property
    def next_cursor(self) -> Optional[str]:
        """The ``cursor`` query value of the next page link, if any."""
        if not self.next:
            return None
        values = parse_qs(urlparse(self.next).query).get("cursor")
        return values[0] if values else None


class RelationshipLinks(ASCModel):
    self_link: Optional[str] = Field(default=None, alias="self")
    related: Optional[str] = None


class Paging(ASCModel):
    total: Optional[int] = None
    limit: Optional[int] = None


class PagingInformation(ASCModel):
    paging: Paging


# ---------------------------------------------------------------------------
# Relationships
# ---------------------------------------------------------------------------


class RelationshipData(ASCModel):
    """Reference to another resource by identity only."""

    id: str
    type: str


class ToOneRelationship(ASCModel):
    """To-one linkage as sent in request bodies."""

    data: Optional[RelationshipData] = None


class ToManyRelationship(ASCModel):
    """To-many linkage as sent in request bodies."""

    data: List[RelationshipData] = Field(default_factory=list)


class RelationshipToOne(ASCModel):
    """To-one relationship as returned by the API."""

    data: Optional[RelationshipData] = None
    links: Optional[RelationshipLinks] = None


class RelationshipToMany(ASCModel):
    """To-many relationship as returned by the API."""

    data: Optional[List[RelationshipData]] = None
    links: Optional[RelationshipLinks] = None
    meta: Optional[PagingInformation] = None


def linkage(resource_type: str, resource_id: str) -> ToOneRelationship:
    """Build a to-one linkage ``{"data": {"type": ..., "id": ...}}``."""
    return ToOneRelationship(data=RelationshipData(id=resource_id, type=resource_type))


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class Resource(ASCModel):
    """
    A resource of any type.

    Used for ``included`` arrays that mix resource kinds; ``type`` tells
    which kind a given entry is.
    """

    id: str
    type: str
    attributes: Optional[Dict[str, Any]] = None
    relationships: Optional[Dict[str, Any]] = None
    links: Optional[ResourceLinks] = None


class Document(ASCModel):
    """Base for response documents carrying an optional ``included`` array."""

    included: Optional[List[Resource]] = None

    def included_of_type(self, resource_type: str) -> List[Resource]:
        """Return the included resources of one type."""
        return [item for item in self.included or [] if item.type == resource_type]


class LinkagesResponse(ASCModel):
    """Relationship endpoint reply listing linked resource identities."""

    data: List[RelationshipData]
    links: PagedDocumentLinks
    meta: Optional[PagingInformation] = None


class ErrorItem(ASCModel):
    """A single JSON:API error object."""

    id: Optional[str] = None
    status: Optional[str] = None
    code: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    source: Optional[Dict[str, Any]] = None


class ErrorResponse(ASCModel):
    """JSON:API error document ``{"errors": [...]}``."""

    errors: List[ErrorItem] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Assets and uploads
# ---------------------------------------------------------------------------


class ImageAsset(ASCModel):
    template_url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class AppMediaStateError(ASCModel):
    code: Optional[str] = None
    description: Optional[str] = None


class AppMediaAssetState(ASCModel):
    errors: Optional[List[AppMediaStateError]] = None
    state: Optional[str] = None
    warnings: Optional[List[AppMediaStateError]] = None


class UploadOperationHeader(ASCModel):
    name: Optional[str] = None
    value: Optional[str] = None


class UploadOperation(ASCModel):
    """One part of a signed asset upload."""

    method: Optional[str] = None
    url: Optional[str] = None
    length: Optional[int] = None
    offset: Optional[int] = None
    request_headers: Optional[List[UploadOperationHeader]] = None

"""
App info localizations: localized app-level metadata (name, subtitle,
privacy policy).
"""

from typing import List, Literal, Optional, Tuple

from .envelope import build_request_body
from .models import (
    ASCModel,
    Document,
    DocumentLinks,
    PagedDocumentLinks,
    PagingInformation,
    RelationshipToOne,
    ResourceLinks,
    ToOneRelationship,
    linkage,
)
from .query import QueryOptions, param
from .transport import Response, Service


class AppInfoLocalizationAttributes(ASCModel):
    locale: Optional[str] = None
    name: Optional[str] = None
    privacy_choices_url: Optional[str] = None
    privacy_policy_text: Optional[str] = None
    privacy_policy_url: Optional[str] = None
    subtitle: Optional[str] = None


class AppInfoLocalizationRelationships(ASCModel):
    app_info: Optional[RelationshipToOne] = None


class AppInfoLocalization(ASCModel):
    id: str
    type: Literal["appInfoLocalizations"] = "appInfoLocalizations"
    attributes: Optional[AppInfoLocalizationAttributes] = None
    relationships: Optional[AppInfoLocalizationRelationships] = None
    links: Optional[ResourceLinks] = None


class AppInfoLocalizationCreateRequestAttributes(ASCModel):
    locale: str
    name: Optional[str] = None
    privacy_choices_url: Optional[str] = None
    privacy_policy_text: Optional[str] = None
    privacy_policy_url: Optional[str] = None
    subtitle: Optional[str] = None


class AppInfoLocalizationCreateRequestRelationships(ASCModel):
    app_info: ToOneRelationship


class AppInfoLocalizationCreateRequest(ASCModel):
    type: Literal["appInfoLocalizations"] = "appInfoLocalizations"
    attributes: AppInfoLocalizationCreateRequestAttributes
    relationships: AppInfoLocalizationCreateRequestRelationships

    @classmethod
    def for_app_info(
        cls, app_info_id: str, locale: str, **attributes
    ) -> "AppInfoLocalizationCreateRequest":
        """Build a create request for ``locale`` under an app info."""
        return cls(
            attributes=AppInfoLocalizationCreateRequestAttributes(locale=locale, **attributes),
            relationships=AppInfoLocalizationCreateRequestRelationships(
                app_info=linkage("appInfos", app_info_id)
            ),
        )


class AppInfoLocalizationUpdateRequestAttributes(ASCModel):
    name: Optional[str] = None
    privacy_choices_url: Optional[str] = None
    privacy_policy_text: Optional[str] = None
    privacy_policy_url: Optional[str] = None
    subtitle: Optional[str] = None


class AppInfoLocalizationUpdateRequest(ASCModel):
    id: str
    type: Literal["appInfoLocalizations"] = "appInfoLocalizations"
    attributes: Optional[AppInfoLocalizationUpdateRequestAttributes] = None


class AppInfoLocalizationResponse(Document):
    data: AppInfoLocalization
    links: DocumentLinks


class AppInfoLocalizationsResponse(Document):
    data: List[AppInfoLocalization]
    links: PagedDocumentLinks
    meta: Optional[PagingInformation] = None

    def for_locale(self, locale: str) -> Optional[AppInfoLocalization]:
        """Return the localization for ``locale``, if listed."""
        for localization in self.data:
            if localization.attributes and localization.attributes.locale == locale:
                return localization
        return None


class ListAppInfoLocalizationsForAppInfoQuery(QueryOptions):
    fields_app_infos: Optional[List[str]] = param("fields[appInfos]")
    fields_app_info_localizations: Optional[List[str]] = param("fields[appInfoLocalizations]")
    limit: Optional[int] = param("limit")
    include: Optional[List[str]] = param("include")
    filter_locale: Optional[List[str]] = param("filter[locale]")
    cursor: Optional[str] = param("cursor")


class GetAppInfoLocalizationQuery(QueryOptions):
    fields_app_info_localizations: Optional[List[str]] = param("fields[appInfoLocalizations]")
    include: Optional[List[str]] = param("include")


class AppInfoLocalizationsService(Service):
    def list_app_info_localizations_for_app_info(
        self,
        app_info_id: str,
        query: Optional[ListAppInfoLocalizationsForAppInfoQuery] = None,
    ) -> Tuple[AppInfoLocalizationsResponse, Response]:
        """Get a list of localized, app-level information for an app."""
        return self._transport.get(
            f"v1/appInfos/{app_info_id}/appInfoLocalizations",
            query,
            AppInfoLocalizationsResponse,
        )

    def get_app_info_localization(
        self, localization_id: str, query: Optional[GetAppInfoLocalizationQuery] = None
    ) -> Tuple[AppInfoLocalizationResponse, Response]:
        """Read localized app-level information."""
        return self._transport.get(
            f"v1/appInfoLocalizations/{localization_id}",
            query,
            AppInfoLocalizationResponse,
        )

    def create_app_info_localization(
        self, body: AppInfoLocalizationCreateRequest
    ) -> Tuple[AppInfoLocalizationResponse, Response]:
        """Add app-level localized information for a new locale."""
        return self._transport.post(
            "v1/appInfoLocalizations",
            build_request_body(body),
            AppInfoLocalizationResponse,
        )

    def update_app_info_localization(
        self, localization_id: str, body: AppInfoLocalizationUpdateRequest
    ) -> Tuple[AppInfoLocalizationResponse, Response]:
        """Modify localized app-level information for a particular language."""
        return self._transport.patch(
            f"v1/appInfoLocalizations/{localization_id}",
            build_request_body(body),
            AppInfoLocalizationResponse,
        )

    def delete_app_info_localization(self, localization_id: str) -> Response:
        return self._transport.delete(f"v1/appInfoLocalizations/{localization_id}")

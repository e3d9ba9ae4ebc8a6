"""
Apps, app infos and in-app purchases.

https://developer.apple.com/documentation/appstoreconnectapi/apps
"""

from enum import Enum
from typing import List, Literal, Optional, Tuple

from .envelope import build_request_body
from .models import (
    ASCModel,
    Document,
    DocumentLinks,
    PagedDocumentLinks,
    PagingInformation,
    RelationshipData,
    RelationshipToMany,
    RelationshipToOne,
    ResourceLinks,
    ToManyRelationship,
)
from .query import QueryOptions, param
from .transport import Response, Service


class Platform(str, Enum):
    IOS = "IOS"
    MAC_OS = "MAC_OS"
    TV_OS = "TV_OS"
    VISION_OS = "VISION_OS"


# ===== MODELS =====


class AppAttributes(ASCModel):
    available_in_new_territories: Optional[bool] = None
    bundle_id: Optional[str] = None
    content_rights_declaration: Optional[str] = None
    is_or_ever_was_made_for_kids: Optional[bool] = None
    name: Optional[str] = None
    primary_locale: Optional[str] = None
    sku: Optional[str] = None


class AppRelationships(ASCModel):
    app_infos: Optional[RelationshipToMany] = None
    app_store_versions: Optional[RelationshipToMany] = None
    available_territories: Optional[RelationshipToMany] = None
    beta_app_localizations: Optional[RelationshipToMany] = None
    beta_app_review_detail: Optional[RelationshipToOne] = None
    beta_groups: Optional[RelationshipToMany] = None
    beta_license_agreement: Optional[RelationshipToOne] = None
    builds: Optional[RelationshipToMany] = None
    end_user_license_agreement: Optional[RelationshipToOne] = None
    game_center_enabled_versions: Optional[RelationshipToMany] = None
    in_app_purchases: Optional[RelationshipToMany] = None
    pre_order: Optional[RelationshipToOne] = None
    pre_release_versions: Optional[RelationshipToMany] = None
    prices: Optional[RelationshipToMany] = None
    subscription_groups: Optional[RelationshipToMany] = None


class App(ASCModel):
    id: str
    type: Literal["apps"] = "apps"
    attributes: Optional[AppAttributes] = None
    relationships: Optional[AppRelationships] = None
    links: Optional[ResourceLinks] = None


class AppUpdateRequestAttributes(ASCModel):
    available_in_new_territories: Optional[bool] = None
    bundle_id: Optional[str] = None
    content_rights_declaration: Optional[str] = None
    primary_locale: Optional[str] = None


class AppUpdateRequestRelationships(ASCModel):
    available_territories: Optional[ToManyRelationship] = None
    prices: Optional[ToManyRelationship] = None


class AppUpdateRequest(ASCModel):
    id: str
    type: Literal["apps"] = "apps"
    attributes: Optional[AppUpdateRequestAttributes] = None
    relationships: Optional[AppUpdateRequestRelationships] = None


class AppResponse(Document):
    data: App
    links: DocumentLinks


class AppsResponse(Document):
    data: List[App]
    links: PagedDocumentLinks
    meta: Optional[PagingInformation] = None


class AppInfoAttributes(ASCModel):
    app_store_age_rating: Optional[str] = None
    app_store_state: Optional[str] = None
    brazil_age_rating: Optional[str] = None
    kids_age_band: Optional[str] = None
    state: Optional[str] = None


class AppInfoRelationships(ASCModel):
    app: Optional[RelationshipToOne] = None
    app_info_localizations: Optional[RelationshipToMany] = None
    primary_category: Optional[RelationshipToOne] = None
    secondary_category: Optional[RelationshipToOne] = None


class AppInfo(ASCModel):
    id: str
    type: Literal["appInfos"] = "appInfos"
    attributes: Optional[AppInfoAttributes] = None
    relationships: Optional[AppInfoRelationships] = None
    links: Optional[ResourceLinks] = None


class AppInfosResponse(Document):
    data: List[AppInfo]
    links: PagedDocumentLinks
    meta: Optional[PagingInformation] = None


class InAppPurchaseAttributes(ASCModel):
    in_app_purchase_type: Optional[str] = None
    product_id: Optional[str] = None
    reference_name: Optional[str] = None
    state: Optional[str] = None


class InAppPurchaseRelationships(ASCModel):
    apps: Optional[RelationshipToMany] = None


class InAppPurchase(ASCModel):
    id: str
    type: Literal["inAppPurchases"] = "inAppPurchases"
    attributes: Optional[InAppPurchaseAttributes] = None
    relationships: Optional[InAppPurchaseRelationships] = None
    links: Optional[ResourceLinks] = None


class InAppPurchaseResponse(Document):
    data: InAppPurchase
    links: DocumentLinks


class InAppPurchasesResponse(Document):
    data: List[InAppPurchase]
    links: PagedDocumentLinks
    meta: Optional[PagingInformation] = None


# ===== QUERY OPTIONS =====


class ListAppsQuery(QueryOptions):
    fields_apps: Optional[List[str]] = param("fields[apps]")
    fields_beta_license_agreements: Optional[List[str]] = param("fields[betaLicenseAgreements]")
    fields_pre_release_versions: Optional[List[str]] = param("fields[preReleaseVersions]")
    fields_beta_app_review_details: Optional[List[str]] = param("fields[betaAppReviewDetails]")
    fields_beta_app_localizations: Optional[List[str]] = param("fields[betaAppLocalizations]")
    fields_builds: Optional[List[str]] = param("fields[builds]")
    fields_beta_groups: Optional[List[str]] = param("fields[betaGroups]")
    fields_end_user_license_agreements: Optional[List[str]] = param("fields[endUserLicenseAgreements]")
    fields_app_store_versions: Optional[List[str]] = param("fields[appStoreVersions]")
    fields_territories: Optional[List[str]] = param("fields[territories]")
    fields_app_prices: Optional[List[str]] = param("fields[appPrices]")
    fields_app_pre_orders: Optional[List[str]] = param("fields[appPreOrders]")
    fields_app_infos: Optional[List[str]] = param("fields[appInfos]")
    fields_perf_power_metrics: Optional[List[str]] = param("fields[perfPowerMetrics]")
    fields_in_app_purchases: Optional[List[str]] = param("fields[inAppPurchases]")
    filter_bundle_id: Optional[List[str]] = param("filter[bundleId]")
    filter_id: Optional[List[str]] = param("filter[id]")
    filter_name: Optional[List[str]] = param("filter[name]")
    filter_sku: Optional[List[str]] = param("filter[sku]")
    filter_app_store_versions: Optional[List[str]] = param("filter[appStoreVersions]")
    filter_app_store_versions_platform: Optional[List[Platform]] = param("filter[appStoreVersionsPlatform]")
    filter_app_store_versions_app_store_state: Optional[List[str]] = param(
        "filter[appStoreVersionsAppStoreState]"
    )
    filter_game_center_enabled_versions: Optional[List[str]] = param("filter[gameCenterEnabledVersions]")
    include: Optional[List[str]] = param("include")
    limit: Optional[int] = param("limit")
    limit_pre_release_versions: Optional[int] = param("limit[preReleaseVersions]")
    limit_builds: Optional[int] = param("limit[builds]")
    limit_beta_groups: Optional[int] = param("limit[betaGroups]")
    limit_beta_app_localizations: Optional[int] = param("limit[betaAppLocalizations]")
    limit_prices: Optional[int] = param("limit[prices]")
    limit_available_territories: Optional[int] = param("limit[availableTerritories]")
    limit_app_store_versions: Optional[int] = param("limit[appStoreVersions]")
    limit_app_infos: Optional[int] = param("limit[appInfos]")
    limit_game_center_enabled_versions: Optional[int] = param("limit[gameCenterEnabledVersions]")
    limit_in_app_purchases: Optional[int] = param("limit[inAppPurchases]")
    sort: Optional[List[str]] = param("sort")
    exists_game_center_enabled_versions: Optional[List[str]] = param(
        "exists[gameCenterEnabledVersions]"
    )
    cursor: Optional[str] = param("cursor")


class GetAppQuery(QueryOptions):
    fields_apps: Optional[List[str]] = param("fields[apps]")
    fields_beta_license_agreements: Optional[List[str]] = param("fields[betaLicenseAgreements]")
    fields_pre_release_versions: Optional[List[str]] = param("fields[preReleaseVersions]")
    fields_beta_app_review_details: Optional[List[str]] = param("fields[betaAppReviewDetails]")
    fields_beta_app_localizations: Optional[List[str]] = param("fields[betaAppLocalizations]")
    fields_builds: Optional[List[str]] = param("fields[builds]")
    fields_beta_groups: Optional[List[str]] = param("fields[betaGroups]")
    fields_end_user_license_agreements: Optional[List[str]] = param("fields[endUserLicenseAgreements]")
    fields_app_store_versions: Optional[List[str]] = param("fields[appStoreVersions]")
    fields_territories: Optional[List[str]] = param("fields[territories]")
    fields_app_prices: Optional[List[str]] = param("fields[appPrices]")
    fields_app_pre_orders: Optional[List[str]] = param("fields[appPreOrders]")
    fields_app_infos: Optional[List[str]] = param("fields[appInfos]")
    fields_perf_power_metrics: Optional[List[str]] = param("fields[perfPowerMetrics]")
    fields_game_center_enabled_versions: Optional[List[str]] = param("fields[gameCenterEnabledVersions]")
    fields_in_app_purchases: Optional[List[str]] = param("fields[inAppPurchases]")
    include: Optional[List[str]] = param("include")
    limit_pre_release_versions: Optional[int] = param("limit[preReleaseVersions]")
    limit_builds: Optional[int] = param("limit[builds]")
    limit_beta_groups: Optional[int] = param("limit[betaGroups]")
    limit_beta_app_localizations: Optional[int] = param("limit[betaAppLocalizations]")
    limit_prices: Optional[int] = param("limit[prices]")
    limit_available_territories: Optional[int] = param("limit[availableTerritories]")
    limit_app_store_versions: Optional[int] = param("limit[appStoreVersions]")
    limit_app_infos: Optional[int] = param("limit[appInfos]")
    limit_game_center_enabled_versions: Optional[int] = param("limit[gameCenterEnabledVersions]")
    limit_in_app_purchases: Optional[int] = param("limit[inAppPurchases]")


class ListAppInfosForAppQuery(QueryOptions):
    fields_app_infos: Optional[List[str]] = param("fields[appInfos]")
    fields_app_info_localizations: Optional[List[str]] = param("fields[appInfoLocalizations]")
    include: Optional[List[str]] = param("include")
    limit: Optional[int] = param("limit")
    limit_app_info_localizations: Optional[int] = param("limit[appInfoLocalizations]")
    cursor: Optional[str] = param("cursor")


class ListInAppPurchasesQuery(QueryOptions):
    fields_apps: Optional[List[str]] = param("fields[apps]")
    fields_in_app_purchases: Optional[List[str]] = param("fields[inAppPurchases]")
    filter_can_be_submitted: Optional[List[str]] = param("filter[canBeSubmitted]")
    filter_in_app_purchase_type: Optional[List[str]] = param("filter[inAppPurchaseType]")
    limit: Optional[int] = param("limit")
    include: Optional[List[str]] = param("include")
    sort: Optional[List[str]] = param("sort")
    cursor: Optional[str] = param("cursor")


class GetInAppPurchaseQuery(QueryOptions):
    fields_in_app_purchases: Optional[List[str]] = param("fields[inAppPurchases]")
    include: Optional[List[str]] = param("include")
    limit_apps: Optional[int] = param("limit[apps]")


# ===== SERVICE =====


class AppsService(Service):
    """Apps and their directly related resources."""

    def list_apps(
        self, query: Optional[ListAppsQuery] = None
    ) -> Tuple[AppsResponse, Response]:
        """Find and list apps added in App Store Connect."""
        return self._transport.get("v1/apps", query, AppsResponse)

    def get_app(
        self, app_id: str, query: Optional[GetAppQuery] = None
    ) -> Tuple[AppResponse, Response]:
        """Get information about a specific app."""
        return self._transport.get(f"v1/apps/{app_id}", query, AppResponse)

    def update_app(
        self, app_id: str, body: AppUpdateRequest
    ) -> Tuple[AppResponse, Response]:
        """Update app information including bundle ID, primary locale and availability."""
        return self._transport.patch(
            f"v1/apps/{app_id}", build_request_body(body), AppResponse
        )

    def remove_beta_testers_from_app(
        self, app_id: str, linkages: List[RelationshipData]
    ) -> Response:
        """Remove beta testers' access to test any builds of a specific app."""
        return self._transport.delete(
            f"v1/apps/{app_id}/relationships/betaTesters", build_request_body(linkages)
        )

    def list_app_infos_for_app(
        self, app_id: str, query: Optional[ListAppInfosForAppQuery] = None
    ) -> Tuple[AppInfosResponse, Response]:
        """Get the app info objects (localization holders) for an app."""
        return self._transport.get(f"v1/apps/{app_id}/appInfos", query, AppInfosResponse)

    def list_in_app_purchases_for_app(
        self, app_id: str, query: Optional[ListInAppPurchasesQuery] = None
    ) -> Tuple[InAppPurchasesResponse, Response]:
        """List the in-app purchases that are available for an app."""
        return self._transport.get(
            f"v1/apps/{app_id}/inAppPurchases", query, InAppPurchasesResponse
        )

    def get_in_app_purchase(
        self, in_app_purchase_id: str, query: Optional[GetInAppPurchaseQuery] = None
    ) -> Tuple[InAppPurchaseResponse, Response]:
        return self._transport.get(
            f"v1/inAppPurchases/{in_app_purchase_id}", query, InAppPurchaseResponse
        )

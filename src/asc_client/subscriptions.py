"""
Auto-renewable subscriptions: subscription groups, subscriptions, prices and
App Store review screenshots.

https://developer.apple.com/documentation/appstoreconnectapi/app_store/auto-renewable_subscriptions
"""

import logging
from datetime import date
from enum import Enum
from pathlib import Path
from typing import List, Literal, Optional, Sequence, Tuple, Union

from pydantic import Field

from .envelope import build_request_body, local_id
from .exceptions import UploadError
from .models import (
    ASCModel,
    AppMediaAssetState,
    Document,
    DocumentLinks,
    ImageAsset,
    PagedDocumentLinks,
    PagingInformation,
    RelationshipData,
    RelationshipToMany,
    RelationshipToOne,
    ResourceLinks,
    ToManyRelationship,
    ToOneRelationship,
    UploadOperation,
    linkage,
)
from .query import QueryOptions, param
from .transport import Response, Service
from .uploads import perform_upload_operations, read_upload_file

logger = logging.getLogger(__name__)


class SubscriptionPeriod(str, Enum):
    ONE_WEEK = "ONE_WEEK"
    ONE_MONTH = "ONE_MONTH"
    TWO_MONTHS = "TWO_MONTHS"
    THREE_MONTHS = "THREE_MONTHS"
    SIX_MONTHS = "SIX_MONTHS"
    ONE_YEAR = "ONE_YEAR"


# ===== SUBSCRIPTION GROUPS =====


class SubscriptionGroupAttributes(ASCModel):
    reference_name: Optional[str] = None


class SubscriptionGroupRelationships(ASCModel):
    subscriptions: Optional[RelationshipToMany] = None
    subscription_group_localizations: Optional[RelationshipToMany] = None


class SubscriptionGroup(ASCModel):
    id: str
    type: Literal["subscriptionGroups"] = "subscriptionGroups"
    attributes: Optional[SubscriptionGroupAttributes] = None
    relationships: Optional[SubscriptionGroupRelationships] = None
    links: Optional[ResourceLinks] = None


class SubscriptionGroupCreateRequestAttributes(ASCModel):
    reference_name: str


class SubscriptionGroupCreateRequestRelationships(ASCModel):
    app: ToOneRelationship


class SubscriptionGroupCreateRequest(ASCModel):
    type: Literal["subscriptionGroups"] = "subscriptionGroups"
    attributes: SubscriptionGroupCreateRequestAttributes
    relationships: SubscriptionGroupCreateRequestRelationships


class SubscriptionGroupUpdateRequest(ASCModel):
    id: str
    type: Literal["subscriptionGroups"] = "subscriptionGroups"
    attributes: Optional[SubscriptionGroupAttributes] = None


class SubscriptionGroupResponse(Document):
    data: SubscriptionGroup
    links: DocumentLinks


class SubscriptionGroupsResponse(Document):
    data: List[SubscriptionGroup]
    links: PagedDocumentLinks
    meta: Optional[PagingInformation] = None


# ===== SUBSCRIPTIONS =====


class SubscriptionAttributes(ASCModel):
    name: Optional[str] = None
    product_id: Optional[str] = None
    family_sharable: Optional[bool] = None
    state: Optional[str] = None
    subscription_period: Optional[Union[SubscriptionPeriod, str]] = Field(
        default=None, union_mode="left_to_right"
    )
    review_note: Optional[str] = None
    group_level: Optional[int] = None


class SubscriptionRelationships(ASCModel):
    group: Optional[RelationshipToOne] = None
    prices: Optional[RelationshipToMany] = None
    subscription_localizations: Optional[RelationshipToMany] = None
    app_store_review_screenshot: Optional[RelationshipToOne] = None
    introductory_offers: Optional[RelationshipToMany] = None
    promotional_offers: Optional[RelationshipToMany] = None


class Subscription(ASCModel):
    id: str
    type: Literal["subscriptions"] = "subscriptions"
    attributes: Optional[SubscriptionAttributes] = None
    relationships: Optional[SubscriptionRelationships] = None
    links: Optional[ResourceLinks] = None


class SubscriptionCreateRequestAttributes(ASCModel):
    name: str
    product_id: str
    family_sharable: Optional[bool] = None
    review_note: Optional[str] = None
    subscription_period: Optional[SubscriptionPeriod] = None
    group_level: Optional[int] = None


class SubscriptionCreateRequestRelationships(ASCModel):
    group: ToOneRelationship


class SubscriptionCreateRequest(ASCModel):
    type: Literal["subscriptions"] = "subscriptions"
    attributes: SubscriptionCreateRequestAttributes
    relationships: SubscriptionCreateRequestRelationships


class SubscriptionUpdateRequestAttributes(ASCModel):
    name: Optional[str] = None
    family_sharable: Optional[bool] = None
    review_note: Optional[str] = None
    subscription_period: Optional[SubscriptionPeriod] = None
    group_level: Optional[int] = None


class SubscriptionUpdateRequestRelationships(ASCModel):
    prices: Optional[ToManyRelationship] = None


class SubscriptionUpdateRequest(ASCModel):
    id: str
    type: Literal["subscriptions"] = "subscriptions"
    attributes: Optional[SubscriptionUpdateRequestAttributes] = None
    relationships: Optional[SubscriptionUpdateRequestRelationships] = None


class SubscriptionResponse(Document):
    data: Subscription
    links: DocumentLinks


class SubscriptionsResponse(Document):
    data: List[Subscription]
    links: PagedDocumentLinks
    meta: Optional[PagingInformation] = None


# ===== PRICES =====


class SubscriptionPriceAttributes(ASCModel):
    start_date: Optional[date] = None
    preserved: Optional[bool] = None


class SubscriptionPriceRelationships(ASCModel):
    subscription_price_point: Optional[RelationshipToOne] = None
    territory: Optional[RelationshipToOne] = None


class SubscriptionPrice(ASCModel):
    id: str
    type: Literal["subscriptionPrices"] = "subscriptionPrices"
    attributes: Optional[SubscriptionPriceAttributes] = None
    relationships: Optional[SubscriptionPriceRelationships] = None
    links: Optional[ResourceLinks] = None


class SubscriptionPriceCreateAttributes(ASCModel):
    start_date: Optional[date] = None
    preserve_current_price: Optional[bool] = None


class SubscriptionPriceCreateRelationships(ASCModel):
    subscription: Optional[ToOneRelationship] = None
    subscription_price_point: ToOneRelationship
    territory: Optional[ToOneRelationship] = None


class SubscriptionPriceCreateRequest(ASCModel):
    type: Literal["subscriptionPrices"] = "subscriptionPrices"
    attributes: Optional[SubscriptionPriceCreateAttributes] = None
    relationships: SubscriptionPriceCreateRelationships


class SubscriptionPriceInlineCreate(SubscriptionPriceCreateRequest):
    """A price created inside a subscription update; ``id`` is a placeholder."""

    id: str


class SubscriptionPriceResponse(Document):
    data: SubscriptionPrice
    links: DocumentLinks


class SubscriptionPricesResponse(Document):
    data: List[SubscriptionPrice]
    links: PagedDocumentLinks
    meta: Optional[PagingInformation] = None


class SubscriptionPricePointAttributes(ASCModel):
    # Decimal strings, kept as sent
    customer_price: Optional[str] = None
    proceeds: Optional[str] = None
    proceeds_year2: Optional[str] = None


class SubscriptionPricePointRelationships(ASCModel):
    territory: Optional[RelationshipToOne] = None


class SubscriptionPricePoint(ASCModel):
    id: str
    type: Literal["subscriptionPricePoints"] = "subscriptionPricePoints"
    attributes: Optional[SubscriptionPricePointAttributes] = None
    relationships: Optional[SubscriptionPricePointRelationships] = None
    links: Optional[ResourceLinks] = None


class SubscriptionPricePointsResponse(Document):
    data: List[SubscriptionPricePoint]
    links: PagedDocumentLinks
    meta: Optional[PagingInformation] = None


# ===== REVIEW SCREENSHOTS =====


class SubscriptionReviewScreenshotAttributes(ASCModel):
    asset_delivery_state: Optional[AppMediaAssetState] = None
    asset_token: Optional[str] = None
    asset_type: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    image_asset: Optional[ImageAsset] = None
    source_file_checksum: Optional[str] = None
    upload_operations: Optional[List[UploadOperation]] = None


class SubscriptionReviewScreenshotRelationships(ASCModel):
    subscription: Optional[RelationshipToOne] = None


class SubscriptionReviewScreenshot(ASCModel):
    id: str
    type: Literal["subscriptionAppStoreReviewScreenshots"] = "subscriptionAppStoreReviewScreenshots"
    attributes: Optional[SubscriptionReviewScreenshotAttributes] = None
    relationships: Optional[SubscriptionReviewScreenshotRelationships] = None
    links: Optional[ResourceLinks] = None


class SubscriptionReviewScreenshotCreateAttributes(ASCModel):
    file_name: str
    file_size: int


class SubscriptionReviewScreenshotCreateRelationships(ASCModel):
    subscription: ToOneRelationship


class SubscriptionReviewScreenshotCreateRequest(ASCModel):
    type: Literal["subscriptionAppStoreReviewScreenshots"] = "subscriptionAppStoreReviewScreenshots"
    attributes: SubscriptionReviewScreenshotCreateAttributes
    relationships: SubscriptionReviewScreenshotCreateRelationships


class SubscriptionReviewScreenshotUpdateAttributes(ASCModel):
    source_file_checksum: Optional[str] = None
    uploaded: Optional[bool] = None


class SubscriptionReviewScreenshotUpdateRequest(ASCModel):
    id: str
    type: Literal["subscriptionAppStoreReviewScreenshots"] = "subscriptionAppStoreReviewScreenshots"
    attributes: Optional[SubscriptionReviewScreenshotUpdateAttributes] = None


class SubscriptionReviewScreenshotResponse(Document):
    data: SubscriptionReviewScreenshot
    links: DocumentLinks


# ===== QUERY OPTIONS =====


class ListSubscriptionGroupsForAppQuery(QueryOptions):
    fields_subscription_groups: Optional[List[str]] = param("fields[subscriptionGroups]")
    fields_subscriptions: Optional[List[str]] = param("fields[subscriptions]")
    filter_reference_name: Optional[List[str]] = param("filter[referenceName]")
    filter_subscriptions_state: Optional[List[str]] = param("filter[subscriptions.state]")
    include: Optional[List[str]] = param("include")
    limit: Optional[int] = param("limit")
    limit_subscriptions: Optional[int] = param("limit[subscriptions]")
    sort: Optional[List[str]] = param("sort")
    cursor: Optional[str] = param("cursor")


class GetSubscriptionGroupQuery(QueryOptions):
    fields_subscription_groups: Optional[List[str]] = param("fields[subscriptionGroups]")
    fields_subscriptions: Optional[List[str]] = param("fields[subscriptions]")
    include: Optional[List[str]] = param("include")
    limit_subscriptions: Optional[int] = param("limit[subscriptions]")


class ListSubscriptionsForGroupQuery(QueryOptions):
    fields_subscriptions: Optional[List[str]] = param("fields[subscriptions]")
    filter_name: Optional[List[str]] = param("filter[name]")
    filter_product_id: Optional[List[str]] = param("filter[productId]")
    filter_state: Optional[List[str]] = param("filter[state]")
    include: Optional[List[str]] = param("include")
    limit: Optional[int] = param("limit")
    limit_prices: Optional[int] = param("limit[prices]")
    sort: Optional[List[str]] = param("sort")
    cursor: Optional[str] = param("cursor")


class GetSubscriptionQuery(QueryOptions):
    fields_subscriptions: Optional[List[str]] = param("fields[subscriptions]")
    fields_subscription_prices: Optional[List[str]] = param("fields[subscriptionPrices]")
    include: Optional[List[str]] = param("include")
    limit_prices: Optional[int] = param("limit[prices]")


class ListSubscriptionPricesQuery(QueryOptions):
    fields_subscription_prices: Optional[List[str]] = param("fields[subscriptionPrices]")
    fields_subscription_price_points: Optional[List[str]] = param("fields[subscriptionPricePoints]")
    fields_territories: Optional[List[str]] = param("fields[territories]")
    filter_subscription_price_point: Optional[List[str]] = param("filter[subscriptionPricePoint]")
    filter_territory: Optional[List[str]] = param("filter[territory]")
    include: Optional[List[str]] = param("include")
    limit: Optional[int] = param("limit")
    cursor: Optional[str] = param("cursor")


class ListSubscriptionPricePointsQuery(QueryOptions):
    fields_subscription_price_points: Optional[List[str]] = param("fields[subscriptionPricePoints]")
    fields_territories: Optional[List[str]] = param("fields[territories]")
    filter_territory: Optional[List[str]] = param("filter[territory]")
    include: Optional[List[str]] = param("include")
    limit: Optional[int] = param("limit")
    cursor: Optional[str] = param("cursor")


class GetSubscriptionReviewScreenshotQuery(QueryOptions):
    fields_subscription_app_store_review_screenshots: Optional[List[str]] = param(
        "fields[subscriptionAppStoreReviewScreenshots]"
    )
    include: Optional[List[str]] = param("include")


# ===== SERVICE =====


class SubscriptionsService(Service):
    """Methods related to auto-renewable subscriptions."""

    # Subscription groups

    def create_subscription_group(
        self, app_id: str, reference_name: str
    ) -> Tuple[SubscriptionGroupResponse, Response]:
        """Create a subscription group for an app."""
        body = SubscriptionGroupCreateRequest(
            attributes=SubscriptionGroupCreateRequestAttributes(reference_name=reference_name),
            relationships=SubscriptionGroupCreateRequestRelationships(
                app=linkage("apps", app_id)
            ),
        )
        return self._transport.post(
            "v1/subscriptionGroups", build_request_body(body), SubscriptionGroupResponse
        )

    def get_subscription_group(
        self, group_id: str, query: Optional[GetSubscriptionGroupQuery] = None
    ) -> Tuple[SubscriptionGroupResponse, Response]:
        return self._transport.get(
            f"v1/subscriptionGroups/{group_id}", query, SubscriptionGroupResponse
        )

    def update_subscription_group(
        self, group_id: str, reference_name: str
    ) -> Tuple[SubscriptionGroupResponse, Response]:
        """Rename a subscription group."""
        body = SubscriptionGroupUpdateRequest(
            id=group_id,
            attributes=SubscriptionGroupAttributes(reference_name=reference_name),
        )
        return self._transport.patch(
            f"v1/subscriptionGroups/{group_id}",
            build_request_body(body),
            SubscriptionGroupResponse,
        )

    def delete_subscription_group(self, group_id: str) -> Response:
        return self._transport.delete(f"v1/subscriptionGroups/{group_id}")

    def list_subscription_groups_for_app(
        self, app_id: str, query: Optional[ListSubscriptionGroupsForAppQuery] = None
    ) -> Tuple[SubscriptionGroupsResponse, Response]:
        return self._transport.get(
            f"v1/apps/{app_id}/subscriptionGroups", query, SubscriptionGroupsResponse
        )

    # Subscriptions

    def create_subscription(
        self, body: SubscriptionCreateRequest
    ) -> Tuple[SubscriptionResponse, Response]:
        """Create an auto-renewable subscription inside a group."""
        return self._transport.post(
            "v1/subscriptions", build_request_body(body), SubscriptionResponse
        )

    def get_subscription(
        self, subscription_id: str, query: Optional[GetSubscriptionQuery] = None
    ) -> Tuple[SubscriptionResponse, Response]:
        return self._transport.get(
            f"v1/subscriptions/{subscription_id}", query, SubscriptionResponse
        )

    def update_subscription(
        self,
        subscription_id: str,
        body: SubscriptionUpdateRequest,
        included: Optional[Sequence[SubscriptionPriceInlineCreate]] = None,
    ) -> Tuple[SubscriptionResponse, Response]:
        """
        Modify a subscription.

        Prices passed in ``included`` are created in the same request; each one
        must be referenced by its placeholder id from ``body.relationships.prices``.
        """
        return self._transport.patch(
            f"v1/subscriptions/{subscription_id}",
            build_request_body(body, included),
            SubscriptionResponse,
        )

    def delete_subscription(self, subscription_id: str) -> Response:
        return self._transport.delete(f"v1/subscriptions/{subscription_id}")

    def list_subscriptions_for_group(
        self, group_id: str, query: Optional[ListSubscriptionsForGroupQuery] = None
    ) -> Tuple[SubscriptionsResponse, Response]:
        return self._transport.get(
            f"v1/subscriptionGroups/{group_id}/subscriptions", query, SubscriptionsResponse
        )

    def set_subscription_price(
        self,
        subscription_id: str,
        price_point_id: str,
        territory_id: Optional[str] = None,
        start_date: Optional[date] = None,
        preserve_current_price: Optional[bool] = None,
    ) -> Tuple[SubscriptionResponse, Response]:
        """
        Schedule a new price for a subscription in a single compound write.

        The price is sent in ``included`` under a placeholder id that the
        subscription's ``prices`` relationship points to.
        """
        placeholder = local_id("new-price-1")
        attributes = None
        if start_date is not None or preserve_current_price is not None:
            attributes = SubscriptionPriceCreateAttributes(
                start_date=start_date, preserve_current_price=preserve_current_price
            )

        price = SubscriptionPriceInlineCreate(
            id=placeholder,
            attributes=attributes,
            relationships=SubscriptionPriceCreateRelationships(
                subscription=linkage("subscriptions", subscription_id),
                subscription_price_point=linkage("subscriptionPricePoints", price_point_id),
                territory=linkage("territories", territory_id) if territory_id else None,
            ),
        )
        body = SubscriptionUpdateRequest(
            id=subscription_id,
            relationships=SubscriptionUpdateRequestRelationships(
                prices=ToManyRelationship(
                    data=[RelationshipData(id=placeholder, type="subscriptionPrices")]
                )
            ),
        )

        logger.info(
            f"Setting price point {price_point_id} for subscription {subscription_id}"
        )
        return self.update_subscription(subscription_id, body, included=[price])

    # Prices

    def list_subscription_prices(
        self, subscription_id: str, query: Optional[ListSubscriptionPricesQuery] = None
    ) -> Tuple[SubscriptionPricesResponse, Response]:
        return self._transport.get(
            f"v1/subscriptions/{subscription_id}/prices", query, SubscriptionPricesResponse
        )

    def create_subscription_price(
        self, body: SubscriptionPriceCreateRequest
    ) -> Tuple[SubscriptionPriceResponse, Response]:
        return self._transport.post(
            "v1/subscriptionPrices", build_request_body(body), SubscriptionPriceResponse
        )

    def list_subscription_price_points(
        self,
        subscription_id: str,
        query: Optional[ListSubscriptionPricePointsQuery] = None,
    ) -> Tuple[SubscriptionPricePointsResponse, Response]:
        """List the price points available to a subscription, usually per territory."""
        return self._transport.get(
            f"v1/subscriptions/{subscription_id}/pricePoints",
            query,
            SubscriptionPricePointsResponse,
        )

    # Review screenshots

    def create_subscription_review_screenshot(
        self, body: SubscriptionReviewScreenshotCreateRequest
    ) -> Tuple[SubscriptionReviewScreenshotResponse, Response]:
        """Reserve a review screenshot; the reply carries its upload operations."""
        return self._transport.post(
            "v1/subscriptionAppStoreReviewScreenshots",
            build_request_body(body),
            SubscriptionReviewScreenshotResponse,
        )

    def get_subscription_review_screenshot(
        self,
        screenshot_id: str,
        query: Optional[GetSubscriptionReviewScreenshotQuery] = None,
    ) -> Tuple[SubscriptionReviewScreenshotResponse, Response]:
        return self._transport.get(
            f"v1/subscriptionAppStoreReviewScreenshots/{screenshot_id}",
            query,
            SubscriptionReviewScreenshotResponse,
        )

    def get_review_screenshot_for_subscription(
        self,
        subscription_id: str,
        query: Optional[GetSubscriptionReviewScreenshotQuery] = None,
    ) -> Tuple[SubscriptionReviewScreenshotResponse, Response]:
        return self._transport.get(
            f"v1/subscriptions/{subscription_id}/appStoreReviewScreenshot",
            query,
            SubscriptionReviewScreenshotResponse,
        )

    def commit_subscription_review_screenshot(
        self, screenshot_id: str, body: SubscriptionReviewScreenshotUpdateRequest
    ) -> Tuple[SubscriptionReviewScreenshotResponse, Response]:
        return self._transport.patch(
            f"v1/subscriptionAppStoreReviewScreenshots/{screenshot_id}",
            build_request_body(body),
            SubscriptionReviewScreenshotResponse,
        )

    def delete_subscription_review_screenshot(self, screenshot_id: str) -> Response:
        return self._transport.delete(
            f"v1/subscriptionAppStoreReviewScreenshots/{screenshot_id}"
        )

    def upload_review_screenshot(
        self, subscription_id: str, file_path: Union[str, Path]
    ) -> Tuple[SubscriptionReviewScreenshotResponse, Response]:
        """
        Upload the App Store review screenshot of a subscription.

        The file is read first, so a missing file fails before any request.
        A rejected upload operation raises UploadError and the screenshot is
        left uncommitted.
        """
        upload = read_upload_file(file_path)

        logger.info(
            f"Reserving review screenshot {upload.file_name} ({upload.file_size} bytes) "
            f"for subscription {subscription_id}"
        )
        reserved, _ = self.create_subscription_review_screenshot(
            SubscriptionReviewScreenshotCreateRequest(
                attributes=SubscriptionReviewScreenshotCreateAttributes(
                    file_name=upload.file_name, file_size=upload.file_size
                ),
                relationships=SubscriptionReviewScreenshotCreateRelationships(
                    subscription=linkage("subscriptions", subscription_id)
                ),
            )
        )
        if reserved is None:
            raise UploadError(f"Reservation of {upload.file_name} returned no screenshot")

        attributes = reserved.data.attributes or SubscriptionReviewScreenshotAttributes()
        perform_upload_operations(self._transport, attributes.upload_operations, upload.data)

        screenshot_id = reserved.data.id
        logger.info(f"Committing review screenshot {screenshot_id}")
        return self.commit_subscription_review_screenshot(
            screenshot_id,
            SubscriptionReviewScreenshotUpdateRequest(
                id=screenshot_id,
                attributes=SubscriptionReviewScreenshotUpdateAttributes(
                    source_file_checksum=upload.checksum, uploaded=True
                ),
            ),
        )

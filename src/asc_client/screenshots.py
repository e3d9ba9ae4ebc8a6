"""
App screenshot sets and app screenshots.

A screenshot set groups the screenshots of one display type for one App Store
version localization. Screenshots are uploaded with the reserve / upload /
commit sequence implemented by ``ScreenshotsService.upload_app_screenshot``.

https://developer.apple.com/documentation/appstoreconnectapi/app_screenshot_sets
"""

import logging
from enum import Enum
from pathlib import Path
from typing import List, Literal, Optional, Tuple, Union

from pydantic import Field

from .envelope import build_request_body
from .exceptions import UploadError
from .models import (
    ASCModel,
    AppMediaAssetState,
    Document,
    DocumentLinks,
    ImageAsset,
    LinkagesResponse,
    PagedDocumentLinks,
    PagingInformation,
    RelationshipData,
    RelationshipToMany,
    RelationshipToOne,
    ResourceLinks,
    ToOneRelationship,
    UploadOperation,
    linkage,
)
from .query import QueryOptions, param
from .transport import Response, Service
from .uploads import perform_upload_operations, read_upload_file

logger = logging.getLogger(__name__)


class ScreenshotDisplayType(str, Enum):
    APP_APPLE_TV = "APP_APPLE_TV"
    APP_APPLE_VISION_PRO = "APP_APPLE_VISION_PRO"
    APP_DESKTOP = "APP_DESKTOP"
    APP_IPAD_105 = "APP_IPAD_105"
    APP_IPAD_97 = "APP_IPAD_97"
    APP_IPAD_PRO_129 = "APP_IPAD_PRO_129"
    APP_IPAD_PRO_3GEN_11 = "APP_IPAD_PRO_3GEN_11"
    APP_IPAD_PRO_3GEN_129 = "APP_IPAD_PRO_3GEN_129"
    APP_IPHONE_35 = "APP_IPHONE_35"
    APP_IPHONE_40 = "APP_IPHONE_40"
    APP_IPHONE_47 = "APP_IPHONE_47"
    APP_IPHONE_55 = "APP_IPHONE_55"
    APP_IPHONE_58 = "APP_IPHONE_58"
    APP_IPHONE_61 = "APP_IPHONE_61"
    APP_IPHONE_65 = "APP_IPHONE_65"
    APP_IPHONE_67 = "APP_IPHONE_67"
    APP_WATCH_SERIES_3 = "APP_WATCH_SERIES_3"
    APP_WATCH_SERIES_4 = "APP_WATCH_SERIES_4"
    APP_WATCH_SERIES_7 = "APP_WATCH_SERIES_7"
    APP_WATCH_SERIES_10 = "APP_WATCH_SERIES_10"
    APP_WATCH_ULTRA = "APP_WATCH_ULTRA"
    IMESSAGE_APP_IPAD_105 = "IMESSAGE_APP_IPAD_105"
    IMESSAGE_APP_IPAD_97 = "IMESSAGE_APP_IPAD_97"
    IMESSAGE_APP_IPAD_PRO_129 = "IMESSAGE_APP_IPAD_PRO_129"
    IMESSAGE_APP_IPAD_PRO_3GEN_11 = "IMESSAGE_APP_IPAD_PRO_3GEN_11"
    IMESSAGE_APP_IPAD_PRO_3GEN_129 = "IMESSAGE_APP_IPAD_PRO_3GEN_129"
    IMESSAGE_APP_IPHONE_40 = "IMESSAGE_APP_IPHONE_40"
    IMESSAGE_APP_IPHONE_47 = "IMESSAGE_APP_IPHONE_47"
    IMESSAGE_APP_IPHONE_55 = "IMESSAGE_APP_IPHONE_55"
    IMESSAGE_APP_IPHONE_58 = "IMESSAGE_APP_IPHONE_58"
    IMESSAGE_APP_IPHONE_61 = "IMESSAGE_APP_IPHONE_61"
    IMESSAGE_APP_IPHONE_65 = "IMESSAGE_APP_IPHONE_65"
    IMESSAGE_APP_IPHONE_67 = "IMESSAGE_APP_IPHONE_67"


# ===== APP SCREENSHOTS =====


class AppScreenshotAttributes(ASCModel):
    asset_delivery_state: Optional[AppMediaAssetState] = None
    asset_token: Optional[str] = None
    asset_type: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    image_asset: Optional[ImageAsset] = None
    source_file_checksum: Optional[str] = None
    upload_operations: Optional[List[UploadOperation]] = None


class AppScreenshotRelationships(ASCModel):
    app_screenshot_set: Optional[RelationshipToOne] = None


class AppScreenshot(ASCModel):
    id: str
    type: Literal["appScreenshots"] = "appScreenshots"
    attributes: Optional[AppScreenshotAttributes] = None
    relationships: Optional[AppScreenshotRelationships] = None
    links: Optional[ResourceLinks] = None


class AppScreenshotCreateRequestAttributes(ASCModel):
    file_name: str
    file_size: int


class AppScreenshotCreateRequestRelationships(ASCModel):
    app_screenshot_set: ToOneRelationship


class AppScreenshotCreateRequest(ASCModel):
    type: Literal["appScreenshots"] = "appScreenshots"
    attributes: AppScreenshotCreateRequestAttributes
    relationships: AppScreenshotCreateRequestRelationships


class AppScreenshotUpdateRequestAttributes(ASCModel):
    source_file_checksum: Optional[str] = None
    uploaded: Optional[bool] = None


class AppScreenshotUpdateRequest(ASCModel):
    id: str
    type: Literal["appScreenshots"] = "appScreenshots"
    attributes: Optional[AppScreenshotUpdateRequestAttributes] = None


class AppScreenshotResponse(Document):
    data: AppScreenshot
    links: DocumentLinks


class AppScreenshotsResponse(Document):
    data: List[AppScreenshot]
    links: PagedDocumentLinks
    meta: Optional[PagingInformation] = None


# ===== APP SCREENSHOT SETS =====


class AppScreenshotSetAttributes(ASCModel):
    # Display types added by Apple later decode as plain strings
    screenshot_display_type: Optional[Union[ScreenshotDisplayType, str]] = Field(
        default=None, union_mode="left_to_right"
    )


class AppScreenshotSetRelationships(ASCModel):
    app_screenshots: Optional[RelationshipToMany] = None
    app_store_version_localization: Optional[RelationshipToOne] = None


class AppScreenshotSet(ASCModel):
    id: str
    type: Literal["appScreenshotSets"] = "appScreenshotSets"
    attributes: Optional[AppScreenshotSetAttributes] = None
    relationships: Optional[AppScreenshotSetRelationships] = None
    links: Optional[ResourceLinks] = None


class AppScreenshotSetCreateRequestAttributes(ASCModel):
    screenshot_display_type: ScreenshotDisplayType


class AppScreenshotSetCreateRequestRelationships(ASCModel):
    app_store_version_localization: ToOneRelationship


class AppScreenshotSetCreateRequest(ASCModel):
    type: Literal["appScreenshotSets"] = "appScreenshotSets"
    attributes: AppScreenshotSetCreateRequestAttributes
    relationships: AppScreenshotSetCreateRequestRelationships

    @classmethod
    def for_localization(
        cls, localization_id: str, display_type: ScreenshotDisplayType
    ) -> "AppScreenshotSetCreateRequest":
        """Build a create request for an App Store version localization."""
        return cls(
            attributes=AppScreenshotSetCreateRequestAttributes(
                screenshot_display_type=display_type
            ),
            relationships=AppScreenshotSetCreateRequestRelationships(
                app_store_version_localization=linkage(
                    "appStoreVersionLocalizations", localization_id
                )
            ),
        )


class AppScreenshotSetResponse(ASCModel):
    data: AppScreenshotSet
    included: Optional[List[AppScreenshot]] = None
    links: DocumentLinks


class AppScreenshotSetsResponse(ASCModel):
    data: List[AppScreenshotSet]
    included: Optional[List[AppScreenshot]] = None
    links: PagedDocumentLinks
    meta: Optional[PagingInformation] = None


# ===== QUERY OPTIONS =====


class GetAppScreenshotSetQuery(QueryOptions):
    fields_app_screenshots: Optional[List[str]] = param("fields[appScreenshots]")
    fields_app_screenshot_sets: Optional[List[str]] = param("fields[appScreenshotSets]")
    include: Optional[List[str]] = param("include")
    limit_app_screenshots: Optional[int] = param("limit[appScreenshots]")


class ListAppScreenshotSetsForLocalizationQuery(QueryOptions):
    fields_app_screenshot_sets: Optional[List[str]] = param("fields[appScreenshotSets]")
    fields_app_screenshots: Optional[List[str]] = param("fields[appScreenshots]")
    filter_screenshot_display_type: Optional[List[ScreenshotDisplayType]] = param(
        "filter[screenshotDisplayType]"
    )
    include: Optional[List[str]] = param("include")
    limit: Optional[int] = param("limit")
    limit_app_screenshots: Optional[int] = param("limit[appScreenshots]")
    cursor: Optional[str] = param("cursor")


class ListAppScreenshotsForSetQuery(QueryOptions):
    fields_app_screenshot_sets: Optional[List[str]] = param("fields[appScreenshotSets]")
    fields_app_screenshots: Optional[List[str]] = param("fields[appScreenshots]")
    limit: Optional[int] = param("limit")
    include: Optional[List[str]] = param("include")
    cursor: Optional[str] = param("cursor")


class ListAppScreenshotIDsForSetQuery(QueryOptions):
    limit: Optional[int] = param("limit")


class GetAppScreenshotQuery(QueryOptions):
    fields_app_screenshots: Optional[List[str]] = param("fields[appScreenshots]")
    include: Optional[List[str]] = param("include")


# ===== SERVICE =====


class ScreenshotsService(Service):
    """App screenshot sets and the screenshots they contain."""

    def list_app_screenshot_sets_for_localization(
        self,
        localization_id: str,
        query: Optional[ListAppScreenshotSetsForLocalizationQuery] = None,
    ) -> Tuple[AppScreenshotSetsResponse, Response]:
        """List the screenshot sets of an App Store version localization."""
        return self._transport.get(
            f"v1/appStoreVersionLocalizations/{localization_id}/appScreenshotSets",
            query,
            AppScreenshotSetsResponse,
        )

    def get_app_screenshot_set(
        self, set_id: str, query: Optional[GetAppScreenshotSetQuery] = None
    ) -> Tuple[AppScreenshotSetResponse, Response]:
        """Get a screenshot set including its display target and screenshots."""
        return self._transport.get(
            f"v1/appScreenshotSets/{set_id}", query, AppScreenshotSetResponse
        )

    def create_app_screenshot_set(
        self, body: AppScreenshotSetCreateRequest
    ) -> Tuple[AppScreenshotSetResponse, Response]:
        """Add a screenshot set for a display type to a version localization."""
        return self._transport.post(
            "v1/appScreenshotSets", build_request_body(body), AppScreenshotSetResponse
        )

    def delete_app_screenshot_set(self, set_id: str) -> Response:
        """Delete a screenshot set and all of its screenshots."""
        return self._transport.delete(f"v1/appScreenshotSets/{set_id}")

    def list_app_screenshots_for_set(
        self, set_id: str, query: Optional[ListAppScreenshotsForSetQuery] = None
    ) -> Tuple[AppScreenshotsResponse, Response]:
        """List all ordered screenshots in a screenshot set."""
        return self._transport.get(
            f"v1/appScreenshotSets/{set_id}/appScreenshots", query, AppScreenshotsResponse
        )

    def list_app_screenshot_ids_for_set(
        self, set_id: str, query: Optional[ListAppScreenshotIDsForSetQuery] = None
    ) -> Tuple[LinkagesResponse, Response]:
        """Get the ordered screenshot ids in a screenshot set."""
        return self._transport.get(
            f"v1/appScreenshotSets/{set_id}/relationships/appScreenshots",
            query,
            LinkagesResponse,
        )

    def replace_app_screenshots_for_set(
        self, set_id: str, linkages: List[RelationshipData]
    ) -> Response:
        """Change the order of the screenshots in a screenshot set."""
        _, response = self._transport.patch(
            f"v1/appScreenshotSets/{set_id}/relationships/appScreenshots",
            build_request_body(linkages),
        )
        return response

    def get_app_screenshot(
        self, screenshot_id: str, query: Optional[GetAppScreenshotQuery] = None
    ) -> Tuple[AppScreenshotResponse, Response]:
        return self._transport.get(
            f"v1/appScreenshots/{screenshot_id}", query, AppScreenshotResponse
        )

    def create_app_screenshot(
        self, body: AppScreenshotCreateRequest
    ) -> Tuple[AppScreenshotResponse, Response]:
        """Reserve a screenshot in a set; the reply carries its upload operations."""
        return self._transport.post(
            "v1/appScreenshots", build_request_body(body), AppScreenshotResponse
        )

    def commit_app_screenshot(
        self, screenshot_id: str, body: AppScreenshotUpdateRequest
    ) -> Tuple[AppScreenshotResponse, Response]:
        """Mark an uploaded screenshot as complete."""
        return self._transport.patch(
            f"v1/appScreenshots/{screenshot_id}",
            build_request_body(body),
            AppScreenshotResponse,
        )

    def delete_app_screenshot(self, screenshot_id: str) -> Response:
        return self._transport.delete(f"v1/appScreenshots/{screenshot_id}")

    def upload_app_screenshot(
        self, set_id: str, file_path: Union[str, Path]
    ) -> Tuple[AppScreenshotResponse, Response]:
        """
        Upload an image file into a screenshot set.

        Args:
            set_id: The screenshot set to add the screenshot to
            file_path: Path of the PNG file to upload

        Returns:
            The committed screenshot and the commit response

        Raises:
            ValidationError: If the file cannot be read (nothing is sent)
            UploadError: If the reservation carries no screenshot or an upload
                operation is rejected (nothing is committed)
        """
        upload = read_upload_file(file_path)

        logger.info(
            f"Reserving screenshot {upload.file_name} ({upload.file_size} bytes) "
            f"in set {set_id}"
        )
        reserved, _ = self.create_app_screenshot(
            AppScreenshotCreateRequest(
                attributes=AppScreenshotCreateRequestAttributes(
                    file_name=upload.file_name, file_size=upload.file_size
                ),
                relationships=AppScreenshotCreateRequestRelationships(
                    app_screenshot_set=linkage("appScreenshotSets", set_id)
                ),
            )
        )
        if reserved is None:
            raise UploadError(f"Reservation of {upload.file_name} returned no screenshot")

        attributes = reserved.data.attributes or AppScreenshotAttributes()
        perform_upload_operations(self._transport, attributes.upload_operations, upload.data)

        screenshot_id = reserved.data.id
        logger.info(f"Committing screenshot {screenshot_id}")
        return self.commit_app_screenshot(
            screenshot_id,
            AppScreenshotUpdateRequest(
                id=screenshot_id,
                attributes=AppScreenshotUpdateRequestAttributes(
                    source_file_checksum=upload.checksum, uploaded=True
                ),
            ),
        )

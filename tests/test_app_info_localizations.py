"""
Tests for the app info localizations service.
"""

import pytest
from unittest.mock import patch

from asc_client.app_info_localizations import (
    AppInfoLocalizationCreateRequest,
    AppInfoLocalizationUpdateRequest,
    AppInfoLocalizationUpdateRequestAttributes,
    ListAppInfoLocalizationsForAppInfoQuery,
)
from asc_client.exceptions import ConflictError

BASE = "https://api.appstoreconnect.apple.com/v1"


def _localization(localization_id, locale, name):
    return {
        "id": localization_id,
        "type": "appInfoLocalizations",
        "attributes": {"locale": locale, "name": name, "subtitle": f"{name} subtitle"},
    }


class TestAppInfoLocalizations:
    """Test localized app-level metadata."""

    @patch("requests.request")
    def test_list_for_app_info(self, mock_request, client, make_response):
        mock_request.return_value = make_response(
            200,
            {
                "data": [
                    _localization("loc-1", "en-US", "My App"),
                    _localization("loc-2", "de-DE", "Meine App"),
                ],
                "links": {"self": f"{BASE}/appInfos/info-1/appInfoLocalizations"},
            },
        )

        localizations, _ = client.app_info_localizations.list_app_info_localizations_for_app_info(
            "info-1", ListAppInfoLocalizationsForAppInfoQuery(filter_locale=["en-US", "de-DE"])
        )

        assert len(localizations.data) == 2
        assert localizations.for_locale("de-DE").attributes.name == "Meine App"
        assert localizations.for_locale("fr-FR") is None
        assert mock_request.call_args.kwargs["url"] == (
            f"{BASE}/appInfos/info-1/appInfoLocalizations?filter[locale]=en-US,de-DE"
        )

    @patch("requests.request")
    def test_get(self, mock_request, client, make_response):
        mock_request.return_value = make_response(
            200, {"data": _localization("loc-1", "en-US", "My App"), "links": {}}
        )

        localization, _ = client.app_info_localizations.get_app_info_localization("loc-1")

        assert localization.data.attributes.subtitle == "My App subtitle"
        assert mock_request.call_args.kwargs["url"] == f"{BASE}/appInfoLocalizations/loc-1"

    @patch("requests.request")
    def test_create(self, mock_request, client, make_response):
        mock_request.return_value = make_response(
            201, {"data": _localization("loc-3", "fr-FR", "Mon App"), "links": {}}
        )

        localization, response = client.app_info_localizations.create_app_info_localization(
            AppInfoLocalizationCreateRequest.for_app_info("info-1", "fr-FR", name="Mon App")
        )

        kwargs = mock_request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["url"] == f"{BASE}/appInfoLocalizations"
        assert kwargs["json"] == {
            "data": {
                "type": "appInfoLocalizations",
                "attributes": {"locale": "fr-FR", "name": "Mon App"},
                "relationships": {"appInfo": {"data": {"id": "info-1", "type": "appInfos"}}},
            }
        }
        assert response.status_code == 201
        assert localization.data.id == "loc-3"

    @patch("requests.request")
    def test_create_existing_locale(self, mock_request, client, make_response):
        mock_request.return_value = make_response(
            409,
            {
                "errors": [
                    {
                        "status": "409",
                        "code": "ENTITY_ERROR.DUPLICATE",
                        "title": "The provided entity already exists",
                        "detail": "A localization for fr-FR already exists.",
                    }
                ]
            },
        )

        with pytest.raises(ConflictError) as exc_info:
            client.app_info_localizations.create_app_info_localization(
                AppInfoLocalizationCreateRequest.for_app_info("info-1", "fr-FR", name="Mon App")
            )

        assert exc_info.value.detail == "A localization for fr-FR already exists."

    @patch("requests.request")
    def test_update(self, mock_request, client, make_response):
        mock_request.return_value = make_response(
            200, {"data": _localization("loc-1", "en-US", "Renamed"), "links": {}}
        )

        client.app_info_localizations.update_app_info_localization(
            "loc-1",
            AppInfoLocalizationUpdateRequest(
                id="loc-1",
                attributes=AppInfoLocalizationUpdateRequestAttributes(
                    name="Renamed", privacy_policy_url="https://example.com/privacy"
                ),
            ),
        )

        kwargs = mock_request.call_args.kwargs
        assert kwargs["method"] == "PATCH"
        assert kwargs["json"]["data"] == {
            "id": "loc-1",
            "type": "appInfoLocalizations",
            "attributes": {"name": "Renamed", "privacyPolicyUrl": "https://example.com/privacy"},
        }

    @patch("requests.request")
    def test_delete(self, mock_request, client, make_response):
        mock_request.return_value = make_response(204)

        response = client.app_info_localizations.delete_app_info_localization("loc-1")

        assert response.status_code == 204
        assert mock_request.call_args.kwargs["method"] == "DELETE"
        assert mock_request.call_args.kwargs["url"] == f"{BASE}/appInfoLocalizations/loc-1"

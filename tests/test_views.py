"""Tests for the identifier lookup API."""
import pytest
from django.urls import reverse


class TestValidateIdentifier:
    def test_user_identifier(self, client):
        response = client.get(reverse("validate_identifier"), {"identifier": "a00001DL112025"})

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["kind"] == "user"
        assert data["components"] == {
            "category": "a", "sequence": 1, "region": "DL", "month": 11, "year": 2025,
            "role": "STUDENT",
        }

    def test_display_form_is_accepted(self, client):
        response = client.get(reverse("validate_identifier"), {"identifier": "a-00001-DL-11-2025"})

        assert response.status_code == 200
        assert response.json()["identifier"] == "a00001DL112025"

    def test_event_identifier(self, client):
        response = client.get(reverse("validate_identifier"), {"identifier": "EVT-0001-FB-DL-071125"})

        data = response.json()
        assert data["kind"] == "event"
        assert data["components"]["date"] == "2025-11-07"

    def test_certificate_identifier(self, client):
        uid = "STAIRS-CERT-EVT-0001-FB-DL-071125-a00001DL112025"
        response = client.get(reverse("validate_identifier"), {"identifier": uid})

        data = response.json()
        assert data["kind"] == "certificate"
        assert data["components"]["user"]["sequence"] == 1
        assert data["components"]["event"]["sport"] == "FB"

    @pytest.mark.parametrize("identifier", ["a00001DL132025", "nonsense", ""])
    def test_invalid_identifier(self, client, identifier):
        response = client.get(reverse("validate_identifier"), {"identifier": identifier})

        assert response.status_code == 400
        assert response.json()["valid"] is False

    def test_post_not_allowed(self, client):
        response = client.post(reverse("validate_identifier"), {"identifier": "a00001DL112025"})
        assert response.status_code == 405


class TestDisplayIdentifier:
    def test_display(self, client):
        response = client.get(reverse("display_identifier"), {"identifier": "a00001DL112025"})
        assert response.json()["display"] == "a-00001-DL-11-2025"

    def test_missing_identifier(self, client):
        response = client.get(reverse("display_identifier"))
        assert response.status_code == 400

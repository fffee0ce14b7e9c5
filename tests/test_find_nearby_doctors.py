# tests/test_find_nearby_doctors.py

import pytest

from skintriage.core.config import settings
from skintriage.db.registry import parse_practitioner_rows
from skintriage.utils.errors import UpstreamError

REGISTRY = "skintriage.services.geo_match.fetch_active_doctors"


def doctor_row(user_id, latitude, longitude, **extra):
    row = {
        "user_id": user_id,
        "first_name": "Dr. Ana",
        "last_name": "Souza",
        "specialties": ["Dermatology"],
        "years_experience": 9,
        "avatar_url": None,
        "bio": "General dermatology",
        "location": {"latitude": latitude, "longitude": longitude, "address": "1 Main St"},
        "is_verified": True,
        "is_active": True,
    }
    row.update(extra)
    return row


@pytest.fixture
def registry(monkeypatch):
    """Stub the registry query; records every token it is called with."""
    state = {"rows": [], "calls": []}

    def fake_fetch(access_token):
        state["calls"].append(access_token)
        return parse_practitioner_rows(state["rows"])

    monkeypatch.setattr(REGISTRY, fake_fetch)
    return state


def test_returns_ranked_registry_doctors(client, auth_headers, access_token, registry):
    registry["rows"] = [
        doctor_row("doc-far", 40.03, -73.0),
        doctor_row("doc-near", 40.01, -73.0),
        doctor_row("doc-out", 40.5, -73.0),
    ]
    response = client.post(
        "/find-nearby-doctors",
        json={"latitude": 40.0, "longitude": -73.0, "radius": 50},
        headers=auth_headers,
    )
    assert response.status_code == 200
    doctors = response.json()["doctors"]
    assert [d["user_id"] for d in doctors] == ["doc-near", "doc-far"]
    assert [d["distance"] for d in doctors] == [1.1, 3.3]
    assert all(d["is_synthetic"] is False for d in doctors)
    assert set(doctors[0].keys()) >= {
        "user_id", "first_name", "last_name", "specialties", "years_experience",
        "avatar_url", "bio", "location", "is_verified", "distance", "is_synthetic",
    }
    assert doctors[0]["location"]["address"] == "1 Main St"
    # The registry is queried with the caller's own token
    assert registry["calls"] == [access_token]


def test_radius_defaults_to_fifty_but_cap_still_applies(client, auth_headers, registry):
    registry["rows"] = [doctor_row("doc-6km", 40.054, -73.0)]  # ~6 km away
    response = client.post(
        "/find-nearby-doctors",
        json={"latitude": 40.0, "longitude": -73.0},
        headers=auth_headers,
    )
    assert response.status_code == 200
    doctors = response.json()["doctors"]
    # Out of the 5 km cap, so the synthetic fill kicks in
    assert len(doctors) == 5
    assert all(d["user_id"].startswith("synthetic-") for d in doctors)
    assert all(d["distance"] <= 5.0 for d in doctors)


def test_empty_registry_returns_five_synthetic_doctors(client, auth_headers, registry):
    response = client.post(
        "/find-nearby-doctors",
        json={"latitude": 40.0, "longitude": -73.0, "radius": 5},
        headers=auth_headers,
    )
    assert response.status_code == 200
    doctors = response.json()["doctors"]
    assert len(doctors) == 5
    distances = [d["distance"] for d in doctors]
    assert distances == sorted(distances)
    for d in doctors:
        assert d["distance"] <= 5.0
        assert d["is_verified"] is True
        assert d["is_synthetic"] is True
        assert d["user_id"].startswith("synthetic-")


def test_synthetic_fill_never_mixes_with_real_doctors(client, auth_headers, registry):
    registry["rows"] = [doctor_row("doc-1", 40.001, -73.0)]
    response = client.post(
        "/find-nearby-doctors",
        json={"latitude": 40.0, "longitude": -73.0, "radius": 5},
        headers=auth_headers,
    )
    doctors = response.json()["doctors"]
    assert [d["user_id"] for d in doctors] == ["doc-1"]


def test_disabled_fallback_returns_empty_list(client, auth_headers, registry, monkeypatch):
    monkeypatch.setattr(settings, "GEO_FALLBACK_POLICY", "disabled")
    response = client.post(
        "/find-nearby-doctors",
        json={"latitude": 40.0, "longitude": -73.0, "radius": 5},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json() == {"doctors": []}


@pytest.mark.parametrize("payload", [
    {"latitude": 91, "longitude": -73.0},
    {"latitude": 40.0, "longitude": 200},
    {"latitude": 40.0, "longitude": -73.0, "radius": 0},
    {"latitude": 40.0, "longitude": -73.0, "radius": 101},
])
def test_out_of_range_input_is_rejected_before_registry(client, auth_headers, registry, payload):
    response = client.post("/find-nearby-doctors", json=payload, headers=auth_headers)
    assert response.status_code == 400
    assert "error" in response.json()
    assert registry["calls"] == []


@pytest.mark.parametrize("payload", [
    {"latitude": "40.0", "longitude": -73.0},
    {"latitude": 40.0, "longitude": None},
    {"longitude": -73.0},
    {"latitude": 40.0, "longitude": -73.0, "radius": "5"},
    {"latitude": True, "longitude": -73.0},
])
def test_non_numeric_input_is_rejected(client, auth_headers, registry, payload):
    response = client.post("/find-nearby-doctors", json=payload, headers=auth_headers)
    assert response.status_code == 400
    assert isinstance(response.json()["error"], str)
    assert registry["calls"] == []


def test_registry_failure_is_upstream_error(client, auth_headers, monkeypatch):
    def failing_fetch(access_token):
        raise UpstreamError("Failed to fetch doctors")

    monkeypatch.setattr(REGISTRY, failing_fetch)
    response = client.post(
        "/find-nearby-doctors",
        json={"latitude": 40.0, "longitude": -73.0, "radius": 5},
        headers=auth_headers,
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch doctors"}


def test_doctor_with_null_profile_columns_is_ranked_not_replaced(client, auth_headers, registry):
    registry["rows"] = [
        doctor_row("doc-new", 40.01, -73.0, years_experience=None, specialties=None, is_verified=None)
    ]
    response = client.post(
        "/find-nearby-doctors",
        json={"latitude": 40.0, "longitude": -73.0, "radius": 5},
        headers=auth_headers,
    )
    assert response.status_code == 200
    doctors = response.json()["doctors"]
    assert [d["user_id"] for d in doctors] == ["doc-new"]
    assert doctors[0]["distance"] == 1.1
    assert doctors[0]["is_synthetic"] is False
    assert doctors[0]["specialties"] == []
    assert doctors[0]["years_experience"] == 0

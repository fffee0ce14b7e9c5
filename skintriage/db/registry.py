# skintriage/db/registry.py

from typing import List

import requests
from pydantic import ValidationError

from skintriage.core.config import settings
from skintriage.core.logger import logger
from skintriage.models.practitioner import PractitionerRecord
from skintriage.utils.errors import UpstreamError

PROFILE_FIELDS = (
    "user_id",
    "first_name",
    "last_name",
    "specialties",
    "years_experience",
    "avatar_url",
    "bio",
    "location",
    "is_verified",
    "is_active",
)


def _has_coordinates(row: dict) -> bool:
    location = row.get("location")
    if not isinstance(location, dict):
        return False
    return location.get("latitude") is not None and location.get("longitude") is not None


def parse_practitioner_rows(rows: list) -> List[PractitionerRecord]:
    """
    Turn raw `profiles` rows into records. Rows without usable coordinates are
    skipped silently; rows that fail validation are skipped with a warning.
    """
    records: List[PractitionerRecord] = []
    for row in rows:
        if not isinstance(row, dict) or not _has_coordinates(row):
            continue
        try:
            records.append(PractitionerRecord.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Skipping malformed practitioner row {row.get('user_id')}: {e.error_count()} error(s)")
    return records


def fetch_active_doctors(access_token: str) -> List[PractitionerRecord]:
    """
    Read active doctors with a location from the registry.

    The request carries the public anon key plus the caller's own access token,
    so row-level security is evaluated for the caller. Never call this with a
    service-role key.
    """
    url = f"{settings.SUPABASE_URL.rstrip('/')}/rest/v1/profiles"
    headers = {
        "apikey": settings.SUPABASE_ANON_KEY,
        "Authorization": f"Bearer {access_token}",
        "Accept": "application/json",
    }
    params = {
        "select": ",".join(PROFILE_FIELDS),
        "user_type": "eq.doctor",
        "is_active": "eq.true",
        "location": "not.is.null",
    }

    try:
        with requests.Session() as session:
            response = session.get(
                url,
                headers=headers,
                params=params,
                timeout=settings.REGISTRY_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
            rows = response.json()
    except requests.exceptions.RequestException as e:
        logger.error(f"Practitioner registry query failed: {e}")
        raise UpstreamError("Failed to fetch doctors")
    except ValueError as e:
        logger.error(f"Practitioner registry returned invalid JSON: {e}")
        raise UpstreamError("Failed to fetch doctors")

    if not isinstance(rows, list):
        logger.error(f"Practitioner registry returned unexpected payload type {type(rows).__name__}")
        raise UpstreamError("Failed to fetch doctors")

    logger.info(f"Found {len(rows)} doctors in registry")
    return parse_practitioner_rows(rows)

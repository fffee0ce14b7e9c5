# skintriage/services/geo_match.py

import random
from typing import Iterable, List, Optional

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from skintriage.core.config import settings
from skintriage.core.logger import logger
from skintriage.db.registry import fetch_active_doctors
from skintriage.models.practitioner import (
    Coordinate,
    FallbackPolicy,
    PractitionerRecord,
    RankedPractitioner,
)
from skintriage.models.user import CurrentUser
from skintriage.services.synthetic_doctors import synthesize_nearby_doctors
from skintriage.utils.errors import InvalidInputError, UnauthorizedError
from skintriage.utils.geo import haversine_km, round_km

MIN_RADIUS_KM = 1
MAX_RADIUS_KM = 100
# In-person consultation range; applied whatever radius the caller asks for
HARD_CAP_KM = 5.0
MAX_RESULTS = 5


def effective_radius_km(radius_km: float) -> float:
    return min(radius_km, HARD_CAP_KM)


def validate_search(latitude: float, longitude: float, radius_km: float) -> Coordinate:
    """Range-check a search before anything touches the network."""
    try:
        origin = Coordinate(latitude=latitude, longitude=longitude)
    except ValidationError:
        raise InvalidInputError("Invalid latitude or longitude values")
    if isinstance(radius_km, bool) or not isinstance(radius_km, (int, float)):
        raise InvalidInputError("Radius must be between 1 and 100 km")
    if not MIN_RADIUS_KM <= radius_km <= MAX_RADIUS_KM:
        raise InvalidInputError("Radius must be between 1 and 100 km")
    return origin


def rank_practitioners(
    origin: Coordinate,
    candidates: Iterable[PractitionerRecord],
    radius_km: float,
) -> List[RankedPractitioner]:
    """Annotate, filter to the effective radius, sort ascending and keep the nearest MAX_RESULTS."""
    cap = effective_radius_km(radius_km)
    ranked: List[RankedPractitioner] = []

    for record in candidates:
        distance = round_km(
            haversine_km(
                origin.latitude,
                origin.longitude,
                record.location.latitude,
                record.location.longitude,
            )
        )
        if distance > cap:
            continue
        ranked.append(
            RankedPractitioner.model_validate(
                {**record.model_dump(by_alias=True), "distance": distance}
            )
        )

    ranked.sort(key=lambda doctor: doctor.distance_km)
    return ranked[:MAX_RESULTS]


async def find_nearby_doctors(
    latitude: float,
    longitude: float,
    radius_km: float,
    user: Optional[CurrentUser],
    fallback_policy: Optional[FallbackPolicy] = None,
    rng: Optional[random.Random] = None,
) -> List[RankedPractitioner]:
    if user is None:
        raise UnauthorizedError()
    origin = validate_search(latitude, longitude, radius_km)
    policy = fallback_policy or FallbackPolicy(settings.GEO_FALLBACK_POLICY)

    logger.info(
        f"User {user.user_id} ({user.role}) searching for doctors near "
        f"{origin.latitude}, {origin.longitude} within {radius_km}km"
    )

    candidates = await run_in_threadpool(fetch_active_doctors, user.access_token)
    nearby = rank_practitioners(origin, candidates, radius_km)
    logger.info(f"Found {len(nearby)} doctors within {effective_radius_km(radius_km)}km")
    if nearby:
        logger.info(f"Nearest doctor: {nearby[0].name or nearby[0].id} at {nearby[0].distance_km}km")

    if nearby or policy is FallbackPolicy.DISABLED:
        return nearby

    logger.warning("No registry doctors in range, returning synthetic placeholder doctors")
    return synthesize_nearby_doctors(origin, effective_radius_km(radius_km), rng=rng)

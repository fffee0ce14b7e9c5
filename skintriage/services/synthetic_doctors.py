# skintriage/services/synthetic_doctors.py

import math
import random
from typing import List, Optional

from skintriage.models.practitioner import Coordinate, RankedPractitioner
from skintriage.utils.geo import destination_point

SYNTHETIC_ID_PREFIX = "synthetic-"
SYNTHETIC_COUNT = 5

# Placeholder profiles shown while the registry has no real coverage
PLACEHOLDER_PROFILES = [
    {
        "first_name": "Dr. Sarah",
        "last_name": "Johnson",
        "specialties": ["Dermatology", "Cosmetic Surgery"],
        "years_experience": 12,
        "bio": "Specialized in skin cancer detection and cosmetic procedures",
        "address": "123 Medical Plaza, Downtown",
    },
    {
        "first_name": "Dr. Michael",
        "last_name": "Chen",
        "specialties": ["Dermatology", "Pediatric Dermatology"],
        "years_experience": 8,
        "bio": "Expert in pediatric skin conditions and general dermatology",
        "address": "456 Health Center, Medical District",
    },
    {
        "first_name": "Dr. Emily",
        "last_name": "Rodriguez",
        "specialties": ["Dermatology", "Mohs Surgery"],
        "years_experience": 15,
        "bio": "Board-certified dermatologist specializing in skin cancer surgery",
        "address": "789 Specialist Clinic, University Area",
    },
    {
        "first_name": "Dr. James",
        "last_name": "Wilson",
        "specialties": ["Dermatology", "Acne Treatment"],
        "years_experience": 6,
        "bio": "Young specialist focused on acne and teenage skin problems",
        "address": "321 Youth Clinic, Suburbs",
    },
    {
        "first_name": "Dr. Lisa",
        "last_name": "Brown",
        "specialties": ["Dermatology", "Psoriasis Treatment"],
        "years_experience": 20,
        "bio": "Senior dermatologist with expertise in chronic skin conditions",
        "address": "654 Senior Care Center, Medical Row",
    },
]


def is_synthetic_id(practitioner_id: str) -> bool:
    return practitioner_id.startswith(SYNTHETIC_ID_PREFIX)


def _synthetic_distance(cap_km: float, rng: random.Random) -> float:
    low = min(1.0, cap_km)
    # Floor to one decimal so the rounded value can never exceed the cap
    return math.floor(rng.uniform(low, cap_km) * 10) / 10


def synthesize_nearby_doctors(
    origin: Coordinate,
    cap_km: float,
    rng: Optional[random.Random] = None,
) -> List[RankedPractitioner]:
    """
    Build SYNTHETIC_COUNT placeholder practitioners around `origin`, each within
    `cap_km`, sorted by distance. Every entry is tagged with a `synthetic-` id
    and `is_synthetic=True`.
    """
    rng = rng or random.Random()
    doctors: List[RankedPractitioner] = []

    for i, profile in enumerate(PLACEHOLDER_PROFILES[:SYNTHETIC_COUNT], start=1):
        distance = _synthetic_distance(cap_km, rng)
        latitude, longitude = destination_point(
            origin.latitude, origin.longitude, rng.uniform(0, 360), distance
        )
        doctors.append(
            RankedPractitioner(
                id=f"{SYNTHETIC_ID_PREFIX}{i}",
                first_name=profile["first_name"],
                last_name=profile["last_name"],
                specialties=list(profile["specialties"]),
                years_experience=profile["years_experience"],
                avatar_url=None,
                bio=profile["bio"],
                location={
                    "latitude": latitude,
                    "longitude": longitude,
                    "address": profile["address"],
                },
                is_verified=True,
                is_active=True,
                distance_km=distance,
                is_synthetic=True,
            )
        )

    doctors.sort(key=lambda d: d.distance_km)
    return doctors

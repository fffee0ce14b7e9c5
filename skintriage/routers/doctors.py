# skintriage/routers/doctors.py

from fastapi import APIRouter, Depends

from skintriage.models.user import CurrentUser
from skintriage.routers.deps import get_current_user
from skintriage.schemas.geo import NearbyDoctorsRequest, NearbyDoctorsResponse
from skintriage.services.geo_match import find_nearby_doctors

router = APIRouter(tags=["doctors"])


@router.post(
    "/find-nearby-doctors",
    response_model=NearbyDoctorsResponse,
    summary="Rank verified doctors near a location",
)
async def nearby_doctors(
    body: NearbyDoctorsRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    doctors = await find_nearby_doctors(
        latitude=body.latitude,
        longitude=body.longitude,
        radius_km=body.radius,
        user=current_user,
    )
    return NearbyDoctorsResponse(doctors=doctors)

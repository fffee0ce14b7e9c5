# skintriage/routers/analysis.py

from fastapi import APIRouter, Depends

from skintriage.models.user import CurrentUser
from skintriage.routers.deps import get_current_user
from skintriage.schemas.analysis import AnalyzeSkinRequest, AnalyzeSkinResponse
from skintriage.services.diagnosis_engine import analyze_skin

router = APIRouter(tags=["analysis"])


@router.post(
    "/analyze-skin",
    response_model=AnalyzeSkinResponse,
    summary="AI assessment of an uploaded skin image",
)
async def analyze_skin_image(
    body: AnalyzeSkinRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    outcome = await analyze_skin(body.image_url, body.symptoms, current_user)
    return AnalyzeSkinResponse(analysis=outcome["result"], disclaimer=outcome["disclaimer"])

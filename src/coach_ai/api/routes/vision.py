"""analyze-form: exercise form analysis from a camera frame."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..deps import get_form_analysis_service
from ..middleware.auth import CurrentUser, get_current_user
from ..schemas import AnalyzeFormRequest
from ...models.form_analysis import Fallback
from ...services.form_analysis import FormAnalysisService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/analyze-form")
async def analyze_form(
    request: AnalyzeFormRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: FormAnalysisService = Depends(get_form_analysis_service),
):
    """
    Return the analysis JSON. Unparseable model output yields the default
    analysis; ``X-Analysis-Fallback`` tells the two apart.
    """
    result = await service.analyze(request.image_base64, request.exercise_name, request.detailed)
    headers = {"X-Analysis-Fallback": "true" if isinstance(result, Fallback) else "false"}
    return JSONResponse(content=result.analysis.to_dict(), headers=headers)

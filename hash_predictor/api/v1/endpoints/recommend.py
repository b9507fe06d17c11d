from fastapi import APIRouter

from hash_predictor.dependencies import OrchestratorDep
from hash_predictor.models.schemas import (
    ErrorResponse,
    Multiplier,
    Prediction,
    RecommendRequest,
    RecommendResponse,
)
from hash_predictor.services.presentation.sink import recommendation_display

router = APIRouter()


@router.post(
    "",
    response_model=RecommendResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid hash"},
    },
    summary="Recommend a target",
    description=(
        "Rank every target multiplier by risk-adjusted score and return the "
        "best one. With auto_predict, the prediction for the best target is "
        "included after the presentation pause."
    ),
)
async def recommend_target(
    request: RecommendRequest,
    orchestrator: OrchestratorDep,
) -> RecommendResponse:
    """Rank all targets and optionally run the auto-selected prediction."""
    prediction = None

    if request.auto_predict:

        async def run_prediction(target: Multiplier) -> Prediction:
            return orchestrator.predict(request.hash, target)

        result, prediction = await orchestrator.auto_select(request.hash, run_prediction)
    else:
        result = orchestrator.recommend(request.hash)

    return RecommendResponse(
        best=result.best,
        recommendations=result.recommendations,
        display=recommendation_display(result.best),
        prediction=prediction,
    )

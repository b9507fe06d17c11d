from fastapi import APIRouter

from hash_predictor.dependencies import OrchestratorDep
from hash_predictor.models.schemas import ErrorResponse, PredictRequest, PredictResponse
from hash_predictor.services.explanation.generator import ExplanationGenerator

router = APIRouter()


@router.post(
    "",
    response_model=PredictResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid hash"},
    },
    summary="Predict for one target",
    description="Estimate confidence and delay for a single target multiplier.",
)
async def predict_target(
    request: PredictRequest,
    orchestrator: OrchestratorDep,
) -> PredictResponse:
    """Confidence and delay for one target, with the rules that fired."""
    analysis = orchestrator.analyze(request.hash)
    prediction = orchestrator.predict_from_analysis(analysis, request.target)
    adjustments = orchestrator.confidence.adjustments(analysis, request.target)

    explainer = ExplanationGenerator()

    return PredictResponse(
        target=prediction.target,
        confidence=prediction.confidence,
        delay=prediction.delay,
        adjustments=adjustments,
        explanations=explainer.generate(analysis, adjustments=adjustments),
    )

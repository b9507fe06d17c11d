from fastapi import APIRouter

from hash_predictor.dependencies import OrchestratorDep
from hash_predictor.models.schemas import AnalyzeResponse, ErrorResponse, HashRequest
from hash_predictor.services.explanation.generator import ExplanationGenerator
from hash_predictor.services.presentation.sink import CollectingResultSink

router = APIRouter()


@router.post(
    "",
    response_model=AnalyzeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid hash"},
    },
    summary="Analyze hash",
    description=(
        "Compute the statistical summary and pattern flags of a hash, "
        "plus a confidence bar for every target multiplier."
    ),
)
async def analyze_hash(
    request: HashRequest,
    orchestrator: OrchestratorDep,
) -> AnalyzeResponse:
    """
    Analyze a hash.

    The analysis pipeline:
    1. Validate the hash (128 lowercase hex characters)
    2. Compute entropy, sample score, checksum and variance
    3. Detect repeat, sequence, edge and palindrome patterns
    4. Estimate confidence for every target
    5. Generate human-readable explanations
    """
    analysis = orchestrator.analyze(request.hash)

    sink = CollectingResultSink()
    orchestrator.pre_analyze(request.hash, sink)

    explainer = ExplanationGenerator()

    return AnalyzeResponse(
        statistics=analysis.statistics,
        patterns=analysis.patterns,
        confidence_bars=sink.payload.confidence_bars,
        explanations=explainer.generate(analysis),
    )

from typing import Annotated

from fastapi import Depends

from hash_predictor.core.config import Settings, get_settings
from hash_predictor.services.pipeline.orchestrator import PredictionOrchestrator


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]


# Orchestrator dependency
def get_orchestrator(settings: SettingsDep) -> PredictionOrchestrator:
    """Build the prediction pipeline with configured presentation pacing."""
    return PredictionOrchestrator(
        presentation_delay=settings.auto_predict_delay_seconds,
    )

OrchestratorDep = Annotated[PredictionOrchestrator, Depends(get_orchestrator)]

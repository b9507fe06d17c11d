from fastapi import APIRouter

from hash_predictor.api.v1.endpoints import analyze, predict, recommend

api_router = APIRouter()

api_router.include_router(
    analyze.router,
    prefix="/analyze",
    tags=["Analysis"],
)

api_router.include_router(
    predict.router,
    prefix="/predict",
    tags=["Prediction"],
)

api_router.include_router(
    recommend.router,
    prefix="/recommend",
    tags=["Recommendation"],
)

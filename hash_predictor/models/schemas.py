from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Enums
# ============================================================================


class Multiplier(int, Enum):
    """Supported target multipliers, in ranking tie-break order."""

    X2 = 2
    X3 = 3
    X4 = 4
    X7 = 7
    X10 = 10
    X100 = 100


# ============================================================================
# Analysis Schemas
# ============================================================================


class HashStatistics(BaseModel):
    """Numeric summary of a hash."""

    model_config = ConfigDict(frozen=True)

    entropy: float = Field(ge=0.0)
    score: int
    checksum: int
    variance: float = Field(ge=0.0)


class PatternFlags(BaseModel):
    """Boolean pattern predicates over the hash text."""

    model_config = ConfigDict(frozen=True)

    triple_repeat: bool
    double_repeat: bool
    sequential_asc: bool
    sequential_desc: bool
    tail_pattern: bool
    head_pattern: bool
    palindrome: bool


class HashAnalysis(BaseModel):
    """Statistics and pattern flags computed once per hash."""

    model_config = ConfigDict(frozen=True)

    statistics: HashStatistics
    patterns: PatternFlags


class Adjustment(BaseModel):
    """A single applied scoring rule."""

    reason: str
    delta: float


# ============================================================================
# Prediction Schemas
# ============================================================================


class Prediction(BaseModel):
    """Confidence and delay for one target."""

    target: Multiplier
    confidence: int = Field(ge=5, le=98)
    delay: int


class Recommendation(BaseModel):
    """Ranked per-target recommendation."""

    target: Multiplier
    confidence: int = Field(ge=5, le=98)
    delay: int
    safety_score: int = Field(ge=5, le=100)
    risk_adjusted_score: float
    success_rate: int = Field(ge=10, le=95)


class RecommendationResult(BaseModel):
    """All recommendations ranked by risk-adjusted score, best first."""

    recommendations: list[Recommendation]
    best: Recommendation


# ============================================================================
# Display Schemas
# ============================================================================


class ConfidenceBar(BaseModel):
    """Confidence bar for one target."""

    target: Multiplier
    confidence: int
    width: str


class RecommendationDisplay(BaseModel):
    """Formatted values for presenting the best recommendation."""

    selected: str
    safety: str
    confidence: str
    delay: str
    success_rate: str
    highlight_target: Multiplier


class DisplayPayload(BaseModel):
    """Everything a result sink was asked to show."""

    confidence_bars: list[ConfidenceBar] = Field(default_factory=list)
    recommendation: RecommendationDisplay | None = None
    error: str | None = None


# ============================================================================
# Request Schemas
# ============================================================================


class HashRequest(BaseModel):
    """Request schema for /analyze endpoint."""

    hash: str | None = None


class PredictRequest(BaseModel):
    """Request schema for /predict endpoint."""

    hash: str | None = None
    target: Multiplier


class RecommendRequest(BaseModel):
    """Request schema for /recommend endpoint."""

    hash: str | None = None
    auto_predict: bool = False


# ============================================================================
# Response Schemas
# ============================================================================


class AnalyzeResponse(BaseModel):
    """Response schema for /analyze endpoint."""

    model_config = ConfigDict(from_attributes=True)

    statistics: HashStatistics
    patterns: PatternFlags
    confidence_bars: list[ConfidenceBar]
    explanations: list[str]


class PredictResponse(BaseModel):
    """Response schema for /predict endpoint."""

    target: Multiplier
    confidence: int
    delay: int
    adjustments: list[Adjustment]
    explanations: list[str]


class RecommendResponse(BaseModel):
    """Response schema for /recommend endpoint."""

    best: Recommendation
    recommendations: list[Recommendation]
    display: RecommendationDisplay
    prediction: Prediction | None = None


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)

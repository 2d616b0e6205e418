"""Smart Planner - capture classification and adaptive copywriting intelligence."""

from .config import ADAPTIVE_CONFIG, MODEL_CONFIG
from .exceptions import (
    GenerationError,
    PromptCompositionError,
    RatingsFetchError,
    SmartPlannerError,
    ValidationError,
    VoiceAnalysisError,
    WorkflowError,
)

__version__ = "0.1.0"
__all__ = [
    "ADAPTIVE_CONFIG",
    "MODEL_CONFIG",
    "GenerationError",
    "PromptCompositionError",
    "RatingsFetchError",
    "SmartPlannerError",
    "ValidationError",
    "VoiceAnalysisError",
    "WorkflowError",
]

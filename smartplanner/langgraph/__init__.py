"""LangGraph workflow components for capture and copy generation."""

from .state import CaptureState, GenerationState
from .workflow import (
    get_capture_workflow,
    get_generation_workflow,
    process_capture,
    process_generation,
)

__all__ = [
    "CaptureState",
    "GenerationState",
    "get_capture_workflow",
    "get_generation_workflow",
    "process_capture",
    "process_generation",
]

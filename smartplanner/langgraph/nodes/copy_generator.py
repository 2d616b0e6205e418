"""Three-pass copy generation: draft, critique, rewrite."""

import logging
import os
import time

from langchain_openai import ChatOpenAI

from ...config import MODEL_CONFIG
from ...exceptions import GenerationError
from ...processing.prompt_composer import build_prompt_template
from ...utils.error_handling import create_error_response
from ..state import GenerationState

logger = logging.getLogger(__name__)

MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0

CRITIQUE_SYSTEM_PROMPT = """You are a direct-response copywriting expert. Review this copy and identify:
1. Weak headlines (not curiosity-driven)
2. Vague language (not specific enough)
3. Missing emotional hooks
4. Weak CTAs (not action-oriented)
5. Areas that don't match the brand voice"""

REWRITE_INSTRUCTION = (
    "Rewrite the copy addressing all critique points. Make it tighter, more specific, "
    "more emotional, and more aligned with the brand voice."
)


def clamp_temperature(value: float) -> float:
    """Keep a sampling temperature inside the range the API accepts."""
    return round(max(MIN_TEMPERATURE, min(MAX_TEMPERATURE, value)), 2)


def _call_model(system_prompt: str, user_prompt: str, temperature: float) -> tuple[str, int]:
    """Run one chat completion and return its text and token usage."""
    llm = ChatOpenAI(
        model=str(MODEL_CONFIG["generation_model"]),
        temperature=temperature,
        max_tokens=int(MODEL_CONFIG["max_tokens"]),
    )
    chain = build_prompt_template() | llm
    message = chain.invoke({"system_prompt": system_prompt, "user_prompt": user_prompt})

    usage = getattr(message, "usage_metadata", None) or {}
    return str(message.content), int(usage.get("total_tokens", 0))


def generate_copy_text(
    system_prompt: str,
    user_prompt: str,
    voice_samples: list[str] | None = None,
    temperature_adjustment: float = 0.0,
) -> dict:
    """Generate copy with a draft, a critique of the draft and a rewrite.

    The adaptive temperature adjustment is applied to the draft and rewrite
    passes only; the critique pass stays analytical.

    Args:
        system_prompt: Composed system prompt
        user_prompt: Composed user prompt
        voice_samples: Writing samples the critique checks the voice against
        temperature_adjustment: Learned offset for the creative passes

    Returns:
        Dictionary with generated_copy, tokens_used and generation_time_ms

    Raises:
        GenerationError: If any pass fails or returns no text

    """
    start = time.monotonic()
    try:
        draft, draft_tokens = _call_model(
            system_prompt,
            user_prompt,
            clamp_temperature(float(MODEL_CONFIG["draft_temperature"]) + temperature_adjustment),
        )
        samples = "\n\n".join(voice_samples or []) or "None provided"
        critique, critique_tokens = _call_model(
            CRITIQUE_SYSTEM_PROMPT,
            f"COPY TO CRITIQUE:\n{draft}\n\nBRAND VOICE SAMPLES:\n{samples}",
            clamp_temperature(float(MODEL_CONFIG["critique_temperature"])),
        )
        final, final_tokens = _call_model(
            system_prompt,
            f"ORIGINAL COPY:\n{draft}\n\nCRITIQUE:\n{critique}\n\n{REWRITE_INSTRUCTION}",
            clamp_temperature(float(MODEL_CONFIG["rewrite_temperature"]) + temperature_adjustment),
        )
    except Exception as e:
        raise GenerationError(f"Copy generation failed: {e!s}") from e

    if not final.strip():
        raise GenerationError("Copy generation returned no text")

    return {
        "generated_copy": final,
        "tokens_used": draft_tokens + critique_tokens + final_tokens,
        "generation_time_ms": int((time.monotonic() - start) * 1000),
    }


def generate_copy(state: GenerationState) -> dict:
    """Generate copy using OpenAI."""
    if state.get("error"):
        return {}

    if not os.getenv("OPENAI_API_KEY"):
        return create_error_response("OPENAI_API_KEY environment variable not set")

    params = state.get("adaptive_params")
    brand_profile = state.get("brand_profile")

    try:
        result = generate_copy_text(
            state.get("system_prompt") or "",
            state.get("user_prompt") or "",
            voice_samples=brand_profile.voice_samples if brand_profile else None,
            temperature_adjustment=params.temperature_adjustment if params else 0.0,
        )
    except GenerationError as e:
        logger.error(f"{state.get('content_type')}: {e}")
        return create_error_response(e, generated_copy=None, tokens_used=0)

    logger.info(
        f"Generated {state.get('content_type')} copy: {result['tokens_used']} tokens "
        f"in {result['generation_time_ms']}ms"
    )
    return result

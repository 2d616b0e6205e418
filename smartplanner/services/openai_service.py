"""OpenAI client wrapper for API key checks and brand voice analysis.
"""
import logging
import os

from openai import OpenAI
from pydantic import ValidationError as PydanticValidationError

from ..config import MODEL_CONFIG
from ..exceptions import VoiceAnalysisError
from ..models.brand import VoiceProfile

logger = logging.getLogger(__name__)

VOICE_ANALYSIS_SYSTEM_PROMPT = (
    "You are a brand voice analyst. Analyze writing samples and extract "
    "detailed voice characteristics."
)

VOICE_ANALYSIS_USER_PROMPT = """Analyze these writing samples and create a voice profile.

SAMPLES:
{samples}

Extract and return as JSON:
{{
  "style_summary": "2-3 sentence description of their writing style",
  "tone_scores": {{
    "formality": 1-10 (1=very casual, 10=very formal),
    "energy": 1-10 (1=calm, 10=high-energy),
    "humor": 1-10 (1=none, 10=very funny),
    "emotion": 1-10 (1=data-driven, 10=heart-led)
  }},
  "sentence_structure": {{
    "avg_length": number,
    "style": "punchy" or "flowing" or "mixed"
  }},
  "signature_phrases": ["phrase 1", "phrase 2", "phrase 3"],
  "vocabulary_patterns": {{
    "uses_contractions": true/false,
    "industry_jargon": true/false,
    "common_words": ["word1", "word2"]
  }},
  "storytelling_style": "description of how they tell stories"
}}

Return ONLY valid JSON, no other text."""


def strip_code_fences(content: str) -> str:
    """Remove a surrounding markdown code block from a model reply."""
    text = content.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


class OpenAIService:
    """Service for direct OpenAI calls outside the generation workflow."""

    def __init__(self, api_key: str | None = None) -> None:
        """Initialize the service with an OpenAI client."""
        api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable not set")

        self.client = OpenAI(api_key=api_key)
        self.model = str(MODEL_CONFIG["voice_analysis_model"])

    def test_api_key(self) -> bool:
        """Check that the configured key can reach the API.

        Returns:
            True if the models endpoint answered, False otherwise

        """
        try:
            self.client.models.list()
            return True
        except Exception as e:
            logger.warning(f"OpenAI API key check failed: {e!s}")
            return False

    def analyze_voice(self, samples: list[str]) -> VoiceProfile:
        """Extract a voice profile from writing samples.

        Args:
            samples: Pieces of the user's own writing

        Returns:
            Validated VoiceProfile

        Raises:
            VoiceAnalysisError: If there are no samples, the request fails,
                or the reply is not a valid voice profile

        """
        cleaned = [s.strip() for s in samples if s.strip()]
        if not cleaned:
            raise VoiceAnalysisError("At least one non-empty writing sample is required")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": VOICE_ANALYSIS_SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": VOICE_ANALYSIS_USER_PROMPT.format(
                            samples="\n\n---\n\n".join(cleaned)
                        ),
                    },
                ],
                temperature=float(MODEL_CONFIG["voice_analysis_temperature"]),
                max_tokens=int(MODEL_CONFIG["max_tokens"]),
                response_format={"type": "json_object"},
            )
        except Exception as e:
            logger.error(f"Voice analysis request failed: {e!s}")
            raise VoiceAnalysisError(f"Voice analysis request failed: {e!s}") from e

        content = response.choices[0].message.content or ""
        try:
            profile = VoiceProfile.model_validate_json(strip_code_fences(content))
        except PydanticValidationError as e:
            logger.error(f"Voice analysis returned an invalid profile: {e!s}")
            raise VoiceAnalysisError("Failed to parse voice analysis") from e

        logger.info(f"Analyzed voice from {len(cleaned)} samples")
        return profile

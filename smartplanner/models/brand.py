"""Brand, voice and copy-control models used when composing prompts."""

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, Field


class ToneScores(BaseModel):
    """Voice tone on 1-10 scales."""

    formality: int = Field(default=5, ge=1, le=10, description="1=very casual, 10=very formal")
    energy: int = Field(default=5, ge=1, le=10, description="1=calm, 10=high-energy")
    humor: int = Field(default=5, ge=1, le=10, description="1=none, 10=very funny")
    emotion: int = Field(default=5, ge=1, le=10, description="1=data-driven, 10=heart-led")


class SentenceStructure(BaseModel):
    avg_length: float = 0
    style: str = Field(default="mixed", description="punchy, flowing or mixed")


class VocabularyPatterns(BaseModel):
    uses_contractions: bool = True
    industry_jargon: bool = False
    common_words: list[str] = Field(default_factory=list)


class VoiceProfile(BaseModel):
    """Schema for a brand voice extracted from writing samples."""

    style_summary: str = Field(default="", description="2-3 sentence description of the writing style")
    tone_scores: ToneScores = Field(default_factory=ToneScores)
    sentence_structure: SentenceStructure | None = None
    signature_phrases: list[str] = Field(default_factory=list)
    vocabulary_patterns: VocabularyPatterns | None = None
    storytelling_style: str | None = None


@dataclass
class Product:
    """An offer that generated copy can promote."""

    product_name: str
    product_type: str  # course, coaching, membership, service, affiliate
    price: float | None = None
    description: str | None = None
    affiliate_link: str | None = None


@dataclass
class BrandProfile:
    """Business context and voice material for a user."""

    business_name: str = ""
    industry: str | None = None
    what_you_sell: str | None = None
    target_customer: str | None = None
    voice_profile: VoiceProfile | None = None
    voice_samples: list[str] = field(default_factory=list)
    customer_reviews: list[str] = field(default_factory=list)
    updated_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class ControlOption:
    """One selectable value of a copy control."""

    label: str
    prompt_addition: str
    shift: int = 0


@dataclass
class CopyControls:
    """User-facing knobs for a single generation."""

    length: str = "medium"  # short, medium, long
    emotion: str = "moderate"  # low, moderate, high
    urgency: str = "none"  # none, soft, strong
    tone: str = "balanced"  # casual, balanced, professional


LENGTH_OPTIONS: dict[str, ControlOption] = {
    "short": ControlOption(
        label="Short",
        prompt_addition=(
            "KEEP THIS TIGHT. 200-300 words MAXIMUM. One main idea only. "
            "Structure: Hook, One Key Point, CTA."
        ),
    ),
    "medium": ControlOption(
        label="Medium",
        prompt_addition=(
            "Aim for 400-500 words. 3-4 key points maximum. "
            "Structure: Hook, Story/Context, Teaching, CTA."
        ),
    ),
    "long": ControlOption(
        label="Long",
        prompt_addition=(
            "This is a deep dive. 600-800 words. Build the case thoroughly and handle objections."
        ),
    ),
}

EMOTION_OPTIONS: dict[str, ControlOption] = {
    "low": ControlOption(
        label="Neutral/Factual",
        prompt_addition="Keep emotion LOW. Be informative, clear, practical.",
        shift=-2,
    ),
    "moderate": ControlOption(
        label="Warm/Relatable",
        prompt_addition="Moderate emotional connection. Be warm, empathetic, relatable.",
    ),
    "high": ControlOption(
        label="Passionate/Inspiring",
        prompt_addition="HIGH emotional resonance. Include personal stories and vivid imagery.",
        shift=2,
    ),
}

URGENCY_OPTIONS: dict[str, ControlOption] = {
    "none": ControlOption(
        label="No Urgency",
        prompt_addition="ZERO urgency. No deadlines. CTA should be an invitation only.",
    ),
    "soft": ControlOption(
        label="Gentle Nudge",
        prompt_addition="Soft urgency. A gentle reminder that acting is beneficial, no pressure.",
    ),
    "strong": ControlOption(
        label="Real Deadline",
        prompt_addition=(
            "STRONG urgency with a REAL deadline: specific date, real reason, what happens after."
        ),
    ),
}

TONE_OPTIONS: dict[str, ControlOption] = {
    "casual": ControlOption(
        label="Casual",
        prompt_addition="Write like you're texting a close friend. Contractions, short sentences.",
        shift=-2,
    ),
    "balanced": ControlOption(
        label="Balanced",
        prompt_addition="Professional enough to be credible, conversational enough to be relatable.",
    ),
    "professional": ControlOption(
        label="Professional",
        prompt_addition="Write with authority and polish. Complete sentences, fewer contractions.",
        shift=2,
    ),
}

CONTENT_TYPE_CONTROL_DEFAULTS: dict[str, CopyControls] = {
    "welcome_email_1": CopyControls(length="short"),
    "welcome_email_2": CopyControls(emotion="high"),
    "welcome_email_3": CopyControls(),
    "welcome_email_4": CopyControls(urgency="soft"),
    "welcome_email_5": CopyControls(length="long", urgency="soft"),
    "social_post": CopyControls(length="short", emotion="high", tone="casual"),
    "sales_page_headline": CopyControls(length="short", emotion="high", urgency="soft", tone="professional"),
    "sales_page_body": CopyControls(length="long", emotion="high", urgency="strong", tone="professional"),
    "promo_email": CopyControls(urgency="soft"),
}


def get_default_controls(content_type: str) -> CopyControls:
    """Smart defaults for a content type."""
    defaults = CONTENT_TYPE_CONTROL_DEFAULTS.get(content_type, CopyControls())
    return CopyControls(
        length=defaults.length,
        emotion=defaults.emotion,
        urgency=defaults.urgency,
        tone=defaults.tone,
    )

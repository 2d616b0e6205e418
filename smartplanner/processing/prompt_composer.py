"""Assembles the system and user prompts that drive copy generation."""

import json
import logging

from langchain_core.prompts import ChatPromptTemplate

from ..exceptions import PromptCompositionError
from ..models.brand import (
    EMOTION_OPTIONS,
    LENGTH_OPTIONS,
    TONE_OPTIONS,
    URGENCY_OPTIONS,
    BrandProfile,
    CopyControls,
    Product,
)
from ..models.content_type import get_content_type
from ..models.feedback import AdaptiveParams, FeedbackPattern, RatedGeneration

logger = logging.getLogger(__name__)

MAX_VOICE_SAMPLES = 3
MAX_CUSTOMER_REVIEWS = 5
MAX_PAST_FEEDBACK = 3
# Past generations rated below this are shown to the model as things to fix
PAST_FEEDBACK_RATING_BELOW = 8

BASE_SYSTEM_PROMPT = "You are an expert copywriter specializing in conversion-focused content."


def _signed(value: int) -> str:
    return f"+{value}" if value > 0 else str(value)


def _tag_label(tag: str) -> str:
    return tag.replace("_", " ")


def build_adaptive_prompt_additions(params: AdaptiveParams | None) -> str:
    """Render adaptive parameters as prompt instructions.

    Returns an empty string for neutral parameters. Each section is only
    emitted when it has content.
    """
    if params is None or params.is_neutral():
        return ""

    lines = [
        "=== ADAPTIVE LEARNING ADJUSTMENTS ===",
        "Based on this user's past feedback, make these adjustments:",
        "",
    ]

    if params.strategic_guidance:
        lines.append("STRATEGIC ADJUSTMENTS:")
        lines.extend(f"- {guide}" for guide in params.strategic_guidance)
        lines.append("")

    if params.avoid_patterns:
        lines.append("AVOID (user dislikes these):")
        lines.extend(f"❌ {pattern}" for pattern in params.avoid_patterns)
        lines.append("")

    if params.emphasize_patterns:
        lines.append("EMPHASIZE (user loves these):")
        lines.extend(f"✓ {pattern}" for pattern in params.emphasize_patterns)
        lines.append("")

    shift = params.tone_shift
    if not shift.is_neutral():
        lines.append("TONE ADJUSTMENTS (from voice profile baseline):")
        if shift.formality_shift:
            direction = "more professional" if shift.formality_shift > 0 else "more casual"
            lines.append(f"- Formality: {_signed(shift.formality_shift)} ({direction})")
        if shift.energy_shift:
            direction = "higher energy" if shift.energy_shift > 0 else "calmer"
            lines.append(f"- Energy: {_signed(shift.energy_shift)} ({direction})")
        if shift.emotion_shift:
            direction = "more expressive" if shift.emotion_shift > 0 else "more neutral"
            lines.append(f"- Emotion: {_signed(shift.emotion_shift)} ({direction})")
        lines.append("")

    lines.append(
        "CRITICAL: These adjustments take precedence over voice profile defaults. "
        "The user has trained you through feedback."
    )
    return "\n".join(lines)


def build_universal_hints(pattern: FeedbackPattern | None) -> str:
    """Render style preferences learned on other content types.

    Only cross-type patterns (no history for the requested family) produce
    output; patterns with family history go through the adaptive
    parameters instead.
    """
    if pattern is None or not pattern.is_cross_type_only:
        return ""
    if not pattern.common_issues and not pattern.success_factors:
        return ""

    lines = [
        "=== GENERAL STYLE PREFERENCES ===",
        "This user has not rated this kind of content yet. "
        "Across their other content they have said:",
    ]
    lines.extend(f"- Avoid: {_tag_label(tag)}" for tag in pattern.common_issues)
    lines.extend(f"- Keep: {_tag_label(tag)}" for tag in pattern.success_factors)
    return "\n".join(lines)


def build_controls_prompt(controls: CopyControls | None) -> str:
    """Render the length, emotion, urgency and tone controls."""
    if controls is None:
        return ""

    options = [
        ("LENGTH", LENGTH_OPTIONS, controls.length),
        ("EMOTION", EMOTION_OPTIONS, controls.emotion),
        ("URGENCY", URGENCY_OPTIONS, controls.urgency),
        ("TONE", TONE_OPTIONS, controls.tone),
    ]

    lines = ["=== COPY CONTROLS ==="]
    for heading, table, value in options:
        option = table.get(value)
        if option is None:
            raise PromptCompositionError(f"Unknown {heading.lower()} control: {value}")
        lines.append(f"{heading} ({option.label}): {option.prompt_addition}")
    return "\n".join(lines)


def build_prompt_template() -> ChatPromptTemplate:
    """Chat prompt with pre-rendered system and user messages."""
    return ChatPromptTemplate.from_messages(
        [
            ("system", "{system_prompt}"),
            ("user", "{user_prompt}"),
        ]
    )


class StrategyComposer:
    """Builds generation prompts from brand context and learned feedback."""

    def build_system_prompt(
        self,
        brand_profile: BrandProfile | None = None,
        adaptive_params: AdaptiveParams | None = None,
        copy_controls: CopyControls | None = None,
        past_feedback: list[RatedGeneration] | None = None,
        feedback_pattern: FeedbackPattern | None = None,
    ) -> str:
        """Assemble the system prompt.

        Args:
            brand_profile: Business context, voice profile and samples
            adaptive_params: Adjustments learned from the user's ratings
            copy_controls: Length, emotion, urgency and tone settings
            past_feedback: Recent rated generations, newest first
            feedback_pattern: Pattern the adaptive parameters came from

        Returns:
            The system prompt text

        """
        sections = [BASE_SYSTEM_PROMPT]

        if brand_profile is not None:
            sections.append(self._business_context(brand_profile))

            if brand_profile.voice_profile is not None:
                voice = brand_profile.voice_profile
                signature = "\n".join(voice.signature_phrases) or "None identified"
                sections.append(
                    "BRAND VOICE PROFILE:\n"
                    f"{voice.style_summary}\n"
                    "Tone Characteristics:\n"
                    f"{json.dumps(voice.tone_scores.model_dump(), indent=2)}\n"
                    "Signature Phrases:\n"
                    f"{signature}"
                )

            if brand_profile.voice_samples:
                samples = "\n\n---\n\n".join(brand_profile.voice_samples[:MAX_VOICE_SAMPLES])
                sections.append(f"VOICE SAMPLES (write in this style):\n{samples}")

            if brand_profile.customer_reviews:
                reviews = "\n".join(brand_profile.customer_reviews[:MAX_CUSTOMER_REVIEWS])
                sections.append(f"CUSTOMER VOICE (use their language):\n{reviews}")

        feedback_section = self._past_feedback(past_feedback or [])
        if feedback_section:
            sections.append(feedback_section)

        for extra in (
            build_controls_prompt(copy_controls),
            build_adaptive_prompt_additions(adaptive_params),
            build_universal_hints(feedback_pattern),
        ):
            if extra:
                sections.append(extra)

        return "\n\n".join(sections)

    def build_user_prompt(
        self,
        content_type: str,
        product: Product | None = None,
        additional_context: str | None = None,
    ) -> str:
        """Assemble the user prompt for a content type."""
        sections = []

        if product is not None:
            lines = [
                "Product/Offer to promote:",
                f"Name: {product.product_name}",
                f"Type: {product.product_type}",
            ]
            if product.price:
                lines.append(f"Price: ${product.price:g}")
            if product.description:
                lines.append(f"Description: {product.description}")
            if product.affiliate_link:
                lines.append(f"Link: {product.affiliate_link}")
            sections.append("\n".join(lines))

        if additional_context:
            sections.append(f"Additional context: {additional_context}")

        definition = get_content_type(content_type)
        if definition is None:
            logger.debug(f"No guidance for content type {content_type}, using generic prompt")
            sections.append(f"Write compelling {_tag_label(content_type)} copy.")
        else:
            sections.append(
                f"Write a {definition.name}: {definition.description}.\n\n{definition.guidance}"
            )

        return "\n\n".join(sections)

    @staticmethod
    def _business_context(profile: BrandProfile) -> str:
        return (
            "BUSINESS CONTEXT:\n"
            f"Business: {profile.business_name or 'Not specified'}\n"
            f"Industry: {profile.industry or 'Not specified'}\n"
            f"What they sell: {profile.what_you_sell or 'Not specified'}\n"
            f"Target customer: {profile.target_customer or 'Not specified'}"
        )

    @staticmethod
    def _past_feedback(past_feedback: list[RatedGeneration]) -> str:
        recent = [
            g for g in past_feedback
            if g.rating is not None and g.rating < PAST_FEEDBACK_RATING_BELOW
        ][:MAX_PAST_FEEDBACK]
        if not recent:
            return ""

        lines = ["IMPORTANT - USER PREFERENCES (from past feedback):"]
        for generation in recent:
            reason = generation.feedback_text or ", ".join(
                _tag_label(tag) for tag in generation.tags
            ) or "no reason given"
            lines.append(f"- Previously rated {generation.rating:g}/10 because: {reason}")
        lines.append("")
        lines.append("Adjust your writing to address these concerns.")
        return "\n".join(lines)

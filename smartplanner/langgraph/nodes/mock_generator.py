"""Mock copy generator for testing without OpenAI API key.

This produces deterministic copy shaped by the content type, the product
and the learned tone shift.
"""

from ...models.content_type import get_content_type
from ..state import GenerationState


def mock_generate_copy(state: GenerationState) -> dict:
    """Mock generate copy for testing."""
    if state.get("error"):
        return {}

    content_type = state.get("content_type", "")
    definition = get_content_type(content_type)
    name = definition.name if definition else content_type.replace("_", " ")

    product = state.get("product")
    offer = product.product_name if product else "the program"

    params = state.get("adaptive_params")
    formality = params.tone_shift.formality_shift if params else 0

    greeting = "Hey friend," if formality <= 0 else "Hello,"
    closing = "Talk soon." if formality <= 0 else "Kind regards."

    paragraphs = [
        f"Subject: The {name.lower()} I almost didn't send",
        greeting,
        (
            "Last spring I sat in my car outside a client meeting and rewrote my pitch "
            "three times. Nothing felt right."
        ),
        f"So I stopped. I told them what {offer} had changed for me, in plain words.",
        "They signed that afternoon.",
        "Hit reply and tell me where you're stuck this week. I read every answer.",
        closing,
    ]
    copy_text = "\n\n".join(paragraphs)

    return {
        "generated_copy": copy_text,
        "tokens_used": len(copy_text.split()),
        "generation_time_ms": 0,
    }

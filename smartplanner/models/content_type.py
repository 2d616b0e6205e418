"""Content types available for copy generation and their families."""

from dataclasses import dataclass
from enum import Enum


class ContentCategory(str, Enum):
    """Broad grouping used for display."""

    EMAIL = "email"
    SOCIAL = "social"
    AD = "ad"
    SALES = "sales"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    ContentCategory.EMAIL: "Email Marketing",
    ContentCategory.SOCIAL: "Social Media",
    ContentCategory.AD: "Ad Copy",
    ContentCategory.SALES: "Sales Pages",
    ContentCategory.OTHER: "Other Content",
}


@dataclass(frozen=True)
class ContentTypeDefinition:
    """A generation target such as a welcome email or a sales headline."""

    id: str
    category: ContentCategory
    name: str
    description: str
    guidance: str


CONTENT_TYPES: dict[str, ContentTypeDefinition] = {
    "welcome_email_1": ContentTypeDefinition(
        id="welcome_email_1",
        category=ContentCategory.EMAIL,
        name="Welcome Email #1",
        description="Deliver value + build trust (no selling)",
        guidance=(
            "This is Email 1 in a welcome sequence.\n"
            "- Include ONE tactical tip with numbered steps\n"
            "- NO selling or pitching\n"
            "- Soft CTA (reply, try this)\n"
            "Length: 250-400 words"
        ),
    ),
    "welcome_email_2": ContentTypeDefinition(
        id="welcome_email_2",
        category=ContentCategory.EMAIL,
        name="Welcome Email #2",
        description="Origin story + position as guide",
        guidance=(
            "This is Email 2 in a welcome sequence.\n"
            "- Share YOUR struggle (specific moment)\n"
            "- Turning point with details\n"
            "- Mirror the reader's current situation\n"
            "Length: 350-500 words"
        ),
    ),
    "welcome_email_3": ContentTypeDefinition(
        id="welcome_email_3",
        category=ContentCategory.EMAIL,
        name="Welcome Email #3",
        description="Teaching content + value",
        guidance=(
            "This is Email 3 in a welcome sequence.\n"
            "- Teach one framework in depth\n"
            "- Use a concrete example\n"
            "Length: 350-500 words"
        ),
    ),
    "welcome_email_4": ContentTypeDefinition(
        id="welcome_email_4",
        category=ContentCategory.EMAIL,
        name="Welcome Email #4",
        description="Social proof + soft intro to offer",
        guidance=(
            "This is Email 4 in a welcome sequence.\n"
            "- Lead with a result or transformation story\n"
            "- Plant seeds about the offer\n"
            "Length: 300-450 words"
        ),
    ),
    "welcome_email_5": ContentTypeDefinition(
        id="welcome_email_5",
        category=ContentCategory.EMAIL,
        name="Welcome Email #5",
        description="Make the offer + invite next step",
        guidance=(
            "This is Email 5 in a welcome sequence.\n"
            "- Introduce the offer naturally\n"
            "- Handle the main objection\n"
            "- Clear, compelling CTA\n"
            "Length: 400-600 words"
        ),
    ),
    "email_newsletter": ContentTypeDefinition(
        id="email_newsletter",
        category=ContentCategory.EMAIL,
        name="Email Newsletter",
        description="Regular value email to your list",
        guidance="One main story or lesson, skimmable sections, one CTA. 300-600 words",
    ),
    "promo_email": ContentTypeDefinition(
        id="promo_email",
        category=ContentCategory.EMAIL,
        name="Promotional Email",
        description="One-off promotional or launch email",
        guidance="Lead with the transformation, state the offer plainly, one clear CTA. 250-450 words",
    ),
    "instagram_post": ContentTypeDefinition(
        id="instagram_post",
        category=ContentCategory.SOCIAL,
        name="Instagram Post",
        description="Caption for a feed post or carousel",
        guidance="Hook in the first line, short paragraphs, end with a question. 100-300 words",
    ),
    "linkedin_post": ContentTypeDefinition(
        id="linkedin_post",
        category=ContentCategory.SOCIAL,
        name="LinkedIn Post",
        description="Professional insight post",
        guidance="Two-line hook, one lesson from real experience, invite discussion. 150-300 words",
    ),
    "twitter_thread": ContentTypeDefinition(
        id="twitter_thread",
        category=ContentCategory.SOCIAL,
        name="Twitter/X Thread",
        description="Multi-post thread",
        guidance="Strong first post, one idea per post, 5-10 posts, closing recap",
    ),
    "social_post": ContentTypeDefinition(
        id="social_post",
        category=ContentCategory.SOCIAL,
        name="Social Media Post",
        description="Platform-optimized social content",
        guidance="Hook immediately, one clear point, engagement element. 100-250 words",
    ),
    "facebook_ad": ContentTypeDefinition(
        id="facebook_ad",
        category=ContentCategory.AD,
        name="Facebook Ad",
        description="Paid social ad copy",
        guidance="Call out the audience, name the pain, show the outcome, one CTA. 50-150 words",
    ),
    "sales_page_headline": ContentTypeDefinition(
        id="sales_page_headline",
        category=ContentCategory.SALES,
        name="Sales Page Headline",
        description="Attention-grabbing headline for sales page",
        guidance="Provide 5 headline options with subheadlines. Specific outcome, no hype",
    ),
    "sales_page_body": ContentTypeDefinition(
        id="sales_page_body",
        category=ContentCategory.SALES,
        name="Sales Page Body",
        description="Full long-form sales page copy",
        guidance="Problem, story, solution, proof, offer stack, objections, guarantee, CTA",
    ),
    "blog_post": ContentTypeDefinition(
        id="blog_post",
        category=ContentCategory.OTHER,
        name="Blog Post",
        description="Long-form educational article",
        guidance="Searchable title, clear sections, practical takeaways. 800-1500 words",
    ),
    "video_script": ContentTypeDefinition(
        id="video_script",
        category=ContentCategory.OTHER,
        name="Video Script",
        description="Script for short or long-form video",
        guidance="Hook in 5 seconds, pattern interrupts, spoken rhythm, CTA at the end",
    ),
}

# Content types whose feedback informs each other
CONTENT_FAMILIES: dict[str, tuple[str, ...]] = {
    "welcome_sequence": (
        "welcome_email_1",
        "welcome_email_2",
        "welcome_email_3",
        "welcome_email_4",
        "welcome_email_5",
    ),
    "broadcast_email": ("email_newsletter", "promo_email"),
    "social": ("instagram_post", "linkedin_post", "twitter_thread", "social_post"),
    "ads": ("facebook_ad",),
    "sales_page": ("sales_page_headline", "sales_page_body"),
    "long_form": ("blog_post", "video_script"),
}


def get_content_type(content_type_id: str) -> ContentTypeDefinition | None:
    """Look up a content type definition by id."""
    return CONTENT_TYPES.get(content_type_id)


def get_content_types_by_category(category: ContentCategory) -> list[ContentTypeDefinition]:
    """List the content types in a display category."""
    return [ct for ct in CONTENT_TYPES.values() if ct.category == category]


def get_content_family(content_type_id: str) -> str:
    """Name of the family a content type belongs to.

    Unknown content types form a family of their own.
    """
    for family, members in CONTENT_FAMILIES.items():
        if content_type_id in members:
            return family
    return content_type_id


def get_family_members(content_type_id: str) -> list[str]:
    """All content types sharing feedback with ``content_type_id``."""
    family = get_content_family(content_type_id)
    return list(CONTENT_FAMILIES.get(family, (content_type_id,)))

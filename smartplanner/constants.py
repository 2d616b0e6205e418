"""Constants used throughout the smartplanner text intelligence core."""


# Task commit defaults
TASK_STATUS_DEFAULT = "backlog"
TASK_DATE_FORMAT = "%Y-%m-%d"

# Feedback tags a user can attach when rating a generation
FEEDBACK_TAGS = [
    "too_formal",
    "too_casual",
    "too_long",
    "too_short",
    "needs_more_emotion",
    "too_salesy",
    "bland_generic",
    "wrong_tone",
    "missing_cta",
    "great_hook",
    "perfect_tone",
    "great_story",
    "clear_cta",
]

# Tags whose meaning holds for every content type. Only these may carry
# signal from one content family into another.
UNIVERSAL_FEEDBACK_TAGS = frozenset({
    "too_formal",
    "too_casual",
    "needs_more_emotion",
    "too_salesy",
    "bland_generic",
    "wrong_tone",
    "great_hook",
    "perfect_tone",
})

# Rating scale
MIN_RATING = 0
MAX_RATING = 10

# AI detection score bounds
MIN_AI_SCORE = 0
MAX_AI_SCORE = 10

# Recent chips kept per key (recent tags, recent projects)
RECENT_ITEMS_LIMIT = 10
RECENT_TAGS_KEY = "recent_tags"
RECENT_PROJECTS_KEY = "recent_projects"

# Generation log export
CSV_EXPORT_FIELDS = [
    "generation_id",
    "user_id",
    "content_type",
    "rating",
    "feedback_tags",
    "feedback_text",
    "created_at",
]
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# CLI output
SEPARATOR_LENGTH = 80

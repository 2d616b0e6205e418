"""Configuration settings for the smartplanner text intelligence core."""

import os
import re
from re import Pattern

# Model configuration
MODEL_CONFIG: dict[str, str | float | int] = {
    "generation_model": "gpt-4o",
    "voice_analysis_model": "gpt-4o",
    "draft_temperature": 0.8,
    "critique_temperature": 0.3,
    "rewrite_temperature": 0.7,
    "voice_analysis_temperature": 0.3,
    "max_tokens": 2000,
}

# Capture classification
CLASSIFIER_CONFIG: dict[str, str] = {
    # Currency at the start with no income/expense context falls back to this
    "ambiguous_currency_type": os.getenv(
        "SMARTPLANNER_AMBIGUOUS_CURRENCY_TYPE", "expense"
    ),
}

EXPLICIT_MARKERS: list[tuple[tuple[str, ...], str]] = [
    (("#idea", "idea:"), "idea"),
    (("#income", "income:"), "income"),
    (("#expense", "expense:"), "expense"),
]

ACTION_VERBS = [
    "call", "write", "send", "finish", "record", "edit", "post", "schedule",
    "email", "meet", "review", "create", "update", "fix", "check", "submit",
    "prepare", "buy", "book", "cancel", "follow", "contact", "complete",
    "start", "begin", "organize", "plan", "setup", "set up", "make", "do",
]

IDEA_PHRASES = [
    "idea", "content idea", "offer idea", "brain dump", "brainstorm",
    "what if", "maybe", "could try", "concept", "thought about",
    "inspiration", "consider", "explore", "potential",
]

INCOME_PHRASES = [
    "sold", "revenue", "earned", "payment received", "income", "sale",
    "client paid", "got paid", "received", "deposit", "refund received",
]

EXPENSE_PHRASES = [
    "spent", "paid", "bought", "subscription", "cost", "expense",
    "purchase", "bill", "fee", "charged", "payment for",
]

TIME_DATE_PATTERNS: list[Pattern] = [
    re.compile(r"\btoday\b", re.IGNORECASE),
    re.compile(r"\btomorrow\b", re.IGNORECASE),
    re.compile(r"\bnext week\b", re.IGNORECASE),
    re.compile(
        r"\b(monday|tuesday|wednesday|thursday|friday|saturday|sunday)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b\d{1,2}(:\d{2})?\s*(am|pm)\b", re.IGNORECASE),  # 2pm, 9:30 am
    re.compile(r"\b\d+(m|h|min|hr|hour)\b", re.IGNORECASE),  # 30m, 2h
    re.compile(r"!(high|medium|med|low)", re.IGNORECASE),
]

CURRENCY_PATTERN: Pattern = re.compile(r"^\$\d+(\.\d{2})?")

# Task field extraction
TASK_PARSER_CONFIG: dict[str, bool] = {
    # When True, bare numbers ("call him at 5") are not captured as times
    "require_meridiem": False,
}

TAG_PATTERN: Pattern = re.compile(r"#(\w+)")
PRIORITY_PATTERN: Pattern = re.compile(r"!(high|medium|med|low)", re.IGNORECASE)
DURATION_PATTERN: Pattern = re.compile(r"\b(\d+)(hour|min|hr|h|m)\b", re.IGNORECASE)
TIME_PATTERN: Pattern = re.compile(r"\b(\d{1,2})(:\d{2})?\s*(am|pm)?\b", re.IGNORECASE)
STRICT_TIME_PATTERN: Pattern = re.compile(
    r"\b(\d{1,2})(:\d{2})?\s*(am|pm)\b|\b(\d{1,2}):(\d{2})\b", re.IGNORECASE
)

WEEKDAYS = [
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
]

# AI pattern detection
FORBIDDEN_PHRASES = [
    "embark on a journey",
    "delve into",
    "dive deep",
    "unlock the secrets",
    "game-changer",
    "revolutionary",
    "transform your life",
    "at the end of the day",
    "in today's world",
    "in today's landscape",
    "in today's digital age",
    "needless to say",
    "it's worth noting that",
    "let's be honest",
    "picture this",
    "imagine this",
    "the bottom line is",
    "in conclusion",
    "harness the power",
    "leverage the",
    "in essence",
    "moreover",
    "furthermore",
    "it is important to note",
    "it goes without saying",
]

AI_PATTERNS: list[Pattern] = [
    re.compile(r"here's what", re.IGNORECASE),
    re.compile(r"here are", re.IGNORECASE),
    re.compile(r"let me know your thoughts", re.IGNORECASE),
    re.compile(r"feel free to", re.IGNORECASE),
    re.compile(r"don't hesitate to", re.IGNORECASE),
    re.compile(r"i hope this helps", re.IGNORECASE),
    re.compile(r"i'd be happy to", re.IGNORECASE),
    re.compile(r"certainly!", re.IGNORECASE),
    re.compile(r"absolutely!", re.IGNORECASE),
    re.compile(r"great question", re.IGNORECASE),
]

QUALIFIER_WORDS = [
    "really",
    "very",
    "actually",
    "literally",
    "powerful",
    "amazing",
    "incredible",
    "game-changing",
    "transformative",
    "revolutionary",
]

SENTENCE_SPLIT_PATTERN: Pattern = re.compile(r"[.!?]+")
PARAGRAPH_SPLIT_PATTERN: Pattern = re.compile(r"\n\n+")
EM_DASH_PATTERN: Pattern = re.compile(r"—|–")
PARENTHETICAL_PATTERN: Pattern = re.compile(r"\([^)]+\)")
TRIPLE_ADJECTIVE_PATTERN: Pattern = re.compile(r"\b\w+,\s+\w+,\s+(and\s+)?\w+\b")
COLON_SETUP_PATTERN: Pattern = re.compile(r":\s*\n|:\s*$", re.MULTILINE)
BULLET_LINE_PATTERN: Pattern = re.compile(r"^[\s]*[-•*]\s", re.MULTILINE)
BULLET_BLOCK_PATTERN: Pattern = re.compile(r"^[\s]*[-•*].*", re.MULTILINE)

DETECTION_THRESHOLDS: dict[str, float] = {
    "exclamations_per_sentence": 0.3,
    "em_dashes_per_paragraph": 2,
    "parentheticals_per_paragraph": 1,
    "qualifiers_per_sentence": 0.2,
    "min_sentences_for_variance": 3,
    "min_sentence_variance": 10,
    "max_colon_setups": 2,
    "max_bullets": 5,
    "prose_words_per_bullet": 20,
}

# Adaptive learning
ADAPTIVE_CONFIG: dict[str, float | int] = {
    "family_window": 30,
    "global_window": 50,
    "low_rating_below": 7,
    "high_rating_from": 8,
    "issue_threshold_ratio": 0.3,
    "success_threshold_ratio": 0.4,
    "min_tag_count": 2,
    "recent_low_rated": 5,
    "min_generations": 3,
    "min_global_ratings": 3,
    "low_avg_rating": 6,
    "high_avg_rating": 8.5,
    "max_temperature_adjustment": 0.2,
    "max_tone_shift": 2,
}

# Logging configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL = os.getenv("SMARTPLANNER_LOG_LEVEL", "INFO")

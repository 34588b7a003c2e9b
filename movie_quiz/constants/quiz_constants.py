"""Quiz-related constants shared across UI and core layers."""

QUESTIONS_AMOUNT: int = 10
FEEDBACK_DELAY_MS: int = 1000
DEFAULT_RATING_THRESHOLD: int = 6
RATING_THRESHOLD_SPREAD: int = 1
ANSWER_BORDER_WIDTH: int = 8

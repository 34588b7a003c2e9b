"""Network configuration constants for the quiz application."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8000

MOVIES_FEED_URL_TEMPLATE: str = "https://tv-api.com/en/API/Top250Movies/{api_key}"
MOVIES_API_KEY_ENV: str = "MOVIE_QUIZ_API_KEY"
REQUEST_TIMEOUT_SECONDS: float = 20.0

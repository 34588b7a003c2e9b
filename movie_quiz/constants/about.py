"""Static metadata describing MovieQuiz."""

APP_NAME = "MovieQuiz"
APP_VERSION = "0.1"
APP_ORGANIZATION = "MovieQuiz"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "MovieQuiz is a single-player trivia game built with Qt and FastAPI. "
    "Ten movie posters, one yes/no question each: is the movie rated higher than the given score?"
)

HELP_TEXT = (
    "Answer each question with Yes or No. The poster is highlighted green for a correct "
    "answer and red for a wrong one before the next question appears.\n\n"
    "After the tenth question a summary shows your result, how many quizzes you have played, "
    "your best result and your average accuracy across all quizzes."
)

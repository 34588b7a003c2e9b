"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "MovieQuiz"
GAME_URL_PLACEHOLDER: str = "http://<host-ip>:8000/"

YES_BUTTON_TEXT: str = "Yes"
NO_BUTTON_TEXT: str = "No"
QUESTION_LABEL_TEXT: str = "Question:"
LOADING_MESSAGE: str = "Loading questions…"
POSTER_PLACEHOLDER: str = "(no poster)"

RESULT_TITLE: str = "This round is over!"
RESULT_BUTTON_TEXT: str = "Play again"
ERROR_TITLE: str = "Error"
ERROR_BUTTON_TEXT: str = "Try again"

POSTER_DIRECTORY_NAME: str = "posters"
POSTER_SUFFIXES: tuple[str, ...] = (".jpg", ".jpeg", ".png")
POSTER_DIR_ENV: str = "MOVIE_QUIZ_POSTER_DIR"

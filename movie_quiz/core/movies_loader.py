"""Download and decode the movie-rating feed used to build remote questions."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError
import requests

from movie_quiz.constants.network_constants import (
    MOVIES_FEED_URL_TEMPLATE,
    REQUEST_TIMEOUT_SECONDS,
)
from movie_quiz.core.errors import SourceUnavailable

logger = logging.getLogger(__name__)


class MostPopularMovie(BaseModel):
    """Single entry of the movie feed."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(alias="fullTitle")
    rating: str = Field(default="", alias="imDbRating")
    image_url: str = Field(alias="image")

    @property
    def rating_value(self) -> float:
        try:
            return float(self.rating)
        except ValueError:
            return 0.0

    @property
    def resized_image_url(self) -> str:
        """Ask the image CDN for a 600px wide poster instead of the original upload."""
        base = self.image_url.split("._", 1)[0]
        if base == self.image_url:
            return self.image_url
        return f"{base}._V0_UX600_.jpg"


class MostPopularMovies(BaseModel):
    """Top-level feed document."""

    model_config = ConfigDict(populate_by_name=True)

    error_message: str = Field(default="", alias="errorMessage")
    items: list[MostPopularMovie] = Field(default_factory=list)


class MoviesLoader:
    """Fetches the movie list and poster images over HTTP."""

    def __init__(
        self,
        api_key: str,
        session: requests.Session | None = None,
        url_template: str = MOVIES_FEED_URL_TEMPLATE,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self._url = url_template.format(api_key=api_key)
        self._session = session or requests.Session()
        self._timeout = timeout

    def load_movies(self) -> list[MostPopularMovie]:
        """Return the decoded feed, raising ``SourceUnavailable`` on any failure."""
        try:
            response = self._session.get(self._url, timeout=self._timeout)
            response.raise_for_status()
            feed = MostPopularMovies.model_validate(response.json())
        except requests.RequestException as exc:
            raise SourceUnavailable(f"Could not download the movie list: {exc}") from exc
        except (ValidationError, ValueError) as exc:
            raise SourceUnavailable(f"Could not decode the movie list: {exc}") from exc

        if feed.error_message:
            raise SourceUnavailable(feed.error_message)
        if not feed.items:
            raise SourceUnavailable("The movie list is empty.")
        logger.info("Loaded %s movies from the feed", len(feed.items))
        return feed.items

    def download_poster(self, movie: MostPopularMovie, cache_dir: Path) -> Path:
        """Store the movie poster under ``cache_dir`` and return its path."""
        url = movie.resized_image_url
        target = cache_dir / f"{hashlib.sha1(url.encode('utf-8')).hexdigest()}.jpg"
        if target.exists():
            return target
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise SourceUnavailable(f"Could not load the poster for {movie.title}: {exc}") from exc
        cache_dir.mkdir(parents=True, exist_ok=True)
        target.write_bytes(response.content)
        return target

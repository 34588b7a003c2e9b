"""
Tests for question sources.

Tests cover:
- The bundled static question list
- Decoding the movie feed
- Building questions from movie ratings
"""

import random
import re

import pytest
import requests

from movie_quiz.core.errors import InvalidInput, SourceUnavailable
from movie_quiz.core.movies_loader import MostPopularMovie, MoviesLoader
from movie_quiz.core.question_factory import RemoteQuestionFactory
from movie_quiz.core.question_source import DEFAULT_MOVIE_QUESTIONS, StaticQuestionSource

FEED = {
    "errorMessage": "",
    "items": [
        {
            "id": "tt0111161",
            "title": "The Shawshank Redemption",
            "fullTitle": "The Shawshank Redemption (1994)",
            "imDbRating": "9.2",
            "image": "https://m.media-amazon.com/images/M/MV5BMDFk._V1_Ratio0.6716_AL_.jpg",
        },
        {
            "id": "tt0068646",
            "title": "The Godfather",
            "fullTitle": "The Godfather (1972)",
            "imDbRating": "5.4",
            "image": "https://m.media-amazon.com/images/M/MV5BM2Mw._V1_Ratio0.7015_AL_.jpg",
        },
    ],
}


class FakeResponse:
    def __init__(self, payload=None, content: bytes = b"", status_code: int = 200, bad_json: bool = False):
        self._payload = payload
        self.content = content
        self.status_code = status_code
        self._bad_json = bad_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._bad_json:
            raise ValueError("Expecting value")
        return self._payload


class FakeSession:
    """Answers the feed URL with ``feed_response`` and every other URL with a poster."""

    def __init__(self, feed_response: FakeResponse, poster_status: int = 200) -> None:
        self.feed_response = feed_response
        self.poster_status = poster_status
        self.requested: list[str] = []

    def get(self, url: str, timeout: float):
        self.requested.append(url)
        if url.startswith("https://feed.test/"):
            return self.feed_response
        return FakeResponse(content=b"poster-bytes", status_code=self.poster_status)


def make_loader(session: FakeSession) -> MoviesLoader:
    return MoviesLoader("k_test", session=session, url_template="https://feed.test/{api_key}")


def run_now(task) -> None:
    task()


class TestStaticQuestionSource:
    def test_delivers_questions_in_order_and_cycles(self):
        source = StaticQuestionSource(DEFAULT_MOVIE_QUESTIONS)
        delivered = []

        for _ in range(len(DEFAULT_MOVIE_QUESTIONS) + 1):
            source.request_next_question(lambda question, error: delivered.append((question, error)))

        assert [q for q, _ in delivered[:10]] == list(DEFAULT_MOVIE_QUESTIONS)
        assert delivered[10] == (DEFAULT_MOVIE_QUESTIONS[0], None)

    def test_shuffled_source_delivers_each_question_once_per_cycle(self):
        source = StaticQuestionSource(DEFAULT_MOVIE_QUESTIONS, shuffle=True, rng=random.Random(11))
        delivered = []

        for _ in DEFAULT_MOVIE_QUESTIONS:
            source.request_next_question(lambda question, error: delivered.append(question))

        assert sorted(q.image_key for q in delivered) == sorted(q.image_key for q in DEFAULT_MOVIE_QUESTIONS)

    def test_empty_source_is_rejected(self):
        with pytest.raises(InvalidInput):
            StaticQuestionSource([])

    def test_bundled_questions(self):
        assert len(DEFAULT_MOVIE_QUESTIONS) == 10
        assert sum(q.correct_answer for q in DEFAULT_MOVIE_QUESTIONS) == 6


class TestMoviesLoader:
    def test_decodes_feed(self):
        movies = make_loader(FakeSession(FakeResponse(FEED))).load_movies()

        assert [m.title for m in movies] == ["The Shawshank Redemption (1994)", "The Godfather (1972)"]
        assert movies[0].rating_value == pytest.approx(9.2)

    def test_error_message_is_unavailable(self):
        session = FakeSession(FakeResponse({"errorMessage": "Invalid API Key", "items": []}))

        with pytest.raises(SourceUnavailable, match="Invalid API Key"):
            make_loader(session).load_movies()

    @pytest.mark.parametrize(
        "response",
        [
            FakeResponse(status_code=500),
            FakeResponse(bad_json=True),
            FakeResponse({"errorMessage": "", "items": [{"fullTitle": "No image"}]}),
            FakeResponse({"errorMessage": "", "items": []}),
        ],
    )
    def test_broken_feed_is_unavailable(self, response):
        with pytest.raises(SourceUnavailable):
            make_loader(FakeSession(response)).load_movies()

    def test_resized_image_url(self):
        movie = MostPopularMovie.model_validate(FEED["items"][0])

        assert movie.resized_image_url == "https://m.media-amazon.com/images/M/MV5BMDFk._V0_UX600_.jpg"

    def test_missing_rating_counts_as_zero(self):
        movie = MostPopularMovie(title="Unrated", rating="", image_url="https://img.test/a.jpg")

        assert movie.rating_value == 0.0
        assert movie.resized_image_url == "https://img.test/a.jpg"

    def test_poster_is_cached_on_disk(self, tmp_path):
        session = FakeSession(FakeResponse(FEED))
        loader = make_loader(session)
        movie = MostPopularMovie.model_validate(FEED["items"][0])

        first = loader.download_poster(movie, tmp_path)
        second = loader.download_poster(movie, tmp_path)

        assert first == second
        assert first.read_bytes() == b"poster-bytes"
        assert session.requested.count(movie.resized_image_url) == 1


class TestRemoteQuestionFactory:
    def test_question_matches_rating_threshold(self, tmp_path):
        loader = make_loader(FakeSession(FakeResponse(FEED)))
        movies = [MostPopularMovie.model_validate(item) for item in FEED["items"]]
        rating_by_poster = {
            str(loader.download_poster(movie, tmp_path)): movie.rating_value for movie in movies
        }
        factory = RemoteQuestionFactory(loader, tmp_path, rng=random.Random(5), runner=run_now)
        delivered = []

        for _ in range(20):
            factory.request_next_question(lambda question, error: delivered.append((question, error)))

        assert len(delivered) == 20
        for question, error in delivered:
            assert error is None
            rating = rating_by_poster[question.image_key]
            threshold = int(re.search(r"greater than (\d+)\?", question.prompt).group(1))
            assert abs(threshold - int(rating)) <= 1
            assert question.correct_answer == (rating > threshold)

    def test_feed_failure_is_delivered_to_callback(self, tmp_path):
        session = FakeSession(FakeResponse(status_code=503))
        factory = RemoteQuestionFactory(make_loader(session), tmp_path, runner=run_now)
        delivered = []

        factory.request_next_question(lambda question, error: delivered.append((question, error)))

        assert len(delivered) == 1
        question, error = delivered[0]
        assert question is None
        assert isinstance(error, SourceUnavailable)

    def test_poster_failure_is_delivered_to_callback(self, tmp_path):
        session = FakeSession(FakeResponse(FEED), poster_status=404)
        factory = RemoteQuestionFactory(make_loader(session), tmp_path, runner=run_now)
        delivered = []

        factory.request_next_question(lambda question, error: delivered.append((question, error)))

        assert delivered[0][0] is None
        assert "poster" in str(delivered[0][1])

    def test_load_data_reports_outcome(self, tmp_path):
        ok = RemoteQuestionFactory(make_loader(FakeSession(FakeResponse(FEED))), tmp_path, runner=run_now)
        broken = RemoteQuestionFactory(
            make_loader(FakeSession(FakeResponse({"errorMessage": "Limit reached"}))), tmp_path, runner=run_now
        )
        outcomes = []

        ok.load_data(outcomes.append)
        broken.load_data(outcomes.append)

        assert outcomes[0] is None
        assert str(outcomes[1]) == "Limit reached"

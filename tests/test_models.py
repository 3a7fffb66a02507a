import pytest
from pydantic import ValidationError

from app.errors import MalformedRecord
from app.models import FilteredView, Movie, UNKNOWN_CATEGORY

from factories import IMAGE_BASE, make_movie, raw_record


def test_from_provider_record_maps_tmdb_fields():
    movie = Movie.from_provider_record(
        raw_record(693134, "Dune: Part Two", overview="Paul joins the Fremen."),
        image_base_url=IMAGE_BASE,
    )

    assert movie.id == 693134
    assert movie.title == "Dune: Part Two"
    assert movie.description == "Paul joins the Fremen."
    assert movie.category == 28
    assert movie.image == "https://image.tmdb.org/t/p/w500/693134.jpg"
    assert movie.release_date == "2024-03-01"
    assert movie.rating == pytest.approx(8.1)


def test_from_provider_record_uses_unknown_category_for_empty_genres():
    movie = Movie.from_provider_record(
        raw_record(1, "No Genres", genre_ids=[]), image_base_url=IMAGE_BASE
    )
    assert movie.category == UNKNOWN_CATEGORY

    missing = Movie.from_provider_record(
        {"id": 2, "title": "Missing Genres"}, image_base_url=IMAGE_BASE
    )
    assert missing.category == UNKNOWN_CATEGORY
    assert missing.description == ""
    assert missing.image == ""
    assert missing.rating == 0


@pytest.mark.parametrize(
    "record",
    [
        {"title": "No id"},
        {"id": None, "title": "Null id"},
        {"id": 3},
        {"id": 4, "title": "   "},
        {"id": 5, "title": None},
        ["not", "a", "mapping"],
    ],
)
def test_from_provider_record_rejects_missing_required_fields(record):
    with pytest.raises(MalformedRecord):
        Movie.from_provider_record(record, image_base_url=IMAGE_BASE)


def test_from_provider_record_ignores_non_string_poster_path():
    for poster_path in (12345, ["/a.jpg"], {"path": "/a.jpg"}):
        movie = Movie.from_provider_record(
            raw_record(7, "Arrival", poster_path=poster_path), image_base_url=IMAGE_BASE
        )
        assert movie.image == ""


def test_from_provider_record_wraps_validation_errors():
    with pytest.raises(MalformedRecord):
        Movie.from_provider_record({"id": 1.5, "title": "Odd id"}, image_base_url=IMAGE_BASE)


def test_movie_is_immutable():
    movie = make_movie(1, "Dune")
    with pytest.raises(ValidationError):
        movie.title = "Other"  # type: ignore[misc]


def test_filtered_view_distinguishes_loading_from_no_results():
    loading = FilteredView(is_loading=True)
    empty = FilteredView()
    populated = FilteredView(movies=[make_movie(1, "Dune")])

    assert loading.no_results is False
    assert empty.no_results is True
    assert populated.no_results is False
    assert empty.model_dump()["no_results"] is True


def test_filtered_view_rejects_movies_while_loading():
    with pytest.raises(ValueError):
        FilteredView(movies=[make_movie(1, "Dune")], is_loading=True)

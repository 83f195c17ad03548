import pytest

from movieshelf.crud.category import category as crud_category
from movieshelf.crud.director import director as crud_director
from movieshelf.crud.exceptions import (
    CategoryNotFound,
    DuplicateMovie,
    NotFound,
    ValidationError,
)
from movieshelf.crud.movie import movie as crud_movie
from movieshelf.models import Director, Movie

from .conftest import ACTION, DRAMA


def movie_fields(**overrides):
    fields = {"title": "Inception", "director": "Nolan", "category_id": ACTION}
    fields.update(overrides)
    return fields


# ============================================================================
# Director / category resolution
# ============================================================================


def test_resolve_director_creates_then_reuses(db):
    first = crud_director.resolve(db, name="Nolan")
    second = crud_director.resolve(db, name="Nolan")
    db.commit()

    assert first == second
    assert db.query(Director).filter(Director.director == "Nolan").count() == 1


def test_resolve_director_reuses_row_created_concurrently(db, monkeypatch):
    existing = crud_director.create(db, obj_in={"director": "Nolan"})
    db.commit()

    real_lookup = crud_director.get_by_name
    calls = []

    def stale_lookup(db, *, name):
        calls.append(name)
        # the first lookup misses, as if the other writer had not committed yet
        if len(calls) == 1:
            return None
        return real_lookup(db, name=name)

    monkeypatch.setattr(crud_director, "get_by_name", stale_lookup)

    assert crud_director.resolve(db, name="Nolan") == existing.id
    db.commit()
    assert db.query(Director).count() == 1


def test_resolve_category_rejects_unknown_id(db):
    assert crud_category.resolve(db, category_id=DRAMA) == DRAMA
    with pytest.raises(CategoryNotFound):
        crud_category.resolve(db, category_id=99)


def test_delete_if_orphaned_keeps_referenced_director(db):
    movie = crud_movie.create_movie(db, fields=movie_fields())

    assert crud_director.delete_if_orphaned(db, director_id=movie.director_id) is False
    db.commit()
    assert db.query(Director).count() == 1


# ============================================================================
# Create
# ============================================================================


def test_create_movie_with_new_director(db):
    movie = crud_movie.create_movie(
        db, fields=movie_fields(year=2010, rating=9.5, review="Dreams", image="http://img/1.jpg")
    )

    assert movie.id is not None
    assert movie.slug == "inception"
    assert movie.year == 2010
    assert movie.rating == 9.5
    directors = db.query(Director).all()
    assert [d.director for d in directors] == ["Nolan"]
    assert movie.director_id == directors[0].id


def test_create_two_movies_share_director(db):
    first = crud_movie.create_movie(db, fields=movie_fields())
    second = crud_movie.create_movie(db, fields=movie_fields(title="Tenet"))

    assert first.director_id == second.director_id
    assert db.query(Director).count() == 1


@pytest.mark.parametrize(
    "missing, message",
    [
        ("title", "Title is required"),
        ("director", "Director is required"),
        ("category_id", "Category Id is required"),
    ],
)
def test_create_requires_fields(db, row_counts, missing, message):
    fields = movie_fields()
    fields.pop(missing)

    with pytest.raises(ValidationError) as exc_info:
        crud_movie.create_movie(db, fields=fields)

    assert exc_info.value.detail == message
    assert row_counts() == (0, 0)


def test_create_rejects_blank_title(db):
    with pytest.raises(ValidationError):
        crud_movie.create_movie(db, fields=movie_fields(title="   "))


def test_create_with_unknown_category_leaves_no_rows(db, row_counts):
    with pytest.raises(CategoryNotFound):
        crud_movie.create_movie(db, fields=movie_fields(category_id=99))

    # the director insert is rolled back with the rest of the operation
    assert row_counts() == (0, 0)


def test_create_rejects_duplicate_case_insensitive(db, row_counts):
    crud_movie.create_movie(db, fields=movie_fields())

    with pytest.raises(DuplicateMovie):
        crud_movie.create_movie(db, fields=movie_fields(title="INCEPTION"))

    assert row_counts() == (1, 1)


def test_same_title_in_other_category_is_allowed(db):
    crud_movie.create_movie(db, fields=movie_fields())
    crud_movie.create_movie(db, fields=movie_fields(category_id=DRAMA))

    assert db.query(Movie).count() == 2


def test_same_title_by_other_director_is_allowed(db, row_counts):
    crud_movie.create_movie(db, fields=movie_fields())
    crud_movie.create_movie(db, fields=movie_fields(director="Villeneuve"))

    assert row_counts() == (2, 2)


# ============================================================================
# Read
# ============================================================================


def test_list_is_ordered_by_custom_order(db):
    crud_movie.create_movie(db, fields=movie_fields(title="Tenet"))
    crud_movie.create_movie(db, fields=movie_fields(title="Dune", director="Villeneuve", category_id=DRAMA))
    crud_movie.create_movie(db, fields=movie_fields(title="Memento"))

    dune = db.query(Movie).filter(Movie.title == "Dune").one()
    dune.custom_order = 0
    db.commit()

    movies = crud_movie.list_enriched(db)

    assert [m["title"] for m in movies] == ["Dune", "Tenet", "Memento"]
    assert movies[0]["director"] == "Villeneuve"
    assert movies[0]["category"] == "Drama"


def test_new_movies_are_appended(db):
    first = crud_movie.create_movie(db, fields=movie_fields(title="Tenet"))
    second = crud_movie.create_movie(db, fields=movie_fields(title="Memento"))

    assert second.custom_order == first.custom_order + 1


def test_get_enriched_and_not_found(db):
    created = crud_movie.create_movie(db, fields=movie_fields())

    movie = crud_movie.get_enriched(db, movie_id=created.id)

    assert movie["title"] == "Inception"
    assert movie["director"] == "Nolan"
    assert movie["category"] == "Action"
    with pytest.raises(NotFound):
        crud_movie.get_enriched(db, movie_id=created.id + 1)


def test_get_by_slug(db):
    crud_movie.create_movie(db, fields=movie_fields(title="The Dark Knight"))

    movie = crud_movie.get_enriched_by_slug(db, slug="the-dark-knight")

    assert movie["title"] == "The Dark Knight"
    with pytest.raises(NotFound):
        crud_movie.get_enriched_by_slug(db, slug="missing")


# ============================================================================
# Update
# ============================================================================


def test_build_update_only_touches_supplied_fields():
    values = crud_movie.build_update({"rating": 7.0}, director_id=3, category_id=4)

    assert values == {"rating": 7.0, "director_id": 3, "category_id": 4}


def test_build_update_pairs_title_with_slug():
    values = crud_movie.build_update(
        {"title": "Blade Runner 2049", "year": None}, director_id=1, category_id=1
    )

    assert values["title"] == "Blade Runner 2049"
    assert values["slug"] == "blade-runner-2049"
    assert values["year"] is None


def test_update_only_rating(db):
    created = crud_movie.create_movie(db, fields=movie_fields(year=2010, rating=8.0))

    updated = crud_movie.update_movie(
        db,
        movie_id=created.id,
        fields={"director": "Nolan", "category_id": ACTION, "title": "Inception", "rating": 9.0},
    )

    assert updated.rating == 9.0
    assert updated.year == 2010
    assert updated.title == "Inception"
    assert updated.slug == "inception"


def test_update_recomputes_slug_and_switches_director(db):
    created = crud_movie.create_movie(db, fields=movie_fields())

    updated = crud_movie.update_movie(
        db,
        movie_id=created.id,
        fields={"title": "Dune: Part Two", "director": "Villeneuve", "category_id": DRAMA},
    )

    assert updated.slug == "dune-part-two"
    assert updated.category_id == DRAMA
    assert crud_movie.get_enriched(db, movie_id=created.id)["director"] == "Villeneuve"


def test_update_missing_movie_changes_nothing(db, row_counts):
    with pytest.raises(NotFound):
        crud_movie.update_movie(
            db, movie_id=42, fields=movie_fields(director="Kubrick")
        )

    assert row_counts() == (0, 0)


def test_update_unknown_category(db):
    created = crud_movie.create_movie(db, fields=movie_fields())

    with pytest.raises(CategoryNotFound) as exc_info:
        crud_movie.update_movie(db, movie_id=created.id, fields=movie_fields(category_id=99))

    assert exc_info.value.detail == "Invalid category Id"
    assert crud_movie.get_enriched(db, movie_id=created.id)["category_id"] == ACTION


def test_update_requires_fields(db):
    created = crud_movie.create_movie(db, fields=movie_fields())

    with pytest.raises(ValidationError):
        crud_movie.update_movie(db, movie_id=created.id, fields={"rating": 5.0})


# ============================================================================
# Delete
# ============================================================================


def test_delete_last_movie_removes_director(db, row_counts):
    created = crud_movie.create_movie(db, fields=movie_fields())

    crud_movie.delete_movie(db, movie_id=created.id)

    assert row_counts() == (0, 0)


def test_delete_one_of_two_keeps_director(db):
    first = crud_movie.create_movie(db, fields=movie_fields())
    crud_movie.create_movie(db, fields=movie_fields(title="Tenet"))

    crud_movie.delete_movie(db, movie_id=first.id)

    assert db.query(Movie).count() == 1
    assert [d.director for d in db.query(Director)] == ["Nolan"]


def test_delete_missing_movie(db):
    with pytest.raises(NotFound):
        crud_movie.delete_movie(db, movie_id=7)

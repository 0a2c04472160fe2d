import pytest

from core.errors import ValidationError
from posts import service
from posts.schemas import PostInput, PostStatus


def _input(**overrides) -> PostInput:
    data = {
        "title": "A very long valid title!!",
        "content": "x" * 200,
        "category": "tech",
        "status": "draft",
    }
    data.update(overrides)
    return PostInput(**data)


def _message(payload: PostInput) -> str:
    with pytest.raises(ValidationError) as exc_info:
        service.validate_post_input(payload)
    return exc_info.value.message


def test_valid_input_parses_status_into_enum():
    fields = service.validate_post_input(_input(status="publish"))

    assert fields.title == "A very long valid title!!"
    assert fields.content == "x" * 200
    assert fields.category == "tech"
    assert fields.status is PostStatus.PUBLISH


def test_boundary_lengths_are_accepted():
    fields = service.validate_post_input(_input(title="t" * 20, content="c" * 200, category="abc"))

    assert len(fields.title) == 20
    assert len(fields.category) == 3


@pytest.mark.parametrize("field", ["title", "content", "category", "status"])
def test_empty_field_is_missing_input(field):
    assert _message(_input(**{field: ""})) == "missing or invalid input"


@pytest.mark.parametrize("field", ["title", "content", "category", "status"])
def test_absent_or_null_field_is_missing_input(field):
    assert _message(_input(**{field: None})) == "missing or invalid input"


def test_short_title():
    assert _message(_input(title="too short")) == "Title must be at least 20 characters"


def test_short_content():
    assert _message(_input(content="x" * 199)) == "Content must be at least 200 characters"


def test_short_category():
    assert _message(_input(category="ab")) == "Category must be at least 3 characters"


@pytest.mark.parametrize("status", ["archived", "Publish", "DRAFT", " trash"])
def test_unknown_status(status):
    assert _message(_input(status=status)) == "Status must be either publish, draft, or trash"


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"title": "", "content": "short", "status": "archived"}, "missing or invalid input"),
        ({"title": "short", "content": "short", "category": "a"}, "Title must be at least 20 characters"),
        ({"content": "short", "category": "a", "status": "archived"}, "Content must be at least 200 characters"),
        ({"category": "a", "status": "archived"}, "Category must be at least 3 characters"),
    ],
)
def test_first_broken_rule_wins(overrides, expected):
    assert _message(_input(**overrides)) == expected


def test_length_counts_characters():
    # 20 non-ASCII characters are more than 20 bytes but exactly 20 characters.
    fields = service.validate_post_input(_input(title="é" * 20))

    assert fields.title == "é" * 20

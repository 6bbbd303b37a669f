"""Field validation — pydantic errors become ordered violation lists."""

import pytest

from inkpost.errors import ValidationFailed
from inkpost.schemas.auth import LoginRequest, RegisterRequest
from inkpost.schemas.category import CategoryCreate
from inkpost.schemas.post import PostCreate, PostUpdate
from inkpost.validation import check


def _violations(schema, payload):
    with pytest.raises(ValidationFailed) as exc_info:
        check(schema, payload)
    return [(v.field, v.msg) for v in exc_info.value.violations]


def test_valid_payload_returns_model():
    body = check(LoginRequest, {"email": "a@example.com", "password": "x"})
    assert body.password == "x"


def test_register_reports_every_bad_field_in_order():
    assert _violations(
        RegisterRequest, {"username": "ab", "email": "nope", "password": "123"}
    ) == [
        ("username", "Username must be between 3 and 30 characters"),
        ("email", "Valid email is required"),
        ("password", "Password must be at least 6 characters"),
    ]


def test_missing_username_uses_required_message():
    violations = _violations(
        RegisterRequest, {"email": "a@example.com", "password": "secret1"}
    )
    assert violations == [("username", "Username is required")]


def test_post_title_length_limit():
    violations = _violations(
        PostCreate, {"title": "x" * 101, "content": "c", "category": "k"}
    )
    assert violations == [("title", "Title cannot be more than 100 characters")]


def test_post_create_requires_title_content_category():
    fields = [f for f, _ in _violations(PostCreate, {})]
    assert fields == ["title", "content", "category"]


def test_post_create_accepts_camel_case_fields():
    body = check(
        PostCreate,
        {
            "title": "t",
            "content": "c",
            "category": "k",
            "featuredImage": "cover.png",
            "isPublished": True,
        },
    )
    assert body.featured_image == "cover.png"
    assert body.is_published is True


def test_post_update_is_partial_and_ignores_author():
    changes = check(PostUpdate, {"excerpt": "short", "author": "someone"}).changes()
    assert changes == {"excerpt": "short"}


def test_post_update_rejects_empty_title():
    assert [f for f, _ in _violations(PostUpdate, {"title": ""})] == ["title"]


def test_category_name_is_trimmed_and_bounded():
    assert check(CategoryCreate, {"name": "  News  "}).name == "News"
    assert _violations(CategoryCreate, {"name": "   "}) == [
        ("name", "Category name is required")
    ]
    assert _violations(CategoryCreate, {"name": "x" * 51}) == [
        ("name", "Category name cannot be more than 50 characters")
    ]


def test_non_object_body_is_a_single_violation():
    violations = _violations(LoginRequest, None)
    assert len(violations) == 1
    assert violations[0][0] == "body"

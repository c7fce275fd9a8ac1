from __future__ import annotations

import datetime as dt

import pytest
from pydantic import BaseModel, Field

from mdc_validator import Validator


# Username pattern used across tests
USERNAME_REGEX = r"^[a-zA-Z0-9]+$"


@pytest.fixture()
def user_validator() -> Validator:
    """Validator for a small user registration record."""
    return (
        Validator()
        .field("username").string().required().min(3).max(50).pattern(USERNAME_REGEX)
        .field("age").number().required().min(18).max(120)
        .field("role").string().is_in(["admin", "editor", "viewer"])
        .field("newsletter").boolean()
        .field("birthday").date().past()
    )


@pytest.fixture()
def valid_user() -> dict:
    """Record accepted by ``user_validator``."""
    return {
        "username": "John123",
        "age": 42,
        "role": "editor",
        "newsletter": False,
        "birthday": "1983-04-12",
    }


@pytest.fixture()
def invalid_user() -> dict:
    """Record with one failure per field of ``user_validator``."""
    return {
        "username": "Jo",
        "age": "42",
        "role": "owner",
        "newsletter": "yes",
        "birthday": "not a date",
    }


@pytest.fixture()
def tomorrow() -> dt.datetime:
    return dt.datetime.now() + dt.timedelta(days=1)


@pytest.fixture()
def yesterday() -> dt.datetime:
    return dt.datetime.now() - dt.timedelta(days=1)


@pytest.fixture()
def sample_pydantic_model() -> type[BaseModel]:
    """Sample Pydantic model for conversion tests."""
    class Signup(BaseModel):
        name: str = Field(min_length=2, max_length=10)
        age: int = Field(ge=0, le=120)
        email: str | None = Field(default=None, pattern=r"^[^@]+@[^@]+$")
        active: bool = True
        joined: dt.datetime
        tags: list[str] = []

    return Signup

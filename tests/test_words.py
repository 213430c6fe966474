"""Word splitting tests."""

from __future__ import annotations

import pytest

from name_lint.words import fold_segments, split_description, split_words


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("getUserProfile", ["get", "user", "profile"]),
        ("UserProfileCard", ["user", "profile", "card"]),
        ("USER_SESSION_TIMEOUT_MS", ["user", "session", "timeout", "ms"]),
        ("user-profile-service", ["user", "profile", "service"]),
        ("getHTTPResponse", ["get", "http", "response"]),
        ("OAuthUserToken", ["o", "auth", "user", "token"]),
        ("retryCount2", ["retry", "count", "2"]),
    ],
)
def test_split_words(identifier: str, expected: list[str]) -> None:
    assert split_words(identifier) == expected


def test_split_words_empty() -> None:
    assert split_words("") == []


def test_fold_segments_merges_numbers_and_units() -> None:
    assert fold_segments(["calculate", "order", "tax", "ms"]) == ["calculate", "order", "taxms"]
    assert fold_segments(["get", "page", "2"]) == ["get", "page2"]


def test_fold_segments_keeps_leading_number() -> None:
    assert fold_segments(["2", "fa"]) == ["2", "fa"]


def test_split_description_lowercases_words() -> None:
    assert split_description("Should show an Error when it's empty") == [
        "should",
        "show",
        "an",
        "error",
        "when",
        "it's",
        "empty",
    ]

"""Identifier tokenization."""

from __future__ import annotations

import re

# Acronym runs stay whole ("HTTPResponse" -> HTTP, Response); a lone capital
# ahead of a capitalised word splits off ("OAuth" -> O, Auth).
WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")
DELIMITER_RE = re.compile(r"[_\-\s]+")

UNIT_SUFFIXES = frozenset({"ms", "sec", "px", "em", "rem", "pct", "kb", "mb", "gb"})


def split_words(identifier: str) -> list[str]:
    """Split an identifier into lowercase word tokens.

    Case boundaries, ``_``, ``-`` and whitespace all separate words, so the
    same function serves camelCase, PascalCase, SCREAMING_SNAKE_CASE and
    kebab-case names.
    """
    tokens: list[str] = []
    for chunk in DELIMITER_RE.split(identifier):
        if not chunk:
            continue
        tokens.extend(match.group(0).lower() for match in WORD_RE.finditer(chunk))
    return tokens


def fold_segments(tokens: list[str]) -> list[str]:
    """Merge numeric and unit suffix tokens into the preceding segment.

    ``calculateOrderTaxMs`` has four tokens but three structural segments:
    ``calculate``, ``order``, ``taxms``.
    """
    segments: list[str] = []
    for token in tokens:
        if segments and (token.isdigit() or token in UNIT_SUFFIXES):
            segments[-1] = segments[-1] + token
            continue
        segments.append(token)
    return segments


def split_description(text: str) -> list[str]:
    """Split free-text test descriptions into lowercase words."""
    return [word.lower() for word in re.findall(r"[A-Za-z0-9']+", text)]

"""Identifier checking against the naming rule catalog."""

from __future__ import annotations

import re

from name_lint.rules import (
    RuleCatalog,
    UnknownCategoryError,
    default_catalog,
    resolve_category,
)
from name_lint.rules.base import (
    Casing,
    IdentifierCategory,
    NamingRule,
    Slot,
    Violation,
    ViolationKind,
)
from name_lint.words import fold_segments, split_description, split_words

CASING_PATTERNS: dict[Casing, re.Pattern[str]] = {
    Casing.PASCAL: re.compile(r"^[A-Z][A-Za-z0-9]*$"),
    Casing.CAMEL: re.compile(r"^[a-z][A-Za-z0-9]*$"),
    Casing.SCREAMING_SNAKE: re.compile(r"^[A-Z][A-Z0-9_]*$"),
    Casing.KEBAB: re.compile(r"^[a-z][a-z0-9-]*$"),
}

SOURCE_EXTENSIONS = (".tsx", ".ts", ".jsx", ".js")

# Longest event phrase matched against trailing segments ("KeyDown", "DragStart").
_MAX_EVENT_SEGMENTS = 2


class IdentifierChecker:
    """Validates single identifiers; stateless apart from the shared catalog."""

    def __init__(self, catalog: RuleCatalog | None = None) -> None:
        self.catalog = catalog or default_catalog()

    def check(
        self,
        identifier: str,
        category: IdentifierCategory | str,
        is_boolean: bool = False,
    ) -> Violation | None:
        """Return the first violation for ``identifier``, or None when it conforms."""
        try:
            resolved = resolve_category(category)
            rule = self.catalog.get_rule(resolved)
        except UnknownCategoryError:
            return Violation(
                identifier=identifier,
                category=str(category),
                kind=ViolationKind.UNKNOWN_CATEGORY,
                reason=f"Category '{category}' is not registered in the rule catalog.",
            )

        if not identifier.strip():
            return _violation(
                identifier,
                rule,
                ViolationKind.CASING,
                f"Empty name for {rule.category.value}.",
            )

        if rule.casing is Casing.FREE_TEXT:
            return self._check_description(identifier, rule)

        name = identifier
        if rule.is_file_name:
            name, violation = self._strip_file_suffixes(identifier, rule)
            if violation is not None:
                return violation

        if not CASING_PATTERNS[rule.casing].match(name):
            return _violation(
                identifier,
                rule,
                ViolationKind.CASING,
                f"Expected {rule.casing.value} for {rule.category.value}.",
            )

        tokens = split_words(name)
        violation = self._check_tokens(identifier, rule, tokens)
        if violation is not None:
            return violation

        if is_boolean or rule.category is IdentifierCategory.BOOLEAN_VARIABLE:
            prefixes = self.catalog.get_boolean_prefixes()
            if tokens[0] not in prefixes:
                return _violation(
                    identifier,
                    rule,
                    ViolationKind.MISSING_BOOLEAN_PREFIX,
                    f"Boolean names must start with one of: {', '.join(prefixes)}.",
                    token=tokens[0],
                )

        if rule.enforces_structure:
            return self._check_structure(identifier, rule, fold_segments(tokens))
        return None

    def _check_tokens(
        self, identifier: str, rule: NamingRule, tokens: list[str]
    ) -> Violation | None:
        forbidden = self.catalog.get_forbidden_tokens()
        for token in tokens:
            if token in forbidden:
                return _violation(
                    identifier,
                    rule,
                    ViolationKind.FORBIDDEN_TOKEN,
                    f"'{token}' is an abbreviation or noise word; spell out what it holds.",
                    token=token,
                )

        if (
            rule.category is IdentifierCategory.VARIABLE
            and len(identifier) == 1
            and identifier not in self.catalog.loop_counters
        ):
            counters = ", ".join(sorted(self.catalog.loop_counters)) or "none"
            return _violation(
                identifier,
                rule,
                ViolationKind.FORBIDDEN_TOKEN,
                f"Single-letter names are reserved for loop counters ({counters}).",
                token=identifier,
            )
        return None

    def _check_structure(
        self, identifier: str, rule: NamingRule, segments: list[str]
    ) -> Violation | None:
        slots = list(rule.required_slots)
        head = slots[0] if not slots[0].is_free else None
        tail = slots[-1] if len(slots) > 1 and not slots[-1].is_free else None
        start = 1 if head is not None else 0
        stop = len(slots) - 1 if tail is not None else len(slots)
        middle = slots[start:stop]

        remaining = list(segments)
        if head is not None:
            if not remaining or not self._slot_accepts(head, remaining[0], rule):
                found = remaining[0] if remaining else ""
                return _slot_violation(identifier, rule, head, _head_reason(head, found))
            remaining = remaining[1:]

        if tail is not None:
            width = self._match_tail(tail, remaining, rule)
            if width == 0:
                found = remaining[-1] if remaining else ""
                return _slot_violation(identifier, rule, tail, _tail_reason(tail, found))
            remaining = remaining[:-width]

        # Context words fill free slots from the right: the most specific word
        # is LowContext, so a short name is missing its HighContext.
        missing = len(middle) - len(remaining)
        if missing > 0:
            slot = middle[0]
            return _slot_violation(
                identifier,
                rule,
                slot,
                f"Missing {slot.name} slot; expected pattern {rule.pattern}.",
            )
        return None

    def _slot_accepts(self, slot: Slot, segment: str, rule: NamingRule) -> bool:
        if slot.literal is not None:
            return segment == slot.literal
        if slot.vocabulary is not None:
            return segment in self.catalog.vocabulary(slot.vocabulary, rule.category)
        return True

    def _match_tail(self, slot: Slot, segments: list[str], rule: NamingRule) -> int:
        for width in range(1, min(_MAX_EVENT_SEGMENTS, len(segments)) + 1):
            if self._slot_accepts(slot, "".join(segments[-width:]), rule):
                return width
        return 0

    def _strip_file_suffixes(
        self, identifier: str, rule: NamingRule
    ) -> tuple[str, Violation | None]:
        name = identifier.rsplit("/", 1)[-1]
        for extension in SOURCE_EXTENSIONS:
            if name.endswith(extension):
                name = name[: -len(extension)]
                break

        matched_suffix = False
        for suffix in rule.role_suffixes:
            if name.endswith(suffix):
                name = name[: -len(suffix)]
                matched_suffix = True
                break

        if rule.requires_role_suffix and not matched_suffix:
            expected = " or ".join(rule.role_suffixes)
            return name, Violation(
                identifier=identifier,
                category=rule.category.value,
                kind=ViolationKind.MISSING_STRUCTURE_SLOT,
                reason=f"Expected a {expected} suffix before the extension.",
                slot="TestSuffix",
            )
        return name, None

    def _check_description(self, identifier: str, rule: NamingRule) -> Violation | None:
        words = split_description(identifier)
        violation = self._check_tokens(identifier, rule, words)
        if violation is not None:
            return violation

        should_slot, behavior_slot, when_slot, condition_slot = rule.slots
        if not words or words[0] != should_slot.literal:
            return _slot_violation(
                identifier,
                rule,
                should_slot,
                "Test descriptions must start with 'should'.",
            )
        if when_slot.literal not in words[1:]:
            return _slot_violation(
                identifier,
                rule,
                when_slot,
                "Test descriptions must state a condition: 'should <behavior> when <condition>'.",
            )
        when_index = words.index(when_slot.literal, 1)
        if when_index == 1:
            return _slot_violation(
                identifier,
                rule,
                behavior_slot,
                "Missing behavior between 'should' and 'when'.",
            )
        if when_index == len(words) - 1:
            return _slot_violation(
                identifier,
                rule,
                condition_slot,
                "Missing condition after 'when'.",
            )
        return None


def check(
    identifier: str,
    category: IdentifierCategory | str,
    is_boolean: bool = False,
    *,
    catalog: RuleCatalog | None = None,
) -> Violation | None:
    """Check one identifier with the given (or default) catalog."""
    return IdentifierChecker(catalog).check(identifier, category, is_boolean)


def _violation(
    identifier: str,
    rule: NamingRule,
    kind: ViolationKind,
    reason: str,
    *,
    token: str | None = None,
) -> Violation:
    return Violation(
        identifier=identifier,
        category=rule.category.value,
        kind=kind,
        reason=reason,
        token=token,
    )


def _slot_violation(identifier: str, rule: NamingRule, slot: Slot, reason: str) -> Violation:
    return Violation(
        identifier=identifier,
        category=rule.category.value,
        kind=ViolationKind.MISSING_STRUCTURE_SLOT,
        reason=reason,
        slot=slot.name,
    )


def _head_reason(slot: Slot, found: str) -> str:
    if slot.literal is not None:
        return f"Expected '{slot.literal}' as the {slot.name} word, found '{found}'."
    return f"'{found}' is not a recognized {slot.name} verb."


def _tail_reason(slot: Slot, found: str) -> str:
    return f"'{found}' is not a recognized {slot.name} word."

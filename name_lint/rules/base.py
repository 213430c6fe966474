"""Naming rule and violation models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class IdentifierCategory(StrEnum):
    """Syntactic category an identifier is checked against."""

    VARIABLE = "variable"
    BOOLEAN_VARIABLE = "booleanVariable"
    FUNCTION = "function"
    EVENT_HANDLER = "eventHandler"
    HOOK = "hook"
    COMPONENT = "component"
    TYPE_OR_INTERFACE = "typeOrInterface"
    CONSTANT = "constant"
    ENUM = "enum"
    ENUM_MEMBER = "enumMember"
    UTILITY_FILE = "utilityFile"
    TEST_FILE = "testFile"
    TEST_CASE = "testCase"
    MOCK_OBJECT = "mockObject"
    HELPER_FUNCTION = "helperFunction"


FILE_CATEGORIES = frozenset({IdentifierCategory.UTILITY_FILE, IdentifierCategory.TEST_FILE})


class Casing(StrEnum):
    """Case convention required by a rule."""

    CAMEL = "camelCase"
    PASCAL = "PascalCase"
    SCREAMING_SNAKE = "SCREAMING_SNAKE_CASE"
    KEBAB = "kebab-case"
    FREE_TEXT = "free text"


class ViolationKind(StrEnum):
    """Why an identifier failed its rule."""

    CASING = "casing"
    FORBIDDEN_TOKEN = "forbidden_token"
    MISSING_BOOLEAN_PREFIX = "missing_boolean_prefix"
    MISSING_STRUCTURE_SLOT = "missing_structure_slot"
    UNKNOWN_CATEGORY = "unknown_category"


@dataclass(frozen=True, slots=True)
class Slot:
    """One semantic segment of a structural naming pattern.

    ``literal`` pins the segment to an exact word (``handle``, ``use``).
    ``vocabulary`` names a catalog word list the segment must come from
    (``"action"`` or ``"event"``). Slots with neither are free context words.
    """

    name: str
    literal: str | None = None
    vocabulary: str | None = None
    optional: bool = False

    @property
    def is_free(self) -> bool:
        return self.literal is None and self.vocabulary is None

    def describe(self) -> str:
        if self.literal is not None:
            return self.literal
        return self.name


@dataclass(frozen=True, slots=True)
class NamingRule:
    """Casing and structural pattern for one identifier category."""

    category: IdentifierCategory
    casing: Casing
    slots: tuple[Slot, ...] = ()
    notes: str = ""
    role_suffixes: tuple[str, ...] = ()
    requires_role_suffix: bool = False

    @property
    def is_file_name(self) -> bool:
        return self.category in FILE_CATEGORIES

    @property
    def required_slots(self) -> tuple[Slot, ...]:
        return tuple(slot for slot in self.slots if not slot.optional)

    @property
    def enforces_structure(self) -> bool:
        return bool(self.required_slots)

    @property
    def pattern(self) -> str:
        """Human-readable pattern, e.g. ``[handle, HighContext, LowContext, Event]``."""
        if not self.slots:
            return "none"
        parts = [
            f"{slot.describe()}?" if slot.optional else slot.describe() for slot in self.slots
        ]
        return "[" + ", ".join(parts) + "]"


@dataclass(frozen=True, slots=True)
class Violation:
    """A single naming finding for one identifier."""

    identifier: str
    category: str
    kind: ViolationKind
    reason: str
    token: str | None = None
    slot: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "identifier": self.identifier,
            "category": self.category,
            "kind": self.kind.value,
            "reason": self.reason,
            "token": self.token,
            "slot": self.slot,
        }

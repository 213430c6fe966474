"""Rules package: the naming rule catalog."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType

from name_lint.config import VocabularyConfig
from name_lint.rules.base import (
    Casing,
    IdentifierCategory,
    NamingRule,
    Slot,
    Violation,
    ViolationKind,
)

__all__ = [
    "Casing",
    "IdentifierCategory",
    "NamingRule",
    "RuleCatalog",
    "RuleInfo",
    "Slot",
    "UnknownCategoryError",
    "Violation",
    "ViolationKind",
    "build_catalog",
    "default_catalog",
    "list_rule_info",
    "resolve_category",
    "resolve_enabled_categories",
]

FORBIDDEN_ABBREVIATIONS = frozenset({"tmp", "temp", "btn", "usr", "prf", "cnt", "msg", "val"})
NOISE_WORDS = frozenset({"data", "info", "obj", "stuff", "thing", "misc"})

BOOLEAN_PREFIXES = ("is", "has", "can", "should", "will", "was", "are")

ACTION_VERBS = frozenset(
    {
        "get",
        "set",
        "reset",
        "fetch",
        "create",
        "update",
        "delete",
        "validate",
        "calculate",
        "format",
        "parse",
        "handle",
        "process",
        "generate",
        "transform",
        "map",
        "add",
        "remove",
        "load",
        "save",
        "send",
        "build",
        "convert",
        "filter",
        "find",
        "sort",
        "normalize",
        "serialize",
        "merge",
        "apply",
        "compute",
        "check",
        "toggle",
        "submit",
        "sync",
        "subscribe",
        "register",
        "extract",
    }
)
HELPER_VERBS = frozenset({"render", "setup", "mock", "wait", "expect", "assert", "make"})

EVENT_WORDS = frozenset(
    {
        "click",
        "doubleclick",
        "change",
        "submit",
        "close",
        "open",
        "blur",
        "focus",
        "select",
        "toggle",
        "input",
        "keydown",
        "keyup",
        "keypress",
        "mouseenter",
        "mouseleave",
        "hover",
        "drag",
        "dragstart",
        "dragend",
        "drop",
        "scroll",
        "resize",
        "load",
        "error",
        "success",
        "cancel",
        "confirm",
        "dismiss",
        "press",
        "reset",
        "retry",
        "expand",
        "collapse",
        "upload",
        "paste",
    }
)

LOOP_COUNTERS = ("i", "j", "k")

_ACTION = Slot("Action", vocabulary="action")
_HIGH = Slot("HighContext")
_LOW = Slot("LowContext")

DEFAULT_RULES: tuple[NamingRule, ...] = (
    NamingRule(
        IdentifierCategory.VARIABLE,
        Casing.CAMEL,
        notes="must not be single-letter outside trivial loop counters",
    ),
    NamingRule(
        IdentifierCategory.BOOLEAN_VARIABLE,
        Casing.CAMEL,
        notes="prefix in is/has/can/should/will/was/are",
    ),
    NamingRule(
        IdentifierCategory.FUNCTION,
        Casing.CAMEL,
        (_ACTION, _HIGH, _LOW),
        notes="Action from the common-verb set",
    ),
    NamingRule(
        IdentifierCategory.EVENT_HANDLER,
        Casing.CAMEL,
        (Slot("Action", literal="handle"), _HIGH, _LOW, Slot("Event", vocabulary="event")),
        notes="literal `handle` required",
    ),
    NamingRule(
        IdentifierCategory.HOOK,
        Casing.CAMEL,
        (Slot("Action", literal="use"), _HIGH, _LOW),
        notes="literal `use` required",
    ),
    NamingRule(
        IdentifierCategory.COMPONENT,
        Casing.PASCAL,
        (
            Slot("Domain", optional=True),
            Slot("Entity", optional=True),
            Slot("ComponentType", optional=True),
        ),
        notes="optional ComponentType suffix (Card, Modal, Form, List...)",
    ),
    NamingRule(
        IdentifierCategory.TYPE_OR_INTERFACE,
        Casing.PASCAL,
        (
            Slot("Domain", optional=True),
            Slot("Entity", optional=True),
            Slot("TypePurpose", optional=True),
        ),
        notes="optional purpose suffix (Props, Request, Response, Config, Result)",
    ),
    NamingRule(
        IdentifierCategory.CONSTANT,
        Casing.SCREAMING_SNAKE,
        (
            Slot("DOMAIN", optional=True),
            Slot("ENTITY", optional=True),
            Slot("PURPOSE", optional=True),
        ),
        notes="underscore-delimited",
    ),
    NamingRule(IdentifierCategory.ENUM, Casing.PASCAL, notes="members also PascalCase"),
    NamingRule(IdentifierCategory.ENUM_MEMBER, Casing.PASCAL),
    NamingRule(
        IdentifierCategory.UTILITY_FILE,
        Casing.KEBAB,
        notes="suffix conventions: .types.ts, .constants.ts, -service.ts",
        role_suffixes=(".types", ".constants", ".utils", ".styles", ".mock"),
    ),
    NamingRule(
        IdentifierCategory.TEST_FILE,
        Casing.KEBAB,
        notes="must end in .test or .spec before the extension",
        role_suffixes=(".test", ".spec"),
        requires_role_suffix=True,
    ),
    NamingRule(
        IdentifierCategory.TEST_CASE,
        Casing.FREE_TEXT,
        (
            Slot("should", literal="should"),
            Slot("Behavior"),
            Slot("when", literal="when"),
            Slot("Condition"),
        ),
        notes="not an identifier-casing rule",
    ),
    NamingRule(
        IdentifierCategory.MOCK_OBJECT,
        Casing.CAMEL,
        (Slot("Mock", literal="mock"), Slot("Entity")),
        notes="literal `mock` prefix required",
    ),
    NamingRule(
        IdentifierCategory.HELPER_FUNCTION,
        Casing.CAMEL,
        (Slot("Action", vocabulary="action"), _HIGH, _LOW),
        notes="Action from the common-verb set plus test helper verbs",
    ),
)


class UnknownCategoryError(KeyError):
    """A category was requested that the catalog does not register."""

    def __init__(self, category: object) -> None:
        super().__init__(category)
        self.category = category

    def __str__(self) -> str:
        return f"Unknown identifier category: {self.category!r}"


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Rule metadata for listing."""

    category: str
    casing: str
    pattern: str
    notes: str


@dataclass(frozen=True, slots=True)
class RuleCatalog:
    """Read-only registry of naming rules and word lists."""

    rules: Mapping[IdentifierCategory, NamingRule]
    forbidden_tokens: frozenset[str]
    boolean_prefixes: tuple[str, ...]
    action_verbs: frozenset[str]
    helper_verbs: frozenset[str]
    event_words: frozenset[str]
    loop_counters: frozenset[str]

    def get_rule(self, category: IdentifierCategory | str) -> NamingRule:
        try:
            return self.rules[resolve_category(category)]
        except KeyError:
            raise UnknownCategoryError(category) from None

    def get_forbidden_tokens(self) -> frozenset[str]:
        return self.forbidden_tokens

    def get_boolean_prefixes(self) -> tuple[str, ...]:
        return self.boolean_prefixes

    def get_action_verbs(self, category: IdentifierCategory) -> frozenset[str]:
        if category is IdentifierCategory.HELPER_FUNCTION:
            return self.action_verbs | self.helper_verbs
        return self.action_verbs

    def get_event_words(self) -> frozenset[str]:
        return self.event_words

    def vocabulary(self, name: str, category: IdentifierCategory) -> frozenset[str]:
        """Return the word list a vocabulary slot draws from."""
        if name == "action":
            return self.get_action_verbs(category)
        if name == "event":
            return self.event_words
        raise ValueError(f"Unknown slot vocabulary: {name}")

    def categories(self) -> list[IdentifierCategory]:
        return list(self.rules)


def resolve_category(category: IdentifierCategory | str) -> IdentifierCategory:
    """Coerce a category value; raises UnknownCategoryError for unknown names."""
    if isinstance(category, IdentifierCategory):
        return category
    try:
        return IdentifierCategory(category)
    except ValueError:
        raise UnknownCategoryError(category) from None


def build_catalog(
    vocabulary: VocabularyConfig | None = None,
    *,
    rules: Iterable[NamingRule] = DEFAULT_RULES,
) -> RuleCatalog:
    """Build a catalog from the default rule table plus vocabulary overrides."""
    effective = vocabulary or VocabularyConfig()
    table: dict[IdentifierCategory, NamingRule] = {}
    for rule in rules:
        if rule.category in table:
            raise ValueError(f"Duplicate rule for category: {rule.category.value}")
        table[rule.category] = rule

    missing = [category.value for category in IdentifierCategory if category not in table]
    if missing:
        raise ValueError(f"Missing rules for categories: {', '.join(missing)}")

    forbidden = (FORBIDDEN_ABBREVIATIONS | NOISE_WORDS | _lowered(effective.forbidden_extra)) - (
        _lowered(effective.forbidden_allow)
    )
    prefixes = BOOLEAN_PREFIXES + tuple(
        prefix
        for prefix in _dedupe(_lowered_list(effective.boolean_prefixes_extra))
        if prefix not in BOOLEAN_PREFIXES
    )
    loop_counters = (
        frozenset(effective.loop_counters)
        if effective.loop_counters is not None
        else frozenset(LOOP_COUNTERS)
    )

    ordered = {category: table[category] for category in IdentifierCategory}
    return RuleCatalog(
        rules=MappingProxyType(ordered),
        forbidden_tokens=frozenset(forbidden),
        boolean_prefixes=prefixes,
        action_verbs=ACTION_VERBS | _lowered(effective.action_verbs_extra),
        helper_verbs=HELPER_VERBS,
        event_words=EVENT_WORDS | _lowered(effective.event_words_extra),
        loop_counters=loop_counters,
    )


@lru_cache(maxsize=1)
def default_catalog() -> RuleCatalog:
    """Return the shared default catalog."""
    return build_catalog()


def list_rule_info(catalog: RuleCatalog | None = None) -> list[RuleInfo]:
    """Return metadata for every registered category."""
    active = catalog or default_catalog()
    return [
        RuleInfo(
            category=rule.category.value,
            casing=rule.casing.value,
            pattern=rule.pattern,
            notes=rule.notes,
        )
        for rule in active.rules.values()
    ]


def resolve_enabled_categories(
    *,
    enabled: list[str] | None = None,
    disabled: list[str] | None = None,
) -> set[IdentifierCategory]:
    """Resolve the set of categories a lint run checks."""
    requested = set(enabled or []) | set(disabled or [])
    known = {category.value for category in IdentifierCategory}
    unknown = [name for name in requested if name not in known]
    if unknown:
        joined = ", ".join(sorted(unknown))
        raise ValueError(f"Unknown categories: {joined}")

    if enabled is None:
        active = set(IdentifierCategory)
    else:
        active = {IdentifierCategory(name) for name in enabled}
    active.difference_update(IdentifierCategory(name) for name in disabled or [])
    return active


def _lowered(items: Iterable[str]) -> frozenset[str]:
    return frozenset(item.lower() for item in items)


def _lowered_list(items: Iterable[str]) -> list[str]:
    return [item.lower() for item in items]


def _dedupe(items: list[str]) -> list[str]:
    seen: set[str] = set()
    output: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        output.append(item)
    return output

"""Configuration loading for name-lint."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

CONFIG_FILENAMES = (".name-lint.toml", "name-lint.toml")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEYS = ("name_lint", "name-lint")

DEFAULT_WORKERS = 4

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class VocabularyConfig:
    """Word-list overrides applied on top of the built-in catalog."""

    forbidden_extra: list[str] = field(default_factory=list)
    forbidden_allow: list[str] = field(default_factory=list)
    action_verbs_extra: list[str] = field(default_factory=list)
    event_words_extra: list[str] = field(default_factory=list)
    boolean_prefixes_extra: list[str] = field(default_factory=list)
    loop_counters: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "forbidden_extra": list(self.forbidden_extra),
            "forbidden_allow": list(self.forbidden_allow),
            "action_verbs_extra": list(self.action_verbs_extra),
            "event_words_extra": list(self.event_words_extra),
            "boolean_prefixes_extra": list(self.boolean_prefixes_extra),
            "loop_counters": list(self.loop_counters) if self.loop_counters is not None else None,
        }


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    format: str = "human"
    max_violations: int = 0
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    workers: int = DEFAULT_WORKERS
    rule_enable: list[str] | None = None
    rule_disable: list[str] = field(default_factory=list)
    vocabulary: VocabularyConfig = field(default_factory=VocabularyConfig)
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "max_violations": self.max_violations,
            "include": list(self.include),
            "exclude": list(self.exclude),
            "workers": self.workers,
            "rules": {
                "enable": list(self.rule_enable) if self.rule_enable is not None else None,
                "disable": list(self.rule_disable),
            },
            "vocabulary": self.vocabulary.to_dict(),
            "source": self.source,
        }


def load_app_config(repo: Path, config_path: Path | None = None) -> AppConfig:
    """Load config from explicit path or repository-local files with precedence."""
    repo = repo.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (repo / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
        return _from_mapping(mapping, source=str(resolved))

    for filename in CONFIG_FILENAMES:
        resolved = repo / filename
        if resolved.exists():
            mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
            return _from_mapping(mapping, source=str(resolved))

    pyproject_path = repo / PYPROJECT_FILENAME
    if pyproject_path.exists():
        mapping = _extract_config_mapping(_load_toml(pyproject_path), source_path=pyproject_path)
        if mapping:
            return _from_mapping(mapping, source=str(pyproject_path))

    logger.debug("No config file found under %s; using defaults", repo)
    return AppConfig()


def default_config_template() -> str:
    """Return a starter config template users can customize."""
    return "\n".join(
        [
            'format = "human"',
            "max_violations = 0",
            'include = ["src/**"]',
            'exclude = ["**/*.d.ts", "**/generated/**"]',
            "workers = 4",
            "",
            "[rules]",
            "# enable = [",
            '#   "variable",',
            '#   "booleanVariable",',
            '#   "function",',
            '#   "eventHandler",',
            '#   "hook",',
            '#   "component",',
            "# ]",
            'disable = ["testCase"]',
            "",
            "[vocabulary]",
            'forbidden_extra = ["mgr", "util"]',
            "forbidden_allow = []",
            'action_verbs_extra = ["render"]',
            'event_words_extra = ["swipe"]',
            "boolean_prefixes_extra = []",
            'loop_counters = ["i", "j", "k"]',
            "",
        ]
    )


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        return {}
    return loaded


def _extract_config_mapping(loaded: dict[str, Any], *, source_path: Path) -> dict[str, Any]:
    if source_path.name == PYPROJECT_FILENAME:
        section = _find_pyproject_tool_section(loaded)
        return section if section is not None else {}

    tool_section = _find_pyproject_tool_section(loaded)
    if tool_section is not None:
        return tool_section
    return loaded


def _find_pyproject_tool_section(loaded: dict[str, Any]) -> dict[str, Any] | None:
    tool = loaded.get("tool")
    if not isinstance(tool, dict):
        return None
    for key in PYPROJECT_TOOL_KEYS:
        section = tool.get(key)
        if isinstance(section, dict):
            return section
    return None


def _from_mapping(mapping: dict[str, Any], *, source: str) -> AppConfig:
    logger.debug("Loading config from %s", source)
    rules_mapping = _as_table(mapping.get("rules"), "rules")
    vocabulary_mapping = _as_table(mapping.get("vocabulary"), "vocabulary")

    format_value = _as_choice(mapping.get("format", "human"), {"human", "json"}, "format")

    max_violations = _as_int(mapping.get("max_violations", 0), "max_violations")
    if max_violations < 0:
        raise ValueError("max_violations must be >= 0")

    workers = _as_int(mapping.get("workers", DEFAULT_WORKERS), "workers")
    if workers <= 0:
        raise ValueError("workers must be > 0")

    return AppConfig(
        format=format_value,
        max_violations=max_violations,
        include=_as_str_list(mapping.get("include"), "include"),
        exclude=_as_str_list(mapping.get("exclude"), "exclude"),
        workers=workers,
        rule_enable=_as_str_list_or_none(rules_mapping.get("enable"), "rules.enable"),
        rule_disable=_as_str_list(rules_mapping.get("disable"), "rules.disable"),
        vocabulary=_parse_vocabulary_config(vocabulary_mapping),
        source=source,
    )


def _parse_vocabulary_config(value: dict[str, Any]) -> VocabularyConfig:
    return VocabularyConfig(
        forbidden_extra=_as_str_list(value.get("forbidden_extra"), "vocabulary.forbidden_extra"),
        forbidden_allow=_as_str_list(value.get("forbidden_allow"), "vocabulary.forbidden_allow"),
        action_verbs_extra=_as_str_list(
            value.get("action_verbs_extra"), "vocabulary.action_verbs_extra"
        ),
        event_words_extra=_as_str_list(
            value.get("event_words_extra"), "vocabulary.event_words_extra"
        ),
        boolean_prefixes_extra=_as_str_list(
            value.get("boolean_prefixes_extra"), "vocabulary.boolean_prefixes_extra"
        ),
        loop_counters=_as_str_list_or_none(value.get("loop_counters"), "vocabulary.loop_counters"),
    )


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table/object")
    return value


def _as_str_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"{field_name} must be a list of strings")
        items.append(item)
    return items


def _as_str_list_or_none(value: Any, field_name: str) -> list[str] | None:
    if value is None:
        return None
    return _as_str_list(value, field_name)


def _as_choice(raw: Any, allowed: set[str], field_name: str) -> str:
    value = str(raw).lower()
    if value not in allowed:
        choices = ", ".join(sorted(allowed))
        raise ValueError(f"{field_name} must be one of: {choices}")
    return value


def _as_int(raw: Any, field_name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"{field_name} must be an integer")
    return raw

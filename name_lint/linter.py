"""Batch linting over source files."""

from __future__ import annotations

import fnmatch
import logging
import os
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from name_lint.checker import IdentifierChecker
from name_lint.config import AppConfig
from name_lint.rules import (
    RuleCatalog,
    UnknownCategoryError,
    build_catalog,
    resolve_enabled_categories,
)
from name_lint.rules.base import IdentifierCategory, Violation, ViolationKind
from name_lint.scanner import Occurrence, is_source_path, scan_file_name, scan_source

SKIPPED_DIRS = frozenset({"node_modules", "dist", "build", "coverage"})

logger = logging.getLogger(__name__)


class LintError(Exception):
    """A lint run could not read its inputs."""


@dataclass(frozen=True, slots=True)
class LintFinding:
    """A violation located in a source file."""

    path: str
    line: int
    column: int
    violation: Violation

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"path": self.path, "line": self.line, "column": self.column}
        payload.update(self.violation.to_dict())
        return payload


@dataclass(slots=True)
class FileResult:
    """Per-file worker output."""

    path: str
    checked: int = 0
    findings: list[LintFinding] = field(default_factory=list)


@dataclass(slots=True)
class LintReport:
    """Aggregated, deterministically ordered lint output."""

    findings: list[LintFinding]
    files_scanned: int
    identifiers_checked: int

    @property
    def violation_count(self) -> int:
        return len(self.findings)

    def counts_by_kind(self) -> dict[str, int]:
        counts = Counter(finding.violation.kind.value for finding in self.findings)
        return dict(sorted(counts.items()))


def discover_files(paths: list[Path], *, root: Path) -> list[Path]:
    """Expand files and directories into a sorted list of source files."""
    discovered: set[Path] = set()
    for path in paths:
        resolved = path if path.is_absolute() else root / path
        if resolved.is_file():
            if is_source_path(resolved.name):
                discovered.add(resolved)
            continue
        if not resolved.is_dir():
            raise LintError(f"Path does not exist: {resolved}")
        for dirpath, dirnames, filenames in os.walk(resolved):
            dirnames[:] = sorted(
                name for name in dirnames if name not in SKIPPED_DIRS and not name.startswith(".")
            )
            for filename in filenames:
                if is_source_path(filename):
                    discovered.add(Path(dirpath) / filename)
    return sorted(discovered)


def lint_paths(
    paths: list[Path],
    *,
    config: AppConfig | None = None,
    root: Path | None = None,
    catalog: RuleCatalog | None = None,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
    workers: int | None = None,
) -> LintReport:
    """Lint files under ``paths`` and return all findings at once."""
    effective = config or AppConfig()
    base = (root or Path(".")).resolve()
    active_catalog = catalog or build_catalog(effective.vocabulary)
    enabled = resolve_enabled_categories(
        enabled=effective.rule_enable,
        disabled=effective.rule_disable,
    )
    include_patterns = include if include is not None else effective.include
    exclude_patterns = exclude if exclude is not None else effective.exclude

    files = discover_files(paths, root=base)
    selected = _filter_paths(
        [(file_path, _display_path(file_path, base)) for file_path in files],
        includes=include_patterns,
        excludes=exclude_patterns,
    )
    logger.debug("Discovered %d source files, %d selected", len(files), len(selected))

    checker = IdentifierChecker(active_catalog)
    max_workers = workers if workers is not None else effective.workers
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        results = list(
            executor.map(
                lambda item: _lint_file(item[0], item[1], checker=checker, enabled=enabled),
                selected,
            )
        )

    findings = [finding for result in results for finding in result.findings]
    findings.sort(key=lambda item: (item.path, item.line, item.column, item.violation.identifier))
    return LintReport(
        findings=findings,
        files_scanned=len(results),
        identifiers_checked=sum(result.checked for result in results),
    )


def lint_text(
    path: str,
    text: str,
    *,
    checker: IdentifierChecker | None = None,
    enabled: set[IdentifierCategory] | None = None,
) -> FileResult:
    """Lint already-loaded source text; ``path`` is used for classification only."""
    active_checker = checker or IdentifierChecker()
    active = enabled if enabled is not None else set(IdentifierCategory)
    result = FileResult(path=path)

    occurrences: list[Occurrence] = []
    file_occurrence = scan_file_name(path)
    if file_occurrence is not None:
        occurrences.append(file_occurrence)
    occurrences.extend(scan_source(path, text))

    for occurrence in occurrences:
        if occurrence.category not in active:
            continue
        result.checked += 1
        violation = active_checker.check(
            occurrence.identifier, occurrence.category, occurrence.is_boolean
        )
        if violation is None:
            continue
        if violation.kind is ViolationKind.UNKNOWN_CATEGORY:
            raise UnknownCategoryError(violation.category)
        result.findings.append(
            LintFinding(
                path=path,
                line=occurrence.line,
                column=occurrence.column,
                violation=violation,
            )
        )
    return result


def _lint_file(
    file_path: Path,
    display_path: str,
    *,
    checker: IdentifierChecker,
    enabled: set[IdentifierCategory],
) -> FileResult:
    start = time.perf_counter()
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LintError(f"Could not read {file_path}: {exc}") from exc

    result = lint_text(display_path, text, checker=checker, enabled=enabled)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.debug(
        "Linted %s: %d identifiers, %d findings in %.1fms",
        display_path,
        result.checked,
        len(result.findings),
        elapsed_ms,
    )
    return result


def _filter_paths(
    items: list[tuple[Path, str]], *, includes: list[str], excludes: list[str]
) -> list[tuple[Path, str]]:
    filtered: list[tuple[Path, str]] = []
    for file_path, display in items:
        if includes and not any(fnmatch.fnmatch(display, pattern) for pattern in includes):
            logger.debug("Skipping %s: not included", display)
            continue
        if excludes and any(fnmatch.fnmatch(display, pattern) for pattern in excludes):
            logger.debug("Skipping %s: excluded", display)
            continue
        filtered.append((file_path, display))
    return filtered


def _display_path(file_path: Path, root: Path) -> str:
    try:
        return file_path.resolve().relative_to(root).as_posix()
    except ValueError:
        return file_path.as_posix()

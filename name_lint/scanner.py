"""Line-oriented extraction of named declarations from TS/JS sources."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePosixPath

from name_lint.rules.base import IdentifierCategory

SOURCE_SUFFIXES = (".ts", ".tsx", ".js", ".jsx")
JSX_SUFFIXES = (".tsx", ".jsx")
DISABLE_LINE_MARKER = "name-lint-disable-line"
DISABLE_NEXT_LINE_MARKER = "name-lint-disable-next-line"

_NAME = r"[A-Za-z_$][\w$]*"

INTERFACE_RE = re.compile(rf"^\s*(?:export\s+)?(?:declare\s+)?interface\s+(?P<name>{_NAME})")
TYPE_RE = re.compile(
    rf"^\s*(?:export\s+)?(?:declare\s+)?type\s+(?P<name>{_NAME})\s*(?:<[^=]*>)?\s*="
)
ENUM_RE = re.compile(
    rf"^\s*(?:export\s+)?(?:declare\s+)?(?:const\s+)?enum\s+(?P<name>{_NAME})"
)
ENUM_MEMBER_RE = re.compile(rf"^\s*(?P<name>{_NAME})\s*(?:=|,|$)")
FUNCTION_RE = re.compile(
    rf"^\s*(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s*\*?\s*(?P<name>{_NAME})\s*[(<]"
)
DECLARATION_RE = re.compile(
    rf"^\s*(?:export\s+)?(?P<keyword>const|let|var)\s+(?P<name>{_NAME})\s*"
    r"(?::\s*(?P<annotation>(?:=>|[^=])+?))?\s*=(?![=>])\s*(?P<init>.*)$"
)
UNINITIALIZED_RE = re.compile(
    rf"^\s*(?:export\s+)?(?:let|var)\s+(?P<name>{_NAME})\s*(?::\s*(?P<annotation>[^;=]+))?;"
)
STATE_PAIR_RE = re.compile(
    rf"^\s*(?:export\s+)?const\s+\[\s*(?P<name>{_NAME})\s*,\s*{_NAME}\s*\]\s*=\s*"
    r"(?:React\.)?useState\s*(?P<generic><[^>]*>)?\s*\((?P<init>.*)$"
)
TEST_CASE_RE = re.compile(
    r"^\s*(?:it|test)(?:\.(?:only|skip|todo))?\s*\(\s*(?P<quote>['\"`])(?P<name>.*?)(?P=quote)"
)

FUNCTION_INIT_RE = re.compile(
    r"^(?:async\s+)?(?:function\b"
    r"|\([^)]*\)\s*(?::\s*[^=]+)?=>"
    rf"|{_NAME}\s*=>"
    r"|(?:React\.)?useCallback\s*\()"
)
COMPONENT_INIT_RE = re.compile(
    r"^(?:(?:React\.)?(?:memo|forwardRef|lazy|createContext)\s*[(<]|styled[.(])"
)
MOCK_FN_RE = re.compile(r"^(?:jest|vi)\.fn\s*\(")
MOCK_INIT_RE = re.compile(r"^(?:\{|\[|(?:jest|vi)\.fn\s*\()")
BOOLEAN_INIT_RE = re.compile(r"^(?:true\b|false\b|!|Boolean\s*\()")
CONSTANT_NAME_RE = re.compile(r"^[A-Z][A-Z0-9_]+$")


@dataclass(frozen=True, slots=True)
class Occurrence:
    """A named declaration found in a source file.

    File-name occurrences use line 0 and column 0.
    """

    path: str
    line: int
    column: int
    identifier: str
    category: IdentifierCategory
    is_boolean: bool = False


def is_source_path(path: str) -> bool:
    lowered = path.lower()
    return lowered.endswith(SOURCE_SUFFIXES) and not lowered.endswith(".d.ts")


def is_test_path(path: str) -> bool:
    pure = PurePosixPath(path)
    if "__tests__" in pure.parts:
        return True
    return re.search(r"\.(?:test|spec)\.[jt]sx?$", pure.name) is not None


def scan_file_name(path: str) -> Occurrence | None:
    """Classify the file name itself, or None for files that are not checked."""
    pure = PurePosixPath(path)
    name = pure.name
    if not is_source_path(name):
        return None
    stem = name.split(".", 1)[0]
    if stem == "index":
        return None

    if is_test_path(path):
        if stem[:1].isupper():
            # Component tests mirror the component file name.
            return Occurrence(path, 0, 0, stem, IdentifierCategory.COMPONENT)
        return Occurrence(path, 0, 0, name, IdentifierCategory.TEST_FILE)

    if name.endswith(JSX_SUFFIXES) and stem[:1].isupper():
        return Occurrence(path, 0, 0, stem, IdentifierCategory.COMPONENT)
    return Occurrence(path, 0, 0, name, IdentifierCategory.UTILITY_FILE)


def scan_source(path: str, text: str) -> list[Occurrence]:
    """Extract declarations from one TS/JS file in source order."""
    occurrences: list[Occurrence] = []
    is_jsx = path.lower().endswith(JSX_SUFFIXES)
    in_test = is_test_path(path)
    in_block_comment = False
    in_enum = False
    skip_next = False

    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line
        if in_block_comment:
            if "*/" not in line:
                continue
            in_block_comment = False
            line = line.split("*/", 1)[1]

        stripped = line.strip()
        if not stripped:
            continue
        if stripped.startswith("/*") and "*/" not in stripped:
            in_block_comment = True
            continue
        if stripped.startswith(("//", "*", "/*")):
            skip_next = DISABLE_NEXT_LINE_MARKER in stripped
            continue
        if skip_next or DISABLE_LINE_MARKER in line:
            skip_next = False
            if in_enum and "}" in line:
                in_enum = False
            continue

        if in_enum:
            member = ENUM_MEMBER_RE.match(line)
            if member is not None and stripped != "}":
                occurrences.append(
                    _occurrence(path, lineno, member, IdentifierCategory.ENUM_MEMBER)
                )
            if "}" in line:
                in_enum = False
            continue

        found = _scan_line(path, lineno, line, is_jsx=is_jsx, in_test=in_test)
        if found is None:
            continue
        occurrences.append(found)
        if found.category is IdentifierCategory.ENUM and "}" not in line:
            in_enum = True
    return occurrences


def _scan_line(
    path: str, lineno: int, line: str, *, is_jsx: bool, in_test: bool
) -> Occurrence | None:
    for pattern, category in (
        (INTERFACE_RE, IdentifierCategory.TYPE_OR_INTERFACE),
        (TYPE_RE, IdentifierCategory.TYPE_OR_INTERFACE),
        (ENUM_RE, IdentifierCategory.ENUM),
    ):
        match = pattern.match(line)
        if match is not None:
            return _occurrence(path, lineno, match, category)

    if in_test:
        match = TEST_CASE_RE.match(line)
        if match is not None:
            return _occurrence(path, lineno, match, IdentifierCategory.TEST_CASE)

    match = FUNCTION_RE.match(line)
    if match is not None:
        category = _classify_callable(match.group("name"), is_jsx=is_jsx, in_test=in_test)
        return _occurrence(path, lineno, match, category)

    match = STATE_PAIR_RE.match(line)
    if match is not None:
        is_boolean = _is_boolean_state(match.group("generic"), match.group("init"))
        category = (
            IdentifierCategory.BOOLEAN_VARIABLE if is_boolean else IdentifierCategory.VARIABLE
        )
        return _occurrence(path, lineno, match, category, is_boolean=is_boolean)

    match = DECLARATION_RE.match(line)
    if match is not None:
        return _classify_declaration(path, lineno, line, match, is_jsx=is_jsx, in_test=in_test)

    match = UNINITIALIZED_RE.match(line)
    if match is not None:
        is_boolean = _annotation_is_boolean(match.group("annotation"))
        category = (
            IdentifierCategory.BOOLEAN_VARIABLE if is_boolean else IdentifierCategory.VARIABLE
        )
        return _occurrence(path, lineno, match, category, is_boolean=is_boolean)
    return None


def _classify_declaration(
    path: str,
    lineno: int,
    line: str,
    match: re.Match[str],
    *,
    is_jsx: bool,
    in_test: bool,
) -> Occurrence:
    name = match.group("name")
    init = match.group("init").strip()
    annotation = match.group("annotation")

    if FUNCTION_INIT_RE.match(init):
        category = _classify_callable(name, is_jsx=is_jsx, in_test=in_test)
        return _occurrence(path, lineno, match, category)
    if COMPONENT_INIT_RE.match(init):
        return _occurrence(path, lineno, match, IdentifierCategory.COMPONENT)
    if match.group("keyword") == "const" and CONSTANT_NAME_RE.match(name):
        return _occurrence(path, lineno, match, IdentifierCategory.CONSTANT)
    if in_test and MOCK_INIT_RE.match(init):
        # Only top-level literals count as fixtures; spies count anywhere.
        if not line[:1].isspace() or MOCK_FN_RE.match(init):
            return _occurrence(path, lineno, match, IdentifierCategory.MOCK_OBJECT)

    is_boolean = _annotation_is_boolean(annotation) or _init_is_boolean(init)
    category = IdentifierCategory.BOOLEAN_VARIABLE if is_boolean else IdentifierCategory.VARIABLE
    return _occurrence(path, lineno, match, category, is_boolean=is_boolean)


def _classify_callable(name: str, *, is_jsx: bool, in_test: bool) -> IdentifierCategory:
    if re.match(r"^use[A-Z0-9]", name):
        return IdentifierCategory.HOOK
    if re.match(r"^(?:handle|on)[A-Z]", name):
        return IdentifierCategory.EVENT_HANDLER
    if is_jsx and name[:1].isupper():
        return IdentifierCategory.COMPONENT
    if in_test:
        return IdentifierCategory.HELPER_FUNCTION
    return IdentifierCategory.FUNCTION


def _annotation_is_boolean(annotation: str | None) -> bool:
    return annotation is not None and annotation.strip() == "boolean"


def _init_is_boolean(init: str) -> bool:
    if BOOLEAN_INIT_RE.match(init):
        return True
    expression = _top_level_text(init)
    if "=>" in expression or "?" in expression.replace("?.", ""):
        return False
    return "===" in expression or "!==" in expression


def _top_level_text(expression: str) -> str:
    """Drop string literals and everything nested in brackets."""
    kept: list[str] = []
    depth = 0
    quote: str | None = None
    escaped = False
    for char in expression:
        if quote is not None:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char in "'\"`":
            quote = char
        elif char in "([{":
            depth += 1
        elif char in ")]}":
            depth = max(depth - 1, 0)
        elif depth == 0:
            kept.append(char)
    return "".join(kept)


def _is_boolean_state(generic: str | None, init: str) -> bool:
    if generic is not None and generic.strip("<> ") == "boolean":
        return True
    return re.match(r"^\s*(?:true|false)\s*\)", init) is not None


def _occurrence(
    path: str,
    lineno: int,
    match: re.Match[str],
    category: IdentifierCategory,
    *,
    is_boolean: bool = False,
) -> Occurrence:
    return Occurrence(
        path=path,
        line=lineno,
        column=match.start("name") + 1,
        identifier=match.group("name"),
        category=category,
        is_boolean=is_boolean,
    )

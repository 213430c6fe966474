"""Source scanner tests."""

from __future__ import annotations

from name_lint.rules.base import IdentifierCategory
from name_lint.scanner import is_test_path, scan_file_name, scan_source

C = IdentifierCategory


def test_scan_component_file_declarations() -> None:
    source = "\n".join(
        [
            "import React, { useState } from 'react';",
            "",
            "export interface UserProfileCardProps {",
            "  userId: string;",
            "}",
            "",
            "type ProfileTab = 'overview' | 'settings';",
            "",
            "const MAX_BIO_LENGTH = 280;",
            "",
            "export function UserProfileCard({ userId }: UserProfileCardProps) {",
            "  const [isEditing, setIsEditing] = useState(false);",
            "  const [bio, setBio] = useState('');",
            "  const userData = useUserProfile(userId);",
            "  const handleSubmit = () => setIsEditing(false);",
            "  const canSave = bio.length <= MAX_BIO_LENGTH;",
            "  return <div />;",
            "}",
        ]
    )
    occurrences = scan_source("src/UserProfileCard.tsx", source)
    found = [(item.identifier, item.category) for item in occurrences]
    assert found == [
        ("UserProfileCardProps", C.TYPE_OR_INTERFACE),
        ("ProfileTab", C.TYPE_OR_INTERFACE),
        ("MAX_BIO_LENGTH", C.CONSTANT),
        ("UserProfileCard", C.COMPONENT),
        ("isEditing", C.BOOLEAN_VARIABLE),
        ("bio", C.VARIABLE),
        ("userData", C.VARIABLE),
        ("handleSubmit", C.EVENT_HANDLER),
        ("canSave", C.VARIABLE),
    ]


def test_scan_reports_line_and_column() -> None:
    source = "\n\nexport const fetchUserProfile = async (id: string) => {};\n"
    (occurrence,) = scan_source("src/user-service.ts", source)
    assert occurrence.identifier == "fetchUserProfile"
    assert occurrence.category is C.FUNCTION
    assert occurrence.line == 3
    assert occurrence.column == len("export const ") + 1


def test_scan_classifies_hooks_and_handlers() -> None:
    source = "\n".join(
        [
            "export function useCartTotals() {}",
            "const onCartItemRemove = (id) => {};",
            "function calculateCartTotal(items) {}",
        ]
    )
    found = [(item.identifier, item.category) for item in scan_source("src/cart.ts", source)]
    assert found == [
        ("useCartTotals", C.HOOK),
        ("onCartItemRemove", C.EVENT_HANDLER),
        ("calculateCartTotal", C.FUNCTION),
    ]


def test_scan_detects_booleans() -> None:
    source = "\n".join(
        [
            "const isVisible: boolean = props.open;",
            "const loaded = true;",
            "const hidden = !isVisible;",
            "const sameUser = a.id === b.id;",
            "const label = ok ? 'yes' : 'no';",
            "let hasError: boolean;",
            "const [expanded, setExpanded] = useState<boolean>(initial);",
        ]
    )
    booleans = {
        item.identifier: item.is_boolean for item in scan_source("src/flags.ts", source)
    }
    assert booleans == {
        "isVisible": True,
        "loaded": True,
        "hidden": True,
        "sameUser": True,
        "label": False,
        "hasError": True,
        "expanded": True,
    }


def test_scan_ignores_comparisons_nested_in_callbacks_and_calls() -> None:
    source = "\n".join(
        [
            "const activeUsers = users.filter((user) => user.status === 'active');",
            "const adminIndex = users.findIndex(function (user) { return user.role === 'admin'; });",
            "const title = format('a === b');",
            "const isOwner = profile?.ownerId === session.userId;",
            "const sameTeam = (a.teamId) === (b.teamId);",
        ]
    )
    booleans = {
        item.identifier: (item.category, item.is_boolean)
        for item in scan_source("src/user-list.ts", source)
    }
    assert booleans == {
        "activeUsers": (C.VARIABLE, False),
        "adminIndex": (C.VARIABLE, False),
        "title": (C.VARIABLE, False),
        "isOwner": (C.BOOLEAN_VARIABLE, True),
        "sameTeam": (C.BOOLEAN_VARIABLE, True),
    }


def test_scan_enum_members() -> None:
    source = "\n".join(
        [
            "export enum OrderStatus {",
            "  Pending = 'pending',",
            "  IN_TRANSIT = 'in_transit',",
            "}",
            "const orderCount = 0;",
        ]
    )
    found = [(item.identifier, item.category) for item in scan_source("src/order.types.ts", source)]
    assert found == [
        ("OrderStatus", C.ENUM),
        ("Pending", C.ENUM_MEMBER),
        ("IN_TRANSIT", C.ENUM_MEMBER),
        ("orderCount", C.VARIABLE),
    ]


def test_scan_skips_comments_and_disabled_lines() -> None:
    source = "\n".join(
        [
            "// const tmpValue = 1;",
            "/*",
            " const usrPrf = 2;",
            " */",
            "const msgText = 'hi'; // name-lint-disable-line",
            "// name-lint-disable-next-line",
            "const btnLabel = 'ok';",
            "const greetingText = 'hello';",
        ]
    )
    found = [item.identifier for item in scan_source("src/greeting.ts", source)]
    assert found == ["greetingText"]


def test_scan_test_file_declarations() -> None:
    source = "\n".join(
        [
            "const mockUserProfile = { id: '1', name: 'Ada' };",
            "const fetchSpy = vi.fn();",
            "function renderUserProfileCard() {}",
            "describe('UserProfileCard', () => {",
            "  it('should show the name when the profile loads', () => {",
            "    const expected = { name: 'Ada' };",
            "  });",
            "  test(\"renders title\", () => {});",
            "});",
        ]
    )
    found = [
        (item.identifier, item.category)
        for item in scan_source("src/__tests__/UserProfileCard.test.tsx", source)
    ]
    assert found == [
        ("mockUserProfile", C.MOCK_OBJECT),
        ("fetchSpy", C.MOCK_OBJECT),
        ("renderUserProfileCard", C.HELPER_FUNCTION),
        ("should show the name when the profile loads", C.TEST_CASE),
        ("expected", C.VARIABLE),
        ("renders title", C.TEST_CASE),
    ]


def test_scan_file_name_classification() -> None:
    component = scan_file_name("src/components/UserProfileCard.tsx")
    assert component is not None
    assert (component.identifier, component.category) == ("UserProfileCard", C.COMPONENT)

    utility = scan_file_name("src/services/user-service.ts")
    assert utility is not None
    assert (utility.identifier, utility.category) == ("user-service.ts", C.UTILITY_FILE)

    test_file = scan_file_name("src/services/user-service.test.ts")
    assert test_file is not None
    assert test_file.category is C.TEST_FILE

    component_test = scan_file_name("src/components/UserProfileCard.test.tsx")
    assert component_test is not None
    assert component_test.category is C.COMPONENT

    assert scan_file_name("src/index.ts") is None
    assert scan_file_name("src/types/global.d.ts") is None
    assert scan_file_name("README.md") is None


def test_is_test_path() -> None:
    assert is_test_path("src/a.test.ts")
    assert is_test_path("src/a.spec.jsx")
    assert is_test_path("src/__tests__/helpers.ts")
    assert not is_test_path("src/testing-utils.ts")

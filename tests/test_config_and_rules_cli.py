"""Config loading and lint/rules/config CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from name_lint.cli import app
from name_lint.config import default_config_template, load_app_config

runner = CliRunner()


def test_load_app_config_prefers_dot_file_over_pyproject(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / "pyproject.toml").write_text(
        "\n".join(
            [
                "[tool.name_lint]",
                'format = "human"',
                "max_violations = 80",
            ]
        ),
        encoding="utf-8",
    )
    (repo / ".name-lint.toml").write_text(
        "\n".join(
            [
                'format = "json"',
                "max_violations = 5",
                'include = ["src/**"]',
                "workers = 2",
                "",
                "[rules]",
                'enable = ["function"]',
                'disable = ["testCase"]',
                "",
                "[vocabulary]",
                'forbidden_extra = ["mgr"]',
            ]
        ),
        encoding="utf-8",
    )

    config = load_app_config(repo)
    assert config.format == "json"
    assert config.max_violations == 5
    assert config.include == ["src/**"]
    assert config.workers == 2
    assert config.rule_enable == ["function"]
    assert config.rule_disable == ["testCase"]
    assert config.vocabulary.forbidden_extra == ["mgr"]
    assert config.vocabulary.loop_counters is None
    assert config.source == str(repo / ".name-lint.toml")


def test_load_app_config_reads_pyproject_hyphenated_key(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / "pyproject.toml").write_text(
        "\n".join(
            [
                '[tool."name-lint"]',
                'format = "json"',
                "",
                '[tool."name-lint".rules]',
                'enable = ["hook"]',
            ]
        ),
        encoding="utf-8",
    )

    config = load_app_config(repo)
    assert config.format == "json"
    assert config.rule_enable == ["hook"]
    assert config.source == str(repo / "pyproject.toml")


def test_load_app_config_defaults_without_files(tmp_path: Path) -> None:
    config = load_app_config(tmp_path)
    assert config.source is None
    assert config.format == "human"
    assert config.max_violations == 0
    assert config.rule_enable is None


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("workers = 0", "workers must be > 0"),
        ("max_violations = -1", "max_violations must be >= 0"),
        ('format = "xml"', "format must be one of: human, json"),
        ("include = \"src\"", "include must be a list of strings"),
        ("[vocabulary]\nloop_counters = [1]", "vocabulary.loop_counters must be a list"),
        ("rules = 3", "rules must be a table/object"),
        ("format = [", "Invalid TOML"),
    ],
)
def test_load_app_config_rejects_invalid_values(tmp_path: Path, body: str, message: str) -> None:
    (tmp_path / ".name-lint.toml").write_text(body, encoding="utf-8")
    with pytest.raises(ValueError, match=message):
        load_app_config(tmp_path)


def test_default_config_template_round_trips(tmp_path: Path) -> None:
    (tmp_path / ".name-lint.toml").write_text(default_config_template(), encoding="utf-8")
    config = load_app_config(tmp_path)
    assert config.rule_disable == ["testCase"]
    assert config.vocabulary.loop_counters == ["i", "j", "k"]


def test_lint_command_json_and_exit_code(tmp_path: Path) -> None:
    src = tmp_path / "src"
    src.mkdir()
    (src / "user-service.ts").write_text(
        "\n".join(
            [
                "export const fetchUserProfile = async (id: string) => id;",
                "export const getProfile = (id: string) => id;",
                "",
            ]
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["lint", str(src), "--repo", str(tmp_path), "--format", "json"])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["summary"]["violation_count"] == 1
    (violation,) = payload["violations"]
    assert violation["identifier"] == "getProfile"
    assert violation["path"] == "src/user-service.ts"
    assert violation["line"] == 2

    allowed = runner.invoke(
        app, ["lint", str(src), "--repo", str(tmp_path), "--max-violations", "1"]
    )
    assert allowed.exit_code == 0
    assert "1 violation in 1 files" in allowed.stdout


def test_lint_command_uses_config_file(tmp_path: Path) -> None:
    (tmp_path / ".name-lint.toml").write_text(
        "\n".join(["[rules]", 'disable = ["function"]']),
        encoding="utf-8",
    )
    (tmp_path / "user-service.ts").write_text(
        "export const getProfile = (id: string) => id;\n", encoding="utf-8"
    )

    result = runner.invoke(app, ["lint", "--repo", str(tmp_path), "--format", "json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["violations"] == []
    assert payload["meta"]["config_source"] == str(tmp_path.resolve() / ".name-lint.toml")


def test_lint_command_missing_path_exits_with_error(tmp_path: Path) -> None:
    result = runner.invoke(app, ["lint", str(tmp_path / "missing"), "--repo", str(tmp_path)])
    assert result.exit_code == 2


def test_rules_command_json_lists_enabled_state_from_config(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / ".name-lint.toml").write_text(
        "\n".join(
            [
                "[rules]",
                'enable = ["function", "hook", "testCase"]',
                'disable = ["testCase"]',
            ]
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["rules", "--repo", str(repo), "--format", "json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    rules_by_category = {item["category"]: item for item in payload["rules"]}

    assert rules_by_category["function"]["enabled"] is True
    assert rules_by_category["hook"]["enabled"] is True
    assert rules_by_category["testCase"]["enabled"] is False
    assert rules_by_category["variable"]["enabled"] is False
    assert rules_by_category["hook"]["pattern"] == "[use, HighContext, LowContext]"
    assert "usr" in payload["forbidden_tokens"]
    assert payload["meta"]["config_source"] == str(repo.resolve() / ".name-lint.toml")


def test_rules_command_human_output() -> None:
    result = runner.invoke(app, ["rules"])
    assert result.exit_code == 0
    assert "- eventHandler [enabled] camelCase" in result.stdout
    assert "Boolean prefixes: is, has, can, should, will, was, are" in result.stdout


def test_config_command_reports_active_categories(tmp_path: Path) -> None:
    (tmp_path / ".name-lint.toml").write_text(
        "\n".join(["[rules]", 'enable = ["hook", "function"]']),
        encoding="utf-8",
    )
    result = runner.invoke(app, ["config", "--repo", str(tmp_path), "--format", "json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["active_categories"] == ["function", "hook"]


def test_config_validate_rejects_unknown_category(tmp_path: Path) -> None:
    (tmp_path / ".name-lint.toml").write_text(
        "\n".join(["[rules]", 'enable = ["widget"]']),
        encoding="utf-8",
    )
    result = runner.invoke(app, ["config-validate", "--repo", str(tmp_path)])
    assert result.exit_code == 2
    assert "Unknown categories: widget" in result.output


def test_config_init_writes_template_and_refuses_overwrite(tmp_path: Path) -> None:
    out = tmp_path / ".name-lint.toml"
    first = runner.invoke(app, ["config-init", "--out", str(out)])
    assert first.exit_code == 0
    assert out.read_text(encoding="utf-8") == default_config_template()

    second = runner.invoke(app, ["config-init", "--out", str(out)])
    assert second.exit_code == 2

    forced = runner.invoke(app, ["config-init", "--out", str(out), "--force"])
    assert forced.exit_code == 0

    validated = runner.invoke(
        app, ["config-validate", "--repo", str(tmp_path), "--format", "json"]
    )
    assert validated.exit_code == 0
    assert json.loads(validated.stdout)["ok"] is True

"""CLI entrypoint for name-lint."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from name_lint import __version__
from name_lint.checker import IdentifierChecker
from name_lint.config import AppConfig, default_config_template, load_app_config
from name_lint.linter import LintError, LintReport, lint_paths
from name_lint.output import render_check_human, render_human, render_json
from name_lint.rules import (
    IdentifierCategory,
    RuleCatalog,
    UnknownCategoryError,
    build_catalog,
    list_rule_info,
    resolve_enabled_categories,
)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = typer.Typer(
    name="name-lint",
    no_args_is_help=True,
    help="Check React/TypeScript identifiers against naming conventions.",
)


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=version_callback),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug details to stderr."),
    ] = False,
) -> None:
    """Root command callback."""
    _ = version
    configure_logging(verbose)


def configure_logging(verbose: bool) -> None:
    """Send package logs to stderr at DEBUG (verbose) or WARNING."""
    logger = logging.getLogger("name_lint")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False


@app.command("check")
def check_command(
    identifier: Annotated[str, typer.Argument(help="Identifier or file name to check.")],
    category: Annotated[
        IdentifierCategory,
        typer.Option("--category", "-c", help="Identifier category."),
    ],
    boolean: Annotated[
        bool, typer.Option("--boolean", help="Treat the identifier as boolean-typed.")
    ] = False,
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Check a single identifier against its category's rule."""
    output_format = _validate_format(format)
    app_config = _load_config_or_raise(repo, config_file)
    checker = IdentifierChecker(_build_catalog_or_raise(app_config))
    violation = checker.check(identifier, category, is_boolean=boolean)

    if output_format == "json":
        payload = {
            "identifier": identifier,
            "category": category.value,
            "ok": violation is None,
            "violation": violation.to_dict() if violation is not None else None,
        }
        typer.echo(json.dumps(payload, sort_keys=True))
    else:
        typer.echo(render_check_human(identifier, category.value, violation))

    if violation is not None:
        raise typer.Exit(code=1)


@app.command("lint")
def lint_command(
    paths: Annotated[
        list[Path] | None,
        typer.Argument(help="Files or directories to lint (default: repository root)."),
    ] = None,
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    format: Annotated[
        str | None, typer.Option(help="Output format: human|json.", show_default="human")
    ] = None,
    include: Annotated[list[str] | None, typer.Option(help="Include glob pattern.")] = None,
    exclude: Annotated[list[str] | None, typer.Option(help="Exclude glob pattern.")] = None,
    workers: Annotated[
        int | None, typer.Option(min=1, help="Number of parallel file workers.")
    ] = None,
    max_violations: Annotated[
        int | None,
        typer.Option(help="Exit nonzero if the violation count is above this value."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Lint source files and report naming violations."""
    app_config = _load_config_or_raise(repo, config_file)
    output_format = _validate_format(format or app_config.format)
    catalog = _build_catalog_or_raise(app_config)
    _build_categories_or_raise(app_config)

    report = _run_lint_or_exit(
        paths=[path.resolve() for path in paths or [repo]],
        repo=repo,
        app_config=app_config,
        catalog=catalog,
        include=include,
        exclude=exclude,
        workers=workers,
    )

    if output_format == "json":
        typer.echo(render_json(report, config_source=app_config.source))
    else:
        typer.echo(render_human(report))

    threshold = max_violations if max_violations is not None else app_config.max_violations
    if report.violation_count > threshold:
        raise typer.Exit(code=1)


@app.command("rules")
def rules_command(
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """List the naming rule for each identifier category."""
    output_format = _validate_format(format)
    app_config = _load_config_or_raise(repo, config_file)
    catalog = _build_catalog_or_raise(app_config)
    enabled = {category.value for category in _build_categories_or_raise(app_config)}
    rule_info = list_rule_info(catalog)

    if output_format == "json":
        payload = {
            "rules": [
                {
                    "category": item.category,
                    "casing": item.casing,
                    "pattern": item.pattern,
                    "notes": item.notes,
                    "enabled": item.category in enabled,
                }
                for item in rule_info
            ],
            "forbidden_tokens": sorted(catalog.get_forbidden_tokens()),
            "boolean_prefixes": list(catalog.get_boolean_prefixes()),
            "meta": {"config_source": app_config.source},
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Naming rules:"]
    for item in rule_info:
        status = "enabled" if item.category in enabled else "disabled"
        line = f"- {item.category} [{status}] {item.casing}, pattern {item.pattern}"
        if item.notes:
            line += f" - {item.notes}"
        lines.append(line)
    lines.append(f"Forbidden tokens: {', '.join(sorted(catalog.get_forbidden_tokens()))}")
    lines.append(f"Boolean prefixes: {', '.join(catalog.get_boolean_prefixes())}")
    typer.echo("\n".join(lines))


@app.command("config")
def config_command(
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Show resolved configuration."""
    output_format = _validate_format(format)
    app_config = _load_config_or_raise(repo, config_file)
    enabled = _build_categories_or_raise(app_config)
    payload = app_config.to_dict()
    payload["active_categories"] = _ordered_category_names(enabled)

    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- format: {payload['format']}",
        f"- max_violations: {payload['max_violations']}",
        f"- include: {payload['include']}",
        f"- exclude: {payload['exclude']}",
        f"- workers: {payload['workers']}",
        f"- rules.enable: {payload['rules']['enable']}",
        f"- rules.disable: {payload['rules']['disable']}",
        f"- active_categories: {payload['active_categories']}",
    ]
    typer.echo("\n".join(lines))


@app.command("config-init")
def config_init_command(
    out: Annotated[Path, typer.Option(help="Output path for starter config TOML.")] = Path(
        ".name-lint.toml"
    ),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite if file already exists."),
    ] = False,
) -> None:
    """Create a starter repository config file."""
    out_path = out.resolve()
    if out_path.exists() and not force:
        raise typer.BadParameter(
            f"Refusing to overwrite existing file: {out_path}. Use --force to overwrite."
        )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")


@app.command("config-validate")
def config_validate_command(
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    config_file: Annotated[
        Path,
        typer.Option("--config", help="Path to config TOML file to validate."),
    ] = Path(".name-lint.toml"),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
) -> None:
    """Validate a config file and report active categories."""
    output_format = _validate_format(format)
    app_config = _load_config_or_raise(repo, config_file)
    _build_catalog_or_raise(app_config)
    enabled = _build_categories_or_raise(app_config)
    payload = {
        "ok": True,
        "source": app_config.source,
        "active_categories": _ordered_category_names(enabled),
    }
    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return
    typer.echo(
        "\n".join(
            [
                "Config is valid.",
                f"- source: {payload['source']}",
                f"- active_categories: {payload['active_categories']}",
            ]
        )
    )


def main() -> None:
    """Console script entrypoint."""
    app()


def _validate_format(value: str) -> str:
    output_format = value.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")
    return output_format


def _load_config_or_raise(repo: Path, config_file: Path | None = None) -> AppConfig:
    try:
        return load_app_config(repo, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _build_catalog_or_raise(app_config: AppConfig) -> RuleCatalog:
    try:
        return build_catalog(app_config.vocabulary)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config.vocabulary") from exc


def _build_categories_or_raise(app_config: AppConfig) -> set[IdentifierCategory]:
    try:
        return resolve_enabled_categories(
            enabled=app_config.rule_enable,
            disabled=app_config.rule_disable,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config.rules") from exc


def _ordered_category_names(enabled: set[IdentifierCategory]) -> list[str]:
    return [category.value for category in IdentifierCategory if category in enabled]


def _run_lint_or_exit(
    *,
    paths: list[Path],
    repo: Path,
    app_config: AppConfig,
    catalog: RuleCatalog,
    include: list[str] | None,
    exclude: list[str] | None,
    workers: int | None,
) -> LintReport:
    try:
        return lint_paths(
            paths,
            config=app_config,
            root=repo,
            catalog=catalog,
            include=include,
            exclude=exclude,
            workers=workers,
        )
    except (LintError, UnknownCategoryError) as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2) from exc

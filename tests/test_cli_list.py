"""Tests for the modes list and categories list commands."""

from pathlib import Path

from roo_init.__main__ import cli

from tests.factories import category_payload, mode_payload


def _base(system_root: Path, user_root: Path) -> list[str]:
    return ["--definitions", str(system_root), "--config-dir", str(user_root)]


def test_modes_list_defaults_to_custom(
    sample_catalog: Path, user_root: Path, cli_runner
) -> None:
    result = cli_runner.invoke(cli, [*_base(sample_catalog, user_root), "modes", "list"])

    assert result.exit_code == 0, result.output
    assert "No custom modes found." in result.output


def test_modes_list_system(sample_catalog: Path, user_root: Path, cli_runner) -> None:
    result = cli_runner.invoke(
        cli, [*_base(sample_catalog, user_root), "modes", "list", "--source", "system"]
    )

    assert result.exit_code == 0, result.output
    for slug in ("architect", "coder", "tester"):
        assert slug in result.output


def test_modes_list_custom_shows_only_overlay_entries(
    sample_catalog: Path, make_user_overlay, user_root: Path, cli_runner
) -> None:
    make_user_overlay({"customModes": [mode_payload("mine", ["code"])]})

    result = cli_runner.invoke(cli, [*_base(sample_catalog, user_root), "modes", "list"])

    assert result.exit_code == 0, result.output
    assert "mine" in result.output
    assert "architect" not in result.output


def test_modes_list_all_is_case_insensitive(
    sample_catalog: Path, make_user_overlay, user_root: Path, cli_runner
) -> None:
    make_user_overlay({"customModes": [mode_payload("mine", ["code"])]})

    result = cli_runner.invoke(
        cli, [*_base(sample_catalog, user_root), "modes", "list", "--source", "ALL"]
    )

    assert result.exit_code == 0, result.output
    assert "coder" in result.output
    assert "mine" in result.output


def test_modes_list_rejects_unknown_source(
    sample_catalog: Path, user_root: Path, cli_runner
) -> None:
    result = cli_runner.invoke(
        cli, [*_base(sample_catalog, user_root), "modes", "list", "--source", "other"]
    )

    assert result.exit_code == 2


def test_categories_list_system(sample_catalog: Path, user_root: Path, cli_runner) -> None:
    result = cli_runner.invoke(
        cli, [*_base(sample_catalog, user_root), "categories", "list", "--source", "system"]
    )

    assert result.exit_code == 0, result.output
    assert "code" in result.output
    assert "qa" in result.output


def test_categories_list_custom(
    sample_catalog: Path, make_user_overlay, user_root: Path, cli_runner
) -> None:
    make_user_overlay({"customCategories": [category_payload("qa", "Mine")]})

    result = cli_runner.invoke(
        cli, [*_base(sample_catalog, user_root), "categories", "list"]
    )

    assert result.exit_code == 0, result.output
    assert "qa" in result.output
    assert "empty" not in result.output


def test_list_reports_broken_system_catalog(
    tmp_path: Path, user_root: Path, cli_runner
) -> None:
    result = cli_runner.invoke(
        cli, [*_base(tmp_path / "missing", user_root), "categories", "list"]
    )

    assert result.exit_code != 0
    assert "Fatal: Missing required definitions file" in result.output


def test_list_uses_bundled_catalog_by_default(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["modes", "list", "--source", "system"])

    assert result.exit_code == 0, result.output
    assert "architect" in result.output

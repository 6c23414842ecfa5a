import re
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console

from roo_init import __version__
from roo_init.constants import (
    CONFIG_DIR_ENVVAR,
    DEFINITIONS_ENVVAR,
    SLUG_PATTERN,
)
from roo_init.definitions import (
    DefinitionLoader,
    SystemDefinitionsRepository,
    UserDefinitionsRepository,
)
from roo_init.definitions.schema import validate_user_definitions
from roo_init.errors import (
    InvalidSelectionError,
    RooInitError,
    UserAbortError,
    UserDefinitionsError,
)
from roo_init.interfaces import IPrompter
from roo_init.materializer import FileMaterializer
from roo_init.models import (
    CategoryDefinition,
    ModeDefinition,
    Origin,
    Rule,
    SourceFilter,
    UserDefinitions,
)
from roo_init.selector import ModeSelector
from roo_init.tui import RooConsoleUI, TerminalPrompter
from roo_init.utils import split_csv


SOURCE_VALUES = [source.value for source in SourceFilter]


def _source_option() -> Any:
    return click.option(
        "--source",
        type=click.Choice(SOURCE_VALUES, case_sensitive=False),
        default=SourceFilter.CUSTOM.value,
        show_default=True,
        help="Which definitions to list.",
    )


def _ui_from_obj(obj: Dict[str, Any]) -> RooConsoleUI:
    ui = obj.get("ui")
    if ui is None:
        ui = RooConsoleUI(Console())
        obj["ui"] = ui
    return ui


def _prompter_from_obj(obj: Dict[str, Any]) -> IPrompter:
    prompter = obj.get("prompter")
    if prompter is None:
        prompter = TerminalPrompter()
        obj["prompter"] = prompter
    return prompter


def _repos_from_obj(
    obj: Dict[str, Any],
) -> tuple[SystemDefinitionsRepository, UserDefinitionsRepository]:
    system = SystemDefinitionsRepository(obj.get("definitions"))
    user = UserDefinitionsRepository(obj.get("config_dir"))
    return system, user


def _loader_from_obj(obj: Dict[str, Any]) -> DefinitionLoader:
    system, user = _repos_from_obj(obj)
    return DefinitionLoader(system=system, user=user, ui=_ui_from_obj(obj))


def _validate_new_slug(slug: str, existing: set[str], entity: str) -> str:
    trimmed = slug.strip()
    if not re.match(SLUG_PATTERN, trimmed):
        raise click.BadParameter(
            "Slug must be lowercase alphanumeric with hyphens (e.g. my-custom-slug).",
            param_hint="--slug",
        )
    if trimmed in existing:
        raise click.BadParameter(
            f'{entity.capitalize()} slug "{trimmed}" already exists.',
            param_hint="--slug",
        )
    return trimmed


def _select_interactively(selector: ModeSelector) -> list[str]:
    selected = selector.select_modes_interactively()
    if not selected:
        raise UserAbortError("No modes selected; nothing was written.")
    return selected


def _select_from_flags(
    selector: ModeSelector,
    ui: RooConsoleUI,
    modes_flag: Optional[str],
    category_flag: Optional[str],
) -> list[str]:
    selection = selector.select_modes_non_interactively(
        modes=modes_flag, category=category_flag
    )
    if selection.invalid_items:
        ui.warning(
            "Ignoring unknown slugs:\n"
            + "\n".join(f"- {item}" for item in selection.invalid_items),
            title="invalid selection",
        )
    if not selection.selected_modes:
        raise InvalidSelectionError(selection.invalid_items)
    return selection.selected_modes


def _load_user_overlay_for_update(user: UserDefinitionsRepository) -> UserDefinitions:
    payload, error = user.load_payload()
    if error is not None:
        raise UserDefinitionsError(
            f"Refusing to update unreadable user definitions at "
            f"{user.definitions_path}: {error}"
        )
    if payload is None and not user.has_document():
        return UserDefinitions()
    result = validate_user_definitions(payload)
    if not result.ok or result.value is None:
        raise UserDefinitionsError(
            f"Refusing to update invalid user definitions at "
            f"{user.definitions_path}: {'; '.join(result.messages())}"
        )
    return result.value


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="roo-init")
@click.option(
    "--definitions",
    type=click.Path(path_type=Path, file_okay=False),
    envvar=DEFINITIONS_ENVVAR,
    default=None,
    help="System definitions directory (defaults to the bundled catalog).",
)
@click.option(
    "--config-dir",
    type=click.Path(path_type=Path, file_okay=False),
    envvar=CONFIG_DIR_ENVVAR,
    default=None,
    help="User config directory (defaults to ~/.config/roo-init).",
)
@click.pass_context
def cli(
    ctx: click.Context, definitions: Optional[Path], config_dir: Optional[Path]
) -> None:
    """Scaffold projects with Roo modes and rules."""
    obj = ctx.ensure_object(dict)
    if definitions is not None or "definitions" not in obj:
        obj["definitions"] = definitions
    if config_dir is not None or "config_dir" not in obj:
        obj["config_dir"] = config_dir


@cli.command(help="Initialize a project with selected modes and their rules.")
@click.argument(
    "target",
    required=False,
    default=".",
    type=click.Path(path_type=Path, file_okay=False),
)
@click.option("--modes", "modes_flag", default=None, help="Comma-separated mode slugs.")
@click.option(
    "--category", "category_flag", default=None, help="Comma-separated category slugs."
)
@click.option("-f", "--force", is_flag=True, help="Overwrite existing files.")
@click.option(
    "--interactive/--non-interactive",
    default=None,
    help="Pick modes interactively (default unless --modes/--category is given).",
)
@click.pass_obj
def init(
    obj: Dict[str, Any],
    target: Path,
    modes_flag: Optional[str],
    category_flag: Optional[str],
    force: bool,
    interactive: Optional[bool],
) -> None:
    ui = _ui_from_obj(obj)
    loader = _loader_from_obj(obj)
    target_root = target.expanduser().resolve()

    has_flags = bool(split_csv(modes_flag) or split_csv(category_flag))
    if interactive is None:
        interactive = not has_flags
    if not interactive and not has_flags:
        raise click.UsageError("Non-interactive mode requires --modes or --category.")

    try:
        catalog = loader.load_definitions()
    except RooInitError as exc:
        raise click.ClickException(f"Fatal: {exc}")

    try:
        if interactive:
            selected_slugs = _select_interactively(
                ModeSelector(catalog, ui, _prompter_from_obj(obj))
            )
        else:
            selected_slugs = _select_from_flags(
                ModeSelector(catalog, ui), ui, modes_flag, category_flag
            )
    except UserAbortError as exc:
        ui.info(str(exc), title="aborted")
        return
    except InvalidSelectionError as exc:
        raise click.ClickException(f"Fatal: {exc}")

    selected_modes = catalog.resolve_modes(selected_slugs)
    ui.render_init_plan(str(target_root), [mode.slug for mode in selected_modes], force)

    materializer = FileMaterializer(ui)
    try:
        result = materializer.materialize(
            target_root,
            selected_modes,
            rules_root_for=loader.rules_root,
            force=force,
            generic_rules_dir=loader.system.generic_rules_dir,
        )
    except RooInitError as exc:
        raise click.ClickException(f"Fatal: {exc}")

    ui.render_init_result(result)


@cli.group(help="List and add mode definitions.")
def modes() -> None:
    pass


@modes.command("list", help="List available modes (custom, system or all).")
@_source_option()
@click.pass_obj
def modes_list(obj: Dict[str, Any], source: str) -> None:
    ui = _ui_from_obj(obj)
    loader = _loader_from_obj(obj)
    source_filter = SourceFilter(source.lower())
    try:
        entries = loader.list_modes(source_filter)
    except RooInitError as exc:
        raise click.ClickException(f"Fatal: {exc}")
    ui.render_definitions(
        [entry.as_row() for entry in entries], "modes", source_filter.value
    )


@modes.command("add", help="Add a custom mode to the user definitions.")
@click.option("--slug", prompt="Mode slug", help="Unique lowercase slug.")
@click.option("--name", prompt="Display name", help="Human-readable name.")
@click.option(
    "--description", prompt="Description", help="Role definition for the mode."
)
@click.option("--custom-instructions", default=None, help="Optional instructions.")
@click.option("--group", "groups", multiple=True, help="Tool group (repeatable).")
@click.option(
    "--category",
    "categories",
    multiple=True,
    required=True,
    help="Category slug (repeatable).",
)
@click.option(
    "--rule",
    "rule_files",
    multiple=True,
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    help="Mode-specific rule file to copy (repeatable).",
)
@click.option(
    "--generic-rule",
    "generic_rule_files",
    multiple=True,
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    help="Generic rule file to copy (repeatable).",
)
@click.pass_obj
def modes_add(
    obj: Dict[str, Any],
    slug: str,
    name: str,
    description: str,
    custom_instructions: Optional[str],
    groups: tuple[str, ...],
    categories: tuple[str, ...],
    rule_files: tuple[Path, ...],
    generic_rule_files: tuple[Path, ...],
) -> None:
    ui = _ui_from_obj(obj)
    loader = _loader_from_obj(obj)
    user = loader.user

    try:
        merged_modes = loader.merged_modes()
        merged_categories = loader.merged_categories()
        overlay = _load_user_overlay_for_update(user)
    except RooInitError as exc:
        raise click.ClickException(f"Fatal: {exc}")

    slug = _validate_new_slug(slug, {entry.slug for entry in merged_modes}, "mode")
    known_categories = {entry.slug for entry in merged_categories}
    unknown = [item for item in categories if item not in known_categories]
    if unknown:
        raise click.BadParameter(
            f"Unknown category slug(s): {', '.join(unknown)}", param_hint="--category"
        )
    if not name.strip() or not description.strip():
        raise click.UsageError("Name and description cannot be empty.")

    sources = [(item, False) for item in rule_files] + [
        (item, True) for item in generic_rule_files
    ]
    targets = [
        path.name if is_generic else f"{slug}/{path.name}"
        for path, is_generic in sources
    ]
    clashing = sorted({item for item in targets if targets.count(item) > 1})
    if clashing:
        raise click.BadParameter(
            f"Rule files share a file name: {', '.join(clashing)}",
            param_hint="--rule/--generic-rule",
        )

    rules: list[Rule] = []
    for (path, is_generic), relative in zip(sources, targets):
        user.install_rule_file(path, relative)
        rules.append(
            Rule(
                id=str(uuid.uuid4()),
                name=path.stem,
                description="",
                source_path=relative,
                is_generic=is_generic,
            )
        )

    mode = ModeDefinition(
        slug=slug,
        name=name.strip(),
        description=description.strip(),
        category_slugs=tuple(dict.fromkeys(categories)),
        associated_rule_files=tuple(rules),
        origin=Origin.USER,
        custom_instructions=(custom_instructions or "").strip() or None,
        groups=list(groups) if groups else None,
    )
    user.save(
        UserDefinitions(
            custom_modes=(*overlay.custom_modes, mode),
            custom_categories=overlay.custom_categories,
        )
    )
    ui.render_definition_saved("mode", slug, str(user.definitions_path))


@cli.group(help="List and add category definitions.")
def categories() -> None:
    pass


@categories.command("list", help="List available categories (custom, system or all).")
@_source_option()
@click.pass_obj
def categories_list(obj: Dict[str, Any], source: str) -> None:
    ui = _ui_from_obj(obj)
    loader = _loader_from_obj(obj)
    source_filter = SourceFilter(source.lower())
    try:
        entries = loader.list_categories(source_filter)
    except RooInitError as exc:
        raise click.ClickException(f"Fatal: {exc}")
    ui.render_definitions(
        [entry.as_row() for entry in entries], "categories", source_filter.value
    )


@categories.command("add", help="Add a custom category to the user definitions.")
@click.option("--slug", prompt="Category slug", help="Unique lowercase slug.")
@click.option("--name", prompt="Display name", help="Human-readable name.")
@click.option(
    "--description",
    prompt="Description (optional)",
    default="",
    show_default=False,
    help="Short description.",
)
@click.pass_obj
def categories_add(obj: Dict[str, Any], slug: str, name: str, description: str) -> None:
    ui = _ui_from_obj(obj)
    loader = _loader_from_obj(obj)
    user = loader.user

    try:
        merged_categories = loader.merged_categories()
        overlay = _load_user_overlay_for_update(user)
    except RooInitError as exc:
        raise click.ClickException(f"Fatal: {exc}")

    slug = _validate_new_slug(
        slug, {entry.slug for entry in merged_categories}, "category"
    )
    if not name.strip():
        raise click.UsageError("Name cannot be empty.")

    category = CategoryDefinition(
        slug=slug,
        name=name.strip(),
        origin=Origin.USER,
        description=description.strip() or None,
    )
    user.save(
        UserDefinitions(
            custom_modes=overlay.custom_modes,
            custom_categories=(*overlay.custom_categories, category),
        )
    )
    ui.render_definition_saved("category", slug, str(user.definitions_path))


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.exceptions.Abort:
        return 0
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

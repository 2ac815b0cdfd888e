"""CliApp -- Typer アプリケーション定義。

paths: 各スコープの設定ファイルパスを表示する。
show: グループの設定を解決し、実効値と供給元スコープを表示する。
set / unset: ユーザー・プロジェクト設定ファイルの setting を書き換える。
"""

from __future__ import annotations

import importlib.metadata
import sys
from pathlib import Path
from typing import Annotated

import typer

from maidconf.models.exit_code import ExitCode
from maidconf.models.read_result import SectionRead
from maidconf.models.scope import FILE_SCOPES, Scope
from maidconf.models.setting import (
    SettingsContext,
    SettingsProperty,
    SettingsPropertyValue,
)
from maidconf.settings import (
    InvalidContextError,
    SettingsResolver,
    SettingsWriteError,
    SourceCorruptError,
    get_scope_config_path,
    read_section,
    remove_settings,
)

app = typer.Typer(
    name="maidconf",
    help="Inspect and edit layered user/project settings.",
    add_completion=False,
    no_args_is_help=True,
)

GroupArgument = Annotated[
    str, typer.Argument(help="Settings group (section) name.")
]
ProjectRootOption = Annotated[
    Path | None,
    typer.Option(
        "--project-root",
        "-p",
        help="Project root directory holding the project settings file.",
    ),
]
ScopeOption = Annotated[
    Scope,
    typer.Option("--scope", "-s", help="Settings file to modify (user or project)."),
]

_SCOPE_LABEL_WIDTH = 9
_DEFAULT_SEPARATOR = "="


def _version_callback(value: bool) -> None:
    """--version 指定時にバージョン番号を出力して終了する。"""
    if value:
        print(importlib.metadata.version("maidconf"))
        raise typer.Exit()


def main() -> None:
    """CLI エントリポイント。pyproject.toml の [project.scripts] から呼び出される。"""
    app()


@app.callback()
def _main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Inspect and edit layered user/project settings."""


def _make_context(group: str | None, project_root: Path | None) -> SettingsContext:
    return SettingsContext(
        group_name=group,
        project_root=str(project_root) if project_root is not None else None,
    )


def _parse_defaults(entries: list[str]) -> list[SettingsProperty]:
    """NAME=VALUE 形式の --default 指定をプロパティ宣言に変換する。

    Raises:
        ValueError: '=' を含まない、または名前が空の場合。
    """
    properties: dict[str, SettingsProperty] = {}
    for entry in entries:
        name, sep, value = entry.partition(_DEFAULT_SEPARATOR)
        if not sep or not name:
            msg = f"Invalid --default '{entry}': expected NAME=VALUE"
            raise ValueError(msg)
        properties[name] = SettingsProperty(name=name, default_value=value)
    return list(properties.values())


def _discover_properties(
    declared: list[SettingsProperty], context: SettingsContext, section_name: str
) -> list[SettingsProperty]:
    """宣言済みプロパティに、設定ファイルにのみ存在する setting 名を追加する。

    読み込み失敗はここでは無視する（resolve_all 側で警告される）。
    """
    known = {prop.name for prop in declared}
    found: set[str] = set()
    for scope in FILE_SCOPES:
        try:
            path = get_scope_config_path(scope, context)
        except RuntimeError:
            continue
        result = read_section(path, section_name)
        if isinstance(result, SectionRead):
            found.update(result.settings)
    extra = [SettingsProperty(name=name) for name in sorted(found - known)]
    return [*declared, *extra]


def _print_values(values: list[SettingsPropertyValue]) -> None:
    """解決済み値をテーブル形式で stdout に表示する。"""
    shown = [
        v.serialized_value if v.serialized_value is not None else "(none)"
        for v in values
    ]
    name_width = max([len("NAME"), *(len(v.name) for v in values)]) + 2
    value_width = max([len("VALUE"), *(len(s) for s in shown)]) + 2

    header = f"{'NAME':<{name_width}}{'VALUE':<{value_width}}SCOPE"
    print(header)
    print("-" * len(header))
    for value, text in zip(values, shown, strict=True):
        print(f"{value.name:<{name_width}}{text:<{value_width}}{value.scope.value}")


@app.command()
def paths(project_root: ProjectRootOption = None) -> None:
    """Show the settings file location of each scope."""
    context = _make_context(None, project_root)
    for scope in FILE_SCOPES:
        try:
            path = get_scope_config_path(scope, context)
        except RuntimeError as e:
            print(f"Error: Cannot locate {scope.value} settings: {e}", file=sys.stderr)
            raise typer.Exit(code=ExitCode.EXECUTION_ERROR) from None
        label = f"{scope.value:<{_SCOPE_LABEL_WIDTH}}"
        if path is None:
            print(f"{label}(no project root)")
        else:
            state = "exists" if path.is_file() else "missing"
            print(f"{label}{path}  [{state}]")


@app.command()
def show(
    group: GroupArgument,
    project_root: ProjectRootOption = None,
    default: Annotated[
        list[str] | None,
        typer.Option(
            "--default",
            "-d",
            help="Declare a property with its default value (NAME=VALUE). Repeatable.",
        ),
    ] = None,
) -> None:
    """Resolve a settings group and show each effective value with its scope."""
    try:
        declared = _parse_defaults(default or [])
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from None

    context = _make_context(group, project_root)
    resolver = SettingsResolver()
    try:
        section_name = resolver.get_section_name(context)
        properties = _discover_properties(declared, context, section_name)
        values = resolver.resolve_all(properties, context)
    except InvalidContextError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from None

    if not values:
        print(f"No settings found for group '{group}'.", file=sys.stderr)
        return
    _print_values(values)


@app.command("set")
def set_value(
    group: GroupArgument,
    name: Annotated[str, typer.Argument(help="Setting name.")],
    value: Annotated[str, typer.Argument(help="Serialized setting value.")],
    scope: ScopeOption = Scope.USER,
    project_root: ProjectRootOption = None,
) -> None:
    """Write a setting to the user or project settings file."""
    context = _make_context(group, project_root)
    setting = SettingsPropertyValue(
        setting=SettingsProperty(name=name),
        serialized_value=value,
        scope=scope,
    )
    try:
        path = SettingsResolver().save([setting], context, scope)
    except InvalidContextError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from None
    except (SourceCorruptError, SettingsWriteError, OSError) as e:
        print(
            f"Error: {e}\nFix or remove the settings file, then retry.",
            file=sys.stderr,
        )
        raise typer.Exit(code=ExitCode.EXECUTION_ERROR) from None
    print(f"Saved {name} to {path}", file=sys.stderr)


@app.command()
def unset(
    group: GroupArgument,
    name: Annotated[str, typer.Argument(help="Setting name.")],
    scope: ScopeOption = Scope.USER,
    project_root: ProjectRootOption = None,
) -> None:
    """Remove a setting from the user or project settings file."""
    context = _make_context(group, project_root)
    try:
        section_name = SettingsResolver.get_section_name(context)
        path = get_scope_config_path(scope, context)
        if path is None:
            raise InvalidContextError(
                f"Scope '{scope.value}' has no settings file. "
                "Use the 'user' scope, or pass --project-root for the 'project' scope."
            )
        removed = remove_settings(path, section_name, [name])
    except InvalidContextError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from None
    except (SourceCorruptError, SettingsWriteError, OSError) as e:
        print(
            f"Error: {e}\nFix or remove the settings file, then retry.",
            file=sys.stderr,
        )
        raise typer.Exit(code=ExitCode.EXECUTION_ERROR) from None

    if removed:
        print(f"Removed {name} from {path}", file=sys.stderr)
    else:
        print(f"{name} is not set in {path}", file=sys.stderr)

"""設定リゾルバー。

project > user > default の3層でプロパティ値を解決する。
設定ファイルの欠落・破損は該当スコープを空として扱い、解決は継続する。
セクション名（グループ名）の欠落のみが解決全体を失敗させる。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import assert_never

from maidconf.models.read_result import SectionRead, SourceCorrupt, SourceUnavailable
from maidconf.models.scope import FILE_SCOPES, Scope
from maidconf.models.setting import (
    SettingsContext,
    SettingsProperty,
    SettingsPropertyValue,
)
from maidconf.settings._loader import is_valid_section_name, read_section
from maidconf.settings._locator import get_scope_config_path
from maidconf.settings._merger import merge_property_values
from maidconf.settings._writer import write_section

logger = logging.getLogger(__name__)


class InvalidContextError(ValueError):
    """解決コンテキストが不正。グループ名の欠落、書き込み先スコープの不備等。"""


class SettingsResolver:
    """ユーザー設定・プロジェクト設定・デフォルト値を統合するリゾルバー。

    インスタンスは状態を保持しないため、複数スレッドから同時に利用できる。

    Args:
        logger: 読み込み失敗の診断出力先。None の場合はモジュールのロガー。
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    @staticmethod
    def get_section_name(context: SettingsContext) -> str:
        """コンテキストのグループ名からセクション名を決定する。

        Raises:
            InvalidContextError: グループ名が未指定または空の場合。
        """
        if not context.group_name:
            raise InvalidContextError(
                "Settings context has no group name. "
                "Pass the settings group (e.g. 'CodeMaid.Properties.Settings')."
            )
        return context.group_name

    def read_scope(self, scope: Scope, context: SettingsContext) -> dict[str, str]:
        """1スコープ分の setting を読み込む。

        読み込み失敗は警告ログに記録し、空辞書として扱う。

        Raises:
            InvalidContextError: グループ名が未指定または空の場合。
        """
        section_name = self.get_section_name(context)
        try:
            path = get_scope_config_path(scope, context)
        except RuntimeError as e:
            self._logger.warning("Unable to locate %s settings: %s", scope.value, e)
            return {}

        result = read_section(path, section_name)
        match result:
            case SectionRead():
                return dict(result.settings)
            case SourceUnavailable():
                self._logger.warning(
                    "Unable to read %s settings from %s: %s",
                    scope.value,
                    result.path,
                    result.message,
                )
            case SourceCorrupt():
                self._logger.warning(
                    "Ignoring corrupt %s settings file %s: %s",
                    scope.value,
                    result.path,
                    result.message,
                )
            case _:
                assert_never(result)
        return {}

    def resolve_all(
        self,
        properties: Iterable[SettingsProperty],
        context: SettingsContext,
    ) -> list[SettingsPropertyValue]:
        """全プロパティの実効値を解決する。

        各プロパティはデフォルト値から開始し、ユーザー設定、プロジェクト設定の順に上書きされる。
        どの設定ファイルが読めなくても、プロパティ数と同数の結果を返す。

        Args:
            properties: 解決対象のプロパティ。
            context: グループ名とプロジェクトルート。

        Returns:
            入力と同じ順序の解決済み値リスト。

        Raises:
            InvalidContextError: グループ名が未指定または空の場合（ファイル I/O の前に送出）。
        """
        self.get_section_name(context)
        layers: list[tuple[Scope, Mapping[str, str]]] = [
            (scope, self.read_scope(scope, context)) for scope in FILE_SCOPES
        ]
        return merge_property_values(properties, layers)

    def save(
        self,
        values: Sequence[SettingsPropertyValue],
        context: SettingsContext,
        scope: Scope,
    ) -> Path:
        """解決済み値のシリアライズ形式を指定スコープの設定ファイルへ書き込む。

        serialized_value が None の値は書き込まない。

        Returns:
            書き込んだファイルのパス。

        Raises:
            InvalidContextError: グループ名が無い・XML 要素名として不正、scope が DEFAULT、
                またはプロジェクトルート未指定で PROJECT を指定した場合。
            SourceCorruptError: 既存ファイルが設定ファイルとして解釈できない場合。
            SettingsWriteError: 書き込みに失敗した場合。
        """
        section_name = self.get_section_name(context)
        if not is_valid_section_name(section_name):
            raise InvalidContextError(
                f"Group name '{section_name}' cannot be used as a settings section. "
                "Use a name without spaces or special characters "
                "(e.g. 'CodeMaid.Properties.Settings')."
            )
        path = get_scope_config_path(scope, context)
        if path is None:
            raise InvalidContextError(
                f"Scope '{scope.value}' has no settings file. "
                "Use the 'user' scope, or set a project root for the 'project' scope."
            )
        settings = {
            value.name: value.serialized_value
            for value in values
            if value.serialized_value is not None
        }
        written = write_section(path, section_name, settings)
        self._logger.info(
            "Saved %d %s setting(s) to %s", len(settings), scope.value, written
        )
        return written


def resolve_settings(
    properties: Iterable[SettingsProperty],
    group_name: str | None,
    project_root: str | None = None,
    *,
    logger: logging.Logger | None = None,
) -> list[SettingsPropertyValue]:
    """SettingsResolver.resolve_all の簡易呼び出し。

    Raises:
        InvalidContextError: group_name が未指定または空の場合。
    """
    context = SettingsContext(group_name=group_name, project_root=project_root)
    return SettingsResolver(logger=logger).resolve_all(properties, context)

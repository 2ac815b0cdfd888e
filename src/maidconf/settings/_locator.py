"""設定ファイルのパス解決。

ユーザー設定: <ユーザーローカルデータディレクトリ>/CodeMaid/CodeMaid.config
プロジェクト設定: <プロジェクトルート>/CodeMaid.config
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final, assert_never

from maidconf.models.scope import Scope
from maidconf.models.setting import SettingsContext

APP_DIR_NAME: Final[str] = "CodeMaid"
CONFIG_FILE_NAME: Final[str] = "CodeMaid.config"

_LOCAL_APP_DATA_ENV: Final[str] = "LOCALAPPDATA"
_XDG_DATA_HOME_ENV: Final[str] = "XDG_DATA_HOME"


def get_user_data_dir() -> Path:
    """ユーザーごとのローカルデータディレクトリを返す。

    LOCALAPPDATA → XDG_DATA_HOME → ~/.local/share の順に決定する。
    空文字の環境変数は未設定として扱う。

    Returns:
        ローカルデータディレクトリのパス（存在チェックは行わない）。

    Raises:
        RuntimeError: 環境変数が無く、ホームディレクトリも特定できない場合。
    """
    for env_name in (_LOCAL_APP_DATA_ENV, _XDG_DATA_HOME_ENV):
        value = os.environ.get(env_name)
        if value:
            return Path(value)
    return Path.home() / ".local" / "share"


def get_user_config_path() -> Path:
    """ユーザー設定ファイルのパスを返す。存在チェックは行わない。"""
    return get_user_data_dir() / APP_DIR_NAME / CONFIG_FILE_NAME


def get_project_config_path(project_root: str | Path | None) -> Path | None:
    """プロジェクト設定ファイルのパスを返す。

    プロジェクトが開かれていない状態は正常系であり、例外は送出しない。

    Args:
        project_root: プロジェクトのルートディレクトリ。

    Returns:
        project_root/CodeMaid.config。project_root が None または空文字なら None。
    """
    if project_root is None or str(project_root) == "":
        return None
    return Path(project_root) / CONFIG_FILE_NAME


def get_scope_config_path(scope: Scope, context: SettingsContext) -> Path | None:
    """スコープに対応する設定ファイルのパスを返す。

    Scope.DEFAULT はファイルを持たないため常に None。
    """
    match scope:
        case Scope.DEFAULT:
            return None
        case Scope.USER:
            return get_user_config_path()
        case Scope.PROJECT:
            return get_project_config_path(context.project_root)
        case _:
            assert_never(scope)

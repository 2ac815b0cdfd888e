"""ユニットテスト共通フィクスチャ・ヘルパー。"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from xml.sax.saxutils import escape, quoteattr

import pytest

SECTION_NAME = "CodeMaid.Properties.Settings"


@pytest.fixture(autouse=True)
def user_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """ユーザーローカルデータディレクトリを tmp_path 配下に隔離する。"""
    data_dir = tmp_path / "local-app-data"
    monkeypatch.setenv("LOCALAPPDATA", str(data_dir))
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    return data_dir


def write_config(
    path: Path,
    sections: Mapping[str, Mapping[str, str]],
) -> Path:
    """<configuration>/<userSettings> 形式の設定ファイルを書き込みパスを返す。"""
    lines = ['<?xml version="1.0" encoding="utf-8"?>', "<configuration>", "  <userSettings>"]
    for section_name, settings in sections.items():
        lines.append(f"    <{section_name}>")
        for name, value in settings.items():
            lines.append(f'      <setting name={quoteattr(name)} serializeAs="String">')
            lines.append(f"        <value>{escape(value)}</value>")
            lines.append("      </setting>")
        lines.append(f"    </{section_name}>")
    lines.extend(["  </userSettings>", "</configuration>"])
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def user_config_file(user_data_dir: Path) -> Path:
    """隔離済みデータディレクトリにおけるユーザー設定ファイルのパス。"""
    return user_data_dir / "CodeMaid" / "CodeMaid.config"

"""設定ファイル書き戻しのテスト。

write_section -- 新規作成, 既存更新, 他セクション保持, 破損ファイル, 書き込み失敗
remove_settings -- 削除件数, ファイル/セクションなし
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from maidconf.settings._loader import SourceCorruptError, load_section
from maidconf.settings._writer import (
    SettingsWriteError,
    remove_settings,
    write_section,
)
from tests.unit.conftest import SECTION_NAME, write_config


class TestWriteSectionNewFile:
    def test_creates_file_and_parents(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "CodeMaid" / "CodeMaid.config"
        result = write_section(path, SECTION_NAME, {"Indent": "2"})
        assert result == path
        assert path.is_file()
        assert load_section(path, SECTION_NAME) == {"Indent": "2"}

    def test_xml_declaration_and_structure(self, tmp_path: Path) -> None:
        path = write_section(tmp_path / "CodeMaid.config", SECTION_NAME, {"Indent": "2"})
        content = path.read_text(encoding="utf-8")
        assert content.startswith("<?xml")
        assert "<userSettings>" in content
        assert f"<{SECTION_NAME}>" in content
        assert 'serializeAs="String"' in content

    def test_special_characters_round_trip(self, tmp_path: Path) -> None:
        path = write_section(tmp_path / "CodeMaid.config", "S", {"Header": "<a & b>"})
        assert load_section(path, "S") == {"Header": "<a & b>"}


class TestWriteSectionExistingFile:
    def test_updates_existing_setting(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "CodeMaid.config", {SECTION_NAME: {"Indent": "2"}})
        write_section(path, SECTION_NAME, {"Indent": "8"})
        assert load_section(path, SECTION_NAME) == {"Indent": "8"}

    def test_keeps_unrelated_settings(self, tmp_path: Path) -> None:
        path = write_config(
            tmp_path / "CodeMaid.config",
            {SECTION_NAME: {"Indent": "2", "UseTabs": "True"}},
        )
        write_section(path, SECTION_NAME, {"Indent": "8"})
        assert load_section(path, SECTION_NAME) == {"Indent": "8", "UseTabs": "True"}

    def test_keeps_other_sections(self, tmp_path: Path) -> None:
        path = write_config(
            tmp_path / "CodeMaid.config",
            {"Other.Settings": {"A": "1"}},
        )
        write_section(path, SECTION_NAME, {"Indent": "8"})
        assert load_section(path, "Other.Settings") == {"A": "1"}
        assert load_section(path, SECTION_NAME) == {"Indent": "8"}

    def test_replaces_xml_value(self, tmp_path: Path) -> None:
        """<value> 配下の子要素は置き換えられる。"""
        path = tmp_path / "CodeMaid.config"
        path.write_text(
            '<configuration><userSettings><S><setting name="A" serializeAs="Xml">'
            "<value><string>old</string></value></setting></S></userSettings>"
            "</configuration>",
            encoding="utf-8",
        )
        write_section(path, "S", {"A": "new"})
        assert load_section(path, "S") == {"A": "new"}
        assert "<string>" not in path.read_text(encoding="utf-8")

    def test_corrupt_file_not_overwritten(self, tmp_path: Path) -> None:
        path = tmp_path / "CodeMaid.config"
        path.write_text("<configuration>", encoding="utf-8")
        with pytest.raises(SourceCorruptError):
            write_section(path, SECTION_NAME, {"Indent": "8"})
        assert path.read_text(encoding="utf-8") == "<configuration>"


class TestWriteSectionFailure:
    def test_parent_is_file(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(SettingsWriteError, match="Failed to write settings"):
            write_section(blocker / "CodeMaid.config", SECTION_NAME, {"Indent": "8"})


class TestRemoveSettings:
    def test_removes_named_settings(self, tmp_path: Path) -> None:
        path = write_config(
            tmp_path / "CodeMaid.config",
            {SECTION_NAME: {"Indent": "2", "UseTabs": "True"}},
        )
        assert remove_settings(path, SECTION_NAME, ["Indent"]) == 1
        assert load_section(path, SECTION_NAME) == {"UseTabs": "True"}

    def test_unknown_names_ignored(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "CodeMaid.config", {SECTION_NAME: {"Indent": "2"}})
        assert remove_settings(path, SECTION_NAME, ["Missing", "Indent", "Indent"]) == 1

    def test_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "CodeMaid.config"
        assert remove_settings(path, SECTION_NAME, ["Indent"]) == 0
        assert not path.exists()

    def test_missing_section_leaves_file_untouched(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "CodeMaid.config", {"Other": {"Indent": "2"}})
        before = path.read_text(encoding="utf-8")
        assert remove_settings(path, SECTION_NAME, ["Indent"]) == 0
        assert path.read_text(encoding="utf-8") == before


class TestWriteSectionInvalidSectionName:
    """XML 要素名として不正なセクション名は書き込まずに拒否する。"""

    @pytest.mark.parametrize(
        "section_name", ["My Settings", "", "1Settings", "a<b", 'S x="1"', "ns:Settings"]
    )
    def test_existing_file_untouched(self, tmp_path: Path, section_name: str) -> None:
        path = write_config(tmp_path / "CodeMaid.config", {SECTION_NAME: {"Indent": "2"}})
        before = path.read_bytes()
        with pytest.raises(SettingsWriteError, match="Invalid section name"):
            write_section(path, section_name, {"A": "1"})
        assert path.read_bytes() == before
        assert load_section(path, SECTION_NAME) == {"Indent": "2"}

    def test_new_file_not_created(self, tmp_path: Path) -> None:
        path = tmp_path / "CodeMaid.config"
        with pytest.raises(SettingsWriteError):
            write_section(path, "My Settings", {"A": "1"})
        assert not path.exists()


class TestCommentsPreserved:
    """手編集で追加されたコメントは書き戻し後も残る。"""

    _CONTENT = (
        "<configuration>\n"
        "  <!-- keep me -->\n"
        "  <userSettings>\n"
        f"    <{SECTION_NAME}>\n"
        "      <!-- indentation for all projects -->\n"
        '      <setting name="Indent" serializeAs="String"><value>2</value></setting>\n'
        '      <setting name="UseTabs" serializeAs="String"><value>True</value></setting>\n'
        f"    </{SECTION_NAME}>\n"
        "  </userSettings>\n"
        "</configuration>\n"
    )

    def test_write_section_keeps_comments(self, tmp_path: Path) -> None:
        path = tmp_path / "CodeMaid.config"
        path.write_text(self._CONTENT, encoding="utf-8")
        write_section(path, SECTION_NAME, {"B": "2"})
        content = path.read_text(encoding="utf-8")
        assert "<!-- keep me -->" in content
        assert "<!-- indentation for all projects -->" in content
        assert load_section(path, SECTION_NAME) == {"Indent": "2", "UseTabs": "True", "B": "2"}

    def test_remove_settings_keeps_comments(self, tmp_path: Path) -> None:
        path = tmp_path / "CodeMaid.config"
        path.write_text(self._CONTENT, encoding="utf-8")
        assert remove_settings(path, SECTION_NAME, ["UseTabs"]) == 1
        content = path.read_text(encoding="utf-8")
        assert "<!-- keep me -->" in content
        assert "<!-- indentation for all projects -->" in content
        assert load_section(path, SECTION_NAME) == {"Indent": "2"}


class TestAtomicReplace:
    """書き込み失敗時も既存ファイルは元の内容のまま残る。"""

    def test_replace_failure_keeps_original(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "CodeMaid.config", {SECTION_NAME: {"Indent": "2"}})
        before = path.read_bytes()
        with patch(
            "maidconf.settings._writer.os.replace", side_effect=OSError("disk full")
        ):
            with pytest.raises(SettingsWriteError, match="disk full"):
                write_section(path, SECTION_NAME, {"Indent": "8"})
        assert path.read_bytes() == before

    def test_no_temporary_file_left(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "CodeMaid.config", {SECTION_NAME: {"Indent": "2"}})
        with patch(
            "maidconf.settings._writer.os.replace", side_effect=OSError("disk full")
        ):
            with pytest.raises(SettingsWriteError):
                write_section(path, SECTION_NAME, {"Indent": "8"})
        assert [p.name for p in tmp_path.iterdir()] == ["CodeMaid.config"]

    def test_successful_write_leaves_no_temporary_file(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "CodeMaid.config", {SECTION_NAME: {"Indent": "2"}})
        write_section(path, SECTION_NAME, {"Indent": "8"})
        assert [p.name for p in tmp_path.iterdir() if p.suffix == ".tmp"] == []

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions required")
    def test_file_mode_preserved(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "CodeMaid.config", {SECTION_NAME: {"Indent": "2"}})
        path.chmod(0o640)
        write_section(path, SECTION_NAME, {"Indent": "8"})
        assert stat.S_IMODE(path.stat().st_mode) == 0o640

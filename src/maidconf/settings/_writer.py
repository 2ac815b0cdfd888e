"""設定ファイルへの書き戻し。

解決処理（SettingsResolver.resolve_all）からは呼ばれない。
明示的な保存操作としてのみ使用する。
"""

from __future__ import annotations

import os
import shutil
import tempfile
import xml.etree.ElementTree as ET
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Final

from maidconf.settings._loader import (
    NAME_ATTRIBUTE,
    ROOT_ELEMENT,
    SETTING_ELEMENT,
    USER_SETTINGS_GROUP,
    VALUE_ELEMENT,
    find_section,
    is_valid_section_name,
    parse_document,
)

_SERIALIZE_AS_ATTRIBUTE: Final[str] = "serializeAs"
_SERIALIZE_AS_STRING: Final[str] = "String"
_INDENT: Final[str] = "  "


class SettingsWriteError(Exception):
    """設定ファイルの書き込みエラー。ディレクトリ作成失敗、I/O エラー等。"""


def _find_setting(section: ET.Element, name: str) -> ET.Element | None:
    for element in section.findall(SETTING_ELEMENT):
        if element.get(NAME_ATTRIBUTE) == name:
            return element
    return None


def _ensure_child(parent: ET.Element, tag: str) -> ET.Element:
    for child in parent:
        if child.tag == tag:
            return child
    return ET.SubElement(parent, tag)


def _save_document(tree: ET.ElementTree, path: Path) -> None:
    """ElementTree をインデント付きで path に書き出す。

    同じディレクトリの一時ファイルに書き出してから置き換えるため、
    書き込みが途中で失敗しても既存ファイルは元の内容のまま残る。

    Raises:
        SettingsWriteError: ディレクトリ作成または書き込みに失敗した場合。
    """
    ET.indent(tree, space=_INDENT)
    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            tree.write(f, encoding="utf-8", xml_declaration=True)
        if path.exists():
            shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise SettingsWriteError(
            f"Failed to write settings to {path}: {e}. "
            "Check that the directory exists and is writable."
        ) from e


def write_section(
    path: Path,
    section_name: str,
    settings: Mapping[str, str],
) -> Path:
    """setting を名前付きセクションへ書き込む。

    ファイル・親ディレクトリ・<userSettings>・セクションが無ければ作成する。
    他のセクションや、settings に含まれない既存 setting はそのまま保持する。
    既存ファイルが解釈できない場合は上書きせずに例外を送出する。

    Args:
        path: 設定ファイルのパス。
        section_name: <userSettings> 配下のセクション名。
        settings: setting 名 → シリアライズ済み値。

    Returns:
        書き込んだファイルのパス。

    Raises:
        SourceCorruptError: 既存ファイルが設定ファイルとして解釈できない場合。
        SettingsWriteError: section_name が XML 要素名として不正な場合、
            または書き込みに失敗した場合。
        PermissionError: 既存ファイルの読み取り権限がない場合。
    """
    if not is_valid_section_name(section_name):
        raise SettingsWriteError(
            f"Invalid section name '{section_name}' for {path}: "
            "use a name without spaces or special characters "
            "(e.g. 'CodeMaid.Properties.Settings')."
        )
    if path.exists():
        tree = parse_document(path)
    else:
        tree = ET.ElementTree(ET.Element(ROOT_ELEMENT))
    group = _ensure_child(tree.getroot(), USER_SETTINGS_GROUP)
    section = _ensure_child(group, section_name)

    for name, serialized in settings.items():
        element = _find_setting(section, name)
        if element is None:
            element = ET.SubElement(
                section,
                SETTING_ELEMENT,
                {NAME_ATTRIBUTE: name, _SERIALIZE_AS_ATTRIBUTE: _SERIALIZE_AS_STRING},
            )
        value = element.find(VALUE_ELEMENT)
        if value is None:
            value = ET.SubElement(element, VALUE_ELEMENT)
        for child in list(value):
            value.remove(child)
        value.text = serialized

    _save_document(tree, path)
    return path


def remove_settings(path: Path, section_name: str, names: Iterable[str]) -> int:
    """名前付きセクションから setting を削除する。

    ファイルやセクションが無い場合は何もしない。削除が発生した場合のみ書き込む。

    Returns:
        削除した setting の数。

    Raises:
        SourceCorruptError: 既存ファイルが設定ファイルとして解釈できない場合。
        SettingsWriteError: 書き込みに失敗した場合。
    """
    if not path.exists():
        return 0
    tree = parse_document(path)
    section = find_section(tree.getroot(), section_name)
    if section is None:
        return 0

    removed = 0
    for name in dict.fromkeys(names):
        element = _find_setting(section, name)
        if element is not None:
            section.remove(element)
            removed += 1

    if removed:
        _save_document(tree, path)
    return removed

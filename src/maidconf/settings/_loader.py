"""設定ファイルローダー。

<configuration>/<userSettings>/<セクション名>/<setting name="..."><value>...</value>
の2段階（グループ → 名前付きセクション）で setting を探索する。
load_section はアクセスエラー・構文エラーを例外として送出し、
read_section はそれらを SectionReadResult に変換する。
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Final

from maidconf.models.read_result import (
    SectionRead,
    SectionReadResult,
    SourceCorrupt,
    SourceUnavailable,
)

ROOT_ELEMENT: Final[str] = "configuration"
USER_SETTINGS_GROUP: Final[str] = "userSettings"
SETTING_ELEMENT: Final[str] = "setting"
VALUE_ELEMENT: Final[str] = "value"
NAME_ATTRIBUTE: Final[str] = "name"


class SourceCorruptError(Exception):
    """設定ファイルが存在するが、想定した形式として解釈できない。"""


def parse_document(path: Path) -> ET.ElementTree:
    """設定ファイルを読み込み、ルート要素を検証した ElementTree を返す。

    書き戻し時に失われないよう、ルート要素内のコメントも保持する。

    Args:
        path: 設定ファイルのパス。

    Returns:
        パース済みの ElementTree。

    Raises:
        SourceCorruptError: XML 構文エラー、またはルート要素が <configuration> でない場合。
        FileNotFoundError: ファイルが存在しない場合。
        PermissionError: 読み取り権限がない場合。
    """
    with path.open("rb") as f:
        try:
            tree = ET.parse(
                f, parser=ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
            )
        except ET.ParseError as e:
            msg = f"Invalid XML in {path}: {e}"
            raise SourceCorruptError(msg) from e
    root = tree.getroot()
    if root.tag != ROOT_ELEMENT:
        msg = (
            f"Unexpected root element <{root.tag}> in {path}: "
            f"expected <{ROOT_ELEMENT}>"
        )
        raise SourceCorruptError(msg)
    return tree


def is_valid_section_name(section_name: str) -> bool:
    """section_name が単独の XML 要素名として書き出せるかを判定する。

    空白や記号を含む名前、未宣言の名前空間接頭辞付きの名前は False。
    """
    if not section_name:
        return False
    try:
        element = ET.fromstring(f"<{section_name}/>")
    except ET.ParseError:
        return False
    return element.tag == section_name


def find_section(root: ET.Element, section_name: str) -> ET.Element | None:
    """<userSettings> グループ配下の名前付きセクションを返す。どちらかが無ければ None。"""
    group = root.find(USER_SETTINGS_GROUP)
    if group is None:
        return None
    for child in group:
        if child.tag == section_name:
            return child
    return None


def _extract_settings(section: ET.Element, path: Path) -> dict[str, str]:
    """セクション内の setting 要素から 名前 → <value> の内部テキスト を抽出する。"""
    settings: dict[str, str] = {}
    for element in section.findall(SETTING_ELEMENT):
        name = element.get(NAME_ATTRIBUTE)
        if not name:
            msg = (
                f"<{SETTING_ELEMENT}> without '{NAME_ATTRIBUTE}' attribute "
                f"in section <{section.tag}> of {path}"
            )
            raise SourceCorruptError(msg)
        value = element.find(VALUE_ELEMENT)
        if value is None:
            msg = (
                f"Setting '{name}' has no <{VALUE_ELEMENT}> element "
                f"in section <{section.tag}> of {path}"
            )
            raise SourceCorruptError(msg)
        settings[name] = "".join(value.itertext())
    return settings


def load_section(path: Path, section_name: str) -> dict[str, str]:
    """設定ファイルから名前付きセクションの setting を読み込む。

    グループまたはセクションが存在しない場合は空辞書を返す。

    Args:
        path: 設定ファイルのパス。
        section_name: <userSettings> 配下のセクション名。

    Returns:
        setting 名 → シリアライズ済み値 の辞書。

    Raises:
        SourceCorruptError: ファイルが設定ファイルとして解釈できない場合。
        FileNotFoundError: ファイルが存在しない場合。
        PermissionError: 読み取り権限がない場合。
    """
    root = parse_document(path).getroot()
    section = find_section(root, section_name)
    if section is None:
        return {}
    return _extract_settings(section, path)


def read_section(
    path: Path | str | None,
    section_name: str | None,
) -> SectionReadResult:
    """load_section の例外を送出しない版。

    path または section_name が未指定・空の場合は I/O を行わず空の SectionRead を返す。

    Args:
        path: 設定ファイルのパス。
        section_name: <userSettings> 配下のセクション名。

    Returns:
        SectionRead、SourceUnavailable、SourceCorrupt のいずれか。
    """
    if not path or not section_name:
        return SectionRead()
    source = Path(path)
    try:
        settings = load_section(source, section_name)
    except SourceCorruptError as e:
        return SourceCorrupt(path=source, message=str(e))
    except OSError as e:
        return SourceUnavailable(path=source, message=str(e) or type(e).__name__)
    return SectionRead(settings=settings)

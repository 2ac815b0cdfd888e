"""設定ソース読み込み結果の定義。

status フィールドの固定値で型を一意に特定する判別共用体。
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import Field

from maidconf.models._base import MaidconfBaseModel


class SectionRead(MaidconfBaseModel):
    """セクションの読み込み成功。判別キー: status="read"。

    ファイルは存在するがセクションが無い場合も空の settings で成功扱いとする。

    Attributes:
        status: 判別キー。固定値 "read"。
        settings: setting 名 → シリアライズ済み値。
    """

    status: Literal["read"] = "read"
    settings: dict[str, str] = Field(default_factory=dict)


class SourceUnavailable(MaidconfBaseModel):
    """ファイルが存在しない・読み取れない。判別キー: status="unavailable"。

    Attributes:
        status: 判別キー。固定値 "unavailable"。
        path: 対象ファイルのパス。
        message: 失敗理由。
    """

    status: Literal["unavailable"] = "unavailable"
    path: Path
    message: str = Field(min_length=1)


class SourceCorrupt(MaidconfBaseModel):
    """ファイルは存在するが設定ファイルとして解釈できない。判別キー: status="corrupt"。

    Attributes:
        status: 判別キー。固定値 "corrupt"。
        path: 対象ファイルのパス。
        message: 失敗理由。
    """

    status: Literal["corrupt"] = "corrupt"
    path: Path
    message: str = Field(min_length=1)


SectionReadResult = Annotated[
    Union[SectionRead, SourceUnavailable, SourceCorrupt],
    Field(discriminator="status"),
]
"""セクション読み込み結果の判別共用体。"""

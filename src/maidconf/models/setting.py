"""設定プロパティと解決済み値の定義。"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from maidconf.models._base import MaidconfBaseModel
from maidconf.models.scope import Scope


class SettingsProperty(MaidconfBaseModel):
    """呼び出し側が宣言する設定プロパティ。

    Attributes:
        name: プロパティ名。セクション内の setting 名と一致させる。
        default_value: シリアライズ済みのデフォルト値。未指定は None。
        property_type: デシリアライズ先の型。
    """

    name: str = Field(min_length=1)
    default_value: str | None = None
    property_type: type[Any] = str


class SettingsPropertyValue(MaidconfBaseModel):
    """1プロパティの解決済み値。解決呼び出しごとに新規生成される。

    Attributes:
        setting: 対象の設定プロパティ。
        serialized_value: シリアライズ済みの値。
        deserialized: property_value が serialized_value から変換済みかどうか。
            False の場合、利用側は serialized_value を再度変換する必要がある。
        scope: serialized_value を供給したスコープ。
        property_value: 変換済みの値。deserialized が True の場合のみ有効。
    """

    setting: SettingsProperty
    serialized_value: str | None = None
    deserialized: bool = False
    scope: Scope = Scope.DEFAULT
    property_value: Any = None

    @property
    def name(self) -> str:
        """プロパティ名。"""
        return self.setting.name


class SettingsContext(MaidconfBaseModel):
    """解決時に呼び出し側が渡すコンテキスト。

    Attributes:
        group_name: 読み込むセクション名。解決時に必須。
        project_root: プロジェクト設定ファイルを置くディレクトリ。開いていなければ None。
    """

    group_name: str | None = None
    project_root: str | None = None

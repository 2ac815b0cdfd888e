"""プロパティ値のマージ。

各プロパティはデフォルト値から開始し、低優先度スコープから順に上書きされる。
後に適用したスコープが先のスコープを上書きする。
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from pydantic import TypeAdapter

from maidconf.models.scope import Scope
from maidconf.models.setting import SettingsProperty, SettingsPropertyValue


def default_value_for(setting: SettingsProperty) -> SettingsPropertyValue:
    """プロパティ宣言のデフォルト値から初期値を生成する。"""
    return SettingsPropertyValue(
        setting=setting,
        serialized_value=setting.default_value,
        scope=Scope.DEFAULT,
    )


def apply_setting_to_value(
    value: SettingsPropertyValue,
    settings: Mapping[str, str],
    scope: Scope,
) -> SettingsPropertyValue:
    """settings に value.name があれば、その値で上書きした新しい値を返す。

    上書き時は deserialized を False に戻し、利用側に再変換を促す。
    settings に名前が無い場合は value をそのまま返す。

    Args:
        value: 現在の解決済み値。
        settings: スコープから読み込んだ setting 名 → シリアライズ済み値。
        scope: settings を供給したスコープ。

    Returns:
        上書き後の値、または value そのもの。
    """
    if value.name not in settings:
        return value
    return value.model_copy(
        update={
            "serialized_value": settings[value.name],
            "deserialized": False,
            "property_value": None,
            "scope": scope,
        }
    )


def merge_property_values(
    properties: Iterable[SettingsProperty],
    layers: Sequence[tuple[Scope, Mapping[str, str]]],
) -> list[SettingsPropertyValue]:
    """全プロパティに各スコープの setting を優先度順に適用する。

    layers は適用前にスコープ優先度でソートされるため、渡す順序は問わない。
    Scope.DEFAULT のレイヤーはデフォルト値の上書きとして扱われる。

    Args:
        properties: 解決対象のプロパティ。
        layers: (スコープ, setting 辞書) の並び。

    Returns:
        入力と同じ順序の解決済み値リスト。
    """
    ordered = sorted(layers, key=lambda layer: layer[0].priority)
    values: list[SettingsPropertyValue] = []
    for setting in properties:
        value = default_value_for(setting)
        for scope, settings in ordered:
            value = apply_setting_to_value(value, settings, scope)
        values.append(value)
    return values


def deserialize_value(value: SettingsPropertyValue) -> SettingsPropertyValue:
    """serialized_value を property_type に変換し、deserialized=True の値を返す。

    変換は pydantic の lax モードで行うため "8" → 8, "True" → True 等を受け付ける。
    serialized_value が None の場合は None のまま変換済みとする。

    Raises:
        pydantic.ValidationError: property_type に変換できない場合。
    """
    if value.deserialized:
        return value
    converted: object = None
    if value.serialized_value is not None:
        adapter: TypeAdapter[object] = TypeAdapter(value.setting.property_type)
        converted = adapter.validate_python(value.serialized_value)
    return value.model_copy(update={"property_value": converted, "deserialized": True})

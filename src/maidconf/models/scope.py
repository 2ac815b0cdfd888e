"""設定スコープ（Scope）の定義。

優先順位: project > user > default の3段階。
default はホスト既定値（プロパティ宣言のデフォルト値）を表す最低優先スコープ。
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Final

SCOPE_PRIORITY: Final[Mapping[str, int]] = MappingProxyType(
    {
        "default": 0,
        "user": 1,
        "project": 2,
    }
)


class Scope(StrEnum):
    """設定ソースの優先度階層。

    比較演算は SCOPE_PRIORITY に基づく。優先度の高いスコープほど大きい。
    スコープを追加する場合は SCOPE_PRIORITY にも優先度を登録する。
    """

    DEFAULT = "default"
    USER = "user"
    PROJECT = "project"

    @property
    def priority(self) -> int:
        """SCOPE_PRIORITY からスコープの優先度を取得する。"""
        return SCOPE_PRIORITY[self.value]

    def _check_comparable(self, other: object, op: str) -> Scope:
        if not isinstance(other, Scope):
            raise TypeError(
                f"'{op}' not supported between instances of 'Scope' and '{type(other).__name__}'"
            )
        return other

    def __lt__(self, other: object) -> bool:
        return self.priority < self._check_comparable(other, "<").priority

    def __le__(self, other: object) -> bool:
        return self.priority <= self._check_comparable(other, "<=").priority

    def __gt__(self, other: object) -> bool:
        return self.priority > self._check_comparable(other, ">").priority

    def __ge__(self, other: object) -> bool:
        return self.priority >= self._check_comparable(other, ">=").priority


FILE_SCOPES: Final[tuple[Scope, ...]] = (Scope.USER, Scope.PROJECT)
"""設定ファイルを持つスコープ。低優先度から高優先度の順。"""

"""ExitCode -- CLI 終了コードの定義。"""

from enum import IntEnum


class ExitCode(IntEnum):
    """プロセス終了コード。

    3 は設定ファイルの読み書き失敗、4 は入力エラー。
    """

    SUCCESS = 0
    EXECUTION_ERROR = 3
    INPUT_ERROR = 4

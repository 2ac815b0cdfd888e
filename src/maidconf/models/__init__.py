"""maidconf ドメインモデルパッケージ。"""

from maidconf.models._base import MaidconfBaseModel
from maidconf.models.exit_code import ExitCode
from maidconf.models.read_result import (
    SectionRead,
    SectionReadResult,
    SourceCorrupt,
    SourceUnavailable,
)
from maidconf.models.scope import FILE_SCOPES, SCOPE_PRIORITY, Scope
from maidconf.models.setting import (
    SettingsContext,
    SettingsProperty,
    SettingsPropertyValue,
)

__all__ = [
    "ExitCode",
    "FILE_SCOPES",
    "MaidconfBaseModel",
    "SCOPE_PRIORITY",
    "Scope",
    "SectionRead",
    "SectionReadResult",
    "SettingsContext",
    "SettingsProperty",
    "SettingsPropertyValue",
    "SourceCorrupt",
    "SourceUnavailable",
]

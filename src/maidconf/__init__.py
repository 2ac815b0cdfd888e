"""maidconf -- ユーザー設定・プロジェクト設定の階層解決。

典型的な利用:

    from maidconf import SettingsProperty, resolve_settings

    values = resolve_settings(
        [SettingsProperty(name="Indent", default_value="4", property_type=int)],
        "CodeMaid.Properties.Settings",
        project_root="/work/solution",
    )
"""

from maidconf.models import (
    Scope,
    SettingsContext,
    SettingsProperty,
    SettingsPropertyValue,
)
from maidconf.settings import (
    InvalidContextError,
    SettingsResolver,
    SettingsWriteError,
    SourceCorruptError,
    deserialize_value,
    resolve_settings,
)

__all__ = [
    "InvalidContextError",
    "Scope",
    "SettingsContext",
    "SettingsProperty",
    "SettingsPropertyValue",
    "SettingsResolver",
    "SettingsWriteError",
    "SourceCorruptError",
    "deserialize_value",
    "resolve_settings",
]

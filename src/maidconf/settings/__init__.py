"""設定解決モジュール。"""

from maidconf.settings._loader import (
    SourceCorruptError,
    is_valid_section_name,
    load_section,
    read_section,
)
from maidconf.settings._locator import (
    APP_DIR_NAME,
    CONFIG_FILE_NAME,
    get_project_config_path,
    get_scope_config_path,
    get_user_config_path,
)
from maidconf.settings._merger import (
    apply_setting_to_value,
    deserialize_value,
    merge_property_values,
)
from maidconf.settings._resolver import (
    InvalidContextError,
    SettingsResolver,
    resolve_settings,
)
from maidconf.settings._writer import SettingsWriteError, remove_settings, write_section

__all__ = [
    "APP_DIR_NAME",
    "CONFIG_FILE_NAME",
    "InvalidContextError",
    "SettingsResolver",
    "SettingsWriteError",
    "SourceCorruptError",
    "apply_setting_to_value",
    "deserialize_value",
    "get_project_config_path",
    "get_scope_config_path",
    "get_user_config_path",
    "is_valid_section_name",
    "load_section",
    "merge_property_values",
    "read_section",
    "remove_settings",
    "resolve_settings",
    "write_section",
]

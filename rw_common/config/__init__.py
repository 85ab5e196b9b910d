"""Configuration helpers for resource-watch."""

from rw_common.config.env import parse_bool_env, parse_duration_env, parse_float_env
from rw_common.config.settings import TableSettings
from rw_common.config.view import ViewSetting

__all__ = [
    "TableSettings",
    "ViewSetting",
    "parse_bool_env",
    "parse_duration_env",
    "parse_float_env",
]

"""設定管理モジュール"""

from slackhub.config.app import AppConfig, load_app_config
from slackhub.config.config import Config, load_config
from slackhub.config.env import EnvConfig, load_env_config, parse_action_list

__all__ = [
    "AppConfig",
    "Config",
    "EnvConfig",
    "load_app_config",
    "load_config",
    "load_env_config",
    "parse_action_list",
]

"""
設定管理モジュール

関連クラス:
  - persistence.create_persistence: storage設定からバックエンドを選択
  - logger.setup_logger: log設定を使用
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass
class StorageConfig:
    """ストレージ設定"""

    backend: str = "session"  # session | sqlite
    db_path: Optional[str] = None  # 省略時はdata/todo_lists.db
    username: str = "admin"


@dataclass
class Config:
    """アプリケーション設定クラス"""

    # ストレージ設定
    storage: StorageConfig = None  # type: ignore

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/todo_lists.log"

    def __post_init__(self):
        """デフォルト値の初期化"""
        if self.storage is None:
            self.storage = StorageConfig()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はconfig/app_config.yamlを使用）

        Returns:
            Config: 設定インスタンス
        """
        if config_path is None:
            project_root = Path(__file__).parent.parent.parent
            config_path = project_root / "config" / "app_config.yaml"

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        storage_data = yaml_data.get("storage") or {}
        log_data = yaml_data.get("log") or {}

        return cls(
            storage=StorageConfig(
                backend=storage_data.get("backend", "session"),
                db_path=storage_data.get("db_path"),
                username=storage_data.get("username", "admin"),
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/todo_lists.log"),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数から設定を読み込む"""
        return cls(
            storage=StorageConfig(
                backend=os.getenv("TODO_LISTS_BACKEND", "session"),
                db_path=os.getenv("TODO_LISTS_DB_PATH"),
                username=os.getenv("TODO_LISTS_USERNAME", "admin"),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/todo_lists.log"),
        )

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルを読み込み、設定済みの環境変数で上書きする

        設定ファイルが存在しない場合はデフォルト値から始める。

        Args:
            config_path: 設定ファイルパス（省略時はconfig/app_config.yamlを使用）

        Returns:
            Config: 設定インスタンス
        """
        if config_path is None:
            project_root = Path(__file__).parent.parent.parent
            config_path = project_root / "config" / "app_config.yaml"

        config = cls.from_yaml(config_path) if Path(config_path).exists() else cls()

        overrides = {
            "backend": os.getenv("TODO_LISTS_BACKEND"),
            "db_path": os.getenv("TODO_LISTS_DB_PATH"),
            "username": os.getenv("TODO_LISTS_USERNAME"),
        }
        for name, value in overrides.items():
            if value:
                setattr(config.storage, name, value)
        config.log_level = os.getenv("LOG_LEVEL") or config.log_level
        config.log_file = os.getenv("LOG_FILE") or config.log_file
        return config

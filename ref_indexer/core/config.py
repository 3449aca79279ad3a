# ref_indexer/core/config.py

from typing import Dict, List, Optional
from pathlib import Path
import json
import os
import logging

import msgspec
import yaml
from dotenv import load_dotenv
from msgspec import Struct

from .logging import IndexerLogger, log_with_context


DEFAULT_DB_URL = "sqlite:///ref_indexer.db"
DEFAULT_ACCOUNTS = ["v2.ref-finance.near"]


class DatabaseConfig(Struct):
    url: str = DEFAULT_DB_URL
    pool_size: int = 5
    max_overflow: int = 10


class LoggingConfig(Struct):
    log_dir: Optional[str] = None
    log_level: str = "INFO"
    console_enabled: bool = True
    file_enabled: bool = False
    structured_format: bool = False


class IndexerConfig(Struct):
    database: DatabaseConfig = msgspec.field(default_factory=DatabaseConfig)
    logging_settings: LoggingConfig = msgspec.field(default_factory=LoggingConfig)
    accounts: List[str] = msgspec.field(default_factory=lambda: list(DEFAULT_ACCOUNTS))
    log_receipts: bool = False

    @classmethod
    def from_env(cls, env_vars: Optional[Dict[str, str]] = None) -> 'IndexerConfig':
        if env_vars is None:
            load_dotenv()
        env = env_vars if env_vars is not None else os.environ

        database = DatabaseConfig(
            url=env.get("REF_INDEXER_DB_URL", DEFAULT_DB_URL),
            pool_size=int(env.get("REF_INDEXER_DB_POOL_SIZE", "5")),
            max_overflow=int(env.get("REF_INDEXER_DB_MAX_OVERFLOW", "10")),
        )

        log_dir = env.get("REF_INDEXER_LOG_DIR")
        logging_config = LoggingConfig(
            log_dir=log_dir or None,
            log_level=env.get("REF_INDEXER_LOG_LEVEL", "INFO"),
            console_enabled=_env_flag(env, "REF_INDEXER_LOG_CONSOLE", True),
            file_enabled=_env_flag(env, "REF_INDEXER_LOG_FILE", False),
            structured_format=_env_flag(env, "REF_INDEXER_LOG_STRUCTURED", False),
        )

        accounts_env = env.get("REF_INDEXER_ACCOUNTS")
        if accounts_env:
            accounts = [a.strip() for a in accounts_env.split(",") if a.strip()]
        else:
            accounts = list(DEFAULT_ACCOUNTS)

        config = cls(
            database=database,
            logging_settings=logging_config,
            accounts=accounts,
            log_receipts=_env_flag(env, "REF_INDEXER_LOG_RECEIPTS", False),
        )

        logger = IndexerLogger.get_logger('core.config')
        log_with_context(logger, logging.DEBUG, "Configuration loaded from environment",
                         accounts=config.accounts,
                         log_receipts=config.log_receipts)
        return config

    @classmethod
    def from_file(cls, config_file: str) -> 'IndexerConfig':
        """Load configuration from a YAML or JSON file"""
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")

        with open(config_path, 'r') as f:
            if config_path.suffix.lower() in ['.yaml', '.yml']:
                config_data = yaml.safe_load(f) or {}
            elif config_path.suffix.lower() == '.json':
                config_data = json.load(f)
            else:
                raise ValueError(f"Unsupported config file type: {config_path.suffix}")

        config = msgspec.convert(config_data, type=cls, strict=False)

        logger = IndexerLogger.get_logger('core.config')
        log_with_context(logger, logging.DEBUG, "Configuration loaded from file",
                         config_file=str(config_path),
                         accounts=config.accounts)
        return config


def _env_flag(env, name: str, default: bool) -> bool:
    value = env.get(name)
    if value is None:
        return default
    return value.lower() == "true"

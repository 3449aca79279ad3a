# ref_indexer/cli/context.py

"""
CLI Context

Lazily builds the indexer container for the invoked command so that commands
which never touch the database (``methods``) do not open a connection.
"""

import logging
from typing import Optional

from .. import create_indexer
from ..core.config import IndexerConfig
from ..core.container import IndexerContainer
from ..core.logging import IndexerLogger, log_with_context
from ..database.connection import DatabaseManager
from ..database.store import EntityStore
from ..pipeline.receipt_pipeline import ReceiptPipeline


class CLIContext:
    def __init__(self, config_file: Optional[str] = None, verbose: bool = False,
                 log_receipts: bool = False):
        self.config_file = config_file
        self.verbose = verbose
        self.log_receipts = log_receipts
        self.logger = IndexerLogger.get_logger('cli.context')
        self._config: Optional[IndexerConfig] = None
        self._container: Optional[IndexerContainer] = None

    @property
    def config(self) -> IndexerConfig:
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def _load_config(self) -> IndexerConfig:
        if self.config_file:
            config = IndexerConfig.from_file(self.config_file)
        else:
            config = IndexerConfig.from_env()

        if self.verbose:
            config.logging_settings.log_level = "DEBUG"
        if self.log_receipts:
            config.log_receipts = True

        return config

    @property
    def container(self) -> IndexerContainer:
        if self._container is None:
            self._container = create_indexer(config=self.config)
            log_with_context(self.logger, logging.DEBUG, "CLI container created",
                             accounts=self.config.accounts)
        return self._container

    @property
    def db_manager(self) -> DatabaseManager:
        return self.container.get(DatabaseManager)

    @property
    def store(self) -> EntityStore:
        return self.container.get(EntityStore)

    @property
    def pipeline(self) -> ReceiptPipeline:
        return self.container.get(ReceiptPipeline)

    def shutdown(self) -> None:
        if self._container is not None:
            if self._container.is_resolved(DatabaseManager):
                self.db_manager.shutdown()
        self._container = None

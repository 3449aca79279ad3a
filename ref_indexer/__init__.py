# ref_indexer/__init__.py

import logging
from pathlib import Path
from typing import Optional

from .core.config import IndexerConfig
from .core.container import IndexerContainer
from .core.logging import IndexerLogger, log_with_context
from .database.connection import DatabaseManager
from .database.store import EntityStore
from .dispatch.builtin import BuiltinHandlers
from .dispatch.dispatcher import ActionDispatcher
from .dispatch.registry import MethodRegistry, build_ref_finance_registry
from .exchange import ProtocolHandlers
from .pipeline.receipt_pipeline import ReceiptPipeline


def create_indexer(env_vars: dict = None, config: Optional[IndexerConfig] = None) -> IndexerContainer:
    if config is None:
        config = IndexerConfig.from_env(env_vars)

    _configure_logging_early(config)

    logger = IndexerLogger.get_logger('core.init')
    log_with_context(logger, logging.INFO, "Creating indexer instance",
                     accounts=config.accounts,
                     db_url_scheme=config.database.url.split(':', 1)[0])

    container = IndexerContainer(config)
    _register_services(container)

    log_with_context(logger, logging.INFO, "Indexer created successfully",
                     service_count=container.get_service_info()['registered_services'])

    return container


def _configure_logging_early(config: IndexerConfig):
    settings = config.logging_settings
    log_dir = Path(settings.log_dir) if settings.log_dir else Path.cwd() / "logs"

    IndexerLogger.configure(
        log_dir=log_dir,
        log_level=settings.log_level,
        console_enabled=settings.console_enabled,
        file_enabled=settings.file_enabled,
        structured_format=settings.structured_format,
        force=True
    )


def _create_database_manager(container: IndexerContainer) -> DatabaseManager:
    db_manager = DatabaseManager(container.config.database)
    db_manager.initialize()
    return db_manager


def _create_method_registry(container: IndexerContainer) -> MethodRegistry:
    return build_ref_finance_registry(container.get(ProtocolHandlers))


def _register_services(container: IndexerContainer):
    container.register_factory(DatabaseManager, _create_database_manager)
    container.register_singleton(EntityStore, EntityStore)
    container.register_singleton(BuiltinHandlers, BuiltinHandlers)
    container.register_singleton(ProtocolHandlers, ProtocolHandlers)
    container.register_factory(MethodRegistry, _create_method_registry)
    container.register_singleton(ActionDispatcher, ActionDispatcher)
    container.register_singleton(ReceiptPipeline, ReceiptPipeline)

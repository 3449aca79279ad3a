from .config import IndexerConfig, DatabaseConfig, LoggingConfig
from .container import IndexerContainer
from .errors import IndexerError, StoreError, ReceiptProcessingError
from .logging import IndexerLogger, LoggingMixin, log_with_context

from .action_decoder import ActionDecoder, ACTION_TYPES, classify
from .record_decoder import RecordDecoder

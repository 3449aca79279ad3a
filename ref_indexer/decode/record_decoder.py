# ref_indexer/decode/record_decoder.py

from pathlib import Path
from typing import Iterator, Tuple, Union

import msgspec

from ..core.logging import LoggingMixin
from ..types import ReceiptWithOutcome


class RecordDecoder(LoggingMixin):
    """Decodes host-delivered receipt-with-outcome records from JSON."""

    def __init__(self):
        self._decoder = msgspec.json.Decoder(ReceiptWithOutcome)
        self._encoder = msgspec.json.Encoder()

    def decode(self, data: Union[bytes, str]) -> ReceiptWithOutcome:
        return self._decoder.decode(data)

    def encode(self, record: ReceiptWithOutcome) -> bytes:
        return self._encoder.encode(record)

    def iter_lines(self, path: Union[str, Path]) -> Iterator[Tuple[int, bytes]]:
        """Yield (line_number, raw line) for each non-blank line of a JSON-lines file"""
        path = Path(path)
        self.log_debug("Reading receipt records", path=str(path))

        with open(path, 'rb') as f:
            for line_number, line in enumerate(f, start=1):
                line = line.strip()
                if line:
                    yield line_number, line

    def iter_file(self, path: Union[str, Path]) -> Iterator[Tuple[int, ReceiptWithOutcome]]:
        for line_number, line in self.iter_lines(path):
            yield line_number, self._decoder.decode(line)

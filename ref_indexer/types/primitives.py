# ref_indexer/types/primitives.py

from typing import NewType
import hashlib

import base58
import msgspec


CryptoHash = NewType('CryptoHash', str)  # base58 text form of a 32-byte digest
AccountId = NewType('AccountId', str)
ContentId = NewType('ContentId', str)


def b58_to_bytes(value: str) -> bytes:
    return base58.b58decode(value)


def bytes_to_b58(value: bytes) -> CryptoHash:
    return CryptoHash(base58.b58encode(value).decode('ascii'))


def generate_content_id(*identifying_content) -> ContentId:
    content_bytes = msgspec.msgpack.encode(list(identifying_content))
    hash_hex = hashlib.sha256(content_bytes).hexdigest()
    return ContentId(hash_hex[:12])

"""Streaming digest and MAC computation over a binary reader."""

from __future__ import annotations

import hashlib
import hmac
from typing import TYPE_CHECKING

from .exceptions import InvalidArgumentError
from .types import Digest, Hmac

if TYPE_CHECKING:
    from typing import BinaryIO

DEFAULT_CHUNK_SIZE = 64 * 1024


def _algorithm_name(algorithm: Digest | Hmac | str, what: str) -> str:
    if algorithm is None:
        raise InvalidArgumentError(f"{what} must not be None")
    if isinstance(algorithm, (Digest, Hmac)):
        return algorithm.value
    if isinstance(algorithm, str):
        return algorithm.lower()
    raise InvalidArgumentError(
        f"{what} must be a str or enum member, got {type(algorithm).__name__}"
    )


def new_digest(digest: Digest | str) -> hashlib._Hash:
    """Return a fresh ``hashlib`` object for *digest*."""
    name = _algorithm_name(digest, "digest")
    try:
        return hashlib.new(name)
    except ValueError:
        raise InvalidArgumentError(f"Unsupported digest algorithm: {name}") from None


def new_mac(algorithm: Hmac | str, key: bytes) -> hmac.HMAC:
    """Return a fresh ``hmac.HMAC`` keyed with *key*."""
    name = _algorithm_name(algorithm, "algorithm")
    if key is None:
        raise InvalidArgumentError("key must not be None")
    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise InvalidArgumentError(f"key must be bytes, got {type(key).__name__}")
    try:
        return hmac.new(bytes(key), digestmod=name)
    except ValueError:
        raise InvalidArgumentError(f"Unsupported MAC algorithm: {name}") from None


def consume(
    target: hashlib._Hash | hmac.HMAC,
    reader: BinaryIO,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bytes:
    """Feed *reader* into *target* until EOF and return the final digest."""
    if chunk_size <= 0:
        raise InvalidArgumentError(f"chunk_size must be positive, got {chunk_size}")
    # A short read is not EOF; only an empty one is.
    while True:
        chunk = reader.read(chunk_size)
        if not chunk:
            return target.digest()
        target.update(chunk)


def hash_stream(
    reader: BinaryIO,
    digest: Digest | str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bytes:
    """Consume *reader* to EOF and return its digest."""
    return consume(new_digest(digest), reader, chunk_size)


def hmac_stream(
    reader: BinaryIO,
    algorithm: Hmac | str,
    key: bytes,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bytes:
    """Consume *reader* to EOF and return its MAC under *key*."""
    return consume(new_mac(algorithm, key), reader, chunk_size)

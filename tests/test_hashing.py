"""Tests for hashing.py: streaming digests and MACs over readers."""

from __future__ import annotations

import hashlib
import hmac
import io

import pytest

from handlefs import Digest, Hmac, InvalidArgumentError
from handlefs.hashing import consume, hash_stream, hmac_stream, new_digest, new_mac


class TrickleReader(io.RawIOBase):
    """Returns at most one byte per read, like a slow pipe."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        chunk = self._data[self._pos : self._pos + 1]
        self._pos += len(chunk)
        return chunk


class TestHashStream:
    def test_matches_hashlib(self):
        assert hash_stream(io.BytesIO(b"hello"), Digest.SHA_256) == hashlib.sha256(b"hello").digest()

    def test_partial_reads_continue_to_eof(self):
        data = b"partial reads are not the end"
        assert hash_stream(TrickleReader(data), Digest.SHA_1) == hashlib.sha1(data).digest()

    @pytest.mark.parametrize("digest", list(Digest))
    def test_every_digest_is_known_to_hashlib(self, digest):
        try:
            expected = hashlib.new(digest.value, b"abc").digest()
        except ValueError:
            pytest.skip(f"{digest.value} not provided by this OpenSSL build")
        assert hash_stream(io.BytesIO(b"abc"), digest) == expected

    def test_unknown_name(self):
        with pytest.raises(InvalidArgumentError, match="Unsupported digest"):
            new_digest("not-a-hash")

    def test_wrong_type(self):
        with pytest.raises(InvalidArgumentError):
            new_digest(256)

    def test_bad_chunk_size(self):
        with pytest.raises(InvalidArgumentError, match="chunk_size"):
            hash_stream(io.BytesIO(b""), Digest.MD5, chunk_size=0)


class TestHmacStream:
    @pytest.mark.parametrize("algorithm", list(Hmac))
    def test_matches_hmac(self, algorithm):
        key = b"key bytes"
        expected = hmac.new(key, b"message", algorithm.value).digest()
        assert hmac_stream(io.BytesIO(b"message"), algorithm, key) == expected

    def test_accepts_bytearray_key(self):
        expected = hmac.new(b"k", b"m", "sha256").digest()
        assert hmac_stream(io.BytesIO(b"m"), Hmac.HMAC_SHA_256, bytearray(b"k")) == expected

    def test_str_key_rejected(self):
        with pytest.raises(InvalidArgumentError, match="key"):
            new_mac(Hmac.HMAC_SHA_256, "k")

    def test_none_algorithm(self):
        with pytest.raises(InvalidArgumentError, match="algorithm"):
            new_mac(None, b"k")

    def test_unknown_algorithm(self):
        with pytest.raises(InvalidArgumentError, match="Unsupported MAC"):
            new_mac("not-a-mac", b"k")


class TestConsume:
    def test_returns_final_digest(self):
        hasher = hashlib.md5()
        assert consume(hasher, io.BytesIO(b"xyz"), chunk_size=1) == hashlib.md5(b"xyz").digest()

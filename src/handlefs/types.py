"""Option and algorithm enums: OpenOption, Intent, Digest, Hmac."""

from __future__ import annotations

from enum import Enum


class OpenOption(str, Enum):
    """How a file writer is opened.

    ``CREATE`` and ``CREATE_NEW`` exist so callers can pass the same option
    sets they would give a plain ``open``; a ``File`` always exists already,
    so ``File.writer`` drops both.
    """

    READ = "read"
    WRITE = "write"
    APPEND = "append"
    TRUNCATE_EXISTING = "truncate_existing"
    CREATE = "create"
    CREATE_NEW = "create_new"
    SYNC = "sync"
    DSYNC = "dsync"


class Intent(str, Enum):
    """What ``FileBuilder.build`` does before validating the path."""

    OPEN = "open"
    CREATE = "create"
    CREATE_IF_ABSENT = "create_if_absent"


class Digest(str, Enum):
    """Message digest algorithms, valued with their ``hashlib`` names."""

    MD5 = "md5"
    SHA_1 = "sha1"
    SHA_224 = "sha224"
    SHA_256 = "sha256"
    SHA_384 = "sha384"
    SHA_512 = "sha512"
    SHA_512_224 = "sha512_224"
    SHA_512_256 = "sha512_256"
    SHA3_224 = "sha3_224"
    SHA3_256 = "sha3_256"
    SHA3_384 = "sha3_384"
    SHA3_512 = "sha3_512"


class Hmac(str, Enum):
    """MAC algorithms, valued with the underlying ``hashlib`` digest name."""

    HMAC_MD5 = "md5"
    HMAC_SHA_1 = "sha1"
    HMAC_SHA_224 = "sha224"
    HMAC_SHA_256 = "sha256"
    HMAC_SHA_384 = "sha384"
    HMAC_SHA_512 = "sha512"

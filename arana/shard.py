"""Shard computers: modulo and hash based."""

from __future__ import annotations

import enum
import hashlib
import re
import zlib
from dataclasses import dataclass
from typing import Any

from .misc import _format_value
from .rule import ShardComputer

__all__ = [
    "ShardType",
    "ModShard",
    "HashMd5Shard",
    "HashCrc32Shard",
    "HashBKDRShard",
    "shard_factory",
]

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MASK = (1 << 64) - 1
_BKDR_SEED = 31


class ShardType(str, enum.Enum):
    """The name of a shard computer."""

    MOD = "modShard"
    HASH_MD5 = "hashMd5Shard"
    HASH_CRC32 = "hashCrc32Shard"
    HASH_BKDR = "hashBKDRShard"


def _parse_int64(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return number


def _to_int32(number: int) -> int:
    number &= 0xFFFFFFFF
    return number - (1 << 32) if number >= 1 << 31 else number


def _bkdr_hash(text: str) -> int:
    result = 0
    for byte in text.encode():
        result = _to_int32(result * _BKDR_SEED + byte)
    return result


@dataclass(frozen=True)
class ModShard(ShardComputer):
    """Shards integers by their absolute value modulo the shard count."""

    shard_num: int

    def compute(self, value: Any) -> int:
        return abs(_parse_int64(_format_value(value))) % self.shard_num


@dataclass(frozen=True)
class HashCrc32Shard(ShardComputer):
    """Shards values by the CRC-32 of their text."""

    shard_num: int

    def compute(self, value: Any) -> int:
        return zlib.crc32(_format_value(value).encode()) % self.shard_num


@dataclass(frozen=True)
class HashMd5Shard(ShardComputer):
    """Shards values by the leading bytes of the MD5 of their text."""

    shard_num: int

    def compute(self, value: Any) -> int:
        digest = hashlib.md5(_format_value(value).encode()).digest()

        # use as many leading bytes as the shard count spans
        bytes_num = 1
        rest = self.shard_num
        while bytes_num < len(digest):
            rest >>= 8
            if rest & 0xFF == 0:
                break
            bytes_num += 1

        hashed = int.from_bytes(digest[:bytes_num], "big") & _UINT64_MASK
        return hashed % self.shard_num


@dataclass(frozen=True)
class HashBKDRShard(ShardComputer):
    """Shards values by the BKDR hash of their text."""

    shard_num: int

    def compute(self, value: Any) -> int:
        return abs(_bkdr_hash(_format_value(value))) % self.shard_num


_COMPUTERS = {
    ShardType.MOD: ModShard,
    ShardType.HASH_MD5: HashMd5Shard,
    ShardType.HASH_CRC32: HashCrc32Shard,
    ShardType.HASH_BKDR: HashBKDRShard,
}


def shard_factory(shard_type: ShardType | str, shard_num: int) -> ShardComputer:
    """Create the shard computer named ``shard_type`` for ``shard_num`` shards."""
    if shard_num <= 0:
        raise ValueError("shardNum is invalid")
    try:
        kind = ShardType(shard_type)
    except ValueError:
        raise ValueError("do not have this shardType") from None
    return _COMPUTERS[kind](shard_num)
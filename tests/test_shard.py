import pytest

from arana.shard import (
    HashBKDRShard,
    HashCrc32Shard,
    HashMd5Shard,
    ModShard,
    ShardType,
    shard_factory,
)


def test_shard_factory_invalid_number():
    with pytest.raises(ValueError, match="shardNum is invalid"):
        shard_factory("xxx", 0)


def test_shard_factory_unknown_type():
    with pytest.raises(ValueError, match="do not have this shardType"):
        shard_factory("xxx", 1)


@pytest.mark.parametrize(
    "shard_type,cls",
    [
        (ShardType.MOD, ModShard),
        (ShardType.HASH_MD5, HashMd5Shard),
        (ShardType.HASH_CRC32, HashCrc32Shard),
        (ShardType.HASH_BKDR, HashBKDRShard),
    ],
)
def test_shard_factory_types(shard_type, cls):
    shard = shard_factory(shard_type, 1)
    assert type(shard) is cls
    assert shard.shard_num == 1


def test_shard_factory_accepts_names():
    shard = shard_factory("modShard", 3)
    assert shard.compute(10) == 1
    assert shard.shard_num == 3


@pytest.mark.parametrize("mod,value,want", [(7, -1, 1), (7, 3, 3), (7, 13, 6), (7, 14, 0)])
def test_mod_shard(mod, value, want):
    assert shard_factory(ShardType.MOD, mod).compute(value) == want


def test_mod_shard_rejects_text():
    with pytest.raises(ValueError):
        shard_factory(ShardType.MOD, 7).compute("abc")


@pytest.mark.parametrize("mod,value,want", [(7, "1", 0), (7, "abc", 4), (7, "DZ20201212", 1)])
def test_md5_shard(mod, value, want):
    assert shard_factory(ShardType.HASH_MD5, mod).compute(value) == want


@pytest.mark.parametrize("mod,value,want", [(7, "1", 2), (7, "abc", 5), (7, "DZ20201212", 3)])
def test_crc32_shard(mod, value, want):
    assert shard_factory(ShardType.HASH_CRC32, mod).compute(value) == want


@pytest.mark.parametrize("mod,value,want", [(7, "1", 0), (7, "abc", 6), (7, "DZ20201212", 5)])
def test_bkdr_shard(mod, value, want):
    assert shard_factory(ShardType.HASH_BKDR, mod).compute(value) == want


def test_hash_shards_treat_number_as_text():
    for shard_type in (ShardType.HASH_MD5, ShardType.HASH_CRC32, ShardType.HASH_BKDR):
        shard = shard_factory(shard_type, 7)
        assert shard.compute(1) == shard.compute("1")


@pytest.mark.parametrize("value", ["a", "hello", "DZ20201212", "12345678901234567890"])
def test_results_within_range(value):
    for shard_type in ShardType:
        if shard_type is ShardType.MOD:
            continue
        result = shard_factory(shard_type, 1000).compute(value)
        assert 0 <= result < 1000
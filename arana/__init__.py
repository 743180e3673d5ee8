"""Sharding rules, shard computers and shard evaluation for a database proxy."""

__version__ = "0.1.0"
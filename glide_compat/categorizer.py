"""Assign GLIDE methods to command families by keyword matching."""

import logging
from collections.abc import Iterable
from dataclasses import replace

from glide_compat.models import MethodSignature

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "general"

# Families in match order: the first family with a keyword contained in the
# lower-cased method name wins, so "hget" is a string command ("get" is
# checked before "hget").
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "strings",
        (
            "get",
            "set",
            "mget",
            "mset",
            "del",
            "exists",
            "incr",
            "decr",
            "append",
            "strlen",
        ),
    ),
    (
        "hashes",
        (
            "hget",
            "hset",
            "hmget",
            "hmset",
            "hdel",
            "hexists",
            "hkeys",
            "hvals",
            "hlen",
            "hincrby",
        ),
    ),
    (
        "lists",
        (
            "lpush",
            "rpush",
            "lpop",
            "rpop",
            "llen",
            "lrange",
            "lindex",
            "lset",
            "ltrim",
            "lrem",
        ),
    ),
    (
        "sets",
        ("sadd", "srem", "smembers", "sismember", "scard", "sinter", "sunion", "sdiff"),
    ),
    (
        "sortedsets",
        ("zadd", "zrem", "zrange", "zrank", "zscore", "zcount", "zincrby", "zcard"),
    ),
    ("geo", ("geoadd", "geodist", "geohash", "geopos", "georadius", "geosearch")),
    (
        "streams",
        ("xadd", "xread", "xlen", "xrange", "xdel", "xgroup", "xreadgroup", "xack"),
    ),
    ("pubsub", ("publish", "subscribe", "psubscribe", "unsubscribe", "punsubscribe")),
    ("transactions", ("multi", "exec", "discard", "watch", "unwatch")),
    ("scripting", ("eval", "evalsha", "script")),
    ("connection", ("ping", "echo", "select", "auth", "quit")),
    ("server", ("info", "config", "flushdb", "flushall", "dbsize", "time")),
    ("bitmap", ("setbit", "getbit", "bitcount", "bitpos", "bitop")),
    ("hyperloglog", ("pfadd", "pfcount", "pfmerge")),
    ("json", ("json.set", "json.get", "json.del", "json.type", "json.strlen")),
)


def categorize(method_name: str) -> str:
    """Return the command family for a method name.

    Args:
        method_name: A GLIDE method name such as "zrangeWithScores"

    Returns:
        The first family in CATEGORY_KEYWORDS with a keyword found anywhere
        in the lower-cased name, or "general"
    """
    lower_name = method_name.lower()
    for family, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lower_name for keyword in keywords):
            return family
    return DEFAULT_CATEGORY


def categorize_methods(methods: Iterable[MethodSignature]) -> list[MethodSignature]:
    """Return copies of the signatures with their category assigned."""
    categorized = [replace(m, category=categorize(m.name)) for m in methods]

    counts: dict[str, int] = {}
    for method in categorized:
        counts[method.category] = counts.get(method.category, 0) + 1
    for family, count in sorted(counts.items()):
        logger.debug(f"  {family}: {count}")

    return categorized

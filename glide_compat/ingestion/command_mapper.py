"""Map documented Valkey command names to GLIDE methods and families."""

import re

DEFAULT_FAMILY = "other"

# Family by first command token
COMMAND_FAMILIES = {
    "GET": "strings",
    "SET": "strings",
    "MGET": "strings",
    "MSET": "strings",
    "INCR": "strings",
    "DECR": "strings",
    "APPEND": "strings",
    "STRLEN": "strings",
    "GETBIT": "bitmaps",
    "SETBIT": "bitmaps",
    "BITCOUNT": "bitmaps",
    "BITFIELD": "bitmaps",
    "BITFIELD_RO": "bitmaps",
    "BITPOS": "bitmaps",
    "DEL": "keys",
    "EXISTS": "keys",
    "EXPIRE": "keys",
    "PEXPIRE": "keys",
    "EXPIREAT": "keys",
    "PEXPIREAT": "keys",
    "TTL": "keys",
    "PTTL": "keys",
    "DUMP": "keys",
    "RESTORE": "keys",
    "PERSIST": "keys",
    "TOUCH": "keys",
    "TYPE": "keys",
    "UNLINK": "keys",
    "RENAME": "keys",
    "RENAMENX": "keys",
    "HSET": "hashes",
    "HGET": "hashes",
    "HDEL": "hashes",
    "HINCRBY": "hashes",
    "HINCRBYFLOAT": "hashes",
    "HGETALL": "hashes",
    "HSTRLEN": "hashes",
    "HEXISTS": "hashes",
    "HLEN": "hashes",
    "HKEYS": "hashes",
    "HVALS": "hashes",
    "HMGET": "hashes",
    "HRANDFIELD": "hashes",
    "LPUSH": "lists",
    "RPUSH": "lists",
    "LPOP": "lists",
    "RPOP": "lists",
    "LINDEX": "lists",
    "LINSERT": "lists",
    "LLEN": "lists",
    "LPOS": "lists",
    "LRANGE": "lists",
    "LREM": "lists",
    "LSET": "lists",
    "LTRIM": "lists",
    "BLPOP": "lists",
    "BRPOP": "lists",
    "LMPOP": "lists",
    "BLMPop": "lists",
    "SADD": "sets",
    "SCARD": "sets",
    "SDIFF": "sets",
    "SDIFFSTORE": "sets",
    "SINTER": "sets",
    "SINTERSTORE": "sets",
    "SUNION": "sets",
    "SUNIONSTORE": "sets",
    "SREM": "sets",
    "SMEMBERS": "sets",
    "SISMEMBER": "sets",
    "SMISMEMBER": "sets",
    "SRANDMEMBER": "sets",
    "SPOP": "sets",
    "ZADD": "zsets",
    "ZCARD": "zsets",
    "ZCOUNT": "zsets",
    "ZLEXCOUNT": "zsets",
    "ZINTER": "zsets",
    "ZUNION": "zsets",
    "ZINTERCARD": "zsets",
    "ZRANGE": "zsets",
    "ZRANGESTORE": "zsets",
    "ZREM": "zsets",
    "ZREMRANGEBYSCORE": "zsets",
    "ZREMRANGEBYRANK": "zsets",
    "ZREMRANGEBYLEX": "zsets",
    "ZSCORE": "zsets",
    "ZRANK": "zsets",
    "ZREVRANK": "zsets",
    "ZMSCORE": "zsets",
    "ZRANDMEMBER": "zsets",
    "ZPOPmax": "zsets",
    "ZPOPmin": "zsets",
    "GEOADD": "geo",
    "GEOSEARCH": "geo",
    "GEOSEARCHSTORE": "geo",
    "GEODIST": "geo",
    "GEOPOS": "geo",
    "GEOHASH": "geo",
    "XADD": "streams",
    "XDEL": "streams",
    "XRANGE": "streams",
    "XREVRANGE": "streams",
    "XLEN": "streams",
    "XGROUP": "streams",
    "XPENDING": "streams",
    "XREAD": "streams",
    "XREADGROUP": "streams",
    "XACK": "streams",
    "XCLAIM": "streams",
    "XAUTOCLAIM": "streams",
    "PUBLISH": "pubsub",
    "ECHO": "server",
    "PING": "server",
    "INFO": "server",
    "TIME": "server",
    "CLIENT": "server",
    "FUNCTION": "functions",
    "FCALL": "functions",
    "SCRIPT": "scripts",
    "FCALL_RO": "functions",
}

# Commands whose GLIDE method is not simply the lower-cased name
SPECIAL_METHOD_NAMES = {
    "BITFIELD_RO": "bitfieldReadOnly",
    "ZRANGESTORE": "zrangeStore",
    "ZRANGE_WITHSCORES": "zrangeWithScores",
    "ZRANK_WITHSCORE": "zrankWithScore",
    "ZREVRANK_WITHSCORE": "zrevrankWithScore",
    "XRANGE": "xrange",
    "XREVRANGE": "xrevrange",
    "XREADGROUP": "xreadgroup",
    "XREAD": "xread",
    "XGROUP_CREATE": "xgroupCreate",
    "XGROUPCREATE": "xgroupCreate",
    "XGROUP_DESTROY": "xgroupDestroy",
    "XGROUPDESTROY": "xgroupDestroy",
    "XGROUP_DELCONSUMER": "xgroupDelConsumer",
    "XGROUPDELCONSUMER": "xgroupDelConsumer",
    "XGROUP_CREATECONSUMER": "xgroupCreateConsumer",
    "XGROUPCREATECONSUMER": "xgroupCreateConsumer",
    "XGROUP_SETID": "xgroupSetId",
    "XGROUPSETID": "xgroupSetId",
    "GEOSEARCHSTORE": "geosearchstore",
    "GEODIST": "geodist",
    "CLIENTGETNAME": "clientGetName",
    "CLIENTID": "clientId",
    "CONFIGGET": "configGet",
    "CONFIGSET": "configSet",
    "CONFIGREWRITE": "configRewrite",
    "CONFIGRESETSTAT": "configResetStat",
    "DBSIZE": "dbsize",
    "RANDOMKEY": "randomKey",
    "SCRIPTEXISTS": "scriptExists",
    "SCRIPTFLUSH": "scriptFlush",
    "SCRIPTKILL": "scriptKill",
    "SCRIPTSHOW": "scriptShow",
    "FUNCTIONLIST": "functionList",
    "FUNCTIONLOAD": "functionLoad",
    "FUNCTIONRESTORE": "functionRestore",
    "FUNCTIONFLUSH": "functionFlush",
    "FUNCTIONKILL": "functionKill",
    "FUNCTIONDELETE": "functionDelete",
    "FUNCTIONSTATS": "functionStats",
    "PUBSUBCHANNELS": "pubsubChannels",
    "PUBSUBNUMPAT": "pubsubNumPat",
    "PUBSUBNUMSUB": "pubsubNumSub",
    "PUBSUBSHARDCHANNELS": "pubsubShardChannels",
    "PUBSUBSHARDNUMSUB": "pubsubShardNumSub",
}

_NON_NAME_CHARS = re.compile(r"[^A-Za-z_ ]")


def map_command_to_method(command: str) -> str | None:
    """Guess the GLIDE method name for a documented command.

    "XGROUP CREATE" becomes "xgroupCreate"; commands without a special
    mapping are lower-cased with spaces removed ("HGETALL" -> "hgetall").

    Returns:
        Method name, or None when nothing usable remains after normalization
    """
    collapsed = " ".join(command.split())
    simple = _NON_NAME_CHARS.sub("", collapsed).replace(" ", "")
    if not simple:
        return None
    special = SPECIAL_METHOD_NAMES.get(simple.upper())
    if special:
        return special
    return simple.lower()


def pick_family(command: str) -> str:
    """Family of a command by its first token, "other" when unknown."""
    tokens = command.split()
    if not tokens:
        return DEFAULT_FAMILY
    return COMMAND_FAMILIES.get(tokens[0].upper(), DEFAULT_FAMILY)

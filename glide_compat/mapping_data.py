"""Curated ioredis/node-redis to GLIDE mapping datasets.

A starting subset focused on common commands and client setup. The GLIDE
text of every entry names the methods it expects the client to expose; the
surface validator checks those names against the real client source.
"""

from glide_compat.models import ApiDataset, ApiMappingEntry

PSUBSCRIBE_GLIDE = (
    "customCommand(['PSUBSCRIBE', pattern]) + getPubSubMessage() "
    "| customCommand(['PUNSUBSCRIBE', pattern])"
)
SUBSCRIBE_GLIDE = "customCommand(['SUBSCRIBE', channel]) + getPubSubMessage()"


def _entry(category: str, symbol: str, glide: str, description: str, **extra) -> ApiMappingEntry:
    return ApiMappingEntry(
        category=category, symbol=symbol, glide=glide, description=description, **extra
    )


IOREDIS_DATASET = ApiDataset(
    client="ioredis",
    entries=(
        _entry(
            "client",
            "new Redis(options)",
            "createClient(options)",
            "Create a standalone client. In Glide, you create the client via a "
            "factory and typically await readiness.",
            params_diff="ioredis uses constructor options; Glide uses a factory. Options "
            "fields may differ (e.g., retry/cluster strategy).",
            return_diff="Both return a client-like object. Methods mostly align on command names.",
            source_example='import Redis from "ioredis";\n'
            'const redis = new Redis({ host: "localhost", port: 6379 });',
            glide_example='import { createClient } from "@valkey/glide";\n'
            'const client = await createClient({ host: "localhost", port: 6379 });',
        ),
        _entry(
            "client",
            "new Redis.Cluster(nodes, options)",
            "GlideClusterClient.createClient(options)",
            "Create a cluster client.",
            params_diff="Both accept node addresses; option names differ. Align "
            "timeouts/retries accordingly.",
        ),
        _entry(
            "client",
            "duplicate()",
            "createClient(options)",
            "Create a separate connection for Pub/Sub or blocking operations by "
            "creating another Glide client.",
            quirks="Use a dedicated subscriber client while the main client publishes.",
        ),
        _entry(
            "strings",
            "get(key)",
            "get(key)",
            "Get the value of key.",
            return_diff="ioredis returns string | null; Glide may return string | null "
            "(binary config differs).",
        ),
        _entry(
            "strings",
            "set(key, value, [EX seconds|PX ms|NX|XX])",
            "set(key, value, options?)",
            "Set key with optional expiration and conditions.",
            params_diff="ioredis variadic flags vs Glide structured options "
            "(e.g., { EX: seconds, NX: true }).",
        ),
        _entry("keys", "del(key|keys)", "del(...keys)", "Delete one or more keys."),
        _entry("keys", "expire(key, seconds)", "expire(key, seconds)", "Set TTL in seconds."),
        _entry(
            "hashes",
            "hset(key, field, value) | hset(key, object)",
            "hset(key, field, value) | hset(key, object)",
            "Set hash fields.",
        ),
        _entry("hashes", "hget(key, field)", "hget(key, field)", "Get hash field."),
        _entry(
            "pubsub",
            "publish(channel, message)",
            "publish(channel, message)",
            "Publish message to channel.",
        ),
        _entry(
            "pubsub",
            "subscribe(channel, callback)",
            SUBSCRIBE_GLIDE,
            "Use SUBSCRIBE via customCommand and consume messages via "
            "getPubSubMessage or a callback configured at client creation.",
            quirks="Ensure dedicated subscriber connection if needed.",
        ),
        _entry(
            "lists",
            "lpush(key, value|values)",
            "lpush(key, value|values)",
            "Push values to a list head.",
        ),
        _entry("lists", "brpop(key, timeout)", "brpop(key, timeout)", "Blocking pop from list tail."),
        _entry(
            "scripts",
            "eval(script, numKeys, ...keysAndArgs)",
            "invokeScript(script, keys, args)",
            "Execute Lua script.",
            params_diff="Glide prefers arrays for keys/args instead of numKeys.",
        ),
        _entry(
            "sets",
            "sadd(key, member|members)",
            "sadd(key, member|members)",
            "Add one or more set members.",
            source_example="await redis.sadd('tags', 'a', 'b');",
            glide_example="await client.sadd('tags', ['a', 'b']);",
        ),
        _entry("sets", "sismember(key, member)", "sismember(key, member)", "Check set membership."),
        _entry("sets", "smembers(key)", "smembers(key)", "Get all set members."),
        _entry(
            "zsets",
            "zadd(key, score, member)",
            "zadd(key, { member: score })",
            "Add a member with score to a sorted set.",
            source_example="await redis.zadd('lb', 10, 'alice');",
            glide_example="await client.zadd('lb', { 'alice': 10 });",
        ),
        _entry(
            "zsets",
            "zrange(key, start, stop) | zrevrange(key, start, stop)",
            "zrange(key, start, stop, { REV?: true, WITHSCORES?: true })",
            "Range over sorted set with optional reverse and scores.",
        ),
        _entry(
            "zsets",
            "zrem(key, member|members)",
            "zrem(key, member|members)",
            "Remove member(s) from a sorted set.",
        ),
        _entry(
            "streams",
            "xadd(key, id, field value ...)",
            "xadd(key, [id, entries])",
            "Append an entry to a stream.",
            source_example="await redis.xadd('mystream', '*', 'f1', 'v1');",
            glide_example="await client.xadd('mystream', [['f1', 'v1']]);",
        ),
        _entry(
            "streams",
            "xgroup create key group $ mkstream",
            "xgroupCreate(key, group, '$', { MKSTREAM: true })",
            "Create a consumer group; optionally create stream if missing.",
        ),
        _entry(
            "streams",
            "xreadgroup group group consumer count block streams key id",
            "xreadgroup(group, consumer, opts)",
            "Read from a stream as part of a consumer group.",
        ),
        _entry(
            "streams",
            "xack(key, group, id|ids)",
            "xack(key, group, ids)",
            "Acknowledge processed entries.",
        ),
        _entry(
            "transactions",
            "multi()...exec()",
            "new Batch(true).command(...) → client.exec(tx)",
            "Atomic transactional execution of multiple commands.",
            quirks="Use Batch class with atomic=true for atomic operations. Ensure errors "
            "are handled; GLIDE returns array of results/errors.",
        ),
        _entry(
            "batch",
            "pipeline()...exec()",
            "new Batch(false).command(...) → client.exec(batch)",
            "Non-atomic batch execution of multiple commands (replaces deprecated pipeline).",
            quirks="Use Batch class with atomic=false for non-atomic operations. "
            "Pipeline is deprecated, use batch instead.",
        ),
        _entry(
            "geo",
            "geoadd(key, longitude, latitude, member)",
            "geoadd(key, { member: {longitude, latitude} })",
            "Add geospatial items.",
            source_example="await redis.geoadd('places', 13.361389, 38.115556, 'Palermo');",
            glide_example="await client.geoadd('places', { 'Palermo': "
            "{ longitude: 13.361389, latitude: 38.115556 } });",
        ),
        _entry(
            "geo",
            "geosearch(key, frommember|fromlonlat, byradius|bybox, opts)",
            "geosearch(key, opts)",
            "Search geospatial index by radius or box.",
        ),
        _entry(
            "bitmaps",
            "setbit(key, offset, value)",
            "setbit(key, offset, value)",
            "Set the bit at offset.",
        ),
        _entry("bitmaps", "getbit(key, offset)", "getbit(key, offset)", "Get the bit value at offset."),
        _entry(
            "bitmaps",
            "bitcount(key, start?, end?)",
            "bitcount(key, start?, end?)",
            "Count set bits.",
        ),
        _entry("hyperloglog", "pfadd(key, elements)", "pfadd(key, elements)", "Add elements to HyperLogLog."),
        _entry("hyperloglog", "pfcount(key|keys)", "pfcount(key|keys)", "Estimate cardinality of set(s)."),
        _entry(
            "hyperloglog",
            "pfmerge(destkey, sourcekeys)",
            "pfmerge(destKey, sourceKeys)",
            "Merge multiple HLLs into one.",
        ),
        _entry(
            "json",
            "JSON.SET key path value",
            "GlideJson.set(client, key, path, value)",
            "Set a JSON value at path (RedisJSON).",
        ),
        _entry(
            "json",
            "JSON.GET key path",
            "GlideJson.get(client, key, { path })",
            "Get a JSON value at path (RedisJSON).",
        ),
        _entry(
            "strings",
            "incr(key) | decr(key)",
            "incr(key) | decr(key)",
            "Increment or decrement integer value stored at key.",
        ),
        _entry(
            "strings",
            "mget(keys) | mset(object)",
            "mGet(keys) | mSet(object)",
            "Bulk get/set of string keys.",
        ),
        _entry(
            "strings",
            "append(key, value) | strlen(key)",
            "append(key, value) | strLen(key)",
            "Append to string and get length.",
        ),
        _entry(
            "keys",
            "exists(...keys) | ttl(key) | persist(key)",
            "exists(...keys) | ttl(key) | persist(key)",
            "Key introspection and TTL management.",
        ),
        _entry("keys", "rename(key, newKey)", "rename(key, newKey)", "Rename a key."),
        _entry("scan", "scan(cursor, opts)", "scan(cursor, opts)", "Incrementally iterate the keyspace."),
        _entry(
            "hashes",
            "hgetall(key) | hmget(key, fields) | hset(key, object)",
            "hgetall(key) | hmget(key, fields) | hset(key, object)",
            "Hash get all and bulk set by object using hset.",
        ),
        _entry(
            "hashes",
            "hincrby(key, field, increment)",
            "hIncrBy(key, field, increment)",
            "Increment numeric hash field.",
        ),
        _entry(
            "hashes",
            "hdel(key, fields) | hexists(key, field) | hlen(key)",
            "hDel(key, fields) | hExists(key, field) | hLen(key)",
            "Delete and introspect hash fields.",
        ),
        _entry(
            "hashes",
            "hkeys(key) | hvals(key) | hscan(key, cursor, opts)",
            "hKeys(key) | hVals(key) | hScan(key, cursor, opts)",
            "Iterate hash keys/values and scan.",
        ),
        _entry(
            "lists",
            "lrange(key, start, stop) | llen(key)",
            "lRange(key, start, stop) | lLen(key)",
            "Read subrange and length of list.",
        ),
        _entry(
            "lists",
            "lpop(key) | rpop(key) | rpush(key, values) | ltrim(key, start, stop)",
            "lPop(key) | rPop(key) | rPush(key, values) | lTrim(key, start, stop)",
            "Common list mutations.",
        ),
        _entry(
            "sets",
            "srem(key, members) | scard(key) | spop(key, count?) | srandmember(key, count?)",
            "sRem(key, members) | sCard(key) | sPop(key, count?) | sRandMember(key, count?)",
            "Set mutations and random ops.",
        ),
        _entry(
            "sets",
            "sdiff(keys) | sinter(keys) | sunion(keys)",
            "sDiff(keys) | sInter(keys) | sUnion(keys)",
            "Set algebra operations.",
        ),
        _entry(
            "zsets",
            "zcard(key) | zscore(key, member) | zincrby(key, increment, member)",
            "zCard(key) | zScore(key, member) | zIncrBy(key, increment, member)",
            "Sorted set cardinality, score lookup and increment.",
        ),
        _entry(
            "zsets",
            "zrank(key, member) | zrevrank(key, member)",
            "zRank(key, member) | zRevRank(key, member)",
            "Sorted set rank lookups.",
        ),
        _entry(
            "zsets",
            "zcount(key, min, max) | zremrangebyscore(key, min, max) "
            "| zremrangebyrank(key, start, stop)",
            "zCount(key, min, max) | zRemRangeByScore(key, min, max) "
            "| zRemRangeByRank(key, start, stop)",
            "Sorted set range operations.",
        ),
        _entry(
            "zsets",
            "zpopmax(key, count?) | zpopmin(key, count?)",
            "zPopMax(key, count?) | zPopMin(key, count?)",
            "Pop highest/lowest scored members.",
        ),
        _entry(
            "geo",
            "geodist(key, member1, member2, unit?) | geopos(key, members) | geohash(key, members)",
            "geoDist(key, m1, m2, unit?) | geoPos(key, members) | geoHash(key, members)",
            "Geo utilities.",
        ),
        _entry(
            "bitmaps",
            "bitop(operation, destKey, keys) | bitpos(key, bit, start?, end?)",
            "bitOp(operation, destKey, keys) | bitPos(key, bit, start?, end?)",
            "Bitmap operations.",
        ),
        _entry(
            "scripts",
            "script load|exists|flush",
            "scriptLoad|scriptExists|scriptFlush",
            "Scripting helpers.",
        ),
        _entry(
            "pubsub",
            "psubscribe(pattern) | punsubscribe(pattern)",
            PSUBSCRIBE_GLIDE,
            "Pattern Pub/Sub via customCommand and getPubSubMessage.",
        ),
    ),
)

NODE_REDIS_DATASET = ApiDataset(
    client="node-redis",
    entries=(
        _entry(
            "client",
            "createClient(options)",
            "createClient(options)",
            "Both expose a client factory. Node-redis requires await client.connect(); "
            "Glide may await creation and be ready.",
            params_diff="Option shapes differ (e.g., URL vs host/port).",
        ),
        _entry(
            "client",
            "createCluster(options)",
            "GlideClusterClient.createClient(options)",
            "Create cluster client.",
        ),
        _entry(
            "client",
            "duplicate()",
            "createClient(options)",
            "Create another client for separate connections (e.g., subscriber).",
        ),
        _entry(
            "strings",
            "get(key)",
            "get(key)",
            "Get the value of key.",
            return_diff="Node-redis can return Buffer if configured; Glide similar if "
            "binary mode enabled.",
        ),
        _entry(
            "strings",
            "set(key, value, options?)",
            "set(key, value, options?)",
            "Set value with options.",
            params_diff="Option keys may differ slightly (EX vs ex) between libs.",
        ),
        _entry("pubsub", "publish(channel, message)", "publish(channel, message)", "Publish to channel."),
        _entry("pubsub", "subscribe(channel, listener)", SUBSCRIBE_GLIDE, "Subscribe to channel."),
        _entry("lists", "lPush(key, value|values)", "lPush(key, value|values)", "Push to list head."),
        _entry("lists", "brPop(key, timeout)", "brPop(key, timeout)", "Blocking pop from list tail."),
        _entry("geo", "geoAdd(key, items)", "geoAdd(key, items)", "Add geospatial items."),
        _entry("geo", "geoSearch(key, opts)", "geoSearch(key, opts)", "Search geospatial index."),
        _entry("bitmaps", "setBit(key, offset, value)", "setBit(key, offset, value)", "Set bit."),
        _entry("bitmaps", "getBit(key, offset)", "getBit(key, offset)", "Get bit."),
        _entry("bitmaps", "bitCount(key, start?, end?)", "bitCount(key, start?, end?)", "Count set bits."),
        _entry("hyperloglog", "pfAdd(key, elements)", "pfAdd(key, elements)", "Add to HyperLogLog."),
        _entry("hyperloglog", "pfCount(key|keys)", "pfCount(key|keys)", "Estimate cardinality."),
        _entry("hyperloglog", "pfMerge(destKey, sourceKeys)", "pfMerge(destKey, sourceKeys)", "Merge HLLs."),
        _entry(
            "json",
            "GlideJson.set(client, key, path, value)",
            "GlideJson.set(client, key, path, value)",
            "Set JSON value.",
        ),
        _entry(
            "json",
            "GlideJson.get(client, key, { path })",
            "GlideJson.get(client, key, { path })",
            "Get JSON value.",
        ),
        _entry(
            "strings",
            "incr(key) | decr(key)",
            "incr(key) | decr(key)",
            "Increment or decrement integer value.",
        ),
        _entry("strings", "mGet(keys) | mSet(object)", "mGet(keys) | mSet(object)", "Bulk get/set."),
        _entry(
            "keys",
            "exists(...keys) | ttl(key) | persist(key) | rename(key,newKey)",
            "exists(...keys) | ttl | persist | rename",
            "Key management.",
        ),
        _entry(
            "scan",
            "scan(cursor, opts) | hScan/sScan/zScan",
            "scan | hScan | sScan | zScan",
            "Iterate keyspace and data structures.",
        ),
        _entry(
            "hashes",
            "hGetAll | hMGet | hMSet | hIncrBy | hDel | hExists | hLen | hKeys | hVals",
            "hGetAll | hMGet | hMSet | hIncrBy | hDel | hExists | hLen | hKeys | hVals",
            "Hash utilities.",
        ),
        _entry(
            "lists",
            "lRange | lLen | lPop | rPop | rPush | lTrim",
            "lRange | lLen | lPop | rPop | rPush | lTrim",
            "List utilities.",
        ),
        _entry(
            "sets",
            "sRem | sCard | sPop | sRandMember | sDiff | sInter | sUnion",
            "sRem | sCard | sPop | sRandMember | sDiff | sInter | sUnion",
            "Set utilities.",
        ),
        _entry(
            "zsets",
            "zCard | zScore | zIncrBy | zRank | zRevRank | zCount | zRemRangeByScore "
            "| zRemRangeByRank | zPopMax | zPopMin",
            "zCard | zScore | zIncrBy | zRank | zRevRank | zCount | zRemRangeByScore "
            "| zRemRangeByRank | zPopMax | zPopMin",
            "Sorted set utilities.",
        ),
        _entry("geo", "geoDist | geoPos | geoHash", "geoDist | geoPos | geoHash", "Geo utilities."),
        _entry("bitmaps", "bitOp | bitPos", "bitOp | bitPos", "Bitmap ops."),
        _entry(
            "scripts",
            "evalSha | scriptLoad | scriptExists | scriptFlush",
            "evalSha | scriptLoad | scriptExists | scriptFlush",
            "Scripting helpers.",
        ),
        _entry(
            "pubsub",
            "pSubscribe | pUnsubscribe",
            PSUBSCRIBE_GLIDE,
            "Pattern Pub/Sub via customCommand and getPubSubMessage.",
        ),
    ),
)

GLIDE_SURFACE = ApiDataset(
    client="glide",
    entries=(
        _entry("client", "createClient(options)", "createClient(options)", "Create a standalone Glide client."),
        _entry(
            "client",
            "createCluster(nodes, options)",
            "GlideClusterClient.createClient(options)",
            "Create a cluster client.",
        ),
        _entry("strings", "get(key)", "get(key)", "Get a key."),
        _entry("strings", "set(key, value, options?)", "set(key, value, options?)", "Set a key."),
        _entry("keys", "del(...keys)", "del(...keys)", "Delete keys."),
        _entry("keys", "expire(key, seconds)", "expire(key, seconds)", "Set TTL."),
        _entry("hashes", "hset(key, field, value)|hset(key, object)", "hset(...)", "Hash set."),
        _entry("hashes", "hget(key, field)", "hget(key, field)", "Hash get."),
        _entry("pubsub", "publish(channel, message)", "publish(channel, message)", "PubSub publish."),
        _entry("pubsub", "subscribe(channel, listener)", SUBSCRIBE_GLIDE, "PubSub subscribe."),
        _entry("scripts", "eval(script, keys, args)", "invokeScript(script, keys, args)", "EVAL script."),
        _entry("lists", "lpush(key, value|values)", "lpush(key, value|values)", "List push."),
        _entry("lists", "brpop(key, timeout)", "brpop(key, timeout)", "Blocking list pop."),
        _entry("geo", "geoadd(key, items)", "geoadd(key, items)", "Add geospatial items."),
        _entry("geo", "geosearch(key, opts)", "geosearch(key, opts)", "Search geospatial index."),
        _entry("bitmaps", "setbit(key, offset, value)", "setbit(key, offset, value)", "Set bit."),
        _entry("bitmaps", "getbit(key, offset)", "getbit(key, offset)", "Get bit."),
        _entry("bitmaps", "bitcount(key, start?, end?)", "bitcount(key, start?, end?)", "Count set bits."),
        _entry("hyperloglog", "pfadd(key, elements)", "pfadd(key, elements)", "Add to HyperLogLog."),
        _entry("hyperloglog", "pfcount(key|keys)", "pfcount(key|keys)", "Estimate cardinality."),
        _entry("hyperloglog", "pfmerge(destKey, sourceKeys)", "pfmerge(destKey, sourceKeys)", "Merge HLLs."),
        _entry(
            "json",
            "GlideJson.set(client, key, path, value)",
            "GlideJson.set(client, key, path, value)",
            "Set JSON value.",
        ),
        _entry(
            "json",
            "GlideJson.get(client, key, { path })",
            "GlideJson.get(client, key, { path })",
            "Get JSON value.",
        ),
        _entry(
            "strings",
            "incr | decr | mGet | mSet | append | strLen",
            "incr | decr | mGet | mSet | append | strLen",
            "Common string operations.",
        ),
        _entry(
            "keys",
            "exists | ttl | persist | rename | scan",
            "exists | ttl | persist | rename | scan",
            "Key utilities and scan.",
        ),
        _entry(
            "hashes",
            "hGetAll | hMGet | hMSet | hIncrBy | hDel | hExists | hLen | hKeys | hVals | hScan",
            "hGetAll | hMGet | hMSet | hIncrBy | hDel | hExists | hLen | hKeys | hVals | hScan",
            "Hash utilities.",
        ),
        _entry(
            "lists",
            "lRange | lLen | lPop | rPop | rPush | lTrim",
            "lRange | lLen | lPop | rPop | rPush | lTrim",
            "List utilities.",
        ),
        _entry(
            "sets",
            "sRem | sCard | sPop | sRandMember | sDiff | sInter | sUnion",
            "sRem | sCard | sPop | sRandMember | sDiff | sInter | sUnion",
            "Set utilities.",
        ),
        _entry(
            "zsets",
            "zCard | zScore | zIncrBy | zRank | zRevRank | zCount | zRemRangeByScore "
            "| zRemRangeByRank | zPopMax | zPopMin",
            "zCard | zScore | zIncrBy | zRank | zRevRank | zCount | zRemRangeByScore "
            "| zRemRangeByRank | zPopMax | zPopMin",
            "Sorted set utilities.",
        ),
        _entry("geo", "geoDist | geoPos | geoHash", "geoDist | geoPos | geoHash", "Geo utilities."),
        _entry("bitmaps", "bitOp | bitPos", "bitOp | bitPos", "Bitmap ops."),
        _entry(
            "scripts",
            "evalSha | scriptLoad | scriptExists | scriptFlush",
            "scriptLoad | scriptExists | scriptFlush",
            "Scripting helpers.",
        ),
        _entry(
            "pubsub",
            "pSubscribe | pUnsubscribe",
            PSUBSCRIBE_GLIDE,
            "Pattern Pub/Sub via customCommand and getPubSubMessage.",
        ),
    ),
)

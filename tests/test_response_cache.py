from flightmint.cache import ResponseCache


def test_get_returns_body_until_ttl_expires(clock):
    cache = ResponseCache(ttl_seconds=60, clock=clock)
    cache.set("https://opensky.test/api/states/all", {"states": []})

    clock.advance(30)
    assert cache.get("https://opensky.test/api/states/all") == {"states": []}

    clock.advance(30)
    assert cache.get("https://opensky.test/api/states/all") is None
    assert cache.stats["entries"] == 0


def test_entries_are_keyed_by_url(clock):
    cache = ResponseCache(ttl_seconds=60, clock=clock)
    cache.set("https://a.test/states/all", {"from": "a"})
    cache.set("https://b.test/states/all", {"from": "b"})

    assert cache.get("https://a.test/states/all") == {"from": "a"}
    assert cache.get("https://b.test/states/all") == {"from": "b"}
    assert cache.get("https://c.test/states/all") is None


def test_oldest_entries_evicted_over_capacity(clock):
    cache = ResponseCache(ttl_seconds=60, max_entries=2, clock=clock)
    for name in ("a", "b", "c"):
        cache.set(name, name)
        clock.advance(1)

    assert cache.get("a") is None
    assert cache.get("b") == "b"
    assert cache.get("c") == "c"


def test_zero_ttl_stores_nothing(clock):
    cache = ResponseCache(ttl_seconds=0, clock=clock)
    cache.set("url", {"states": []})

    assert cache.get("url") is None
    assert cache.stats["entries"] == 0


def test_stats_track_hits_and_misses(clock):
    cache = ResponseCache(ttl_seconds=60, clock=clock)
    cache.get("url")
    cache.set("url", {})
    cache.get("url")
    cache.get("url")

    stats = cache.stats
    assert stats["hits"] == 2
    assert stats["misses"] == 1
    assert stats["hit_rate"] == 2 / 3
    assert stats["ttl_seconds"] == 60


def test_invalidate_and_clear(clock):
    cache = ResponseCache(ttl_seconds=60, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)

    cache.invalidate("a")
    assert cache.get("a") is None
    assert cache.get("b") == 2

    cache.clear()
    assert cache.get("b") is None

import threading

from gamescout_core.ttl_cache import TTLCache


def test_missing_key_is_not_found(cache):
    value, found = cache.try_get("nope")
    assert found is False
    assert value is None


def test_set_then_get_within_ttl(cache, clock):
    cache.set("k", [1, 2], ttl=300)
    clock.advance(299)
    value, found = cache.try_get("k")
    assert found is True
    assert value == [1, 2]


def test_entry_expires_strictly(cache, clock):
    cache.set("k", "v", ttl=300)

    # Expiry exactly reached is already stale
    clock.advance(300)
    assert cache.try_get("k") == (None, False)

    clock.advance(1)
    assert cache.try_get("k") == (None, False)


def test_expired_entry_is_replaced_on_set(cache, clock):
    cache.set("k", "old", ttl=10)
    clock.advance(20)
    cache.set("k", "new", ttl=10)
    assert cache.try_get("k") == ("new", True)
    assert len(cache) == 1


def test_empty_values_are_cacheable(cache):
    cache.set("empty", (), ttl=60)
    assert cache.try_get("empty") == ((), True)


def test_concurrent_writers_do_not_corrupt_state():
    cache = TTLCache()

    def writer(offset):
        for i in range(200):
            cache.set(f"key-{offset}-{i}", i, ttl=60)

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cache) == 800
    assert cache.try_get("key-3-199") == (199, True)

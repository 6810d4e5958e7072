"""
Тесты кэша запросов витрины.
"""

from storefront.services.cache import QueryCache


def counting_loader(calls, value):
    def load():
        calls.append(value)
        return value

    return load


def test_cached_value_is_reused():
    cache = QueryCache(ttl=60)
    calls = []

    assert cache.get_or_load(("brands", "all"), counting_loader(calls, 1)) == 1
    assert cache.get_or_load(("brands", "all"), counting_loader(calls, 2)) == 1
    assert calls == [1]


def test_invalidate_by_query_name():
    cache = QueryCache(ttl=60)
    calls = []
    cache.get_or_load(("products", "list", "size=40"), counting_loader(calls, "a"))
    cache.get_or_load(("brands", "all"), counting_loader(calls, "b"))

    cache.invalidate("products")

    assert cache.get_or_load(("products", "list", "size=40"), counting_loader(calls, "c")) == "c"
    assert cache.get_or_load(("brands", "all"), counting_loader(calls, "d")) == "b"


def test_expired_entries_are_removed():
    cache = QueryCache(ttl=0)

    for i in range(1000):
        cache.get_or_load(("products", "list", f"search=q{i}"), lambda: i)

    assert len(cache._entries) <= 1


def test_oldest_entries_are_evicted_over_limit():
    cache = QueryCache(ttl=60, max_entries=2)
    calls = []
    for name in ("a", "b", "c"):
        cache.get_or_load(("products", name), counting_loader(calls, name))

    assert len(cache._entries) == 2
    cache.get_or_load(("products", "c"), counting_loader(calls, "c2"))
    cache.get_or_load(("products", "a"), counting_loader(calls, "a2"))
    assert calls == ["a", "b", "c", "a2"]

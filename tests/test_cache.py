from utils.cache import ListingCache


def test_key_ignores_category_order_and_duplicates():
    assert ListingCache.key(0, 12, [3, 1, 3], None) == ListingCache.key(0, 12, [1, 3], None)
    assert ListingCache.key(0, 12, [], True) != ListingCache.key(0, 12, [], False)


def test_invalidate_drops_entries():
    cache = ListingCache()
    key = cache.key(0, 12, None, None)
    cache.set(key, "page", cache.generation)

    cache.invalidate()

    assert cache.get(key) is None


def test_page_computed_before_invalidation_is_not_stored():
    cache = ListingCache()
    key = cache.key(0, 12, None, None)
    generation = cache.generation

    cache.invalidate()  # a mutation lands while the page is being built

    assert cache.set(key, "stale", generation) is False
    assert cache.get(key) is None


def test_oldest_entry_evicted_when_full():
    cache = ListingCache(max_entries=2)
    g = cache.generation
    for offset in range(3):
        cache.set(cache.key(offset, 12, None, None), offset, g)

    assert len(cache) == 2
    assert cache.get(cache.key(0, 12, None, None)) is None
    assert cache.get(cache.key(2, 12, None, None)) == 2

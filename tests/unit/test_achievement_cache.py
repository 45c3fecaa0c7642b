import threading

from app.services.achievement_cache import AchievementCache


def test_invalidate_drops_only_that_user() -> None:
    cache = AchievementCache(ttl_seconds=60)
    cache.set('alice', {'gold': 1})
    cache.set('bob', {'gold': 0})

    cache.invalidate('comp-1', 'alice')

    assert cache.get('alice') is None
    assert cache.get('bob') == {'gold': 0}
    assert len(cache) == 1


def test_zero_ttl_disables_caching() -> None:
    cache = AchievementCache(ttl_seconds=0)
    cache.set('alice', {'gold': 1})
    assert cache.get('alice') is None
    assert len(cache) == 0


def test_len_waits_for_the_lock() -> None:
    cache = AchievementCache(ttl_seconds=60)
    cache.set('alice', {})
    sizes = []
    reader = threading.Thread(target=lambda: sizes.append(len(cache)))

    with cache._lock:
        reader.start()
        reader.join(timeout=0.2)
        assert reader.is_alive()

    reader.join(timeout=5)
    assert sizes == [1]

# =============================================
# File: tests/test_store_concurrency.py
# Purpose: Many threads on overlapping keys must leave the store consistent
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import random
import threading
from concurrent.futures import ThreadPoolExecutor

from ttl_lru_service.services.store import TTLLRUStore


def _worker(store: TTLLRUStore, seed: int, ops: int, errors: list) -> None:
    rnd = random.Random(seed)
    try:
        for _ in range(ops):
            key = f"k{rnd.randint(0, 40)}"
            if rnd.random() < 0.5:
                store.set(key, f"v{seed}", rnd.choice([-1, 0, 1, 60]))
            else:
                value, found = store.get(key)
                if found:
                    assert value.startswith("v")
                else:
                    assert value == ""
            if len(store) > store.capacity:
                errors.append("capacity exceeded")
    except Exception as e:
        errors.append(f"{type(e).__name__}: {e}")


def test_concurrent_mixed_ops_keep_invariants():
    store = TTLLRUStore(16)
    errors: list = []

    threads = [
        threading.Thread(target=_worker, args=(store, seed, 2000, errors))
        for seed in range(8)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    store.check_invariants()
    assert len(store) <= 16
    assert len(store.keys()) == len(store)


def test_concurrent_distinct_inserts_never_exceed_capacity():
    store = TTLLRUStore(50)

    def insert(batch: int) -> None:
        for i in range(200):
            store.set(f"b{batch}-{i}", "x", 60)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(insert, range(8)))

    store.check_invariants()
    assert len(store) == 50
    stats = store.stats()
    assert stats.evictions == 8 * 200 - 50


def test_concurrent_overwrites_of_one_key_do_not_evict():
    store = TTLLRUStore(2)
    store.set("other", "o", 60)

    def overwrite(n: int) -> None:
        for _ in range(500):
            store.set("hot", str(n), 60)

    with ThreadPoolExecutor(max_workers=6) as pool:
        list(pool.map(overwrite, range(6)))

    assert len(store) == 2
    assert store.stats().evictions == 0
    assert store.get("other") == ("o", True)
    value, found = store.get("hot")
    assert found and value in {str(n) for n in range(6)}

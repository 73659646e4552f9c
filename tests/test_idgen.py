import threading

from wampproto.idgen import MAX_ID, SessionScopeIDGenerator


def test_starts_at_one_and_counts_up():
    gen = SessionScopeIDGenerator()
    assert [gen.next_id() for _ in range(3)] == [1, 2, 3]


def test_generators_are_independent():
    first, second = SessionScopeIDGenerator(), SessionScopeIDGenerator()
    first.next_id()
    assert second.next_id() == 1


def test_reaches_max_then_wraps():
    gen = SessionScopeIDGenerator()
    gen._current = MAX_ID - 1
    assert gen.next_id() == MAX_ID
    assert gen.next_id() == 1


def test_unique_across_threads():
    gen = SessionScopeIDGenerator()
    per_thread = [[] for _ in range(8)]

    def worker(bucket):
        for _ in range(200):
            bucket.append(gen.next_id())

    threads = [threading.Thread(target=worker, args=(bucket,)) for bucket in per_thread]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    collected = sorted(value for bucket in per_thread for value in bucket)
    assert collected == list(range(1, 1601))
    assert gen.next_id() == 1601
from sporkle.ratelimit import RateLimiter


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_first_request_allowed():
    limiter = RateLimiter(FakeClock())
    assert limiter.limited("alice") is False


def test_burst_then_limited():
    limiter = RateLimiter(FakeClock())
    results = [limiter.limited("alice") for _ in range(8)]
    allowed = results.count(False)
    assert allowed == 5
    assert results[:allowed] == [False] * allowed
    assert all(results[allowed:])


def test_nicks_are_independent():
    limiter = RateLimiter(FakeClock())
    for _ in range(10):
        limiter.limited("alice")
    assert limiter.limited("alice") is True
    assert limiter.limited("bob") is False


def test_steady_rate_never_limited():
    clock = FakeClock()
    limiter = RateLimiter(clock)
    outcomes = []
    for _ in range(20):
        outcomes.append(limiter.limited("alice"))
        clock.now += 15.0
    assert outcomes == [False] * 20


def test_recovers_after_waiting():
    clock = FakeClock()
    limiter = RateLimiter(clock)
    for _ in range(10):
        limiter.limited("alice")
    assert limiter.limited("alice") is True
    clock.now += 3600.0
    assert limiter.limited("alice") is False


def test_refused_request_does_not_reset_timer():
    clock = FakeClock()
    limiter = RateLimiter(clock)
    while not limiter.limited("alice"):
        pass
    clock.now += 15.0
    assert limiter.limited("alice") is True
    clock.now += 15.0
    assert limiter.limited("alice") is False
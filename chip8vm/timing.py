import logging
import time

log = logging.getLogger(__name__)

CPU_HZ = 700
TIMER_HZ = 60


class Pacer:
    """Runs instructions at a fixed rate against a monotonic clock.

    Elapsed wall time is added to an accumulator on every pump(); one
    instruction runs for each whole period it holds. After a stall (the host
    was busy drawing) the backlog is worked off in one go, so long-run
    throughput stays at ``rate``. If ``max_backlog`` is set, owed time beyond
    that many seconds is dropped instead.
    """

    def __init__(self, step, rate=CPU_HZ, clock=time.perf_counter, max_backlog=None):
        if rate <= 0:
            raise ValueError("instruction rate must be positive")
        self.step = step
        self.rate = rate
        self.period = 1.0 / rate
        self.clock = clock
        self.max_backlog = max_backlog
        self.accumulated = 0.0
        self.last = clock()

    def reset(self):
        self.accumulated = 0.0
        self.last = self.clock()

    def pump(self):
        now = self.clock()
        self.accumulated += now - self.last
        self.last = now

        if self.max_backlog is not None and self.accumulated > self.max_backlog:
            log.warning("Dropping %.3fs of emulation after a stall",
                        self.accumulated - self.max_backlog)
            self.accumulated = self.max_backlog

        executed = 0
        while self.accumulated >= self.period:
            self.accumulated -= self.period
            self.step()
            executed += 1
        return executed

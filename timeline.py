# timeline.py

import heapq
import itertools
import pygame


class MonotonicClock:
    """Milliseconds since pygame.init(), as reported by pygame."""

    def now(self) -> int:
        return pygame.time.get_ticks()


class ManualClock:
    """
    A virtual clock that only moves when told to.
    Used to drive the show deterministically, e.g. from tests.
    """

    def __init__(self, start: float = 0):
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, milliseconds: float):
        self.current += milliseconds

    def set(self, milliseconds: float):
        self.current = milliseconds


class Timeline:
    """
    Deferred events keyed by absolute clock time.

    Events are only ever run from fire_due(), which the owning fire element
    calls at the start of each frame. A transition scheduled during one frame
    therefore becomes visible on the next.

    Data Contract:
    - Inputs: clock - Any object with a now() method returning milliseconds.
    - Outputs: None.
    - Side Effects: Runs scheduled callbacks.
    - Invariants: Events fire in order of due time; events with equal due
      times fire in the order they were scheduled.
    """

    def __init__(self, clock):
        self.clock = clock
        self._events = []
        self._counter = itertools.count()

    def __len__(self):
        return len(self._events)

    def schedule(self, delay: float, callback):
        """Runs callback once the clock has moved `delay` milliseconds past now."""
        due = self.clock.now() + delay
        heapq.heappush(self._events, (due, next(self._counter), callback))
        return due

    def fire_due(self) -> int:
        """
        Runs every event whose due time has been reached.
        Callbacks may schedule further events; those that are already due
        run in the same call.
        """
        now = self.clock.now()
        fired = 0
        while self._events and self._events[0][0] <= now:
            _, _, callback = heapq.heappop(self._events)
            callback()
            fired += 1
        return fired

    def clear(self):
        """Drops all pending events."""
        self._events.clear()

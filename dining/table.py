"""The dining philosophers simulation: forks, philosophers and the monitor."""

from __future__ import annotations

import sys
import threading
import time
from typing import TextIO

from dining.config import Settings

_POLL_SECONDS = 0.00005
_MONITOR_POLL_SECONDS = 0.0001


def now_ms() -> int:
    """Wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


def _emit(out: TextIO, line: str) -> None:
    out.write(line + "\n")
    out.flush()


class Table:
    """Shared state of a run: the forks, the philosophers and the stop flag."""

    def __init__(self, settings: Settings, out: TextIO | None = None) -> None:
        if settings.philosophers < 2:
            raise ValueError("a table needs at least two philosophers")
        self.settings = settings
        self.out = out if out is not None else sys.stdout
        self._print_lock = threading.Lock()
        self._dead_lock = threading.Lock()
        self._eat_lock = threading.Lock()
        self._dead = False
        self.start_time = now_ms()
        count = settings.philosophers
        forks = [threading.Lock() for _ in range(count)]
        self.philosophers = [
            Philosopher(self, index + 1, forks[index], forks[(index + 1) % count])
            for index in range(count)
        ]

    def is_over(self) -> bool:
        """Whether the simulation has been stopped."""
        with self._dead_lock:
            return self._dead

    def stop(self) -> None:
        """Stop the simulation without printing anything."""
        with self._dead_lock:
            self._dead = True

    def report(self, philosopher: Philosopher, message: str, final: bool = False) -> None:
        """Print a timestamped status line unless the run is over.

        A final report stops the simulation after it is printed.
        """
        with self._print_lock, self._dead_lock:
            if not self._dead:
                elapsed = now_ms() - self.start_time
                _emit(self.out, f"{elapsed} {philosopher.ident} {message}")
            if final:
                self._dead = True

    def pause(self, duration_ms: int) -> None:
        """Wait for the given time, returning early once the run is over."""
        start = now_ms()
        while now_ms() - start < duration_ms:
            if self.is_over():
                break
            time.sleep(_POLL_SECONDS)

    def add_meal(self, philosopher: Philosopher) -> None:
        """Count one finished meal for a philosopher."""
        with self._eat_lock:
            philosopher.meals += 1

    def all_fed(self) -> bool:
        """Whether every philosopher has eaten the required number of meals."""
        target = self.settings.meals
        if target is None:
            return False
        with self._eat_lock:
            fed = sum(1 for p in self.philosophers if p.meals >= target)
        return fed >= len(self.philosophers)

    def monitor(self) -> Philosopher | None:
        """Watch for starvation or completion; return who died, if anyone."""
        time.sleep(20 * (len(self.philosophers) // 2) / 1_000_000)
        die = self.settings.time_to_die
        while True:
            for philosopher in self.philosophers:
                with philosopher.meal_lock:
                    if now_ms() - philosopher.last_eat >= die:
                        self.report(philosopher, "died", final=True)
                        return philosopher
            if self.all_fed():
                self.stop()
                return None
            time.sleep(_MONITOR_POLL_SECONDS)

    def run(self) -> Philosopher | None:
        """Run the simulation to its end; return the philosopher who died."""
        threads = [
            threading.Thread(target=p.run, name=f"philosopher-{p.ident}")
            for p in self.philosophers
        ]
        for thread in threads:
            thread.start()
        try:
            return self.monitor()
        finally:
            self.stop()
            for thread in threads:
                thread.join()


class Philosopher:
    """One philosopher sitting between two forks."""

    def __init__(
        self,
        table: Table,
        ident: int,
        left_fork: threading.Lock,
        right_fork: threading.Lock,
    ) -> None:
        self.table = table
        self.ident = ident
        self.left_fork = left_fork
        self.right_fork = right_fork
        self.meal_lock = threading.Lock()
        self.last_eat = table.start_time
        self.meals = 0

    def take_forks(self) -> None:
        """Pick up both forks; even seats start left, odd seats start right."""
        if self.ident % 2 == 0:
            first, second = self.left_fork, self.right_fork
        else:
            time.sleep(0.0001)
            first, second = self.right_fork, self.left_fork
        first.acquire()
        self.table.report(self, "has taken a fork")
        second.acquire()
        self.table.report(self, "has taken a fork")

    def release_forks(self) -> None:
        """Put both forks back on the table."""
        self.left_fork.release()
        self.right_fork.release()

    def mark_meal(self) -> None:
        """Record now as the start of the latest meal."""
        with self.meal_lock:
            self.last_eat = now_ms()

    def eat(self) -> None:
        """Eat one meal while holding both forks."""
        self.mark_meal()
        self.table.report(self, "is eating")
        self.table.pause(self.table.settings.time_to_eat)
        self.table.add_meal(self)

    def sleep(self) -> None:
        """Sleep after a meal."""
        self.table.report(self, "is sleeping")
        self.table.pause(self.table.settings.time_to_sleep)

    def think(self) -> None:
        """Think, lingering when the timing leaves plenty of slack."""
        self.table.report(self, "is thinking")
        settings = self.table.settings
        thinking_time = settings.time_to_die - settings.time_to_eat - settings.time_to_sleep
        if thinking_time > 60:
            self.table.pause(thinking_time - 10)

    def run(self) -> None:
        """Eat, sleep and think until the simulation stops."""
        self.mark_meal()
        while not self.table.is_over():
            self.take_forks()
            try:
                self.eat()
            finally:
                self.release_forks()
            if self.table.is_over():
                return
            self.sleep()
            self.think()


def run_single(settings: Settings, out: TextIO | None = None) -> None:
    """Simulate a lone philosopher, who holds one fork and starves."""
    stream = out if out is not None else sys.stdout
    start_time = now_ms()
    _emit(stream, f"{now_ms() - start_time} 1 has taken a fork")
    start = now_ms()
    while now_ms() - start < settings.time_to_die:
        time.sleep(0.0001)
    _emit(stream, f"{now_ms() - start_time} 1 is died")
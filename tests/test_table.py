import io
import re
import threading
import time

import pytest

from dining.config import Settings
from dining.table import Table, now_ms, run_single

LINE = re.compile(r"^(\d+) (\d+) (.+)$")


def parse_lines(text):
    rows = []
    for line in text.splitlines():
        match = LINE.match(line)
        assert match is not None, line
        rows.append((int(match.group(1)), int(match.group(2)), match.group(3)))
    return rows


def test_now_ms_tracks_wall_clock():
    before = time.time() * 1000
    value = now_ms()
    after = time.time() * 1000
    assert before - 1 <= value <= after + 1


def test_table_needs_two_philosophers():
    with pytest.raises(ValueError):
        Table(Settings(1, 800, 200, 200), io.StringIO())


def test_forks_are_shared_between_neighbours():
    table = Table(Settings(4, 800, 200, 200), io.StringIO())
    seats = table.philosophers
    assert [p.ident for p in seats] == [1, 2, 3, 4]
    for index, philosopher in enumerate(seats):
        assert philosopher.right_fork is seats[(index + 1) % len(seats)].left_fork
        assert philosopher.meals == 0


def test_report_format_and_final_stops_output():
    out = io.StringIO()
    table = Table(Settings(2, 800, 200, 200), out)
    first, second = table.philosophers
    table.report(second, "is eating")
    assert not table.is_over()
    table.report(first, "died", final=True)
    table.report(second, "is sleeping")
    rows = parse_lines(out.getvalue())
    assert [(ident, message) for _, ident, message in rows] == [
        (2, "is eating"),
        (1, "died"),
    ]
    assert table.is_over()


def test_stop_silences_reports():
    out = io.StringIO()
    table = Table(Settings(2, 800, 200, 200), out)
    table.stop()
    table.report(table.philosophers[0], "is thinking")
    assert out.getvalue() == ""
    assert table.is_over()


def test_pause_waits_the_duration():
    out = io.StringIO()
    table = Table(Settings(2, 800, 200, 200), out)
    start = time.monotonic()
    table.pause(30)
    elapsed = time.monotonic() - start
    assert elapsed >= 0.028
    assert table.is_over() is False
    assert out.getvalue() == ""


def test_pause_returns_early_when_stopped():
    table = Table(Settings(2, 800, 200, 200), io.StringIO())
    timer = threading.Timer(0.05, table.stop)
    timer.start()
    start = time.monotonic()
    table.pause(10_000)
    elapsed = time.monotonic() - start
    timer.join()
    assert elapsed < 2
    assert table.is_over() is True


def test_all_fed_without_target_is_false():
    table = Table(Settings(2, 800, 200, 200), io.StringIO())
    assert table.all_fed() is False


def test_all_fed_counts_meals():
    table = Table(Settings(2, 800, 200, 200, meals=1), io.StringIO())
    assert table.all_fed() is False
    table.add_meal(table.philosophers[0])
    assert table.all_fed() is False
    table.add_meal(table.philosophers[1])
    assert table.all_fed() is True


def test_mark_meal_updates_last_eat():
    table = Table(Settings(2, 800, 200, 200), io.StringIO())
    philosopher = table.philosophers[0]
    before = now_ms()
    philosopher.mark_meal()
    assert philosopher.last_eat >= before


def test_run_stops_when_everyone_has_eaten():
    out = io.StringIO()
    table = Table(Settings(2, 260, 100, 100, meals=2), out)
    dead = table.run()
    assert dead is None
    assert all(p.meals >= 2 for p in table.philosophers)
    rows = parse_lines(out.getvalue())
    assert all(message != "died" for _, _, message in rows)
    times = [stamp for stamp, _, _ in rows]
    assert times == sorted(times)
    eating = [ident for _, ident, message in rows if message == "is eating"]
    assert eating.count(1) >= 2 and eating.count(2) >= 2


def test_run_with_zero_meals_finishes_at_once():
    out = io.StringIO()
    table = Table(Settings(3, 800, 200, 200, meals=0), out)
    assert table.run() is None
    assert "died" not in out.getvalue()
    assert table.is_over()


def test_run_reports_a_death_last():
    out = io.StringIO()
    table = Table(Settings(2, 100, 200, 100), out)
    dead = table.run()
    assert dead in table.philosophers
    rows = parse_lines(out.getvalue())
    assert rows[-1][2] == "died"
    assert rows[-1][1] == dead.ident
    assert sum(1 for _, _, message in rows if message == "died") == 1
    assert rows[-1][0] >= 100


def test_run_single_starves():
    out = io.StringIO()
    run_single(Settings(1, 50, 200, 200), out)
    rows = parse_lines(out.getvalue())
    assert [(ident, message) for _, ident, message in rows] == [
        (1, "has taken a fork"),
        (1, "is died"),
    ]
    assert rows[1][0] >= 50
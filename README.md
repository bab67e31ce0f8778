# dining

A simulation of the dining philosophers problem. Each philosopher is a
thread. The philosophers sit around a table, with one fork between each
pair of neighbours. A philosopher needs both neighbouring forks to eat. A
philosopher dies if too much time passes after their last meal started. A
monitor watches the table and ends the simulation when someone dies or when
everyone has eaten enough.

## Installation

```
pip install .
```

## Usage

```
dining NUMBER_OF_PHILOSOPHERS TIME_TO_DIE TIME_TO_EAT TIME_TO_SLEEP [MEALS_EACH]
```

The same command can also be run as `python -m dining.cli ...`.

All times are in milliseconds. Each argument must be written with digits
only. It may not have a sign, spaces or other characters, and it may not be
larger than 2147483647. There must be at least one philosopher.

- `TIME_TO_DIE`: a philosopher dies once this much time has passed since
  their last meal started, or since they sat down.
- `TIME_TO_EAT`: how long a meal takes. The philosopher holds both forks
  while eating.
- `TIME_TO_SLEEP`: how long a philosopher sleeps after eating.
- `MEALS_EACH` (optional): the simulation stops when every philosopher has
  eaten at least this many meals. Without it, the simulation runs until a
  philosopher dies.

Example:

```
dining 5 800 200 200 7
```

Each state change is printed as one line. The line gives the milliseconds
since the start, the philosopher's number (counting from 1), and the event:

```
0 1 has taken a fork
0 1 has taken a fork
0 1 is eating
200 1 is sleeping
400 1 is thinking
...
```

The events are `has taken a fork`, `is eating`, `is sleeping`, `is thinking`
and `died`. When a philosopher dies, `died` is the last line printed.

Philosophers with even numbers pick up their left fork first. Philosophers
with odd numbers pick up their right fork first. A philosopher only lingers
while thinking when `TIME_TO_DIE - TIME_TO_EAT - TIME_TO_SLEEP` is more than
60 ms, and then waits 10 ms less than that.

With a single philosopher there is only one fork. The philosopher takes it,
waits `TIME_TO_DIE` milliseconds and then prints `1 is died`.

Exit status and errors:

- If the number of arguments is not four or five, `error` goes to standard
  error and the exit status is 1.
- If an argument is not valid, a message explaining why goes to standard
  output and the exit status is 1.
- Otherwise the exit status is 0.

## Using the library

```python
import sys

from dining.config import parse_settings
from dining.table import Table

settings = parse_settings(["4", "410", "200", "200", "3"])
dead = Table(settings, sys.stdout).run()
print("died:", dead.ident if dead else None)
```

The library provides these names:

- `dining.config.parse_settings(args)` turns four or five argument strings
  into a frozen `Settings` dataclass. The dataclass has the fields
  `philosophers`, `time_to_die`, `time_to_eat`, `time_to_sleep` and `meals`.
  `meals` is `None` when no meal count was given. `parse_settings` raises
  `dining.config.ArgumentError`, a subclass of `ValueError`, when the
  arguments are not valid.
- `dining.config.parse_number(text)` parses one unsigned decimal argument in
  the same way.
- `dining.table.Table(settings, out)` sets up the table, and `Table.run()`
  runs it to the end. `run()` returns the `Philosopher` who died, or `None`
  if every philosopher ate enough. A `Table` needs at least two philosophers;
  with fewer it raises `ValueError`.
- `dining.table.run_single(settings, out)` runs the one-philosopher case.

For `Table` and `run_single`, `out` is any text stream. When it is left out,
output goes to standard output.

## Running the tests

```
pip install .[test]
pytest
```
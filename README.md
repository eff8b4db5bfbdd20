# sysprog

A collection of small systems-programming tools:

- `sysprog.parser` – an incremental command-line parser. Feed it text in
  any chunks; it hands back complete command lines made of commands,
  pipes (`|`), logical operators (`&&`, `||`), output redirection
  (`>`, `>>`) and a background marker (`&`). Single and double quotes,
  backslash escapes, line continuations and `#` comments are understood.
- `sysprog.shell` – a tiny shell that reads command lines from standard
  input and runs their commands.
- `sysprog.coro` – a cooperative coroutine scheduler built on generators.
- `sysprog.sorting` – merge sort with yield points, plus helpers to read,
  write and merge files of whitespace-separated integers.
- `sysprog.sortfiles` – sorts several files with coroutines that share a
  latency budget, then merges the results.
- `sysprog.kmerge` – generation of random number files and a heap-based
  k-way merge of sorted files.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command-line tools

Run the shell, reading commands from standard input:

```
sysprog-shell
```

A line that cannot be parsed is dropped and reported as `Error: <code>`,
where the code is the value of `sysprog.parser.ParserErrorCode`.

Sort files of integers with `N` coroutines and a target latency of `T`
microseconds:

```
sysprog-sortfiles -n 3 -t 1000 numbers1.txt numbers2.txt numbers3.txt
```

Each coroutine gets a quota of `T/N` microseconds before it hands control
on. Every coroutine reports its switch count and working time when it
finishes, and the total elapsed time is printed at the end. Both `-n` and
`-t` must be greater than zero.

## Library use

Parsing command lines:

```python
from sysprog.parser import Parser, ParseError

parser = Parser()
parser.feed("echo 100 | grep 1 > out.txt &\n")
try:
    line = parser.pop_next()
except ParseError as err:
    print("bad line:", err.code.name)
else:
    if line is not None:
        print(line.out_type, line.out_file, line.is_background)
        for expr in line.exprs:
            print(expr.type, expr.cmd)
```

`pop_next()` returns `None` while no complete line is available yet.
`sysprog.shell.describe_command_line(line)` returns a readable summary of
a parsed line, and `execute_command_line(line)` runs it and returns the
exit codes of its commands.

Cooperative coroutines are generator functions; a bare `yield` hands
control to the next one:

```python
from sysprog.coro import Scheduler

def count(name, n):
    for i in range(n):
        yield
    return name

scheduler = Scheduler()
scheduler.spawn(count, "a", 3)
scheduler.spawn(count, "b", 1)
for coro in scheduler:
    print(coro.status, coro.switch_count)
```

Sorting and merging numbers:

```python
from sysprog.sorting import load_files, merge_all
from sysprog.kmerge import generate_files, merge_files

paths = generate_files(".", count=3, numbers_per_file=100, seed=1)
files = load_files(paths)
for f in files:
    for _ in f.sort():
        pass
print(merge_all(files)[:10])

merge_files(["0", "1", "2"], "result.dat")
```

`merge_files` expects its input files to be sorted already.

## What the shell does not do

`execute_command_line` runs the commands of a line one after another,
waiting for each before starting the next. The output of a command is fed
to the next command of the line whenever anything follows it, whether the
operator between them is `|`, `&&` or `||`. The logical operators do not
skip commands, output redirection (`>`, `>>`) is parsed but not applied,
and `&` does not run a line in the background. There are no built-in
commands such as `cd` or `exit`.

The package has no thread pool or other facility for running tasks in
parallel threads.
# jzlog

Named log libraries for Python applications. Each library has its own
log directory, file policy and separate severity thresholds for the
console and for files. A manager hands them out by name and is safe to
use from several threads.

The package also carries a few companion tools:

- a demangler for Itanium C++ ABI symbol names, with a command-line
  entry point;
- helpers that read settings from environment variables;
- a scoped capture of logged messages for tests;
- a helper that returns the caller's Python stack frames.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Creating and using a log

```python
from jzlog.library import create_log, get_log, cleanup_log

log = create_log("billing")          # a new, named log library
log.set_log_dir("./logs")
log.log(2, "service started")        # levels 1 (debug) to 5 (fatal)

same = get_log("billing")            # the same object, or None if unknown
cleanup_log(log)                     # unregister it and close its file
```

`create_log`, `get_log` and `cleanup_log` work on a process-wide
`LogManager`; you can also create your own `LogManager` and use its
`add_log`, `get_log` and `remove_log` methods. `add_log` raises
`LogError` when the name is already registered.

A `LogLibrary` is configured with:

- `set_log_dir(path)`: the directory for log files (default `./`).
  `None` or a path longer than 256 bytes raises `LogError`.
- `set_log_property(file_mode, file_size)`: a `FileMode` and a size
  limit in megabytes, from 1 to 1000 (default 10); anything outside that
  range raises `LogError`.
  - `FileMode.REWIND` writes to `<name>.log` and empties it when the
    limit would be exceeded.
  - `FileMode.CREATE` writes to `<name>.<YYYYmmdd-HHMMSS>.<pid>.log` and
    starts a new such file when the limit would be exceeded.
- `set_log_level(target, level)`: the lowest 1-based level written to
  `OutputTarget.CONSOLE` (standard error) or `OutputTarget.FILE`. Both
  default to debug.

`log(level, message)` raises `LogError` for a level outside 1–5. Each
line starts with the severity's letter, the date and time, the thread
id and the calling file and line, followed by the message.

`jzlog.severity` holds the `Severity` enum (`DEBUG` … `FATAL`, numbered
0–4) and `from_jz_level`, which maps the 1–5 levels onto it.

## Stream-style messages

`jzlog.stream` builds a message piece by piece and logs it once the
stream is closed, either by `close()` or at the end of a `with` block.
Messages are capped at 4096 characters: text is cut to fit, numbers that
would not fit are dropped.

```python
from jzlog.library import create_log
from jzlog.stream import info

log = create_log("worker")
with info(log) as stream:
    stream << "processed " << 42 << " items"
```

`write(value)` (or `<<`) accepts strings, `None` (written as `null`),
booleans (`true`/`false`), integers and floats; other types raise
`TypeError`. `debug`, `info`, `warn`, `error` and `fatal` open a stream
at their level, prefixed with the calling file and function;
`log_stream(library, level)` takes the level explicitly. With no library
(`None`) nothing is collected or logged.

## Capturing messages in tests

`jzlog.capture.ScopedLogCapture` records every message logged through a
manager's libraries while it is open, as `CapturedMessage` records with
`severity`, `file_path` and `message`.

```python
from jzlog.capture import ScopedLogCapture
from jzlog.library import LogManager

manager = LogManager()
log = manager.add_log("test")
with ScopedLogCapture(manager) as capture:
    log.log(3, "Fishy.")
assert capture.messages[0].message == "Fishy."
```

Without a manager it listens to the process-wide one. An optional
`handler` is called with each captured message and may itself log.

## Demangling symbol names

```python
from jzlog.demangle import demangle, demangle_or_original

demangle("_ZN3FooC1Ev", 64)             # 'Foo::Foo()'
demangle_or_original("not_a_symbol")    # returned unchanged
```

Parameter types and template arguments are skipped, so `_Z1fIiEvi`
becomes `f<>()`. `demangle` raises `DemangleError` when the name cannot
be demangled or the result does not fit in `out_size - 1` characters
(no limit when `out_size` is `None`).

From the command line:

```
jzlog-demangle _ZN3Foo3BarEv
```

prints `Foo::Bar()`. Names that cannot be demangled are printed
unchanged. Without arguments it reads names from standard input, one
per line.

## Other helpers

- `jzlog.envflags`: `env_to_bool`, `env_to_int` and `env_to_string` read
  an environment variable, falling back to a default when it is unset.
  A boolean is true when the value is empty or starts with `t`, `T`,
  `y`, `Y` or `1`; an integer is read from the leading digits, and a
  value without any reads as 0.
- `jzlog.stacktrace`: `get_stack_trace(max_depth, skip_count)` returns
  up to `max_depth` of the caller's Python frames as
  `traceback.FrameSummary` objects, innermost first, after skipping
  `skip_count`; at most 64 frames are examined.

## What it does not do

The package is a library and a demangling command only. It does not
parse command-line flags for log settings, read configuration files,
ship logs over the network, or unwind native stacks; stack traces are
of the Python interpreter's frames.
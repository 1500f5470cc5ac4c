"""Assorted helpers: version strings, a fast PRNG, debug statistics and I/O logging."""

from __future__ import annotations

import math
import os
import platform
import re
import sys
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, TextIO, TypeVar

T = TypeVar("T")

VERSION = "dev"
ENGINE_NAME = "Chesscore"

_MASK64 = (1 << 64) - 1
_SIZE_T_MAX = sys.maxsize * 2 + 1
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_C_WHITESPACE = frozenset(" \t\n\v\f\r")

MAX_DEBUG_SLOTS = 32


# ---------------------------------------------------------------------------
# Version information
# ---------------------------------------------------------------------------


def _build_date() -> str:
    try:
        stamp = Path(__file__).stat().st_mtime
    except OSError:
        stamp = time.time()
    return datetime.fromtimestamp(stamp).strftime("%Y%m%d")


def engine_version_info() -> str:
    """Return the engine name and version, e.g. ``Chesscore dev-20250101-nogit``."""
    text = f"{ENGINE_NAME} {VERSION}"
    if VERSION == "dev":
        text += f"-{_build_date()}-nogit"
    return text


def engine_info(to_uci: bool = False) -> str:
    """Return the version line followed by the author credit."""
    separator = "\nid author " if to_uci else " by "
    return f"{engine_version_info()}{separator}the {ENGINE_NAME} developers"


def compiler_info() -> str:
    """Describe the runtime the engine is executing on."""
    implementation = f"{platform.python_implementation()} {platform.python_version()}"
    system = platform.system() or "unknown system"
    architecture = platform.machine() or "(undefined architecture)"
    settings = "64bit" if sys.maxsize > 2**32 else "32bit"
    return (
        f"\nCompiled by                : {implementation} on {system}"
        f"\nCompilation architecture   : {architecture}"
        f"\nCompilation settings       : {settings}"
        f"\nCompiler version string    : {sys.version.splitlines()[0]}"
        "\n"
    )


# ---------------------------------------------------------------------------
# Pseudo-random numbers
# ---------------------------------------------------------------------------


class PRNG:
    """xorshift64star generator producing 64-bit unsigned integers."""

    def __init__(self, seed: int) -> None:
        seed &= _MASK64
        if not seed:
            raise ValueError("PRNG seed must be non-zero")
        self._state = seed

    def rand64(self) -> int:
        s = self._state
        s ^= s >> 12
        s ^= (s << 25) & _MASK64
        s ^= s >> 27
        self._state = s
        return (s * 2685821657736338717) & _MASK64

    def rand(self) -> int:
        """Return the next 64-bit value."""
        return self.rand64()

    def sparse_rand(self) -> int:
        """Return a value with roughly one eighth of its bits set."""
        return self.rand64() & self.rand64() & self.rand64()


def mul_hi64(a: int, b: int) -> int:
    """Return the high 64 bits of the 128-bit product of two 64-bit values."""
    return ((a & _MASK64) * (b & _MASK64)) >> 64


# ---------------------------------------------------------------------------
# Debug statistics
# ---------------------------------------------------------------------------


@dataclass
class _Slots:
    hit: List[List[int]] = field(default_factory=lambda: [[0, 0] for _ in range(MAX_DEBUG_SLOTS)])
    mean: List[List[int]] = field(default_factory=lambda: [[0, 0] for _ in range(MAX_DEBUG_SLOTS)])
    stdev: List[List[int]] = field(
        default_factory=lambda: [[0, 0, 0] for _ in range(MAX_DEBUG_SLOTS)]
    )
    correl: List[List[int]] = field(
        default_factory=lambda: [[0] * 6 for _ in range(MAX_DEBUG_SLOTS)]
    )
    extremes: List[List[int]] = field(
        default_factory=lambda: [[0, _INT64_MIN, _INT64_MAX] for _ in range(MAX_DEBUG_SLOTS)]
    )


def _checked(table: List[List[int]], slot: int) -> List[int]:
    if not 0 <= slot < MAX_DEBUG_SLOTS:
        raise IndexError(f"debug slot {slot} out of range 0..{MAX_DEBUG_SLOTS - 1}")
    return table[slot]


def _fmt(x: float) -> str:
    if math.isnan(x):
        return "nan"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    return f"{x:g}"


def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0 else math.nan


def _div(num: float, den: float) -> float:
    if den:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num)


class DebugStats:
    """Thread-safe run-time counters collected into numbered slots."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._slots = _Slots()

    def hit_on(self, cond: bool, slot: int = 0) -> None:
        with self._lock:
            entry = _checked(self._slots.hit, slot)
            entry[0] += 1
            if cond:
                entry[1] += 1

    def mean_of(self, value: int, slot: int = 0) -> None:
        with self._lock:
            entry = _checked(self._slots.mean, slot)
            entry[0] += 1
            entry[1] += value

    def stdev_of(self, value: int, slot: int = 0) -> None:
        with self._lock:
            entry = _checked(self._slots.stdev, slot)
            entry[0] += 1
            entry[1] += value
            entry[2] += value * value

    def extremes_of(self, value: int, slot: int = 0) -> None:
        with self._lock:
            entry = _checked(self._slots.extremes, slot)
            entry[0] += 1
            entry[1] = max(entry[1], value)
            entry[2] = min(entry[2], value)

    def correl_of(self, value1: int, value2: int, slot: int = 0) -> None:
        with self._lock:
            entry = _checked(self._slots.correl, slot)
            entry[0] += 1
            entry[1] += value1
            entry[2] += value1 * value1
            entry[3] += value2
            entry[4] += value2 * value2
            entry[5] += value1 * value2

    def report(self) -> str:
        """Return one line per used slot, in the order hits, means, stdevs, extremes, correlations."""
        with self._lock:
            slots = self._slots
            lines: List[str] = []

            for i, (n, hits) in enumerate(slots.hit):
                if n:
                    lines.append(
                        f"Hit #{i}: Total {n} Hits {hits} Hit Rate (%) {_fmt(100.0 * hits / n)}"
                    )

            for i, (n, total) in enumerate(slots.mean):
                if n:
                    lines.append(f"Mean #{i}: Total {n} Mean {_fmt(total / n)}")

            for i, (n, s1, s2) in enumerate(slots.stdev):
                if n:
                    r = _sqrt(s2 / n - (s1 / n) ** 2)
                    lines.append(f"Stdev #{i}: Total {n} Stdev {_fmt(r)}")

            for i, (n, hi, lo) in enumerate(slots.extremes):
                if n:
                    lines.append(f"Extremity #{i}: Total {n} Min {lo} Max {hi}")

            for i, (n, x, xx, y, yy, xy) in enumerate(slots.correl):
                if n:
                    ex, ey = x / n, y / n
                    den = _sqrt(xx / n - ex * ex) * _sqrt(yy / n - ey * ey)
                    r = _div(xy / n - ex * ey, den)
                    lines.append(f"Correl. #{i}: Total {n} Coefficient {_fmt(r)}")

        return "".join(line + "\n" for line in lines)


debug_stats = DebugStats()


# ---------------------------------------------------------------------------
# I/O logging
# ---------------------------------------------------------------------------


class _TeeStream:
    """Wraps a text stream and copies everything passing through it to a log."""

    def __init__(self, stream: TextIO, logger: "IOLogger", prefix: str) -> None:
        self._stream = stream
        self._logger = logger
        self._prefix = prefix

    def write(self, text: str) -> int:
        written = self._stream.write(text)
        self._logger._log(text, self._prefix)
        return written if written is not None else len(text)

    def writelines(self, lines: Sequence[str]) -> None:
        for line in lines:
            self.write(line)

    def read(self, size: int = -1) -> str:
        data = self._stream.read(size)
        self._logger._log(data, self._prefix)
        return data

    def readline(self, size: int = -1) -> str:
        data = self._stream.readline(size)
        self._logger._log(data, self._prefix)
        return data

    def readlines(self) -> List[str]:
        return list(self)

    def __iter__(self) -> Iterator[str]:
        while line := self.readline():
            yield line

    def flush(self) -> None:
        self._logger._flush()
        self._stream.flush()

    def __getattr__(self, name: str):
        return getattr(self._stream, name)


class IOLogger:
    """Mirrors standard input and output into a log file while active."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._file: Optional[TextIO] = None
        self._orig_stdin: Optional[TextIO] = None
        self._orig_stdout: Optional[TextIO] = None
        self._last = "\n"

    @property
    def active(self) -> bool:
        return self._file is not None

    def start(self, fname: str) -> None:
        """Stop any current log, then start logging to ``fname`` unless it is empty."""
        with self._lock:
            if self._file is not None:
                sys.stdout = self._orig_stdout
                sys.stdin = self._orig_stdin
                self._file.close()
                self._file = None

            if fname:
                try:
                    self._file = open(fname, "w", encoding="utf-8")
                except OSError as exc:
                    raise OSError(f"Unable to open debug log file {fname}") from exc
                self._orig_stdin = sys.stdin
                self._orig_stdout = sys.stdout
                sys.stdin = _TeeStream(sys.stdin, self, ">> ")
                sys.stdout = _TeeStream(sys.stdout, self, "<< ")

    def stop(self) -> None:
        self.start("")

    def __enter__(self) -> "IOLogger":
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def _log(self, text: str, prefix: str) -> None:
        if not text:
            return
        with self._lock:
            if self._file is None:
                return
            pieces = []
            for ch in text:
                if self._last == "\n":
                    pieces.append(prefix)
                pieces.append(ch)
                self._last = ch
            self._file.write("".join(pieces))

    def _flush(self) -> None:
        with self._lock:
            if self._file is not None:
                self._file.flush()


_logger = IOLogger()


def start_logger(fname: str) -> None:
    """Start (or, with an empty name, stop) the process-wide I/O log."""
    _logger.start(fname)


# ---------------------------------------------------------------------------
# String and file helpers
# ---------------------------------------------------------------------------

_UNSIGNED_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?)(\d+)")


def str_to_size_t(s: str) -> int:
    """Parse a leading unsigned decimal number, as a size."""
    match = _UNSIGNED_RE.match(s)
    if not match:
        raise ValueError(f"invalid unsigned number: {s!r}")
    value = int(match.group(2))
    if value > _MASK64:
        raise OverflowError(f"number out of range: {s!r}")
    if match.group(1) == "-":
        value = (-value) & _MASK64
    if value > _SIZE_T_MAX:
        raise OverflowError(f"number does not fit in a size: {s!r}")
    return value


def read_file_to_string(path: str) -> Optional[bytes]:
    """Return the file's bytes, or None if it cannot be opened."""
    try:
        return Path(path).read_bytes()
    except OSError:
        return None


def remove_whitespace(s: str) -> str:
    """Return ``s`` with all whitespace characters removed."""
    return "".join(ch for ch in s if ch not in _C_WHITESPACE)


def is_whitespace(s: str) -> bool:
    """True if ``s`` consists only of whitespace (or is empty)."""
    return all(ch in _C_WHITESPACE for ch in s)


def split(s: str, delimiter: str) -> List[str]:
    """Split on ``delimiter``; an empty string yields an empty list."""
    if not delimiter:
        raise ValueError("empty delimiter")
    if not s:
        return []
    return s.split(delimiter)


def get_working_directory() -> str:
    try:
        return os.getcwd()
    except OSError:
        return ""


def get_binary_directory(argv0: str) -> str:
    """Return the directory part of ``argv0``, resolving a leading ``./``."""
    sep = "\\" if os.name == "nt" else "/"
    working_directory = get_working_directory()

    pos = max(argv0.rfind("\\"), argv0.rfind("/"))
    directory = "." + sep if pos < 0 else argv0[: pos + 1]

    if directory.startswith("." + sep):
        directory = working_directory + directory[1:]
    return directory


def move_to_front(items: List[T], pred: Callable[[T], bool]) -> None:
    """Move the first item matching ``pred`` to the front, keeping the others in order."""
    found = next((i for i, item in enumerate(items) if pred(item)), None)
    if found is not None:
        items[: found + 1] = [items[found], *items[:found]]


def now() -> int:
    """Monotonic time in milliseconds."""
    return time.monotonic_ns() // 1_000_000
"""Channel scan report parsing.

A scan report is a sequence of records. Each record starts with a scan line
and a result line::

    SCAN: 473000000 (us-bcast:14)
    LOCK: 8vsb (ss=83 snq=67 seq=100)
    TSID: 0x0805
    PROGRAM 3: 14.1 KPXB-DT
    PROGRAM 4: 14.2 ION

When the result line reports ``LOCK: none`` the record ends there. Otherwise an
optional ``TSID:`` line and any number of ``PROGRAM`` lines follow; the first
line that is not a ``PROGRAM`` line starts the next record.
"""

from __future__ import annotations

from enum import Enum, auto

from hdhrctl.core.errors import FormatError
from hdhrctl.core.logsink import NULL_SINK, LogSink, Severity, raise_logged
from hdhrctl.core.model import Program, ScannedChannel, ScanResult
from hdhrctl.core.tokenizer import tokenize

LOCK_PREFIX = "LOCK:"
LOCK_NONE = "none"
TSID_PREFIX = "TSID:"
PROGRAM_PREFIX = "PROGRAM"


class ScanState(Enum):
    EXPECT_SCAN_LINE = auto()
    EXPECT_RESULT_LINE = auto()
    CONSUME_PROGRAMS = auto()


class LineCursor:
    """Forward-only cursor over response lines with one line of lookahead."""

    def __init__(self, lines: list[str]) -> None:
        self._lines = lines
        self._index = 0

    @property
    def exhausted(self) -> bool:
        return self._index >= len(self._lines)

    def peek(self) -> str | None:
        if self.exhausted:
            return None
        return self._lines[self._index]

    def next(self) -> str:
        line = self.peek()
        if line is None:
            raise IndexError("cursor exhausted")
        self._index += 1
        return line


def _first_word(line: str | None) -> str | None:
    if line is None:
        return None
    words = tokenize(" ", line)
    return words[0] if words else None


def _parse_scan_line(line: str, sink: LogSink) -> tuple[str, int]:
    words = tokenize(" ", line)
    if len(words) < 3:
        raise_logged(sink, FormatError("Scan line is too short", fragment=line))
    channel_map_words = tokenize(":", words[2].strip("()"))
    if len(channel_map_words) < 2:
        raise_logged(sink, FormatError("Scan line is missing channel map number", fragment=line))
    try:
        friendly_channel = int(channel_map_words[1])
    except ValueError:
        raise_logged(sink, FormatError("Scan line has non-numeric channel number", fragment=line))
    return words[1], friendly_channel


def _parse_result_line(line: str, sink: LogSink) -> tuple[str, dict[str, str]]:
    words = tokenize(" ", line)
    if not words or words[0] != LOCK_PREFIX:
        raise_logged(
            sink,
            FormatError(f"Unexpected result line, expected {LOCK_PREFIX} prefix", fragment=line),
        )
    if len(words) < 2:
        raise_logged(sink, FormatError("Result line is missing lock state", fragment=line))

    signal: dict[str, str] = {}
    for word in words[2:]:
        key, sep, value = word.strip("()").partition("=")
        if sep:
            signal[key] = value
    return words[1], signal


def _parse_program_line(line: str, sink: LogSink) -> Program:
    words = tokenize(" ", line)
    if len(words) < 3:
        raise_logged(sink, FormatError("Program line is too short", fragment=line))
    try:
        number = int(words[1].rstrip(":"))
    except ValueError:
        raise_logged(sink, FormatError("Program line has non-numeric program number", fragment=line))
    return Program(number=number, friendly_number=words[2], friendly_name=" ".join(words[3:]))


def parse_scan_report(text: str, sink: LogSink = NULL_SINK) -> ScanResult:
    cursor = LineCursor(tokenize("\n", text))
    channels: ScanResult = {}

    state = ScanState.EXPECT_SCAN_LINE
    scan_line = ""
    internal_channel = ""
    friendly_channel = 0
    lock = ""
    signal: dict[str, str] = {}
    tsid: str | None = None
    programs: dict[int, Program] = {}

    while True:
        if state is ScanState.EXPECT_SCAN_LINE:
            if cursor.exhausted:
                break
            scan_line = cursor.next()
            state = ScanState.EXPECT_RESULT_LINE

        elif state is ScanState.EXPECT_RESULT_LINE:
            if cursor.exhausted:
                raise_logged(sink, FormatError("Scan line has no result line", fragment=scan_line))
            lock, signal = _parse_result_line(cursor.next(), sink)
            if lock == LOCK_NONE:
                state = ScanState.EXPECT_SCAN_LINE
                continue

            internal_channel, friendly_channel = _parse_scan_line(scan_line, sink)
            tsid = None
            programs = {}
            if _first_word(cursor.peek()) == TSID_PREFIX:
                tsid_words = tokenize(" ", cursor.next())
                tsid = tsid_words[1] if len(tsid_words) > 1 else ""
            state = ScanState.CONSUME_PROGRAMS

        else:
            if _first_word(cursor.peek()) == PROGRAM_PREFIX:
                program = _parse_program_line(cursor.next(), sink)
                programs[program.number] = program
                continue

            if not programs:
                sink.log(
                    f"Odd ... found no programs for channel {friendly_channel} ({internal_channel})",
                    Severity.INFO,
                )
            channels[friendly_channel] = ScannedChannel(
                friendly_number=friendly_channel,
                internal_channel=internal_channel,
                programs=programs,
                lock=lock,
                signal=signal,
                tsid=tsid,
            )
            state = ScanState.EXPECT_SCAN_LINE

    sink.log(f"Found these channels during scan: {channels!r}", Severity.DEBUG)
    return channels

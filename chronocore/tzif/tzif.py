"""Library for reading TZif files.

A TZif file (see rfc8536) describes a time-zone as a series of transition
times, each referencing a local time type with the UTC offset in effect after
the transition. Version 2+ files also carry a footer with a POSIX TZ string
describing the transitions after the last one in the file.

The reader returns the raw records, which are converted into `ZoneRules` by
`chronocore.tzif.timezoneinfo`.
"""

import enum
import io
import logging
import struct
from collections import namedtuple
from dataclasses import dataclass
from functools import cache
from typing import Sequence

from .model import LeapSecond, LocalTimeType, TimezoneInfo, Transition
from .tz_rule import parse_tz_rule

__all__ = [
    "read_tzif",
]

_LOGGER = logging.getLogger(__name__)

# Records specifying the local time type
_LOCAL_TIME_TYPE_STRUCT_FORMAT = "".join(
    [
        ">",  # Use standard size of packed value bytes
        "l",  # utoff (4 bytes): Number of seconds to add to UTC to determine local time
        "?",  # dst (1 byte): Indicates the time is DST (1) or standard (0)
        "B",  # idx (1 byte): Offset index into the time zone designation octets (0-charcnt-1)
    ]
)
_LOCAL_TIME_RECORD_SIZE = 6


class _TZifVersion(enum.Enum):
    """Defines information related to _TZifVersions."""

    V1 = (b"\x00", 4, "l")  # 32-bit in v1
    V2 = (b"2", 8, "q")  # 64-bit in v2+
    V3 = (b"3", 8, "q")
    V4 = (b"4", 8, "q")

    def __init__(self, version: bytes, time_size: int, time_format: str):
        self._version = version
        self._time_size = time_size
        self._time_format = time_format

    @classmethod
    def of(cls, version: bytes) -> "_TZifVersion":
        """Return the version for the header version byte."""
        for member in cls:
            if member.version == version:
                return member
        raise ValueError(f"Unsupported TZif version: {version!r}")

    @property
    def version(self) -> bytes:
        """Return the version byte string."""
        return self._version

    @property
    def time_size(self) -> int:
        """Return the TIME_SIZE used in the data block parsing."""
        return self._time_size

    @property
    def time_format(self) -> str:
        """Return the struct unpack format string for TIME_SIZE objects."""
        return self._time_format


@dataclass
class _Header:
    """TZif _Header information."""

    SIZE = 44  # Total size of the header to read
    STRUCT_FORMAT = "".join(
        [
            ">",  # Use standard size of packed value bytes
            "4s",  # magic (4 bytes)
            "c",  # version (1 byte)
            "15x",  # unused
            "6l",  # isutccnt, isstdcnt, leapcnt, timecnt, typecnt, charcnt
        ]
    )
    MAGIC = "TZif".encode()

    version: _TZifVersion
    """The version of the files format."""

    isutccnt: int
    """The number of UTC/local indicators in the data block."""

    isstdcnt: int
    """The number of standard/wall indicators in the data block."""

    leapcnt: int
    """The number of leap second records in the data block."""

    timecnt: int
    """The number of time transitions in the data block."""

    typecnt: int
    """The number of local time type records in the data block."""

    charcnt: int
    """The number of characters for time zone designations in the data block."""

    @classmethod
    def from_bytes(cls, header_bytes: bytes) -> "_Header":
        """Parse the header bytes into a file."""
        if len(header_bytes) != _Header.SIZE:
            raise ValueError("zoneinfo file header was truncated")
        (
            magic,
            version,
            isutccnt,
            isstdcnt,
            leapcnt,
            timecnt,
            typecnt,
            charcnt,
        ) = struct.unpack(_Header.STRUCT_FORMAT, header_bytes)
        if magic != _Header.MAGIC:
            raise ValueError("zoneinfo file did not contain magic header")
        if isutccnt not in (0, typecnt):
            raise ValueError(
                f"UTC/local indicators in datablock mismatched ({isutccnt}, {typecnt})"
            )
        if isstdcnt not in (0, typecnt):
            raise ValueError(
                f"standard/wall indicators in datablock mismatched ({isstdcnt}, {typecnt})"
            )
        return _Header(
            _TZifVersion.of(version),
            isutccnt,
            isstdcnt,
            leapcnt,
            timecnt,
            typecnt,
            charcnt,
        )

    def check_local_time_types(self) -> None:
        """Verify the header describes at least one local time type."""
        if self.typecnt == 0:
            raise ValueError("Local time records in block is zero")
        if self.charcnt == 0:
            raise ValueError("Total number of octets is zero")


_TransitionBlock = namedtuple(
    "_TransitionBlock", ["transition_time", "time_type", "isstdcnt", "isutccnt"]
)


@dataclass
class _DataBlock:
    """The records read from a single data block."""

    transitions: list[Transition]
    leap_seconds: list[LeapSecond]
    local_time_types: list[LocalTimeType]


def _new_transition(
    transition: _TransitionBlock,
    local_time_types: list[LocalTimeType],
) -> Transition:
    """Create a transition from the raw block and its local time type."""
    if transition.time_type >= len(local_time_types):
        raise ValueError(
            f"transition_type out of bounds {transition.time_type} >= {len(local_time_types)}"
        )
    if transition.isutccnt and not transition.isstdcnt:
        raise ValueError("isutccnt was True but isstdcnt was False")
    local_time_type = local_time_types[transition.time_type]
    return Transition(
        transition.transition_time,
        local_time_type.utoff,
        local_time_type.dst,
        transition.isstdcnt,
        transition.isutccnt,
        local_time_type.designation,
    )


def _read_datablock(header: _Header, version: _TZifVersion, buf: io.BytesIO) -> _DataBlock:
    """Read records from the buffer."""
    # A series of transition times in sorted order
    transition_times: Sequence[int] = struct.unpack(
        f">{header.timecnt}{version.time_format}",
        buf.read(header.timecnt * version.time_size),
    )
    if any(a >= b for a, b in zip(transition_times, transition_times[1:])):
        raise ValueError("Transition times are not in ascending order")

    # A series of integers specifying the type of local time of the corresponding
    # transition time. These are zero-based indices into the array of local
    # time type records. (from 0 to typecnt-1)
    transition_types: Sequence[int] = []
    if header.timecnt > 0:
        transition_types = struct.unpack(
            f">{header.timecnt}B", buf.read(header.timecnt)
        )

    raw_time_types = [
        struct.unpack(_LOCAL_TIME_TYPE_STRUCT_FORMAT, buf.read(_LOCAL_TIME_RECORD_SIZE))
        for _ in range(header.typecnt)
    ]

    # An array of NUL-terminated time zone designation strings
    tz_designations = buf.read(header.charcnt)

    @cache
    def get_tz_designation(idx: int) -> str:
        """Find the null terminated string starting at the specified index."""
        if idx >= len(tz_designations):
            raise ValueError(f"Designation index out of bounds {idx}")
        end = tz_designations.find(b"\x00", idx)
        return tz_designations[idx:end].decode("UTF-8")

    local_time_types = [
        LocalTimeType(utoff, dst, get_tz_designation(idx))
        for (utoff, dst, idx) in raw_time_types
    ]

    leap_seconds: list[LeapSecond] = [
        LeapSecond._make(
            struct.unpack(
                f">{version.time_format}l",
                buf.read(version.time_size + 4),  # occur + corr
            )
        )
        for _ in range(header.leapcnt)
    ]

    # Standard/wall and UTC/local indicators are per local time type, and
    # determine how the transition times of that type were specified.
    isstd_types: Sequence[bool] = [False] * header.typecnt
    if header.isstdcnt > 0:
        isstd_types = struct.unpack(f">{header.isstdcnt}?", buf.read(header.isstdcnt))
    isut_types: Sequence[bool] = [False] * header.typecnt
    if header.isutccnt > 0:
        isut_types = struct.unpack(f">{header.isutccnt}?", buf.read(header.isutccnt))

    transitions = [
        _new_transition(
            _TransitionBlock(
                transition_time,
                time_type,
                isstd_types[time_type] if time_type < len(isstd_types) else False,
                isut_types[time_type] if time_type < len(isut_types) else False,
            ),
            local_time_types,
        )
        for (transition_time, time_type) in zip(transition_times, transition_types)
    ]
    return _DataBlock(transitions, leap_seconds, local_time_types)


def _read_footer(buf: io.BytesIO) -> str:
    """Read the footer TZ string, surrounded by newlines."""
    footer = buf.read()
    parts = footer.decode("UTF-8").split("\n")
    if len(parts) != 3:
        raise ValueError("Failed to read TZ footer")
    return parts[1]


def read_tzif(content: bytes) -> TimezoneInfo:
    """Read the TZif file and parse and return the timezone records."""
    try:
        return _read_tzif(io.BytesIO(content))
    except struct.error as err:
        raise ValueError(f"zoneinfo file was truncated: {err}") from err


def _read_tzif(buf: io.BytesIO) -> TimezoneInfo:
    """Read the headers, data blocks and footer from the buffer."""
    # V1 header and block
    header = _Header.from_bytes(buf.read(_Header.SIZE))
    if header.version is _TZifVersion.V1:
        header.check_local_time_types()
    block = _read_datablock(header, _TZifVersion.V1, buf)
    if header.version is _TZifVersion.V1:
        return TimezoneInfo(
            block.transitions,
            block.leap_seconds,
            local_time_types=block.local_time_types,
        )

    # V2+ header and block with 64-bit times
    header = _Header.from_bytes(buf.read(_Header.SIZE))
    header.check_local_time_types()
    block = _read_datablock(header, header.version, buf)

    rule = None
    if tz_str := _read_footer(buf):
        _LOGGER.debug("Parsing TZ footer: %s", tz_str)
        rule = parse_tz_rule(tz_str)
    return TimezoneInfo(
        block.transitions,
        block.leap_seconds,
        rule=rule,
        local_time_types=block.local_time_types,
    )

"""Constants for integer and year bounds used by field ranges."""

INT_MIN_VALUE = -(2**31)
INT_MAX_VALUE = 2**31 - 1

LONG_MIN_VALUE = -(2**63)
LONG_MAX_VALUE = 2**63 - 1

YEAR_MIN_VALUE = -999_999
YEAR_MAX_VALUE = 999_999

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * 60
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR
NANOS_PER_SECOND = 1_000_000_000

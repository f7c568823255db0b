"""Process exit statuses for tplan commands.

Codes are grouped by tens so scripts can branch on the category:
    0: plan produced, file skipped, or encode accepted
    10-19: bad intent or configuration
    20-29: input file missing
    30-39: external tool missing
    50-59: probe could not be read or analyzed
    60-69: gate rejected the encoded result
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit statuses returned by tplan."""

    SUCCESS = 0

    INTENT_VALIDATION_ERROR = 10
    CONFIG_ERROR = 11

    TARGET_NOT_FOUND = 20

    TOOL_NOT_AVAILABLE = 30

    PROBE_ERROR = 51

    # Not a failure: the caller should keep the original file
    REVERTED = 60

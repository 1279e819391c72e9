# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from enum import IntEnum

# ============================================================================
# CLI Names
# ============================================================================

CLI_NAME = "volk-gen"
PACKAGE_NAME = "volk-gen"

# ============================================================================
# Exit Codes (BSD sysexits.h)
# ============================================================================


class ExitCode(IntEnum):
    USAGE = 64
    DATAERR = 65
    NOINPUT = 66
    SOFTWARE = 70
    CANTCREAT = 73
    CONFIG = 78
    INTERRUPTED = 130  # Standard SIGINT exit code


EX_USAGE = ExitCode.USAGE
EX_DATAERR = ExitCode.DATAERR
EX_NOINPUT = ExitCode.NOINPUT
EX_CANTCREAT = ExitCode.CANTCREAT
EX_CONFIG = ExitCode.CONFIG

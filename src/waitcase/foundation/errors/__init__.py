"""Error handling for waitcase.

- ErrorCode: Standard error codes
- ArgumentError/BackoffArgumentError: Structured invalid-argument payload and exception
"""

from .errors import ArgumentError, BackoffArgumentError, ErrorCode

__all__ = ["ArgumentError", "BackoffArgumentError", "ErrorCode"]

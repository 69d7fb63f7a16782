"""Release versioning services."""

from .argv import parse_argv
from .errors import VersioningError
from .request import ReadRequest, VersionInput, VersionRequest
from .versioning import VersioningService

__all__ = [
    "ReadRequest",
    "VersionInput",
    "VersionRequest",
    "VersioningError",
    "VersioningService",
    "parse_argv",
]

"""
officers.exceptions — Errors raised by the officer directory.
"""

from __future__ import annotations

from django.db import models

from core.domain.exceptions import ServiceUnavailable


class DirectoryErrorKind(models.TextChoices):
    UNAVAILABLE = "directory_unavailable", "Directory Unavailable"


class DirectoryUnavailable(ServiceUnavailable):
    """Every query path over the officer directory failed."""

    kind = DirectoryErrorKind.UNAVAILABLE

    def __init__(self, message: str = "Officer directory is unavailable.") -> None:
        super().__init__(message)

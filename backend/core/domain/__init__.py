"""
core.domain — Shared domain utilities for cross-app service layers.

Modules
-------
exceptions         Domain-specific exceptions that map cleanly to HTTP responses.
exception_handler  DRF global handler translating domain exceptions.
transactions       Helpers for ``transaction.atomic`` + ``select_for_update``.
access             Permission guard and role-name helpers.

Usage from any app::

    from core.domain.exceptions import DomainError, NotFound
    from core.domain.transactions import lock_for_update
    from core.domain.access import require_permission
"""

"""
Accounts Service Layer.

Only identity *resolution* lives here: the portal does not issue
identities (that is the identity provider's job), but every assignment
operation names its actor explicitly and the actor has to be resolved
to an administrator before anything is written.

Architecture
------------
- ``AdminLookupService`` — resolve an assigner id to an administrator.
"""

from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import get_user_model

from core.domain.access import is_admin

logger = logging.getLogger(__name__)

User = get_user_model()


class AdminLookupService:
    """
    Resolve an administrator identity from any of its identifiers.

    Lookup order: primary key → ``external_uid`` (identity-provider
    subject id) → ``username``.  The first strategy that finds a user
    wins; the user must then be an active administrator.
    """

    @staticmethod
    def _by_pk(identifier: Any):
        try:
            pk = int(identifier)
        except (TypeError, ValueError):
            return None
        return User.objects.select_related("role").filter(pk=pk).first()

    @staticmethod
    def _by_external_uid(identifier: Any):
        return User.objects.select_related("role").filter(external_uid=str(identifier)).first()

    @staticmethod
    def _by_username(identifier: Any):
        return User.objects.select_related("role").filter(username=str(identifier)).first()

    @classmethod
    def resolve(cls, identifier: Any):
        """
        Return the administrator ``User`` for ``identifier`` or ``None``.

        ``None`` covers both "no such identity" and "identity exists but
        is not an active administrator"; callers surface either as their
        own not-found error.
        """
        if identifier is None or str(identifier).strip() == "":
            return None

        for strategy in (cls._by_pk, cls._by_external_uid, cls._by_username):
            user = strategy(identifier)
            if user is None:
                continue
            if not is_admin(user):
                logger.warning(
                    "Identity %s resolved to user #%d who is not an active administrator",
                    identifier,
                    user.pk,
                )
                return None
            return user
        return None

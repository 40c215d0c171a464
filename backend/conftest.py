"""
Root conftest.py — shared fixtures for the entire test suite.

Provides:
  - ``api_client`` fixture returning a DRF ``APIClient``.
  - ``create_user`` / ``create_admin`` factories for portal identities.
  - ``create_unit`` / ``create_officer`` / ``create_complaint`` factories
    for the assignment domain.
  - ``auth_header`` fixture for authenticated requests (JWT).
"""

from __future__ import annotations

import pytest
from rest_framework.test import APIClient


@pytest.fixture()
def api_client() -> APIClient:
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture()
def create_user(db):
    """
    Factory fixture that creates a user with sensible defaults.

    Usage::

        def test_something(create_user):
            user = create_user(username="alice")
            user = create_user(username="bob", external_uid="idp|bob", role=role)
    """
    from accounts.models import User

    _counter = 0

    def _factory(
        *,
        username: str | None = None,
        password: str = "TestPass123!",
        email: str | None = None,
        role=None,
        is_active: bool = True,
        **kwargs,
    ) -> User:
        nonlocal _counter
        _counter += 1
        if username is None:
            username = f"testuser{_counter}"
        if email is None:
            email = f"{username}@test.local"

        return User.objects.create_user(
            username=username,
            password=password,
            email=email,
            role=role,
            is_active=is_active,
            **kwargs,
        )

    return _factory


@pytest.fixture()
def admin_role(db):
    from accounts.models import Role

    role, _ = Role.objects.get_or_create(
        name="System Admin",
        defaults={"hierarchy_level": 100, "description": "Assigns officers."},
    )
    return role


@pytest.fixture()
def create_admin(create_user, admin_role):
    """Factory for users holding the "System Admin" role."""

    def _factory(**kwargs):
        kwargs.setdefault("role", admin_role)
        return create_user(**kwargs)

    return _factory


@pytest.fixture()
def create_unit(db):
    """
    Factory for units.  Defaults to the unit that owns the category and
    links the category's crime types when ``with_crime_types`` is set.
    """
    from core.taxonomy import CrimeCategory, CrimeTypeMapper
    from officers.models import Unit, UnitCrimeType

    _counter = 0

    def _factory(
        *,
        category: str = CrimeCategory.COMMUNICATION,
        name: str | None = None,
        with_crime_types: bool = False,
        **kwargs,
    ) -> Unit:
        nonlocal _counter
        _counter += 1
        kwargs.setdefault("code", f"U{_counter:03d}")
        unit = Unit.objects.create(
            name=name or f"{CrimeTypeMapper.unit_for_category(category)} #{_counter}",
            category=category,
            **kwargs,
        )
        if with_crime_types:
            UnitCrimeType.objects.bulk_create(
                UnitCrimeType(unit=unit, crime_type=m.display_name)
                for m in CrimeTypeMapper.crime_types_for_category(category)
            )
        return unit

    return _factory


@pytest.fixture()
def create_officer(db):
    from officers.models import Officer

    _counter = 0

    def _factory(*, unit=None, **kwargs) -> Officer:
        nonlocal _counter
        _counter += 1
        kwargs.setdefault("full_name", f"Officer {_counter}")
        kwargs.setdefault("badge_number", f"B-{_counter:04d}")
        kwargs.setdefault("rank", "Inspector")
        return Officer.objects.create(unit=unit, **kwargs)

    return _factory


@pytest.fixture()
def create_complaint(db):
    from cases.models import Complaint

    _counter = 0

    def _factory(**kwargs) -> Complaint:
        nonlocal _counter
        _counter += 1
        kwargs.setdefault("complaint_number", f"CMP-{_counter:05d}")
        kwargs.setdefault("title", f"Complaint {_counter}")
        kwargs.setdefault("crime_type", "Phishing")
        return Complaint.objects.create(**kwargs)

    return _factory


@pytest.fixture()
def auth_header(create_admin):
    """
    Returns a helper that creates an administrator and an
    ``Authorization`` header dict with a valid JWT access token.

    Usage::

        def test_protected(auth_header, api_client):
            header = auth_header(username="alice")
            api_client.credentials(HTTP_AUTHORIZATION=header["Authorization"])
    """
    from rest_framework_simplejwt.tokens import AccessToken

    def _make(**user_kwargs) -> dict[str, str]:
        user = create_admin(**user_kwargs)
        token = AccessToken.for_user(user)
        return {"Authorization": f"Bearer {token}"}

    return _make

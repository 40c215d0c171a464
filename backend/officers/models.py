"""
Officers app models.

Units are the investigative teams that own one crime category each;
officers belong to at most one unit and carry the case counters that
drive workload balancing.  The counters are only ever written by the
store procedures in ``cases.procedures``.
"""

from django.db import models

from core.models import TimeStampedModel
from core.permissions_constants import OfficersPerms
from core.taxonomy import CrimeCategory


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class UnitStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    INACTIVE = "inactive", "Inactive"
    DISBANDED = "disbanded", "Disbanded"


class AvailabilityStatus(models.TextChoices):
    """
    Self-reported availability.  Informational only: it is shown to
    the assigning administrator but does not exclude an officer.
    """

    AVAILABLE = "available", "Available"
    BUSY = "busy", "Busy"
    OVERLOADED = "overloaded", "Overloaded"
    UNAVAILABLE = "unavailable", "Unavailable"


class EmploymentStatus(models.TextChoices):
    """Only ``ACTIVE`` officers are eligible for assignment."""

    ACTIVE = "active", "Active"
    ON_LEAVE = "on_leave", "On Leave"
    SUSPENDED = "suspended", "Suspended"
    RETIRED = "retired", "Retired"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class Unit(TimeStampedModel):
    """An investigative unit responsible for one crime category."""

    name = models.CharField(
        max_length=150,
        unique=True,
        verbose_name="Unit Name",
    )
    code = models.CharField(
        max_length=20,
        unique=True,
        verbose_name="Unit Code",
    )
    category = models.CharField(
        max_length=64,
        choices=CrimeCategory.choices,
        verbose_name="Crime Category",
    )
    region = models.CharField(
        max_length=100,
        blank=True,
        default="",
        verbose_name="Region",
    )
    status = models.CharField(
        max_length=16,
        choices=UnitStatus.choices,
        default=UnitStatus.ACTIVE,
        verbose_name="Status",
    )

    class Meta:
        verbose_name = "Unit"
        verbose_name_plural = "Units"
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.code})"


class UnitCrimeType(models.Model):
    """One crime type (stored by display name) handled by a unit."""

    unit = models.ForeignKey(
        Unit,
        on_delete=models.CASCADE,
        related_name="crime_types",
        verbose_name="Unit",
    )
    crime_type = models.CharField(
        max_length=100,
        verbose_name="Crime Type",
    )

    class Meta:
        verbose_name = "Unit Crime Type"
        verbose_name_plural = "Unit Crime Types"
        unique_together = [("unit", "crime_type")]
        indexes = [
            models.Index(fields=["crime_type"], name="officers_uct_crime_type_idx"),
        ]

    def __str__(self):
        return f"{self.crime_type} @ {self.unit.name}"


class Officer(TimeStampedModel):
    """
    A field officer who can be bound to complaints.

    ``active_cases`` is the workload signal: it goes up on every bind and
    down when a case is taken away by reassignment.  ``total_cases`` only
    ever increases.
    """

    full_name = models.CharField(
        max_length=150,
        verbose_name="Full Name",
    )
    badge_number = models.CharField(
        max_length=32,
        unique=True,
        verbose_name="Badge Number",
    )
    external_uid = models.CharField(
        max_length=128,
        unique=True,
        null=True,
        blank=True,
        verbose_name="External Identity ID",
        help_text="Subject id issued by the identity provider.",
    )
    rank = models.CharField(
        max_length=64,
        blank=True,
        default="",
        verbose_name="Rank",
    )
    unit = models.ForeignKey(
        Unit,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="officers",
        verbose_name="Unit",
    )
    active_cases = models.PositiveIntegerField(
        default=0,
        verbose_name="Active Cases",
    )
    total_cases = models.PositiveIntegerField(
        default=0,
        verbose_name="Total Cases",
    )
    resolved_cases = models.PositiveIntegerField(
        default=0,
        verbose_name="Resolved Cases",
    )
    availability_status = models.CharField(
        max_length=16,
        choices=AvailabilityStatus.choices,
        default=AvailabilityStatus.AVAILABLE,
        verbose_name="Availability",
    )
    employment_status = models.CharField(
        max_length=16,
        choices=EmploymentStatus.choices,
        default=EmploymentStatus.ACTIVE,
        verbose_name="Employment Status",
    )
    last_assignment_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name="Last Assignment At",
    )

    class Meta:
        verbose_name = "Officer"
        verbose_name_plural = "Officers"
        ordering = ["active_cases", "id"]
        indexes = [
            models.Index(fields=["employment_status", "active_cases"], name="officers_emp_status_load_idx"),
        ]
        permissions = [
            (OfficersPerms.CAN_VIEW_AVAILABLE_OFFICERS, "Can list eligible officers and suggestions"),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.badge_number})"

    @property
    def is_eligible(self) -> bool:
        return self.employment_status == EmploymentStatus.ACTIVE

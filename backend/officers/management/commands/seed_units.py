"""
Management command: seed_units
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Creates one **Unit** per crime category, named after the unit that owns
the category in ``core.taxonomy``, and links it to every crime type of
that category (``UnitCrimeType`` rows, stored by display name).

The command is **idempotent**: existing units keep their region and
status; missing crime-type rows are added, stale ones are left alone
unless ``--prune`` is given.

Usage::

    python manage.py seed_units [--region "Central"] [--prune]
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from core.taxonomy import TAXONOMY_VERSION, CrimeTypeMapper
from officers.models import Unit, UnitCrimeType


def unit_code(name: str) -> str:
    """``"Economic Offenses Wing"`` → ``"EOW"``."""
    return "".join(word[0] for word in name.split() if word[0].isupper())


class Command(BaseCommand):
    help = "Create investigative units and their crime types from the taxonomy."

    def add_arguments(self, parser):
        parser.add_argument("--region", default="", help="Region for newly created units.")
        parser.add_argument(
            "--prune",
            action="store_true",
            help="Delete crime-type rows that are no longer in the taxonomy.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.MIGRATE_HEADING(
            f"Seeding units from taxonomy {TAXONOMY_VERSION}"
        ))

        units_created = 0
        links_created = 0
        links_pruned = 0

        for category in CrimeTypeMapper.categories():
            name = CrimeTypeMapper.unit_for_category(category)
            unit, created = Unit.objects.get_or_create(
                name=name,
                defaults={
                    "code": unit_code(name),
                    "category": category,
                    "region": options["region"],
                },
            )
            if created:
                units_created += 1
                self.stdout.write(f"  + {unit}")
            elif unit.category != category:
                unit.category = category
                unit.save(update_fields=["category", "updated_at"])
                self.stdout.write(self.style.WARNING(f"  ~ {unit}: category set to {category}"))

            display_names = [m.display_name for m in CrimeTypeMapper.crime_types_for_category(category)]
            for display_name in display_names:
                _, link_created = UnitCrimeType.objects.get_or_create(unit=unit, crime_type=display_name)
                links_created += int(link_created)

            if options["prune"]:
                deleted, _ = (
                    UnitCrimeType.objects
                    .filter(unit=unit)
                    .exclude(crime_type__in=display_names)
                    .delete()
                )
                links_pruned += deleted

        self.stdout.write(self.style.SUCCESS(
            f"Done: {units_created} unit(s) created, "
            f"{links_created} crime-type link(s) added, "
            f"{links_pruned} pruned."
        ))

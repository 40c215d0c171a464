import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Unit",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("name", models.CharField(max_length=150, unique=True, verbose_name="Unit Name")),
                ("code", models.CharField(max_length=20, unique=True, verbose_name="Unit Code")),
                ("category", models.CharField(choices=[
                    ("Communication & Social Media Crimes", "Communication & Social Media Crimes"),
                    ("Financial & Economic Crimes", "Financial & Economic Crimes"),
                    ("Data & Privacy Crimes", "Data & Privacy Crimes"),
                    ("Malware & System Attacks", "Malware & System Attacks"),
                    ("Harassment & Exploitation", "Harassment & Exploitation"),
                    ("Content-Related Crimes", "Content-Related Crimes"),
                    ("System Disruption & Sabotage", "System Disruption & Sabotage"),
                    ("Government & Terrorism", "Government & Terrorism"),
                    ("Technical Exploitation", "Technical Exploitation"),
                    ("Targeted Attacks", "Targeted Attacks"),
                ], max_length=64, verbose_name="Crime Category")),
                ("region", models.CharField(blank=True, default="", max_length=100, verbose_name="Region")),
                ("status", models.CharField(choices=[("active", "Active"), ("inactive", "Inactive"), ("disbanded", "Disbanded")], default="active", max_length=16, verbose_name="Status")),
            ],
            options={
                "verbose_name": "Unit",
                "verbose_name_plural": "Units",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="UnitCrimeType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("crime_type", models.CharField(max_length=100, verbose_name="Crime Type")),
                ("unit", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="crime_types", to="officers.unit", verbose_name="Unit")),
            ],
            options={
                "verbose_name": "Unit Crime Type",
                "verbose_name_plural": "Unit Crime Types",
                "indexes": [models.Index(fields=["crime_type"], name="officers_uct_crime_type_idx")],
                "unique_together": {("unit", "crime_type")},
            },
        ),
        migrations.CreateModel(
            name="Officer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("full_name", models.CharField(max_length=150, verbose_name="Full Name")),
                ("badge_number", models.CharField(max_length=32, unique=True, verbose_name="Badge Number")),
                ("external_uid", models.CharField(blank=True, help_text="Subject id issued by the identity provider.", max_length=128, null=True, unique=True, verbose_name="External Identity ID")),
                ("rank", models.CharField(blank=True, default="", max_length=64, verbose_name="Rank")),
                ("active_cases", models.PositiveIntegerField(default=0, verbose_name="Active Cases")),
                ("total_cases", models.PositiveIntegerField(default=0, verbose_name="Total Cases")),
                ("resolved_cases", models.PositiveIntegerField(default=0, verbose_name="Resolved Cases")),
                ("availability_status", models.CharField(choices=[("available", "Available"), ("busy", "Busy"), ("overloaded", "Overloaded"), ("unavailable", "Unavailable")], default="available", max_length=16, verbose_name="Availability")),
                ("employment_status", models.CharField(choices=[("active", "Active"), ("on_leave", "On Leave"), ("suspended", "Suspended"), ("retired", "Retired")], default="active", max_length=16, verbose_name="Employment Status")),
                ("last_assignment_at", models.DateTimeField(blank=True, null=True, verbose_name="Last Assignment At")),
                ("unit", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="officers", to="officers.unit", verbose_name="Unit")),
            ],
            options={
                "verbose_name": "Officer",
                "verbose_name_plural": "Officers",
                "ordering": ["active_cases", "id"],
                "indexes": [models.Index(fields=["employment_status", "active_cases"], name="officers_emp_status_load_idx")],
                "permissions": [("can_view_available_officers", "Can list eligible officers and suggestions")],
            },
        ),
    ]

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

COMPLAINT_STATUS_CHOICES = [
    ("to_be_assigned", "To Be Assigned"),
    ("under_investigation", "Under Investigation"),
    ("requires_more_info", "Requires More Info"),
    ("resolved", "Resolved"),
    ("dismissed", "Dismissed"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("officers", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Complaint",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("complaint_number", models.CharField(max_length=32, unique=True, verbose_name="Complaint Number")),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("crime_type", models.CharField(max_length=100, verbose_name="Crime Type")),
                ("status", models.CharField(choices=COMPLAINT_STATUS_CHOICES, default="to_be_assigned", max_length=32, verbose_name="Status")),
                ("priority", models.CharField(choices=[("low", "Low"), ("medium", "Medium"), ("high", "High"), ("urgent", "Urgent")], default="medium", max_length=16, verbose_name="Priority")),
                ("unit", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="routed_complaints", to="officers.unit", verbose_name="Target Unit")),
                ("assigned_officer", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="assigned_complaints", to="officers.officer", verbose_name="Assigned Officer")),
                ("assigned_unit", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="assigned_complaints", to="officers.unit", verbose_name="Assigned Unit")),
            ],
            options={
                "verbose_name": "Complaint",
                "verbose_name_plural": "Complaints",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["status", "created_at"], name="cases_complaint_queue_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=(
                            models.Q(("assigned_officer__isnull", True), ("status", "to_be_assigned"))
                            | models.Q(models.Q(("status", "to_be_assigned"), _negated=True), ("assigned_officer__isnull", False))
                        ),
                        name="cases_complaint_officer_matches_status",
                    ),
                ],
                "permissions": [
                    ("can_assign_officer", "Can assign an officer to a complaint"),
                    ("can_reassign_case", "Can reassign a complaint to another officer"),
                    ("can_view_assignment_history", "Can view the assignment history of a complaint"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CaseAssignment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("assigned_by", models.CharField(choices=[("admin", "Administrator"), ("system", "System")], default="admin", max_length=16, verbose_name="Assigned By")),
                ("assignment_type", models.CharField(choices=[("primary", "Primary"), ("reassignment", "Reassignment"), ("temporary", "Temporary")], default="primary", max_length=16, verbose_name="Assignment Type")),
                ("status", models.CharField(choices=[("active", "Active"), ("reassigned", "Reassigned"), ("completed", "Completed")], default="active", max_length=16, verbose_name="Status")),
                ("notes", models.TextField(blank=True, default="", verbose_name="Notes")),
                ("complaint", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="assignments", to="cases.complaint", verbose_name="Complaint")),
                ("officer", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="assignments", to="officers.officer", verbose_name="Officer")),
                ("assigner", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="issued_assignments", to=settings.AUTH_USER_MODEL, verbose_name="Assigned By (User)")),
            ],
            options={
                "verbose_name": "Case Assignment",
                "verbose_name_plural": "Case Assignments",
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "active")),
                        fields=("complaint",),
                        name="cases_one_active_assignment",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ComplaintStatusLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("from_status", models.CharField(choices=COMPLAINT_STATUS_CHOICES, max_length=32, verbose_name="From Status")),
                ("to_status", models.CharField(choices=COMPLAINT_STATUS_CHOICES, max_length=32, verbose_name="To Status")),
                ("message", models.TextField(blank=True, default="", verbose_name="Message")),
                ("complaint", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="status_logs", to="cases.complaint", verbose_name="Complaint")),
                ("changed_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="complaint_status_changes", to=settings.AUTH_USER_MODEL, verbose_name="Changed By")),
            ],
            options={
                "verbose_name": "Complaint Status Log",
                "verbose_name_plural": "Complaint Status Logs",
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]

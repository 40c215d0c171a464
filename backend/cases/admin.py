from django.contrib import admin

from .models import CaseAssignment, Complaint, ComplaintStatusLog


class CaseAssignmentInline(admin.TabularInline):
    model = CaseAssignment
    extra = 0
    can_delete = False
    readonly_fields = ("officer", "assigner", "assigned_by", "assignment_type",
                       "status", "notes", "created_at")

    def has_add_permission(self, request, obj=None):
        return False


class ComplaintStatusLogInline(admin.TabularInline):
    model = ComplaintStatusLog
    extra = 0
    can_delete = False
    readonly_fields = ("from_status", "to_status", "changed_by", "message", "created_at")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Complaint)
class ComplaintAdmin(admin.ModelAdmin):
    list_display = ("complaint_number", "title", "crime_type", "status",
                    "priority", "assigned_officer", "created_at")
    list_filter = ("status", "priority", "unit")
    search_fields = ("complaint_number", "title", "crime_type")
    # Assignment fields are written by the store procedures only.
    readonly_fields = ("assigned_officer", "assigned_unit", "created_at", "updated_at")
    inlines = [CaseAssignmentInline, ComplaintStatusLogInline]


@admin.register(CaseAssignment)
class CaseAssignmentAdmin(admin.ModelAdmin):
    list_display = ("complaint", "officer", "assignment_type", "status",
                    "assigned_by", "assigner", "created_at")
    list_filter = ("status", "assignment_type", "assigned_by")
    search_fields = ("complaint__complaint_number", "officer__badge_number")

    def has_delete_permission(self, request, obj=None):
        return False

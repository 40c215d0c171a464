from django.contrib import admin

from .models import Officer, Unit, UnitCrimeType


class UnitCrimeTypeInline(admin.TabularInline):
    model = UnitCrimeType
    extra = 0


@admin.register(Unit)
class UnitAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "category", "region", "status")
    list_filter = ("category", "status")
    search_fields = ("name", "code")
    inlines = [UnitCrimeTypeInline]


@admin.register(Officer)
class OfficerAdmin(admin.ModelAdmin):
    list_display = ("full_name", "badge_number", "rank", "unit",
                    "active_cases", "total_cases", "availability_status",
                    "employment_status")
    list_filter = ("employment_status", "availability_status", "unit")
    search_fields = ("full_name", "badge_number", "external_uid")
    # Counters belong to the assignment procedures.
    readonly_fields = ("active_cases", "total_cases", "resolved_cases",
                       "last_assignment_at", "created_at", "updated_at")

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Role, User


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ("name", "hierarchy_level", "description")
    search_fields = ("name",)
    ordering = ("-hierarchy_level",)
    filter_horizontal = ("permissions",)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "email", "external_uid",
                    "first_name", "last_name", "is_active", "role")
    search_fields = ("username", "email", "external_uid")
    list_filter = ("is_active", "is_staff", "role")
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Identity", {"fields": ("external_uid", "role")}),
    )
    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ("Identity", {"fields": ("email", "external_uid", "role")}),
    )

from django.contrib import admin

from .models import Report


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "category", "status", "reporter",
                    "assignee", "created_at", "updated_at")
    list_filter = ("status", "category")
    search_fields = ("title", "description", "address")
    raw_id_fields = ("reporter",)
    # Status and response change only through the workflow endpoint.
    readonly_fields = ("status", "response", "assignee", "created_at", "updated_at")

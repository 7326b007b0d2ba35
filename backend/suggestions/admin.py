from django.contrib import admin

from .models import Suggestion


@admin.register(Suggestion)
class SuggestionAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "category", "status", "submitter", "created_at")
    list_filter = ("status", "category")
    search_fields = ("title", "description")
    raw_id_fields = ("submitter",)
    readonly_fields = ("status", "response", "created_at")

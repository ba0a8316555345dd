# apps/faq/admin.py

from django.contrib import admin

from .models import FaqEntry


@admin.register(FaqEntry)
class FaqEntryAdmin(admin.ModelAdmin):
    list_display = ('title', 'order', 'is_visible', 'updated_at')
    list_editable = ('order', 'is_visible')
    search_fields = ('title',)

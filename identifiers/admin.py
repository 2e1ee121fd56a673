"""
Django admin configuration for identifiers app.
"""
from django.contrib import admin
import csv
from django.http import HttpResponse
from .formats import format_uid_for_display
from .models import SequenceCounter, IssuedIdentifier


@admin.register(SequenceCounter)
class SequenceCounterAdmin(admin.ModelAdmin):
    """
    Read-only view of partition counters.
    Counters are only moved by the allocator and sync_sequence_counters.
    """
    list_display = ['category', 'region', 'sport', 'month', 'year', 'last_value', 'updated_at']
    list_filter = ['category', 'year', 'month', 'region']
    search_fields = ['category', 'region', 'sport']
    readonly_fields = [
        'id', 'category', 'region', 'sport', 'month', 'year',
        'last_value', 'created_at', 'updated_at',
    ]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(IssuedIdentifier)
class IssuedIdentifierAdmin(admin.ModelAdmin):
    """
    Audit trail of every identifier handed out. Entries are never edited or
    deleted, so a sequence is never issued twice.
    """
    list_display = ['identifier', 'display', 'category', 'region', 'sport', 'sequence', 'created_at']
    list_filter = ['category', 'year', 'month', 'region']
    search_fields = ['identifier']
    readonly_fields = [
        'id', 'identifier', 'category', 'region', 'sport', 'month', 'year',
        'sequence', 'created_at',
    ]
    date_hierarchy = 'created_at'

    actions = ['export_as_csv']

    def display(self, obj):
        return format_uid_for_display(obj.identifier)
    display.short_description = 'Display Form'

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def export_as_csv(self, request, queryset):
        """
        Export selected identifiers as CSV.
        """
        field_names = ['identifier', 'category', 'region', 'sport', 'month', 'year', 'sequence', 'created_at']

        response = HttpResponse(content_type='text/csv')
        response['Content-Disposition'] = 'attachment; filename=issued_identifiers.csv'
        writer = csv.writer(response)

        writer.writerow(field_names)
        for obj in queryset:
            writer.writerow([getattr(obj, field) for field in field_names])

        return response

    export_as_csv.short_description = "Export selected identifiers as CSV"

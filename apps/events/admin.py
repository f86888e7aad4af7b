from django.contrib import admin
from django.utils.html import format_html
from .models import Event, Participant, Expense, ExpenseShare, ParticipantRole


class ParticipantInline(admin.TabularInline):
    """Inline admin for participants within an event."""
    model = Participant
    extra = 0
    fields = ['position', 'name', 'phone', 'role', 'wallet_number', 'bank_transfer_id']
    ordering = ['position']


class ExpenseShareInline(admin.TabularInline):
    """Inline admin for shares within an expense."""
    model = ExpenseShare
    extra = 0
    fields = ['participant', 'amount']
    readonly_fields = ['participant', 'amount']

    def has_add_permission(self, request, obj=None):
        """Shares are created by the split calculator, not by hand."""
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ['name', 'date', 'organizer', 'participant_count', 'created_at']
    list_filter = ['date']
    search_fields = ['name', 'description']
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [ParticipantInline]

    def participant_count(self, obj):
        return obj.participants.count()
    participant_count.short_description = 'Participants'


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    list_display = ['name', 'event', 'phone', 'role_badge', 'position']
    list_filter = ['role']
    search_fields = ['name', 'phone', 'event__name']
    readonly_fields = ['id', 'created_at', 'updated_at']

    def role_badge(self, obj):
        """Display role as colored badge."""
        bg = '#A47449' if obj.role == ParticipantRole.ORGANIZER else '#6B8E5E'
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, obj.get_role_display()
        )
    role_badge.short_description = 'Role'


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    """
    Admin interface for expenses.

    Expenses are read-only here: shares must always match the amount, so
    edits go through recording a new expense.
    """

    list_display = ['description', 'event', 'amount', 'category', 'paid_by', 'split_mode', 'date']
    list_filter = ['split_mode', 'category']
    search_fields = ['description', 'event__name', 'paid_by__name']
    readonly_fields = [
        'id', 'event', 'description', 'amount', 'category', 'paid_by',
        'split_mode', 'involved', 'receipt', 'date', 'created_at',
    ]
    inlines = [ExpenseShareInline]

    def has_add_permission(self, request):
        return False

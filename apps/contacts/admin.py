from django.contrib import admin
from django.utils.html import format_html
from .lifecycle import ContactStatus
from .models import Contact, StatusHistory, Opportunity, Deal


STATUS_COLORS = {
    ContactStatus.LEAD: '#6c757d',
    ContactStatus.MQL: '#17a2b8',
    ContactStatus.SQL: '#667eea',
    ContactStatus.OPPORTUNITY: '#ffc107',
    ContactStatus.CUSTOMER: '#28a745',
    ContactStatus.EVANGELIST: '#e83e8c',
    ContactStatus.DORMANT: '#343a40',
}


class StatusHistoryInline(admin.TabularInline):

    model = StatusHistory
    extra = 0  # History is written by the transition service
    readonly_fields = ['created_at', 'changed_by', 'old_status', 'new_status']
    fields = ['created_at', 'changed_by', 'old_status', 'new_status']
    classes = ['collapse']
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('changed_by')


class OpportunityInline(admin.TabularInline):

    model = Opportunity
    extra = 0
    readonly_fields = ['owner', 'expected_value', 'status', 'created_at', 'closed_at']
    fields = ['owner', 'expected_value', 'status', 'created_at', 'closed_at']
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Contact)
class ContactAdmin(admin.ModelAdmin):

    list_display = [
        'id',
        'name',
        'email',
        'status_badge',
        'interest_score',
        'assigned_to',
        'created_at',
    ]

    list_filter = [
        'company',
        'status',
        'assigned_to',
        'created_at',
    ]

    search_fields = [
        'name',
        'email',
        'phone',
    ]

    ordering = ['-created_at']
    list_per_page = 50
    date_hierarchy = 'created_at'

    fieldsets = [
        ('Basic Information', {
            'fields': ['company', 'name', 'email', 'phone']
        }),
        ('Pipeline', {
            'fields': ['status', 'interest_score', 'assigned_to']
        }),
        ('Additional Info', {
            'fields': ['notes'],
            'classes': ['collapse'],
        }),
        ('Timestamps', {
            'fields': ['created_at', 'updated_at'],
            'classes': ['collapse'],
        }),
    ]

    # Status only changes through the transition workflow
    readonly_fields = ['status', 'interest_score', 'created_at', 'updated_at']
    inlines = [OpportunityInline, StatusHistoryInline]

    def status_badge(self, obj):
        """Display status with colored badge"""
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            STATUS_COLORS.get(obj.status, '#6c757d'),
            obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('company', 'assigned_to')


@admin.register(Opportunity)
class OpportunityAdmin(admin.ModelAdmin):
    list_display = ['id', 'contact', 'owner', 'expected_value', 'status', 'created_at', 'closed_at']
    list_filter = ['status', 'created_at']
    search_fields = ['contact__name', 'contact__email']
    readonly_fields = ['created_at', 'closed_at']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('contact', 'owner')


@admin.register(Deal)
class DealAdmin(admin.ModelAdmin):
    list_display = ['id', 'product_name', 'deal_value', 'opportunity', 'closed_by', 'created_at']
    list_filter = ['created_at']
    search_fields = ['product_name', 'opportunity__contact__name']
    readonly_fields = ['created_at']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('opportunity__contact', 'closed_by')


@admin.register(StatusHistory)
class StatusHistoryAdmin(admin.ModelAdmin):
    list_display = ['id', 'contact', 'old_status', 'new_status', 'changed_by', 'created_at']
    list_filter = ['new_status', 'created_at']
    search_fields = ['contact__name', 'contact__email']
    ordering = ['-created_at']
    list_per_page = 100
    readonly_fields = ['contact', 'old_status', 'new_status', 'changed_by', 'created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('contact', 'changed_by')

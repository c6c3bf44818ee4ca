from django.contrib import admin
from django.utils.html import format_html
from .models import Company


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):

    list_display = [
        'name',
        'email',
        'status_badge',
        'contacts_count',
        'created_at'
    ]
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'email', 'phone']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'slug', 'description')
        }),
        ('Contact Information', {
            'fields': ('phone', 'email')
        }),
        ('Status', {
            'fields': ('is_active',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def status_badge(self, obj):

        color, label = ('#28a745', 'Active') if obj.is_active else ('#dc3545', 'Inactive')
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 10px; border-radius: 3px; font-size: 11px;">{}</span>',
            color,
            label
        )

    status_badge.short_description = 'Status'

    def contacts_count(self, obj):

        return format_html(
            '<span style="color: #667eea; font-weight: bold;">{} contacts</span>',
            obj.get_total_contacts_count()
        )

    contacts_count.short_description = 'Contacts'

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _
from .forms import UserChangeForm, UserCreationForm
from .models import User


# CUSTOM USER ADMIN
@admin.register(User)
class UserAdmin(BaseUserAdmin):
    form = UserChangeForm
    add_form = UserCreationForm

    list_display = (
        'email',
        'get_full_name',
        'company',
        'role',
        'is_active',
        'date_joined',
    )

    list_filter = (
        'role',
        'is_active',
        'is_staff',
        'is_superuser',
        'company',
    )
    search_fields = (
        'email',
        'first_name',
        'last_name',
        'company__name',
    )

    ordering = ('-date_joined',)
    list_per_page = 25
    list_select_related = ('company',)

    fieldsets = (
        (_('Login Credentials'), {
            'fields': ('email', 'password'),
            'classes': ('wide',),
        }),
        (_('Personal Information'), {
            'fields': ('first_name', 'last_name'),
        }),
        (_('Company & Role'), {
            'fields': ('company', 'role'),
        }),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        (_('Important Dates'), {
            'fields': ('last_login', 'date_joined'),
            'classes': ('collapse',),
        }),
    )

    # Fields shown on the "Add user" page
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'first_name', 'last_name', 'company', 'role', 'password1', 'password2'),
        }),
    )

import uuid

from django.conf import settings
from django.db import models

from apps.core.models import Company
from .lifecycle import ContactStatus


class Contact(models.Model):

    # Basic Information
    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name='contacts', help_text='Which company owns this contact')
    name = models.CharField(max_length=200, help_text="Contact's full name")
    email = models.EmailField(blank=True, help_text='Email address')
    phone = models.CharField(max_length=20, blank=True, help_text='Phone number in international format')

    # Pipeline
    status = models.CharField(max_length=20, choices=ContactStatus.choices, default=ContactStatus.LEAD, db_index=True, help_text='Current stage in the contact lifecycle')
    interest_score = models.PositiveIntegerField(default=0, help_text='Tracked interactions with marketing content')
    tracking_token = models.UUIDField(default=uuid.uuid4, unique=True, editable=False, help_text='Token embedded in tracked marketing links')

    # Assignment
    assigned_to = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='assigned_contacts', help_text='Which agent is responsible for this contact')

    notes = models.TextField(blank=True, help_text='General notes about this contact')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Contact'
        verbose_name_plural = 'Contacts'
        ordering = ['-created_at']

    def __str__(self):
        """String representation: Name - Status"""
        return f"{self.name} - {self.get_status_display()}"

    def is_closed(self):
        """Customers and evangelists have closed the pipeline"""
        return self.status in (ContactStatus.CUSTOMER, ContactStatus.EVANGELIST)

    def get_open_opportunity(self):
        return self.opportunities.filter(status=Opportunity.STATUS_OPEN).order_by('-created_at').first()

    def get_status_history(self):
        """Status changes (newest first)"""
        return self.status_history.all().select_related('changed_by').order_by('-created_at', '-id')


class StatusHistory(models.Model):
    """Append-only audit of every status change of a contact"""

    contact = models.ForeignKey(Contact, on_delete=models.CASCADE, related_name='status_history')
    old_status = models.CharField(max_length=20, choices=ContactStatus.choices, blank=True, null=True, help_text='Empty for the initial status')
    new_status = models.CharField(max_length=20, choices=ContactStatus.choices)
    changed_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='status_changes', help_text='Empty when the system changed the status')
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = 'Status History'
        verbose_name_plural = 'Status History'
        ordering = ['-created_at']

    def __str__(self):
        who = self.changed_by.get_full_name() if self.changed_by else 'System'
        return f"{who}: {self.old_status or '-'} → {self.new_status}"


class Opportunity(models.Model):

    STATUS_OPEN = 'OPEN'
    STATUS_WON = 'WON'
    STATUS_LOST = 'LOST'

    STATUS_CHOICES = [
        (STATUS_OPEN, 'Open'),
        (STATUS_WON, 'Won'),
        (STATUS_LOST, 'Lost'),
    ]

    contact = models.ForeignKey(Contact, on_delete=models.CASCADE, related_name='opportunities')
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='opportunities', help_text='Agent who opened the opportunity')
    expected_value = models.DecimalField(max_digits=14, decimal_places=2)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_OPEN, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    closed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = 'Opportunity'
        verbose_name_plural = 'Opportunities'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.contact.name} - {self.expected_value} ({self.get_status_display()})"


class Deal(models.Model):

    opportunity = models.OneToOneField(Opportunity, on_delete=models.CASCADE, related_name='deal')
    deal_value = models.DecimalField(max_digits=14, decimal_places=2)
    product_name = models.CharField(max_length=200, help_text='Stored lower-cased')
    closed_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='closed_deals')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Deal'
        verbose_name_plural = 'Deals'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.product_name} - {self.deal_value}"

from django.db import models
from django.utils.text import slugify


class Company(models.Model):

    # Basic Information
    name = models.CharField(max_length=200,unique=True,help_text="Company name")
    slug = models.SlugField(max_length=200,unique=True,help_text="URL-friendly name (auto-generated)")
    description = models.TextField(blank=True,help_text="Brief description about the company")

    # Contact Information
    phone = models.CharField(max_length=17,blank=True,help_text="Contact phone number")
    email = models.EmailField(blank=True,help_text="Contact email")

    # Status
    is_active = models.BooleanField(default=True,db_index=True,help_text="Is company active?")

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Company"
        verbose_name_plural = "Companies"
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):

        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    def get_total_contacts_count(self):

        return self.contacts.count()

from django.db import models
from django.utils.text import slugify
from django.core.validators import URLValidator


class Agency(models.Model):

    STATUS_CHOICES = [
        ('ACTIVE', 'Active'),
        ('SUSPENDED', 'Suspended'),
    ]

    # Basic Information
    name = models.CharField(max_length=200, unique=True, help_text="Brokerage agency name")
    slug = models.SlugField(max_length=200, unique=True, help_text="URL-friendly name (auto-generated)")
    logo = models.ImageField(upload_to='agencies/logos/', null=True, blank=True, help_text="Agency logo (used on offers)")

    # Contact Information
    phone = models.CharField(max_length=20, blank=True, help_text="Contact phone number")
    email = models.EmailField(blank=True, help_text="Contact email")
    website = models.URLField(blank=True, validators=[URLValidator()], help_text="Agency website")
    address = models.TextField(blank=True, help_text="Office address")

    # Branding
    primary_color = models.CharField(max_length=7, default='#1E3A5F', help_text="Hex color used on offer documents")

    # Status
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='ACTIVE', db_index=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Agency"
        verbose_name_plural = "Agencies"
        ordering = ['name']
        indexes = [
            models.Index(fields=['slug'], name='agency_slug_idx'),
            models.Index(fields=['status'], name='agency_status_idx'),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):

        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    def is_active(self):
        return self.status == 'ACTIVE'

    def get_active_users_count(self):

        return self.users.filter(is_active=True).count()

    def get_brokers_count(self):

        return self.users.filter(is_active=True, role='BROKER').count()

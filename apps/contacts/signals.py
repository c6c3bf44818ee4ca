from django.db.models.signals import post_save
from django.dispatch import receiver
from .models import Contact, StatusHistory


@receiver(post_save, sender=Contact)
def record_initial_status(sender, instance, created, **kwargs):

    # Only for newly created contacts, later changes are written by
    # services.submit_transition together with the user who made them
    if created:
        StatusHistory.objects.create(
            contact=instance,
            old_status=None,
            new_status=instance.status,
            changed_by=None,  # System-generated
        )

from django.db.models.signals import post_save, pre_save, post_delete
from django.dispatch import receiver
from .models import PropertyRequest, Activity, recalculate_deal_counts


@receiver(pre_save, sender=PropertyRequest)
def track_contact_changes(sender, instance, **kwargs):
    # Remember the previous company/person so both sides get recounted
    instance._old_company_id = None
    instance._old_person_id = None

    if instance.pk:
        old = PropertyRequest.objects.filter(pk=instance.pk).values('company_id', 'person_id').first()
        if old:
            instance._old_company_id = old['company_id']
            instance._old_person_id = old['person_id']


@receiver(post_save, sender=PropertyRequest)
def refresh_contact_counters(sender, instance, created, **kwargs):

    if created:
        Activity.log_system(instance, title='Deal created', user=instance.user)

    company_ids = {instance.company_id, getattr(instance, '_old_company_id', None)}
    person_ids = {instance.person_id, getattr(instance, '_old_person_id', None)}

    for company_id in company_ids - {None}:
        recalculate_deal_counts(company_id=company_id)
    for person_id in person_ids - {None}:
        recalculate_deal_counts(person_id=person_id)


@receiver(post_delete, sender=PropertyRequest)
def refresh_counters_on_delete(sender, instance, **kwargs):
    recalculate_deal_counts(company_id=instance.company_id, person_id=instance.person_id)

import logging

from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from .models import Milestone, Payment
from .services.recompute import recompute_paid, recompute_total

logger = logging.getLogger(__name__)

"""
    Keep contract totals in sync with milestones and payments.
    Every save/delete of a child row is followed, in the same transaction,
    by a recompute of the contract it belongs to.
    Bulk queryset operations (update(), bulk_create()) don't send these
    signals; run tasks.recompute_all_contracts after using them.
"""


# Remember which contract the row belonged to before this save,
# so a row moved to another contract recomputes both of them
@receiver(pre_save, sender=Milestone)
@receiver(pre_save, sender=Payment)
def remember_previous_contract(sender, instance, **kwargs):
    if instance._state.adding or instance.pk is None:
        instance._previous_contract_id = None
        return
    instance._previous_contract_id = (
        sender.objects.filter(pk=instance.pk)
        .values_list("contract_id", flat=True)
        .first()
    )


def _recompute_after_save(recompute, instance):
    # contract from the new row
    recompute(instance.contract_id)
    previous = getattr(instance, "_previous_contract_id", None)
    if previous is not None and previous != instance.contract_id:
        logger.info("%s %s moved from contract %s to %s",
                    instance.__class__.__name__, instance.pk,
                    previous, instance.contract_id)
        recompute(previous)
    instance._previous_contract_id = instance.contract_id


""" Milestones drive total_amount """


@receiver(post_save, sender=Milestone)
def milestone_saved(sender, instance, **kwargs):
    _recompute_after_save(recompute_total, instance)


@receiver(post_delete, sender=Milestone)
def milestone_deleted(sender, instance, **kwargs):
    # only the old row exists; during a contract cascade the
    # recompute may find the contract already gone, which is fine
    recompute_total(instance.contract_id)


""" Payments drive paid_amount """


@receiver(post_save, sender=Payment)
def payment_saved(sender, instance, **kwargs):
    _recompute_after_save(recompute_paid, instance)


@receiver(post_delete, sender=Payment)
def payment_deleted(sender, instance, **kwargs):
    recompute_paid(instance.contract_id)

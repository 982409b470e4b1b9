import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task  # register this function as a Celery task
def recompute_all_contracts(contract_ids=None):
    """
    Re-derive total/paid/debt for every contract (or the given ones).
    Needed after bulk imports or queryset.update() calls that bypass
    the change observer. Returns how many contracts were processed.
    """
    # import lazily to avoid circular imports at module import time
    from .models import Contract
    from .services.recompute import recompute_contract

    ids = Contract.objects.order_by("pk").values_list("pk", flat=True)
    if contract_ids is not None:
        ids = ids.filter(pk__in=contract_ids)

    processed = 0
    # one short transaction per contract, so locks are held briefly
    for contract_id in ids.iterator():
        if recompute_contract(contract_id) is not None:
            processed += 1

    logger.info("Recomputed %s contracts", processed)
    return processed

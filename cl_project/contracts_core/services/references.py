from ..exceptions import ReferentialError
from ..models import Contract

"""
    Resolve ids handed in by callers.
    An unknown id is a referential error, not a missing page.
"""
def resolve(model, pk, *, required=True):
    if pk is None:
        if required:
            raise ReferentialError(f"{model._meta.verbose_name} is required")
        return None
    try:
        return model.objects.get(pk=pk)
    except model.DoesNotExist:
        raise ReferentialError(
            f"{model._meta.verbose_name} {pk} does not exist") from None


def lock_contracts(*contract_ids):
    """
    Lock the given contracts for the rest of the transaction.
    Rows are locked in ascending id order, so two writers touching
    the same pair of contracts can't deadlock.
    Returns {id: contract}; raises ReferentialError if any id is unknown.
    """
    ids = sorted({int(pk) for pk in contract_ids if pk is not None})
    if not ids:
        raise ReferentialError("contract is required")
    locked = {
        c.pk: c
        for c in Contract.objects.select_for_update().filter(pk__in=ids).order_by("pk")
    }
    missing = [pk for pk in ids if pk not in locked]
    if missing:
        raise ReferentialError(f"contract {missing[0]} does not exist")
    return locked

from django.db import transaction

from ..models import Payment, PaymentMethod
from .audit_helper import log_action
from .references import lock_contracts, resolve

PAYMENT_FIELDS = (
    "contract_id", "payment_date", "amount", "method_id", "payment_doc_number",
)


# ----------------------------
# Payment workflows
# ----------------------------
# The change observer recomputes paid/debt after every save and delete,
# inside the same transaction as the mutation.


def _lock_payment(payment_id, target_contract_id=None):
    """
    Lock the payment's owning contract (and the target of a move), then
    the payment row itself. If another writer moved the payment between
    reading its owner and taking the lock, lock the new owner and retry.
    Must run inside a transaction.
    """
    while True:
        owner_id = Payment.objects.values_list(
            "contract_id", flat=True).get(pk=payment_id)
        lock_contracts(owner_id, target_contract_id)
        payment = Payment.objects.select_for_update().get(pk=payment_id)
        if payment.contract_id == owner_id:
            return payment


def create_payment(
    contract_id,
    payment_date=None,
    amount=None,
    method_id=None,
    doc_number=None,
    user=None,
):
    with transaction.atomic():
        contract = lock_contracts(contract_id)[int(contract_id)]
        payment = Payment(
            contract=contract,
            amount=amount,
            payment_method=resolve(PaymentMethod, method_id, required=False),
            payment_doc_number=doc_number,
        )
        # leave the model default (today) in place when no date is given
        if payment_date is not None:
            payment.payment_date = payment_date
        # full_clean() rejects zero and negative amounts
        payment.save()
        log_action(
            action="create",
            instance=payment,
            user=user,
            changes={
                "contract_id": contract.pk,
                "amount": str(payment.amount),
                "payment_doc_number": doc_number,
            },
        )
    return payment


def update_payment(payment_id, user=None, **changes):
    """
    Change a payment. Passing contract_id moves it to another contract;
    both contracts get their paid amounts recomputed.
    """
    unknown = set(changes) - set(PAYMENT_FIELDS)
    if unknown:
        raise ValueError(f"Unknown payment fields: {sorted(unknown)}")

    with transaction.atomic():
        payment = _lock_payment(payment_id, changes.get("contract_id"))
        for key, value in changes.items():
            if key == "method_id":
                payment.payment_method = resolve(
                    PaymentMethod, value, required=False)
            else:
                setattr(payment, key, value)
        payment.save()
        log_action(
            action="update",
            instance=payment,
            user=user,
            changes={k: str(v) for k, v in changes.items()},
        )
    return payment


def delete_payment(payment_id, user=None):
    with transaction.atomic():
        payment = _lock_payment(payment_id)
        log_action(
            action="delete",
            instance=payment,
            user=user,
            changes={
                "contract_id": payment.contract_id,
                "amount": str(payment.amount),
            },
        )
        payment.delete()

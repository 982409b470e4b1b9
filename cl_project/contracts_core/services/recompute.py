import logging
from decimal import Decimal
from typing import Iterable, NamedTuple, Optional

from django.db import transaction

from ..models import Contract, Milestone, Payment

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")
CENTS = Decimal("0.01")


class LedgerTotals(NamedTuple):
    total_amount: Decimal
    paid_amount: Decimal
    debt_amount: Decimal


# ----------------------------
# Pure derivations
# ----------------------------
def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    # Exact decimal accumulation, no float on the way
    return sum((Decimal(a) for a in amounts), ZERO).quantize(CENTS)


def debt_for(total: Decimal, paid: Decimal) -> Decimal:
    # Debt never goes negative, overpayment shows as paid > total
    return max(total - paid, ZERO)


def derive_totals(milestone_amounts, payment_amounts) -> LedgerTotals:
    """What the three ledger fields must be for the given children."""
    total = sum_amounts(milestone_amounts)
    paid = sum_amounts(payment_amounts)
    return LedgerTotals(total, paid, debt_for(total, paid))


def expected_totals(contract_id) -> LedgerTotals:
    """Freshly summed children of a contract, ignoring its stored fields."""
    return derive_totals(
        Milestone.objects.filter(contract_id=contract_id).values_list(
            "amount", flat=True),
        Payment.objects.filter(contract_id=contract_id).values_list(
            "amount", flat=True),
    )


# ----------------------------
# Recompute workflows
# ----------------------------
def _lock_contract(contract_id):
    # Row lock until the enclosing transaction ends,
    # so two recomputes of one contract can't interleave
    return (
        Contract.objects.select_for_update()
        .filter(pk=contract_id)
        .only("pk", "total_amount", "paid_amount")
        .first()
    )


def recompute_total(contract_id) -> Optional[LedgerTotals]:
    """
    Re-derive total_amount from the contract's milestones, then debt_amount
    against the current paid_amount.
    A missing contract (e.g. already removed by a cascading delete) is a no-op.
    """
    with transaction.atomic():
        contract = _lock_contract(contract_id)
        if contract is None:
            logger.debug("recompute_total: contract %s not found, skipped",
                         contract_id)
            return None

        total = sum_amounts(
            Milestone.objects.filter(contract_id=contract_id).values_list(
                "amount", flat=True)
        )
        debt = debt_for(total, contract.paid_amount)

        # update() writes only the derived columns and fires no signals
        Contract.objects.filter(pk=contract_id).update(
            total_amount=total, debt_amount=debt
        )

    logger.debug("recompute_total: contract %s total=%s debt=%s",
                 contract_id, total, debt)
    return LedgerTotals(total, contract.paid_amount, debt)


def recompute_paid(contract_id) -> Optional[LedgerTotals]:
    """
    Re-derive paid_amount from the contract's payments, then debt_amount
    against the current total_amount.
    A missing contract is a no-op.
    """
    with transaction.atomic():
        contract = _lock_contract(contract_id)
        if contract is None:
            logger.debug("recompute_paid: contract %s not found, skipped",
                         contract_id)
            return None

        paid = sum_amounts(
            Payment.objects.filter(contract_id=contract_id).values_list(
                "amount", flat=True)
        )
        debt = debt_for(contract.total_amount, paid)

        Contract.objects.filter(pk=contract_id).update(
            paid_amount=paid, debt_amount=debt
        )

    logger.debug("recompute_paid: contract %s paid=%s debt=%s",
                 contract_id, paid, debt)
    return LedgerTotals(contract.total_amount, paid, debt)


def recompute_contract(contract_id) -> Optional[LedgerTotals]:
    """Re-derive all three fields. Used for repairs, not on the mutation path."""
    with transaction.atomic():
        if recompute_total(contract_id) is None:
            return None
        return recompute_paid(contract_id)

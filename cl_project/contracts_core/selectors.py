from decimal import Decimal
from itertools import product

from django.conf import settings
from django.db.models import Prefetch

from .models import Contract, Milestone, Payment
from .services.recompute import expected_totals

# ------------------------------------
# Read-only queries over the ledger
# ------------------------------------


def contracts_with_debt_over(threshold=None):
    """Contracts whose debt is strictly above threshold (default from settings)."""
    if threshold is None:
        threshold = getattr(settings, "CONTRACT_DEBT_THRESHOLD", Decimal("10000.00"))
    return (
        Contract.objects.with_debt_over(threshold)
        .select_related("customer")
        .order_by("-debt_amount", "pk")
    )


def contract_details(contract_ids=None):
    """
    One row per milestone x payment of each contract.
    Milestones and payments are paired independently against their contract
    (two left joins), so a contract with 2 milestones and 3 payments gives
    6 rows, and a contract with neither gives one row of None children.
    """
    contracts = Contract.objects.order_by("pk").prefetch_related(
        Prefetch("milestones", queryset=Milestone.objects.order_by("milestone_no")),
        Prefetch("payments", queryset=Payment.objects.order_by("payment_date", "pk")),
    )
    if contract_ids is not None:
        contracts = contracts.filter(pk__in=contract_ids)

    rows = []
    for contract in contracts:
        milestones = list(contract.milestones.all()) or [None]
        payments = list(contract.payments.all()) or [None]
        for milestone, payment in product(milestones, payments):
            rows.append({
                "contract_id": contract.pk,
                "contract_number": contract.contract_number,
                "contract_date": contract.contract_date,
                "milestone_no": milestone.milestone_no if milestone else None,
                "milestone_date": milestone.milestone_date if milestone else None,
                "milestone_amount": milestone.amount if milestone else None,
                "advance_amount": milestone.advance_amount if milestone else None,
                "payment_id": payment.pk if payment else None,
                "payment_date": payment.payment_date if payment else None,
                "payment_amount": payment.amount if payment else None,
            })
    return rows


def inconsistent_contracts(queryset=None):
    """
    Contracts whose stored amounts differ from their freshly summed children.
    Returns a list of (contract, expected LedgerTotals).
    """
    if queryset is None:
        queryset = Contract.objects.all()
    drifted = []
    for contract in queryset.order_by("pk"):
        expected = expected_totals(contract.pk)
        stored = (contract.total_amount, contract.paid_amount, contract.debt_amount)
        if stored != tuple(expected):
            drifted.append((contract, expected))
    return drifted

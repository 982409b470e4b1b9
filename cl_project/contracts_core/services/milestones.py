from decimal import Decimal

from django.db import transaction

from ..models import ExecutionStage, Milestone
from .audit_helper import log_action
from .references import lock_contracts, resolve

MILESTONE_FIELDS = (
    "contract_id", "milestone_no", "milestone_date", "stage_id",
    "amount", "advance_amount", "subject",
)


# ----------------------------
# Milestone workflows
# ----------------------------
# The change observer recomputes total/debt after every save and delete,
# inside the same transaction as the mutation.


def create_milestone(
    contract_id,
    milestone_no,
    milestone_date=None,
    stage_id=None,
    amount=None,
    advance_amount=Decimal("0.00"),
    subject=None,
    user=None,
):
    with transaction.atomic():
        contract = lock_contracts(contract_id)[int(contract_id)]
        milestone = Milestone(
            contract=contract,
            milestone_no=milestone_no,
            milestone_date=milestone_date,
            stage=resolve(ExecutionStage, stage_id, required=False),
            amount=amount,
            advance_amount=advance_amount,
            subject=subject,
        )
        # full_clean() rejects negative amounts and a reused number
        milestone.save()
        log_action(
            action="create",
            instance=milestone,
            user=user,
            changes={
                "contract_id": contract.pk,
                "milestone_no": milestone.milestone_no,
                "amount": str(milestone.amount),
                "advance_amount": str(milestone.advance_amount),
            },
        )
    return milestone


def update_milestone(owner_contract_id, current_no, *, user=None, **changes):
    """
    Change the milestone numbered current_no on owner_contract_id.
    changes may carry contract_id to move it to another contract
    (both contracts get their totals recomputed) and milestone_no
    to renumber it.
    """
    unknown = set(changes) - set(MILESTONE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown milestone fields: {sorted(unknown)}")

    with transaction.atomic():
        target_id = changes.get("contract_id", owner_contract_id)
        lock_contracts(owner_contract_id, target_id)
        milestone = Milestone.objects.select_for_update().get(
            contract_id=owner_contract_id, milestone_no=current_no
        )
        for key, value in changes.items():
            if key == "stage_id":
                milestone.stage = resolve(ExecutionStage, value, required=False)
            else:
                setattr(milestone, key, value)
        milestone.save()
        log_action(
            action="update",
            instance=milestone,
            user=user,
            changes={k: str(v) for k, v in changes.items()},
        )
    return milestone


def delete_milestone(contract_id, milestone_no, user=None):
    with transaction.atomic():
        lock_contracts(contract_id)
        milestone = Milestone.objects.select_for_update().get(
            contract_id=contract_id, milestone_no=milestone_no
        )
        log_action(
            action="delete",
            instance=milestone,
            user=user,
            changes={
                "contract_id": milestone.contract_id,
                "milestone_no": milestone.milestone_no,
                "amount": str(milestone.amount),
            },
        )
        milestone.delete()

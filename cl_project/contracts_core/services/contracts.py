import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from ..models import (DERIVED_FIELDS, Contract, ContractType, ExecutionStage,
                      Organization, VatRate)
from .audit_helper import log_action
from .references import lock_contracts, resolve

logger = logging.getLogger(__name__)

ORGANIZATION_FIELDS = (
    "postal_index", "address", "phone", "fax", "inn", "corr_account",
    "bank", "checking_account", "okonh", "okpo", "bik",
)

# Plain attributes a caller may change on a contract
CONTRACT_FIELDS = (
    "contract_number", "contract_date", "execution_date",
    "subject", "note", "is_active",
)

# Caller-facing id -> (model field, lookup model, required)
CONTRACT_REFERENCES = {
    "customer_id": ("customer", Organization, True),
    "contractor_id": ("contractor", Organization, True),
    "contract_type_id": ("contract_type", ContractType, True),
    "current_stage_id": ("current_stage", ExecutionStage, False),
    "vat_id": ("vat_rate", VatRate, False),
}


# ----------------------------
# Organization workflows
# ----------------------------
def create_organization(name, user=None, **fields):
    unknown = set(fields) - set(ORGANIZATION_FIELDS)
    if unknown:
        raise ValueError(f"Unknown organization fields: {sorted(unknown)}")

    with transaction.atomic():
        org = Organization(name=name, **fields)
        org.save()  # full_clean() catches a duplicate inn
        log_action(action="create", instance=org, user=user,
                   changes={"name": name, "inn": org.inn})
    return org


def delete_organization(org_id, user=None):
    """Refuse to delete an organization any contract still points at."""
    with transaction.atomic():
        org = resolve(Organization, org_id)
        log_action(action="delete", instance=org, user=user,
                   changes={"name": org.name})
        # Organization.delete() raises ReferentialError while referenced,
        # which also rolls back the log entry above
        org.delete()


# ----------------------------
# Contract workflows
# ----------------------------
def create_contract(
    contract_number,
    customer_id,
    contractor_id,
    contract_type_id,
    *,
    current_stage_id=None,
    vat_id=None,
    user=None,
    **fields,
):
    """
    Register a new contract. Its derived amounts start at 0.00 and
    only change when milestones or payments are recorded against it.
    """
    unknown = set(fields) - set(CONTRACT_FIELDS)
    if unknown:
        raise ValueError(f"Unknown contract fields: {sorted(unknown)}")

    refs = {
        "customer_id": customer_id,
        "contractor_id": contractor_id,
        "contract_type_id": contract_type_id,
        "current_stage_id": current_stage_id,
        "vat_id": vat_id,
    }

    with transaction.atomic():
        contract = Contract(contract_number=contract_number, **fields)
        for key, pk in refs.items():
            field, model, required = CONTRACT_REFERENCES[key]
            setattr(contract, field, resolve(model, pk, required=required))
        # full_clean() rejects a contract number reused by the same customer
        contract.save()
        log_action(
            action="create",
            instance=contract,
            user=user,
            changes={
                "contract_number": contract.contract_number,
                "customer_id": customer_id,
                "contractor_id": contractor_id,
            },
        )
    logger.info("Contract %s created (%s)", contract.pk, contract.contract_number)
    return contract


def update_contract(contract_id, user=None, **changes):
    """Change a contract's own attributes. Derived amounts are not writable."""
    derived = set(changes) & set(DERIVED_FIELDS)
    if derived:
        raise ValidationError(
            f"{sorted(derived)} are derived from milestones and payments "
            "and can't be set directly.")
    unknown = set(changes) - set(CONTRACT_FIELDS) - set(CONTRACT_REFERENCES)
    if unknown:
        raise ValueError(f"Unknown contract fields: {sorted(unknown)}")

    with transaction.atomic():
        contract = lock_contracts(contract_id)[int(contract_id)]
        for key, value in changes.items():
            if key in CONTRACT_REFERENCES:
                field, model, required = CONTRACT_REFERENCES[key]
                setattr(contract, field, resolve(model, value, required=required))
            else:
                setattr(contract, key, value)
        contract.save()  # derived columns are left out of the UPDATE
        log_action(
            action="update",
            instance=contract,
            user=user,
            changes={k: str(v) for k, v in changes.items()},
        )
    contract.refresh_from_db()
    return contract


def delete_contract(contract_id, user=None):
    """
    Delete a contract together with its milestones and payments.
    Each cascaded child still goes through the change observer;
    its recompute is a no-op once the contract row is gone.
    Returns the number of rows removed per model.
    """
    with transaction.atomic():
        contract = lock_contracts(contract_id)[int(contract_id)]
        pk = contract.pk
        log_action(
            action="delete",
            instance=contract,
            user=user,
            object_id=pk,
            changes={
                "contract_number": contract.contract_number,
                "milestones": contract.milestones.count(),
                "payments": contract.payments.count(),
            },
        )
        _, per_model = contract.delete()
    logger.info("Contract %s deleted: %s", pk, per_model)
    return per_model

from .contracts import (create_contract, create_organization, delete_contract,
                        delete_organization, update_contract)
from .milestones import create_milestone, delete_milestone, update_milestone
from .payments import create_payment, delete_payment, update_payment
from .recompute import (LedgerTotals, debt_for, derive_totals, expected_totals,
                        recompute_contract, recompute_paid, recompute_total)

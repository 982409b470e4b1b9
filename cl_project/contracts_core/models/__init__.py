from .auditlog import AuditLog
from .contract import DERIVED_FIELDS, Contract, Milestone, Payment
from .lookup import ContractType, ExecutionStage, PaymentMethod, VatRate
from .organization import Organization
from .reports import (ContractDebtOverThreshold, ContractFull, MilestoneSummary,
                      OrganizationView, PaymentSummary)

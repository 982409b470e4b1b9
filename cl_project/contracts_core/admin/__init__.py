from .actions import recompute_selected_contracts
from .contract import ContractAdmin, MilestoneAdmin, PaymentAdmin
from .inlines import MilestoneInline, PaymentInline
from .lookups import (ContractTypeAdmin, ExecutionStageAdmin,
                      PaymentMethodAdmin, VatRateAdmin)
from .organization import OrganizationAdmin
from .ReadOnly import ReadOnlyAdmin
from .reports import (AuditLogAdmin, ContractDebtOverThresholdAdmin,
                      ContractFullAdmin, MilestoneSummaryAdmin,
                      OrganizationViewAdmin, PaymentSummaryAdmin)

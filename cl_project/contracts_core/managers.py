from decimal import Decimal

from django.db import models


# -----------------------------------------
# Query helpers for the contract ledger
# -----------------------------------------
class ContractQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def for_customer(self, organization):
        return self.filter(customer=organization)

    def for_contractor(self, organization):
        return self.filter(contractor=organization)

    # Contracts whose debt is strictly above the threshold
    def with_debt_over(self, threshold):
        return self.filter(debt_amount__gt=Decimal(threshold))

    # Overpaid contracts show up only as paid > total (debt is clamped at 0)
    def overpaid(self):
        return self.filter(paid_amount__gt=models.F("total_amount"))


class ContractManager(models.Manager.from_queryset(ContractQuerySet)):
    pass

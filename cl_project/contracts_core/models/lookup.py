from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from ..exceptions import ReferentialError


# ---------- Reference data ----------
# Small dictionaries the ledger points at.
# They carry no logic of their own beyond basic validation.


class ContractType(models.Model):
    # e.g. "Work contract", "Agency", "License"
    name = models.CharField(max_length=200, unique=True)

    class Meta:
        db_table = "contract_types"
        ordering = ("name",)

    def __str__(self):
        return self.name

    """ A type still used by a contract can't go away """

    def delete(self, *args, **kwargs):
        if self.contracts.exists():
            raise ReferentialError(
                f"Contract type '{self.name}' is used by contracts.")
        return super().delete(*args, **kwargs)


class ExecutionStage(models.Model):
    # e.g. "Preparation", "In progress", "Completed"
    # Deleting a stage only clears it on contracts and milestones
    name = models.CharField(max_length=200, unique=True)

    class Meta:
        db_table = "execution_stages"
        ordering = ("name",)

    def __str__(self):
        return self.name


class VatRate(models.Model):
    percent = models.DecimalField(max_digits=5, decimal_places=2)
    description = models.CharField(max_length=200, null=True, blank=True)

    class Meta:
        db_table = "vat_rates"
        ordering = ("percent",)
        constraints = [
            # Percent must stay in [0, 100]
            models.CheckConstraint(
                condition=models.Q(percent__gte=0) & models.Q(percent__lte=100),
                name="vat_percent_range",
            ),
        ]

    def __str__(self):
        return f"{self.percent}%"

    def clean(self):
        if self.percent is not None and not (
            Decimal("0") <= self.percent <= Decimal("100")
        ):
            raise ValidationError(
                {"percent": "VAT percent must be between 0 and 100."})

    def save(self, *args, **kwargs):
        self.full_clean()  # run validations before saving
        return super().save(*args, **kwargs)


class PaymentMethod(models.Model):
    # e.g. "Bank transfer", "Cash", "Bank card"
    name = models.CharField(max_length=200, unique=True)

    class Meta:
        db_table = "payment_methods"
        ordering = ("name",)

    def __str__(self):
        return self.name

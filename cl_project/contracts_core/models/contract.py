from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from ..managers import ContractManager
from .lookup import ContractType, ExecutionStage, PaymentMethod, VatRate
from .organization import Organization

ZERO = Decimal("0.00")

# Fields owned by the recompute engine, never written from user input
DERIVED_FIELDS = ("total_amount", "paid_amount", "debt_amount")


# ---------- Contract (the ledger record) ----------
class Contract(models.Model):
    # Human-readable number, e.g. "K-001/2025"
    contract_number = models.CharField(max_length=64)
    contract_date = models.DateField(default=timezone.localdate)

    # Both parties must exist for as long as the contract does
    customer = models.ForeignKey(
        Organization,
        on_delete=models.PROTECT,
        related_name="contracts_as_customer",
    )
    contractor = models.ForeignKey(
        Organization,
        on_delete=models.PROTECT,
        related_name="contracts_as_contractor",
    )
    contract_type = models.ForeignKey(
        ContractType,
        on_delete=models.PROTECT,
        related_name="contracts",
    )

    # Optional references, cleared if the lookup row goes away
    current_stage = models.ForeignKey(
        ExecutionStage,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="contracts",
    )
    vat_rate = models.ForeignKey(
        VatRate,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="contracts",
    )

    execution_date = models.DateField(null=True, blank=True)
    subject = models.TextField(null=True, blank=True)
    note = models.TextField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    # Derived amounts, maintained by services.recompute:
    #   total = sum(milestones.amount)
    #   paid  = sum(payments.amount)
    #   debt  = max(total - paid, 0)
    total_amount = models.DecimalField(
        max_digits=18, decimal_places=2, default=ZERO, editable=False
    )
    paid_amount = models.DecimalField(
        max_digits=18, decimal_places=2, default=ZERO, editable=False
    )
    debt_amount = models.DecimalField(
        max_digits=18, decimal_places=2, default=ZERO, editable=False
    )

    objects = ContractManager()

    class Meta:
        db_table = "contracts"
        ordering = ("-contract_date", "contract_number")
        indexes = [
            models.Index(fields=["contract_date"], name="idx_contracts_date"),
            models.Index(fields=["customer"], name="idx_contracts_customer"),
            models.Index(fields=["contractor"], name="idx_contracts_contractor"),
        ]
        constraints = [
            # A customer can't reuse a contract number,
            # different customers can
            models.UniqueConstraint(
                fields=["contract_number", "customer"],
                name="uq_contract_number_customer",
            ),
            models.CheckConstraint(
                condition=models.Q(total_amount__gte=0)
                & models.Q(paid_amount__gte=0)
                & models.Q(debt_amount__gte=0),
                name="contract_non_negative_amounts",
            ),
        ]

    def __str__(self):
        return f"Contract {self.contract_number}"

    """ Derived amounts are never taken from the caller.
    A new contract has no children yet, so it starts at zero;
    an existing one saves everything except the derived columns. """

    def save(self, *args, **kwargs):
        if self._state.adding:
            self.total_amount = ZERO
            self.paid_amount = ZERO
            self.debt_amount = ZERO
        elif kwargs.get("update_fields") is None:
            kwargs["update_fields"] = [
                f.name
                for f in self._meta.concrete_fields
                if not f.primary_key and f.name not in DERIVED_FIELDS
            ]
        self.full_clean()  # run validations before saving
        return super().save(*args, **kwargs)


# ---------- Milestone ----------
# Planned payment obligation; numbered within its contract
class Milestone(models.Model):
    contract = models.ForeignKey(
        Contract, on_delete=models.CASCADE, related_name="milestones"
    )
    milestone_no = models.IntegerField()
    milestone_date = models.DateField(null=True, blank=True)
    stage = models.ForeignKey(
        ExecutionStage,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="milestones",
    )
    amount = models.DecimalField(max_digits=18, decimal_places=2)
    # Advance is independent of amount (may even exceed it)
    advance_amount = models.DecimalField(
        max_digits=18, decimal_places=2, default=ZERO
    )
    subject = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "contract_milestones"
        ordering = ("contract_id", "milestone_no")
        indexes = [
            models.Index(fields=["contract"], name="idx_milestones_contract"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["contract", "milestone_no"],
                name="uq_milestone_contract_no",
            ),
            models.CheckConstraint(
                condition=models.Q(amount__gte=0)
                & models.Q(advance_amount__gte=0),
                name="milestone_non_negative_amounts",
            ),
        ]

    def __str__(self):
        return f"Milestone {self.milestone_no} ({self.amount})"

    def clean(self):
        if self.amount is not None and self.amount < 0:
            raise ValidationError({"amount": "Milestone amount must be >= 0"})
        if self.advance_amount is not None and self.advance_amount < 0:
            raise ValidationError(
                {"advance_amount": "Advance amount must be >= 0"})

    def save(self, *args, **kwargs):
        self.full_clean()  # run validations before saving
        return super().save(*args, **kwargs)


# ---------- Payment ----------
# Money actually received against a contract
class Payment(models.Model):
    contract = models.ForeignKey(
        Contract, on_delete=models.CASCADE, related_name="payments"
    )
    payment_date = models.DateField(default=timezone.localdate)
    amount = models.DecimalField(max_digits=18, decimal_places=2)
    payment_method = models.ForeignKey(
        PaymentMethod,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="payments",
    )
    payment_doc_number = models.CharField(max_length=100, null=True, blank=True)

    class Meta:
        db_table = "payments"
        ordering = ("payment_date", "id")
        indexes = [
            models.Index(fields=["contract"], name="idx_payments_contract"),
            models.Index(fields=["payment_date"], name="idx_payments_date"),
        ]
        constraints = [
            # Unlike milestones, a zero payment makes no sense
            models.CheckConstraint(
                condition=models.Q(amount__gt=0),
                name="payment_positive_amount",
            ),
        ]

    def __str__(self):
        return f"Payment {self.payment_doc_number or self.pk} ({self.amount})"

    def clean(self):
        if self.amount is not None and self.amount <= 0:
            raise ValidationError({"amount": "Payment amount must be > 0"})

    def save(self, *args, **kwargs):
        self.full_clean()  # run validations before saving
        return super().save(*args, **kwargs)

import datetime
from decimal import Decimal

from ..models import (Contract, ContractType, ExecutionStage, Milestone,
                      Organization, Payment, PaymentMethod, VatRate)
from ..services import create_contract


class LedgerFixturesMixin:
    """Reference data, two parties and a helper to open contracts."""

    def setUp(self):
        super().setUp()
        self.work = ContractType.objects.create(name="Work contract")
        self.in_progress = ExecutionStage.objects.create(name="In progress")
        self.vat20 = VatRate.objects.create(
            percent=Decimal("20.00"), description="Standard rate")
        self.bank_transfer = PaymentMethod.objects.create(name="Bank transfer")
        self.customer = Organization.objects.create(
            name="Customer LLC", inn="1234567890")
        self.contractor = Organization.objects.create(
            name="Contractor IE", inn="0987654321")

    def make_contract(self, number="K-001/2025", customer=None, **fields):
        return create_contract(
            number,
            (customer or self.customer).pk,
            self.contractor.pk,
            self.work.pk,
            vat_id=self.vat20.pk,
            contract_date=datetime.date(2025, 9, 1),
            **fields,
        )

    def assertLedgerConsistent(self, contract_id):
        """Stored amounts must match the freshly summed children."""
        contract = Contract.objects.get(pk=contract_id)
        total = sum(
            Milestone.objects.filter(contract_id=contract_id).values_list(
                "amount", flat=True),
            Decimal("0.00"),
        )
        paid = sum(
            Payment.objects.filter(contract_id=contract_id).values_list(
                "amount", flat=True),
            Decimal("0.00"),
        )
        self.assertEqual(contract.total_amount, total)
        self.assertEqual(contract.paid_amount, paid)
        self.assertEqual(contract.debt_amount, max(total - paid, Decimal("0.00")))
        return contract

import datetime
from decimal import Decimal

from django.test import TestCase

from ..models import Contract, Milestone, Payment
from ..services import (create_milestone, create_payment, debt_for,
                        derive_totals, recompute_contract, recompute_paid,
                        recompute_total)
from .helpers import LedgerFixturesMixin


class DerivationTests(TestCase):
    def test_debt_is_clamped_at_zero(self):
        self.assertEqual(debt_for(Decimal("100.00"), Decimal("150.00")),
                         Decimal("0.00"))
        self.assertEqual(debt_for(Decimal("100.00"), Decimal("40.00")),
                         Decimal("60.00"))

    def test_sums_are_exact_decimals(self):
        # 0.1 + 0.2 is not 0.3 in binary floating point
        totals = derive_totals(
            [Decimal("0.10"), Decimal("0.20")], [Decimal("0.30")])
        self.assertEqual(totals.total_amount, Decimal("0.30"))
        self.assertEqual(totals.paid_amount, Decimal("0.30"))
        self.assertEqual(totals.debt_amount, Decimal("0.00"))

    def test_empty_collections_sum_to_zero(self):
        totals = derive_totals([], [])
        self.assertEqual(tuple(totals), (Decimal("0.00"),) * 3)


class RecomputeEngineTests(LedgerFixturesMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.contract = self.make_contract()

    def test_missing_contract_is_a_noop(self):
        before = Contract.objects.count()

        # must not raise, must not create anything
        self.assertIsNone(recompute_total(987654))
        self.assertIsNone(recompute_paid(987654))
        self.assertIsNone(recompute_contract(987654))
        self.assertIsNone(recompute_total(None))

        self.assertEqual(Contract.objects.count(), before)
        self.assertFalse(Contract.objects.filter(pk=987654).exists())

    def test_recompute_is_idempotent(self):
        create_milestone(self.contract.pk, 1, amount=Decimal("300.00"))
        create_payment(self.contract.pk, datetime.date(2025, 9, 20),
                       Decimal("120.00"))

        first = recompute_total(self.contract.pk)
        second = recompute_total(self.contract.pk)
        self.assertEqual(first, second)

        first = recompute_paid(self.contract.pk)
        second = recompute_paid(self.contract.pk)
        self.assertEqual(first, second)

        self.contract.refresh_from_db()
        self.assertEqual(self.contract.total_amount, Decimal("300.00"))
        self.assertEqual(self.contract.paid_amount, Decimal("120.00"))
        self.assertEqual(self.contract.debt_amount, Decimal("180.00"))

    def test_recompute_repairs_fields_written_behind_its_back(self):
        Milestone.objects.create(
            contract=self.contract, milestone_no=1, amount=Decimal("500.00"))
        Payment.objects.create(
            contract=self.contract, amount=Decimal("200.00"))

        # queryset.update() bypasses the observer
        Contract.objects.filter(pk=self.contract.pk).update(
            total_amount=Decimal("1.00"),
            paid_amount=Decimal("2.00"),
            debt_amount=Decimal("3.00"),
        )

        totals = recompute_total(self.contract.pk)
        # total is fixed, debt uses the (still stale) paid amount
        self.assertEqual(totals.total_amount, Decimal("500.00"))
        self.assertEqual(totals.debt_amount, Decimal("498.00"))

        totals = recompute_paid(self.contract.pk)
        self.assertEqual(totals.paid_amount, Decimal("200.00"))
        self.assertEqual(totals.debt_amount, Decimal("300.00"))
        self.assertLedgerConsistent(self.contract.pk)

    def test_recompute_total_only_touches_total_and_debt(self):
        Payment.objects.create(contract=self.contract, amount=Decimal("50.00"))
        Contract.objects.filter(pk=self.contract.pk).update(
            paid_amount=Decimal("10.00"))

        recompute_total(self.contract.pk)

        self.contract.refresh_from_db()
        # paid is left as stored until recompute_paid runs
        self.assertEqual(self.contract.paid_amount, Decimal("10.00"))

    def test_recompute_contract_rederives_everything(self):
        Milestone.objects.create(
            contract=self.contract, milestone_no=1, amount=Decimal("80.00"))
        Payment.objects.create(contract=self.contract, amount=Decimal("30.00"))
        Contract.objects.filter(pk=self.contract.pk).update(
            total_amount=Decimal("0.00"),
            paid_amount=Decimal("0.00"),
            debt_amount=Decimal("0.00"),
        )

        totals = recompute_contract(self.contract.pk)

        self.assertEqual(
            tuple(totals),
            (Decimal("80.00"), Decimal("30.00"), Decimal("50.00")))
        self.assertLedgerConsistent(self.contract.pk)

import datetime
from decimal import Decimal
from unittest.mock import patch

from django.core.exceptions import ValidationError
from django.test import TestCase

from ..models import Contract, Milestone, Payment
from ..services import (create_milestone, create_payment, delete_contract,
                        delete_milestone, delete_payment, update_milestone,
                        update_payment)
from .helpers import LedgerFixturesMixin


class LedgerScenarioTests(LedgerFixturesMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.contract = self.make_contract()

    def test_milestones_payments_and_milestone_delete(self):
        create_milestone(self.contract.pk, 1, datetime.date(2025, 9, 15),
                         self.in_progress.pk, Decimal("50000.00"),
                         Decimal("10000.00"), "First stage")
        create_milestone(self.contract.pk, 2, datetime.date(2025, 10, 15),
                         self.in_progress.pk, Decimal("70000.00"),
                         Decimal("0.00"), "Second stage")

        contract = self.assertLedgerConsistent(self.contract.pk)
        self.assertEqual(contract.total_amount, Decimal("120000.00"))

        create_payment(self.contract.pk, datetime.date(2025, 9, 20),
                       Decimal("10000.00"), self.bank_transfer.pk, "PO-100")

        contract = self.assertLedgerConsistent(self.contract.pk)
        self.assertEqual(contract.paid_amount, Decimal("10000.00"))
        self.assertEqual(contract.debt_amount, Decimal("110000.00"))

        delete_milestone(self.contract.pk, 2)

        contract = self.assertLedgerConsistent(self.contract.pk)
        self.assertEqual(contract.total_amount, Decimal("50000.00"))
        self.assertEqual(contract.debt_amount, Decimal("40000.00"))

    def test_overpayment_clamps_debt_at_zero(self):
        create_milestone(self.contract.pk, 1, amount=Decimal("100.00"))
        create_payment(self.contract.pk, amount=Decimal("150.00"))

        contract = self.assertLedgerConsistent(self.contract.pk)
        self.assertEqual(contract.total_amount, Decimal("100.00"))
        self.assertEqual(contract.paid_amount, Decimal("150.00"))
        self.assertEqual(contract.debt_amount, Decimal("0.00"))
        self.assertIn(contract, Contract.objects.overpaid())

    def test_updates_recompute(self):
        create_milestone(self.contract.pk, 1, amount=Decimal("100.00"))
        payment = create_payment(self.contract.pk, amount=Decimal("40.00"))

        update_milestone(self.contract.pk, 1, amount=Decimal("250.00"))
        update_payment(payment.pk, amount=Decimal("45.50"))

        contract = self.assertLedgerConsistent(self.contract.pk)
        self.assertEqual(contract.total_amount, Decimal("250.00"))
        self.assertEqual(contract.paid_amount, Decimal("45.50"))
        self.assertEqual(contract.debt_amount, Decimal("204.50"))

    def test_deleting_last_payment_resets_paid(self):
        create_milestone(self.contract.pk, 1, amount=Decimal("100.00"))
        payment = create_payment(self.contract.pk, amount=Decimal("100.00"))

        delete_payment(payment.pk)

        contract = self.assertLedgerConsistent(self.contract.pk)
        self.assertEqual(contract.paid_amount, Decimal("0.00"))
        self.assertEqual(contract.debt_amount, Decimal("100.00"))

    def test_plain_orm_writes_are_observed_too(self):
        milestone = Milestone.objects.create(
            contract=self.contract, milestone_no=1, amount=Decimal("10.00"))
        Payment.objects.create(contract=self.contract, amount=Decimal("4.00"))
        self.assertLedgerConsistent(self.contract.pk)

        milestone.amount = Decimal("12.00")
        milestone.save()
        self.assertLedgerConsistent(self.contract.pk)

        milestone.delete()
        contract = self.assertLedgerConsistent(self.contract.pk)
        self.assertEqual(contract.total_amount, Decimal("0.00"))


class ReparentingTests(LedgerFixturesMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.a = self.make_contract("A-1")
        self.b = self.make_contract("B-1")
        create_milestone(self.a.pk, 1, amount=Decimal("1000.00"))
        create_milestone(self.b.pk, 1, amount=Decimal("1000.00"))

    def test_moving_a_payment_recomputes_both_contracts(self):
        payment = create_payment(self.a.pk, amount=Decimal("300.00"))
        a = self.assertLedgerConsistent(self.a.pk)
        self.assertEqual(a.paid_amount, Decimal("300.00"))

        update_payment(payment.pk, contract_id=self.b.pk)

        a = self.assertLedgerConsistent(self.a.pk)
        b = self.assertLedgerConsistent(self.b.pk)
        self.assertEqual(a.paid_amount, Decimal("0.00"))
        self.assertEqual(a.debt_amount, Decimal("1000.00"))
        self.assertEqual(b.paid_amount, Decimal("300.00"))
        self.assertEqual(b.debt_amount, Decimal("700.00"))

    def test_moving_a_milestone_recomputes_both_contracts(self):
        create_milestone(self.a.pk, 2, amount=Decimal("500.00"))

        update_milestone(self.a.pk, 2, contract_id=self.b.pk)

        a = self.assertLedgerConsistent(self.a.pk)
        b = self.assertLedgerConsistent(self.b.pk)
        self.assertEqual(a.total_amount, Decimal("1000.00"))
        self.assertEqual(b.total_amount, Decimal("1500.00"))
        self.assertTrue(
            Milestone.objects.filter(contract=self.b, milestone_no=2).exists())

    def test_reparenting_through_plain_save(self):
        payment = Payment.objects.create(contract=self.a, amount=Decimal("50.00"))

        payment.contract = self.b
        payment.save()

        self.assertEqual(self.assertLedgerConsistent(self.a.pk).paid_amount,
                         Decimal("0.00"))
        self.assertEqual(self.assertLedgerConsistent(self.b.pk).paid_amount,
                         Decimal("50.00"))


class CascadeDeleteTests(LedgerFixturesMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.contract = self.make_contract()
        self.other = self.make_contract("K-002/2025")
        create_milestone(self.contract.pk, 1, amount=Decimal("10.00"))
        create_milestone(self.contract.pk, 2, amount=Decimal("20.00"))
        create_payment(self.contract.pk, amount=Decimal("5.00"))
        create_milestone(self.other.pk, 1, amount=Decimal("7.00"))

    def test_delete_contract_removes_children(self):
        pk = self.contract.pk

        removed = delete_contract(pk)

        self.assertEqual(removed["contracts_core.Milestone"], 2)
        self.assertEqual(removed["contracts_core.Payment"], 1)
        self.assertFalse(Contract.objects.filter(pk=pk).exists())
        # no orphan rows survive
        self.assertFalse(Milestone.objects.filter(contract_id=pk).exists())
        self.assertFalse(Payment.objects.filter(contract_id=pk).exists())

    def test_cascade_leaves_other_contracts_alone(self):
        delete_contract(self.contract.pk)

        other = self.assertLedgerConsistent(self.other.pk)
        self.assertEqual(other.total_amount, Decimal("7.00"))
        self.assertEqual(Contract.objects.count(), 1)

    def test_plain_model_delete_cascades_as_well(self):
        pk = self.contract.pk

        Contract.objects.get(pk=pk).delete()

        self.assertFalse(Contract.objects.filter(pk=pk).exists())
        self.assertFalse(Milestone.objects.filter(contract_id=pk).exists())
        self.assertFalse(Payment.objects.filter(contract_id=pk).exists())


class RecomputeCountTests(LedgerFixturesMixin, TestCase):
    """Each child mutation recomputes its own side of the ledger exactly once."""

    def setUp(self):
        super().setUp()
        self.contract = self.make_contract()
        self.other = self.make_contract("K-002/2025")

    def test_milestone_mutations_recompute_total_only(self):
        with patch("contracts_core.observers.recompute_total") as total, \
                patch("contracts_core.observers.recompute_paid") as paid:
            create_milestone(self.contract.pk, 1, amount=Decimal("10.00"))
            self.assertEqual(total.call_count, 1)

            update_milestone(self.contract.pk, 1, amount=Decimal("20.00"))
            self.assertEqual(total.call_count, 2)

            delete_milestone(self.contract.pk, 1)
            self.assertEqual(total.call_count, 3)

        for call in total.call_args_list:
            self.assertEqual(call.args, (self.contract.pk,))
        paid.assert_not_called()

    def test_payment_mutations_recompute_paid_only(self):
        with patch("contracts_core.observers.recompute_total") as total, \
                patch("contracts_core.observers.recompute_paid") as paid:
            payment = create_payment(self.contract.pk, amount=Decimal("5.00"))
            update_payment(payment.pk, amount=Decimal("6.00"))
            delete_payment(payment.pk)

        self.assertEqual(paid.call_count, 3)
        total.assert_not_called()

    def test_rejected_mutations_recompute_nothing(self):
        payment = create_payment(self.contract.pk, amount=Decimal("5.00"))

        with patch("contracts_core.observers.recompute_total") as total, \
                patch("contracts_core.observers.recompute_paid") as paid:
            with self.assertRaises(ValidationError):
                create_milestone(self.contract.pk, 1, amount=Decimal("-1.00"))
            with self.assertRaises(ValidationError):
                create_payment(self.contract.pk, amount=Decimal("0.00"))
            with self.assertRaises(ValidationError):
                update_payment(payment.pk, amount=Decimal("-3.00"))

        total.assert_not_called()
        paid.assert_not_called()

    def test_move_recomputes_new_then_old_contract(self):
        create_milestone(self.contract.pk, 1, amount=Decimal("10.00"))

        with patch("contracts_core.observers.recompute_total") as total:
            update_milestone(self.contract.pk, 1, contract_id=self.other.pk)

        self.assertEqual(
            [call.args for call in total.call_args_list],
            [(self.other.pk,), (self.contract.pk,)],
        )


class MilestoneRenumberTests(LedgerFixturesMixin, TestCase):
    def test_renumber_and_move_in_one_update(self):
        a = self.make_contract("A-1")
        b = self.make_contract("B-1")
        create_milestone(a.pk, 1, amount=Decimal("40.00"))
        create_milestone(b.pk, 1, amount=Decimal("60.00"))

        milestone = update_milestone(a.pk, 1, contract_id=b.pk, milestone_no=2)

        self.assertEqual(milestone.contract_id, b.pk)
        self.assertEqual(milestone.milestone_no, 2)
        self.assertEqual(self.assertLedgerConsistent(a.pk).total_amount,
                         Decimal("0.00"))
        self.assertEqual(self.assertLedgerConsistent(b.pk).total_amount,
                         Decimal("100.00"))

    def test_renumber_within_the_same_contract(self):
        contract = self.make_contract()
        create_milestone(contract.pk, 1, amount=Decimal("40.00"))

        update_milestone(contract.pk, 1, milestone_no=5)

        self.assertEqual(
            list(contract.milestones.values_list("milestone_no", flat=True)),
            [5])
        self.assertLedgerConsistent(contract.pk)

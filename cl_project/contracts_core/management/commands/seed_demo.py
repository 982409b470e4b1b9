import datetime
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from contracts_core.models import (Contract, ContractType, ExecutionStage,
                                   Organization, PaymentMethod, VatRate)
from contracts_core.services import (create_contract, create_milestone,
                                     create_organization, create_payment)

CONTRACT_TYPES = ("Work contract", "Agency", "License")
STAGES = ("Preparation", "In progress", "Completed")
VAT_RATES = ((Decimal("0.00"), "No VAT"), (Decimal("20.00"), "Standard rate"))
PAYMENT_METHODS = ("Bank transfer", "Cash", "Bank card")


class Command(BaseCommand):
    help = "Load reference data and a demo contract with milestones and a payment."

    # Define command-line argument
    def add_arguments(self, parser):
        parser.add_argument(
            "--contract-number",
            default="K-001/2025",
            help="Number of the demo contract (default: K-001/2025)",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        number = options["contract_number"]

        # 1. Reference data (safe to run repeatedly)
        types = {n: ContractType.objects.get_or_create(name=n)[0] for n in CONTRACT_TYPES}
        stages = {n: ExecutionStage.objects.get_or_create(name=n)[0] for n in STAGES}
        vat = {}
        for percent, description in VAT_RATES:
            vat[percent], _ = VatRate.objects.get_or_create(
                percent=percent, defaults={"description": description})
        methods = {n: PaymentMethod.objects.get_or_create(name=n)[0] for n in PAYMENT_METHODS}

        # 2. Parties
        customer = (
            Organization.objects.filter(inn="1234567890").first()
            or create_organization("Customer LLC", inn="1234567890",
                                   address="1 Kirov St, Izhevsk")
        )
        contractor = (
            Organization.objects.filter(inn="0987654321").first()
            or create_organization("Contractor IE", inn="0987654321",
                                   address="2 Pesochnaya St, Izhevsk")
        )

        if Contract.objects.filter(contract_number=number, customer=customer).exists():
            self.stdout.write(self.style.NOTICE(
                f"Contract {number} already exists, nothing to do."))
            return

        # 3. Contract, its milestones and the first payment
        contract = create_contract(
            number,
            customer.pk,
            contractor.pk,
            types["Work contract"].pk,
            vat_id=vat[Decimal("20.00")].pk,
            contract_date=datetime.date(2025, 9, 1),
            subject="Software development",
        )
        in_progress = stages["In progress"].pk
        create_milestone(contract.pk, 1, datetime.date(2025, 9, 15), in_progress,
                         Decimal("50000.00"), Decimal("10000.00"), "First stage")
        create_milestone(contract.pk, 2, datetime.date(2025, 10, 15), in_progress,
                         Decimal("70000.00"), Decimal("0.00"), "Second stage")
        create_payment(contract.pk, datetime.date(2025, 9, 20), Decimal("10000.00"),
                       methods["Bank transfer"].pk, "PO-100")

        contract.refresh_from_db()
        self.stdout.write(self.style.SUCCESS(
            f"Seeded {contract}: total={contract.total_amount} "
            f"paid={contract.paid_amount} debt={contract.debt_amount}"))

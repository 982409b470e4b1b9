from django.core.management.base import BaseCommand

from contracts_core.selectors import inconsistent_contracts
from contracts_core.services.recompute import recompute_contract


class Command(BaseCommand):
    help = (
        "Compare every contract's stored total/paid/debt with its milestones "
        "and payments, and optionally repair the ones that drifted."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--fix",
            action="store_true",
            help="Recompute the contracts that disagree with their children.",
        )

    def handle(self, *args, **options):
        drifted = inconsistent_contracts()
        if not drifted:
            self.stdout.write(self.style.SUCCESS("All contracts are consistent."))
            return

        for contract, expected in drifted:
            self.stdout.write(self.style.WARNING(
                f"{contract} (id={contract.pk}): stored "
                f"total={contract.total_amount} paid={contract.paid_amount} "
                f"debt={contract.debt_amount}, expected "
                f"total={expected.total_amount} paid={expected.paid_amount} "
                f"debt={expected.debt_amount}"
            ))

        if options["fix"]:
            for contract, _ in drifted:
                recompute_contract(contract.pk)
            self.stdout.write(self.style.SUCCESS(
                f"Recomputed {len(drifted)} contract(s)."))
        else:
            self.stdout.write(self.style.NOTICE(
                f"{len(drifted)} contract(s) out of sync, run with --fix to repair."))

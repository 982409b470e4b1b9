from django.contrib import admin

from contracts_core.models import Contract, Milestone, Payment

from .actions import recompute_selected_contracts
from .inlines import MilestoneInline, PaymentInline


# Register `Contract` model
@admin.register(Contract)
class ContractAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "contract_number",
        "contract_date",
        "customer",
        "contractor",
        "contract_type",
        "current_stage",
        "total_amount",
        "paid_amount",
        "debt_amount",
        "is_active",
    )
    list_filter = ("is_active", "contract_type", "current_stage")
    search_fields = ("contract_number", "customer__name", "contractor__name")
    # Derived amounts are shown, never edited
    readonly_fields = ("total_amount", "paid_amount", "debt_amount")
    actions = [recompute_selected_contracts]
    inlines = [MilestoneInline, PaymentInline]

    # Use a SQL join so parties and lookups come with the contract
    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related(
            "customer", "contractor", "contract_type", "current_stage", "vat_rate")


@admin.register(Milestone)
class MilestoneAdmin(admin.ModelAdmin):
    list_display = (
        "id", "contract", "milestone_no", "milestone_date", "stage",
        "amount", "advance_amount")
    list_filter = ("stage",)
    search_fields = ("contract__contract_number", "subject")

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related("contract", "stage")


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = (
        "id", "contract", "payment_date", "amount", "payment_method",
        "payment_doc_number")
    list_filter = ("payment_method", "payment_date")
    search_fields = ("contract__contract_number", "payment_doc_number")

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related("contract", "payment_method")

from django.contrib import admin

from ..models import (AuditLog, ContractDebtOverThreshold, ContractFull,
                      MilestoneSummary, OrganizationView, PaymentSummary)
from .ReadOnly import ReadOnlyAdmin


@admin.register(ContractFull)
class ContractFullAdmin(ReadOnlyAdmin):
    list_display = (
        "contract_id", "contract_number", "contract_date", "customer_name",
        "contractor_name", "contract_type", "current_stage", "vat_percent",
        "total_amount", "paid_amount", "debt_amount")
    search_fields = ("contract_number", "customer_name", "contractor_name")


@admin.register(ContractDebtOverThreshold)
class ContractDebtOverThresholdAdmin(ReadOnlyAdmin):
    list_display = (
        "contract_id", "contract_number", "customer_name",
        "total_amount", "paid_amount", "debt_amount")
    ordering = ("-debt_amount",)


@admin.register(MilestoneSummary)
class MilestoneSummaryAdmin(ReadOnlyAdmin):
    list_display = (
        "contract_id", "contract_number", "milestones_count",
        "milestones_total", "advances_total")


@admin.register(PaymentSummary)
class PaymentSummaryAdmin(ReadOnlyAdmin):
    list_display = (
        "contract_id", "contract_number", "payments_count",
        "payments_sum", "last_payment_date")


@admin.register(OrganizationView)
class OrganizationViewAdmin(ReadOnlyAdmin):
    list_display = ("org_id", "name", "inn", "phone", "address", "created_at")
    search_fields = ("name", "inn")


@admin.register(AuditLog)
class AuditLogAdmin(ReadOnlyAdmin):
    list_display = ("created_at", "user", "action", "object_type", "object_id")
    list_filter = ("action", "object_type")
    search_fields = ("object_type", "object_id")

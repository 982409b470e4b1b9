from django.contrib import admin

from contracts_core.models import (ContractType, ExecutionStage, PaymentMethod,
                                   VatRate)


@admin.register(ContractType)
class ContractTypeAdmin(admin.ModelAdmin):
    list_display = ("id", "name")
    search_fields = ("name",)


@admin.register(ExecutionStage)
class ExecutionStageAdmin(admin.ModelAdmin):
    list_display = ("id", "name")
    search_fields = ("name",)


@admin.register(VatRate)
class VatRateAdmin(admin.ModelAdmin):
    list_display = ("id", "percent", "description")


@admin.register(PaymentMethod)
class PaymentMethodAdmin(admin.ModelAdmin):
    list_display = ("id", "name")
    search_fields = ("name",)

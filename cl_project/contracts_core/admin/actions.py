from django.contrib import admin, messages

from ..services.recompute import recompute_contract


@admin.action(description="Recompute totals of selected contracts")
def recompute_selected_contracts(modeladmin, request, queryset):
    count = 0
    for contract_id in queryset.values_list("pk", flat=True):
        if recompute_contract(contract_id) is not None:
            count += 1
    modeladmin.message_user(
        request, f"Recomputed {count} contract(s).", level=messages.SUCCESS)

from django.contrib import admin

from contracts_core.models import Milestone, Payment

# ---------- Child rows on the contract page ----------
# Saving or deleting a row here goes through Model.save()/delete(),
# so the change observer recomputes the contract afterwards.


class MilestoneInline(admin.TabularInline):
    model = Milestone
    extra = 0  # don't show "empty" rows by default
    fields = (
        "milestone_no",
        "milestone_date",
        "stage",
        "amount",
        "advance_amount",
        "subject",
    )
    ordering = ("milestone_no",)


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    fields = (
        "payment_date",
        "amount",
        "payment_method",
        "payment_doc_number",
    )
    ordering = ("payment_date", "id")

from django.db import models

# ------------------------ Reporting views ----------------------
# Read-only models over the SQL views created in migration 0002.
# Field types must line up with the view's columns.


""" Contract with party names and lookup values resolved """


class ContractFull(models.Model):
    contract_id = models.BigIntegerField(primary_key=True)
    contract_number = models.CharField(max_length=64)
    contract_date = models.DateField()
    customer_id = models.BigIntegerField(null=True)
    customer_name = models.CharField(max_length=255, null=True)
    contractor_id = models.BigIntegerField(null=True)
    contractor_name = models.CharField(max_length=255, null=True)
    contract_type = models.CharField(max_length=200, null=True)
    current_stage = models.CharField(max_length=200, null=True)
    vat_percent = models.DecimalField(max_digits=5, decimal_places=2, null=True)
    total_amount = models.DecimalField(max_digits=18, decimal_places=2)
    paid_amount = models.DecimalField(max_digits=18, decimal_places=2)
    debt_amount = models.DecimalField(max_digits=18, decimal_places=2)
    subject = models.TextField(null=True)
    note = models.TextField(null=True)

    class Meta:
        managed = False  # Django won't try to create/drop this
        db_table = "view_contract_full"  # must match the view name
        verbose_name = "Contract (full)"
        verbose_name_plural = "Contracts (full)"


""" Contracts with a significant debt (over 10000) """


class ContractDebtOverThreshold(models.Model):
    contract_id = models.BigIntegerField(primary_key=True)
    contract_number = models.CharField(max_length=64)
    customer_org_id = models.BigIntegerField()
    customer_name = models.CharField(max_length=255, null=True)
    total_amount = models.DecimalField(max_digits=18, decimal_places=2)
    paid_amount = models.DecimalField(max_digits=18, decimal_places=2)
    debt_amount = models.DecimalField(max_digits=18, decimal_places=2)

    class Meta:
        managed = False
        db_table = "view_contracts_with_debt_over_10000"
        verbose_name = "Contract with debt over 10000"
        verbose_name_plural = "Contracts with debt over 10000"


""" Planned payments per contract """


class MilestoneSummary(models.Model):
    contract_id = models.BigIntegerField(primary_key=True)
    contract_number = models.CharField(max_length=64)
    milestones_count = models.IntegerField()
    milestones_total = models.DecimalField(max_digits=18, decimal_places=2)
    advances_total = models.DecimalField(max_digits=18, decimal_places=2)

    class Meta:
        managed = False
        db_table = "view_milestones_summary_per_contract"
        verbose_name = "Milestone summary"
        verbose_name_plural = "Milestone summaries"


""" Received payments per contract (contracts with nothing paid are left out) """


class PaymentSummary(models.Model):
    contract_id = models.BigIntegerField(primary_key=True)
    contract_number = models.CharField(max_length=64)
    payments_count = models.IntegerField()
    payments_sum = models.DecimalField(max_digits=18, decimal_places=2)
    last_payment_date = models.DateField(null=True)

    class Meta:
        managed = False
        db_table = "view_payments_summary_per_contract"
        verbose_name = "Payment summary"
        verbose_name_plural = "Payment summaries"


class OrganizationView(models.Model):
    org_id = models.BigIntegerField(primary_key=True)
    name = models.CharField(max_length=255)
    postal_index = models.CharField(max_length=20, null=True)
    address = models.TextField(null=True)
    phone = models.CharField(max_length=50, null=True)
    inn = models.CharField(max_length=20, null=True)
    bank = models.TextField(null=True)
    created_at = models.DateTimeField(null=True)

    class Meta:
        managed = False
        db_table = "view_organizations"
        verbose_name = "Organization directory entry"
        verbose_name_plural = "Organization directory"

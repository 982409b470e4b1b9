from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ContractType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200, unique=True)),
            ],
            options={
                "db_table": "contract_types",
                "ordering": ("name",),
            },
        ),
        migrations.CreateModel(
            name="ExecutionStage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200, unique=True)),
            ],
            options={
                "db_table": "execution_stages",
                "ordering": ("name",),
            },
        ),
        migrations.CreateModel(
            name="PaymentMethod",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200, unique=True)),
            ],
            options={
                "db_table": "payment_methods",
                "ordering": ("name",),
            },
        ),
        migrations.CreateModel(
            name="VatRate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("percent", models.DecimalField(decimal_places=2, max_digits=5)),
                ("description", models.CharField(blank=True, max_length=200, null=True)),
            ],
            options={
                "db_table": "vat_rates",
                "ordering": ("percent",),
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("percent__gte", 0), ("percent__lte", 100)),
                        name="vat_percent_range",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Organization",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("postal_index", models.CharField(blank=True, max_length=20, null=True)),
                ("address", models.TextField(blank=True, null=True)),
                ("phone", models.CharField(blank=True, max_length=50, null=True)),
                ("fax", models.CharField(blank=True, max_length=50, null=True)),
                ("inn", models.CharField(blank=True, max_length=20, null=True, unique=True)),
                ("bank", models.TextField(blank=True, null=True)),
                ("corr_account", models.CharField(blank=True, max_length=34, null=True)),
                ("checking_account", models.CharField(blank=True, max_length=34, null=True)),
                ("bik", models.CharField(blank=True, max_length=20, null=True)),
                ("okonh", models.CharField(blank=True, max_length=20, null=True)),
                ("okpo", models.CharField(blank=True, max_length=20, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "organizations",
                "ordering": ("name",),
            },
        ),
        migrations.CreateModel(
            name="Contract",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("contract_number", models.CharField(max_length=64)),
                ("contract_date", models.DateField(default=django.utils.timezone.localdate)),
                ("execution_date", models.DateField(blank=True, null=True)),
                ("subject", models.TextField(blank=True, null=True)),
                ("note", models.TextField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("total_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), editable=False, max_digits=18)),
                ("paid_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), editable=False, max_digits=18)),
                ("debt_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), editable=False, max_digits=18)),
                ("contract_type", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="contracts", to="contracts_core.contracttype")),
                ("contractor", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="contracts_as_contractor", to="contracts_core.organization")),
                ("current_stage", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="contracts", to="contracts_core.executionstage")),
                ("customer", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="contracts_as_customer", to="contracts_core.organization")),
                ("vat_rate", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="contracts", to="contracts_core.vatrate")),
            ],
            options={
                "db_table": "contracts",
                "ordering": ("-contract_date", "contract_number"),
                "indexes": [
                    models.Index(fields=["contract_date"], name="idx_contracts_date"),
                    models.Index(fields=["customer"], name="idx_contracts_customer"),
                    models.Index(fields=["contractor"], name="idx_contracts_contractor"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("contract_number", "customer"), name="uq_contract_number_customer"),
                    models.CheckConstraint(
                        condition=models.Q(("total_amount__gte", 0), ("paid_amount__gte", 0), ("debt_amount__gte", 0)),
                        name="contract_non_negative_amounts",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Milestone",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("milestone_no", models.IntegerField()),
                ("milestone_date", models.DateField(blank=True, null=True)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=18)),
                ("advance_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("subject", models.TextField(blank=True, null=True)),
                ("contract", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="milestones", to="contracts_core.contract")),
                ("stage", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="milestones", to="contracts_core.executionstage")),
            ],
            options={
                "db_table": "contract_milestones",
                "ordering": ("contract_id", "milestone_no"),
                "indexes": [
                    models.Index(fields=["contract"], name="idx_milestones_contract"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("contract", "milestone_no"), name="uq_milestone_contract_no"),
                    models.CheckConstraint(
                        condition=models.Q(("amount__gte", 0), ("advance_amount__gte", 0)),
                        name="milestone_non_negative_amounts",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("payment_date", models.DateField(default=django.utils.timezone.localdate)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=18)),
                ("payment_doc_number", models.CharField(blank=True, max_length=100, null=True)),
                ("contract", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="payments", to="contracts_core.contract")),
                ("payment_method", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="payments", to="contracts_core.paymentmethod")),
            ],
            options={
                "db_table": "payments",
                "ordering": ("payment_date", "id"),
                "indexes": [
                    models.Index(fields=["contract"], name="idx_payments_contract"),
                    models.Index(fields=["payment_date"], name="idx_payments_date"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("amount__gt", 0)), name="payment_positive_amount"),
                ],
            },
        ),
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("action", models.CharField(max_length=50)),
                ("object_type", models.CharField(max_length=100)),
                ("object_id", models.CharField(max_length=100)),
                ("changes", models.JSONField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "audit_log",
                "ordering": ("-created_at", "-id"),
                "indexes": [
                    models.Index(fields=["object_type", "object_id"], name="idx_audit_object"),
                    models.Index(fields=["created_at"], name="idx_audit_created"),
                ],
            },
        ),
    ]

from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("contracts_core", "0001_initial"),
    ]

    """ Reporting views:
        - Plain SQL views (not materialized), so they always reflect
        the ledger as it is right now.
        - Written in portable SQL, they work on PostgreSQL and SQLite alike.
        - Each one is mapped by an unmanaged model in models/reports.py.
    """

    operations = [
        # Organization directory (single table)
        migrations.RunSQL(
            sql=[
                """
                CREATE VIEW view_organizations AS
                SELECT
                    o.id AS org_id,
                    o.name,
                    o.postal_index,
                    o.address,
                    o.phone,
                    o.inn,
                    o.bank,
                    o.created_at
                FROM organizations o
                """,
            ],
            reverse_sql=["DROP VIEW IF EXISTS view_organizations"],
        ),
        # Contract with parties and lookups resolved
        migrations.RunSQL(
            sql=[
                """
                CREATE VIEW view_contract_full AS
                SELECT
                    c.id AS contract_id,
                    c.contract_number,
                    c.contract_date,
                    cust.id AS customer_id,
                    cust.name AS customer_name,
                    contr.id AS contractor_id,
                    contr.name AS contractor_name,
                    ct.name AS contract_type,
                    es.name AS current_stage,
                    v.percent AS vat_percent,
                    c.total_amount,
                    c.paid_amount,
                    c.debt_amount,
                    c.subject,
                    c.note
                FROM contracts c
                LEFT JOIN organizations cust ON cust.id = c.customer_id
                LEFT JOIN organizations contr ON contr.id = c.contractor_id
                LEFT JOIN contract_types ct ON ct.id = c.contract_type_id
                LEFT JOIN execution_stages es ON es.id = c.current_stage_id
                LEFT JOIN vat_rates v ON v.id = c.vat_rate_id
                """,
            ],
            reverse_sql=["DROP VIEW IF EXISTS view_contract_full"],
        ),
        # Contracts with a significant debt
        migrations.RunSQL(
            sql=[
                """
                CREATE VIEW view_contracts_with_debt_over_10000 AS
                SELECT
                    c.id AS contract_id,
                    c.contract_number,
                    c.customer_id AS customer_org_id,
                    cust.name AS customer_name,
                    c.total_amount,
                    c.paid_amount,
                    c.debt_amount
                FROM contracts c
                LEFT JOIN organizations cust ON cust.id = c.customer_id
                WHERE c.debt_amount > 10000
                """,
            ],
            reverse_sql=["DROP VIEW IF EXISTS view_contracts_with_debt_over_10000"],
        ),
        # Planned payments per contract
        migrations.RunSQL(
            sql=[
                """
                CREATE VIEW view_milestones_summary_per_contract AS
                SELECT
                    cm.contract_id,
                    c.contract_number,
                    COUNT(*) AS milestones_count,
                    SUM(cm.amount) AS milestones_total,
                    SUM(cm.advance_amount) AS advances_total
                FROM contract_milestones cm
                JOIN contracts c ON c.id = cm.contract_id
                GROUP BY cm.contract_id, c.contract_number
                """,
            ],
            reverse_sql=["DROP VIEW IF EXISTS view_milestones_summary_per_contract"],
        ),
        # Received payments per contract
        migrations.RunSQL(
            sql=[
                """
                CREATE VIEW view_payments_summary_per_contract AS
                SELECT
                    p.contract_id,
                    c.contract_number,
                    COUNT(p.id) AS payments_count,
                    SUM(p.amount) AS payments_sum,
                    MAX(p.payment_date) AS last_payment_date
                FROM payments p
                JOIN contracts c ON c.id = p.contract_id
                GROUP BY p.contract_id, c.contract_number
                HAVING SUM(p.amount) > 0
                """,
            ],
            reverse_sql=["DROP VIEW IF EXISTS view_payments_summary_per_contract"],
        ),
        migrations.CreateModel(
            name="OrganizationView",
            fields=[
                ("org_id", models.BigIntegerField(primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("postal_index", models.CharField(max_length=20, null=True)),
                ("address", models.TextField(null=True)),
                ("phone", models.CharField(max_length=50, null=True)),
                ("inn", models.CharField(max_length=20, null=True)),
                ("bank", models.TextField(null=True)),
                ("created_at", models.DateTimeField(null=True)),
            ],
            options={
                "verbose_name": "Organization directory entry",
                "verbose_name_plural": "Organization directory",
                "db_table": "view_organizations",
                "managed": False,
            },
        ),
        migrations.CreateModel(
            name="ContractFull",
            fields=[
                ("contract_id", models.BigIntegerField(primary_key=True, serialize=False)),
                ("contract_number", models.CharField(max_length=64)),
                ("contract_date", models.DateField()),
                ("customer_id", models.BigIntegerField(null=True)),
                ("customer_name", models.CharField(max_length=255, null=True)),
                ("contractor_id", models.BigIntegerField(null=True)),
                ("contractor_name", models.CharField(max_length=255, null=True)),
                ("contract_type", models.CharField(max_length=200, null=True)),
                ("current_stage", models.CharField(max_length=200, null=True)),
                ("vat_percent", models.DecimalField(decimal_places=2, max_digits=5, null=True)),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=18)),
                ("paid_amount", models.DecimalField(decimal_places=2, max_digits=18)),
                ("debt_amount", models.DecimalField(decimal_places=2, max_digits=18)),
                ("subject", models.TextField(null=True)),
                ("note", models.TextField(null=True)),
            ],
            options={
                "verbose_name": "Contract (full)",
                "verbose_name_plural": "Contracts (full)",
                "db_table": "view_contract_full",
                "managed": False,
            },
        ),
        migrations.CreateModel(
            name="ContractDebtOverThreshold",
            fields=[
                ("contract_id", models.BigIntegerField(primary_key=True, serialize=False)),
                ("contract_number", models.CharField(max_length=64)),
                ("customer_org_id", models.BigIntegerField()),
                ("customer_name", models.CharField(max_length=255, null=True)),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=18)),
                ("paid_amount", models.DecimalField(decimal_places=2, max_digits=18)),
                ("debt_amount", models.DecimalField(decimal_places=2, max_digits=18)),
            ],
            options={
                "verbose_name": "Contract with debt over 10000",
                "verbose_name_plural": "Contracts with debt over 10000",
                "db_table": "view_contracts_with_debt_over_10000",
                "managed": False,
            },
        ),
        migrations.CreateModel(
            name="MilestoneSummary",
            fields=[
                ("contract_id", models.BigIntegerField(primary_key=True, serialize=False)),
                ("contract_number", models.CharField(max_length=64)),
                ("milestones_count", models.IntegerField()),
                ("milestones_total", models.DecimalField(decimal_places=2, max_digits=18)),
                ("advances_total", models.DecimalField(decimal_places=2, max_digits=18)),
            ],
            options={
                "verbose_name": "Milestone summary",
                "verbose_name_plural": "Milestone summaries",
                "db_table": "view_milestones_summary_per_contract",
                "managed": False,
            },
        ),
        migrations.CreateModel(
            name="PaymentSummary",
            fields=[
                ("contract_id", models.BigIntegerField(primary_key=True, serialize=False)),
                ("contract_number", models.CharField(max_length=64)),
                ("payments_count", models.IntegerField()),
                ("payments_sum", models.DecimalField(decimal_places=2, max_digits=18)),
                ("last_payment_date", models.DateField(null=True)),
            ],
            options={
                "verbose_name": "Payment summary",
                "verbose_name_plural": "Payment summaries",
                "db_table": "view_payments_summary_per_contract",
                "managed": False,
            },
        ),
    ]

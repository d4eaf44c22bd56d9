# Initial Dropman schema: customers, drop-offs, staff

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("first_name", models.CharField(max_length=100, verbose_name="first name")),
                ("last_name", models.CharField(max_length=100, verbose_name="last name")),
                ("email", models.EmailField(db_index=True, max_length=254, verbose_name="email")),
                ("phone", models.CharField(blank=True, db_index=True, max_length=20, verbose_name="phone")),
                ("referred_by", models.CharField(blank=True, max_length=200, verbose_name="referred by")),
                (
                    "total_dropoffs",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Cumulative quantity dropped off (never decreases)",
                        verbose_name="total drop-offs",
                    ),
                ),
                (
                    "rewards_redeemed",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Flat rewards already redeemed (one per 10 units)",
                        verbose_name="rewards redeemed",
                    ),
                ),
                ("bronze_claimed", models.BooleanField(default=False, verbose_name="bronze claimed")),
                ("silver_claimed", models.BooleanField(default=False, verbose_name="silver claimed")),
                ("gold_claimed", models.BooleanField(default=False, verbose_name="gold claimed")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "customer",
                "verbose_name_plural": "customers",
                "db_table": "dropman_customer",
                "ordering": ["last_name", "first_name"],
                "indexes": [
                    models.Index(fields=["last_name", "first_name"], name="dropman_cust_name_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Staff",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("pin", models.CharField(max_length=10, unique=True, verbose_name="PIN")),
                ("name", models.CharField(max_length=100, verbose_name="name")),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
            ],
            options={
                "verbose_name": "staff member",
                "verbose_name_plural": "staff",
                "db_table": "dropman_staff",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Dropoff",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField(verbose_name="quantity")),
                ("date", models.DateField(verbose_name="date")),
                (
                    "added_by",
                    models.CharField(
                        help_text="Staff identifier that recorded the drop-off",
                        max_length=100,
                        verbose_name="added by",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="dropoffs",
                        to="dropman.customer",
                        verbose_name="customer",
                    ),
                ),
            ],
            options={
                "verbose_name": "drop-off",
                "verbose_name_plural": "drop-offs",
                "db_table": "dropman_dropoff",
                "ordering": ["-date", "-created_at"],
                "indexes": [
                    models.Index(fields=["customer", "-date"], name="dropman_drop_cust_date_idx"),
                    models.Index(fields=["date"], name="dropman_drop_date_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(quantity__gt=0),
                        name="dropman_dropoff_quantity_positive",
                    ),
                ],
            },
        ),
    ]

# Non-blank phones are unique

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("dropman", "0002_seed_staff"),
    ]

    operations = [
        migrations.AddConstraint(
            model_name="customer",
            constraint=models.UniqueConstraint(
                condition=models.Q(("phone", ""), _negated=True),
                fields=("phone",),
                name="dropman_customer_phone_unique",
            ),
        ),
    ]

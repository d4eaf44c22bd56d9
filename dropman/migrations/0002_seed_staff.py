from django.db import migrations

STAFF_SEED = [
    ("1157", "Staff Member 1"),
    ("5600", "Staff Member 2"),
    ("0725", "Staff Member 3"),
]


def seed_staff(apps, schema_editor):
    Staff = apps.get_model("dropman", "Staff")
    for pin, name in STAFF_SEED:
        Staff.objects.get_or_create(pin=pin, defaults={"name": name})


def unseed_staff(apps, schema_editor):
    Staff = apps.get_model("dropman", "Staff")
    Staff.objects.filter(pin__in=[pin for pin, _ in STAFF_SEED]).delete()


class Migration(migrations.Migration):

    dependencies = [
        ("dropman", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_staff, unseed_staff),
    ]

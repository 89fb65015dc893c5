# Generated manually

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("pitches", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="pitchgeneration",
            name="business_id",
            field=models.CharField(
                blank=True, db_index=True, max_length=100, verbose_name="Business"
            ),
        ),
    ]

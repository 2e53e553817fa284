import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('clinic', '0004_user_profile'),
    ]

    operations = [
        migrations.CreateModel(
            name='SchemaLedgerEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('app', models.CharField(max_length=100)),
                ('name', models.CharField(max_length=255)),
                ('checksum', models.CharField(max_length=64)),
                ('applied_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'db_table': 'SchemaLedger',
                'ordering': ['app', 'name'],
                'constraints': [models.UniqueConstraint(fields=('app', 'name'), name='unique_ledger_migration')],
            },
        ),
    ]

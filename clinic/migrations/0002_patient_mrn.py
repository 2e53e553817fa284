"""Medical record numbers.  Existing patients get their id as MRN."""
import logging

from django.db import migrations, models
from django.db.models import F, Q

logger = logging.getLogger('clinic.migrations')


def backfill_mrn(apps, schema_editor):
    Patient = apps.get_model('clinic', 'Patient')
    db = schema_editor.connection.alias
    updated = (
        Patient.objects.using(db)
        .filter(Q(mrn__isnull=True) | Q(mrn=''))
        .update(mrn=F('id'))
    )
    if updated:
        logger.info("backfilled MRN for %d patients", updated)
    else:
        logger.info("every patient already has an MRN")


class Migration(migrations.Migration):

    dependencies = [
        ('clinic', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='patient',
            name='mrn',
            field=models.CharField(blank=True, max_length=50, null=True),
        ),
        migrations.RunPython(backfill_mrn, migrations.RunPython.noop),
        migrations.AlterField(
            model_name='patient',
            name='mrn',
            field=models.CharField(blank=True, max_length=50, null=True, unique=True),
        ),
    ]

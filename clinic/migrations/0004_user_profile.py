import logging

import django.utils.timezone
from django.db import migrations, models

logger = logging.getLogger('clinic.migrations')

# Role defaults as they stood when this migration was written, in canonical
# capability order.  Later changes to the live defaults do not apply here.
ROLE_DEFAULTS = {
    'Admin': [
        'view_patients', 'edit_patients', 'delete_patients', 'view_payments',
        'create_payments', 'view_lab_results', 'edit_lab_results', 'view_prescriptions',
        'create_prescriptions', 'view_reports', 'manage_users', 'manage_stock',
        'view_medicines',
    ],
    'Doctor': [
        'view_patients', 'edit_patients', 'view_lab_results', 'view_prescriptions',
        'create_prescriptions', 'view_medicines',
    ],
    'Receptionist': [
        'view_patients', 'edit_patients', 'view_payments', 'create_payments', 'manage_stock',
    ],
    'LabTechnician': ['view_patients', 'view_lab_results', 'edit_lab_results'],
}


def backfill_permissions(apps, schema_editor):
    """Give accounts without a capability list their role defaults."""
    User = apps.get_model('clinic', 'User')
    db = schema_editor.connection.alias
    filled = 0
    for user in User.objects.using(db).all().iterator():
        if user.permissions:
            continue
        user.permissions = list(ROLE_DEFAULTS.get(user.role, []))
        user.save(update_fields=['permissions'])
        filled += 1
    logger.info("role default permissions applied to %d users", filled)


class Migration(migrations.Migration):

    dependencies = [
        ('clinic', '0003_decouple_clinical_records'),
    ]

    operations = [
        migrations.AddField(
            model_name='user',
            name='name',
            field=models.CharField(blank=True, default='', max_length=255),
            preserve_default=False,
        ),
        migrations.AddField(
            model_name='user',
            name='phone',
            field=models.CharField(blank=True, default='', max_length=50),
            preserve_default=False,
        ),
        migrations.AddField(
            model_name='user',
            name='permissions',
            field=models.JSONField(blank=True, default=list),
        ),
        migrations.AddField(
            model_name='user',
            name='created_by',
            field=models.CharField(blank=True, default='', max_length=50),
            preserve_default=False,
        ),
        migrations.AddField(
            model_name='user',
            name='updated_at',
            field=models.DateTimeField(auto_now=True, default=django.utils.timezone.now),
            preserve_default=False,
        ),
        migrations.RunPython(backfill_permissions, migrations.RunPython.noop),
    ]

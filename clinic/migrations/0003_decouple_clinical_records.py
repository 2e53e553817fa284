"""
Separate clinical records from pharmacy inventory.

Prescription lines used to point at ``MedicineStock`` with
``ON DELETE SET NULL``.  The column, its foreign key and the table go
away; a line is identified by its medicine name and gains a category.
A line without a prescription is a clinical master list entry.
"""
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('clinic', '0002_patient_mrn'),
    ]

    operations = [
        migrations.RemoveField(
            model_name='prescriptionmedicine',
            name='medicine',
        ),
        migrations.DeleteModel(
            name='MedicineStock',
        ),
        migrations.AddField(
            model_name='prescriptionmedicine',
            name='category',
            field=models.CharField(blank=True, default='', max_length=100),
            preserve_default=False,
        ),
        migrations.AlterField(
            model_name='prescriptionmedicine',
            name='prescription',
            field=models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='medicines', to='clinic.prescription'),
        ),
    ]

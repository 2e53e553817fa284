"""
Pharmacy inventory and the clinical medicine master list.

The two never meet in the database: stock rows are keyed by ``STK-`` ids,
clinical rows by medicine name.  Removing stock leaves every clinical
record untouched.
"""
import logging

from django.db import transaction
from django.db.models import F

from clinic import ids
from clinic.models import PrescriptionMedicine, StockItem
from ._fields import assign

logger = logging.getLogger(__name__)

STOCK_FIELDS = {
    'name': 'name',
    'category': 'category',
    'quantity': 'quantity',
    'price': 'price',
    'lowStockThreshold': 'low_stock_threshold',
}

CLINICAL_FIELDS = {
    'medicineName': 'medicine_name',
    'category': 'category',
    'dosage': 'dosage',
    'frequency': 'frequency',
    'duration': 'duration',
}


def create_stock(*, data: dict) -> StockItem:
    with transaction.atomic():
        item = StockItem(id=data.get('id') or ids.generate_id(ids.STOCK, StockItem))
        assign(item, data, STOCK_FIELDS)
        item.save(force_insert=True)
    logger.info("stock %s added: %s x%d", item.id, item.name, item.quantity)
    return item


def update_stock(item: StockItem, *, data: dict) -> StockItem:
    assign(item, data, STOCK_FIELDS)
    item.save()
    return item


def delete_stock(item: StockItem) -> None:
    item_id = item.id
    item.delete()
    logger.info("stock %s deleted", item_id)


def low_stock():
    return StockItem.objects.filter(quantity__lte=F('low_stock_threshold')).order_by('quantity', 'name')


def reduce_stock(stock_id: str, amount: int) -> bool:
    """Take ``amount`` off a stock row, never going below zero.

    Returns False when the row does not exist; dispensing is recorded
    either way.
    """
    item = StockItem.objects.select_for_update().filter(pk=stock_id).first()
    if item is None:
        logger.warning("stock %s not found, nothing deducted", stock_id)
        return False
    item.quantity = max(0, item.quantity - amount)
    item.save(update_fields=['quantity'])
    return True


def master_list():
    return PrescriptionMedicine.objects.filter(prescription__isnull=True).order_by('medicine_name', 'id')


def add_clinical_medicine(*, data: dict) -> PrescriptionMedicine:
    med = PrescriptionMedicine(prescription=None)
    assign(med, data, CLINICAL_FIELDS)
    med.save()
    logger.info("clinical medicine %s added to master list", med.medicine_name)
    return med


def update_clinical_medicine(med: PrescriptionMedicine, *, data: dict) -> PrescriptionMedicine:
    assign(med, data, CLINICAL_FIELDS)
    med.save()
    return med


def delete_clinical_medicine_by_name(name: str) -> int:
    """Drop master-list entries called ``name``; prescription lines stay."""
    deleted, _ = master_list().filter(medicine_name=name).delete()
    logger.info("clinical medicine %s removed from master list (%d rows)", name, deleted)
    return deleted

from ..extensions import db
from ..logs import log
from ..models import Supplier
from ..schemas import CreateSupplierInput, UpdateSupplierInput
from . import apply_changes, require, unit_of_work


@unit_of_work("Supplier creation")
def create_supplier(data: CreateSupplierInput) -> Supplier:
    s = Supplier(**data.model_dump())
    db.session.add(s)
    db.session.flush()
    log.info("Created supplier %s", s.id)
    return s


def get_suppliers():
    return Supplier.query.order_by(Supplier.id).all()


def get_supplier(supplier_id: int):
    return db.session.get(Supplier, supplier_id)


@unit_of_work("Supplier update")
def update_supplier(data: UpdateSupplierInput) -> Supplier:
    s = require(Supplier, data.id)
    apply_changes(s, data.model_dump(exclude_unset=True, exclude={'id'}))
    return s


@unit_of_work("Supplier deletion")
def delete_supplier(supplier_id: int) -> None:
    # missing suppliers raise like every other delete
    s = require(Supplier, supplier_id)
    db.session.delete(s)
    log.info("Deleted supplier %s", supplier_id)

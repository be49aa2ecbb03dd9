from ..extensions import db
from ..logs import log
from ..models import Customer
from ..schemas import CreateCustomerInput, UpdateCustomerInput
from . import apply_changes, require, unit_of_work


@unit_of_work("Customer creation")
def create_customer(data: CreateCustomerInput) -> Customer:
    c = Customer(name=data.name,
                 email=data.email,
                 phone=data.phone,
                 address=data.address)
    db.session.add(c)
    db.session.flush()
    log.info("Created customer %s", c.id)
    return c


def get_customers():
    return Customer.query.order_by(Customer.id).all()


def get_customer(customer_id: int):
    return db.session.get(Customer, customer_id)


@unit_of_work("Customer update")
def update_customer(data: UpdateCustomerInput) -> Customer:
    c = require(Customer, data.id)
    apply_changes(c, data.model_dump(exclude_unset=True, exclude={'id'}))
    log.info("Updated customer %s", c.id)
    return c


@unit_of_work("Customer deletion")
def delete_customer(customer_id: int) -> None:
    c = require(Customer, customer_id)
    db.session.delete(c)
    log.info("Deleted customer %s", customer_id)

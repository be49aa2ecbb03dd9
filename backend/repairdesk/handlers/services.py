from ..accounting import money
from ..constants import ServiceStatus
from ..extensions import db
from ..logs import log
from ..models import Customer, Service, today, utcnow
from ..schemas import CreateServiceInput, UpdateServiceInput
from . import apply_changes, require, unit_of_work

COST_FIELDS = ('estimated_cost', 'final_cost')


@unit_of_work("Service creation")
def create_service(data: CreateServiceInput) -> Service:
    require(Customer, data.customer_id)
    s = Service(
        customer_id=data.customer_id,
        device_type=data.device_type,
        device_model=data.device_model,
        device_serial=data.device_serial,
        problem_description=data.problem_description,
        repair_notes=data.repair_notes,
        estimated_cost=money(data.estimated_cost) if data.estimated_cost is not None else None,
        status=ServiceStatus.RECEIVED.value,
    )
    db.session.add(s)
    db.session.flush()
    log.info("Received service %s (%s) for customer %s", s.id, s.device_type, s.customer_id)
    return s


def get_services():
    return Service.query.order_by(Service.id).all()


def get_service(service_id: int):
    return db.session.get(Service, service_id)


@unit_of_work("Service update")
def update_service(data: UpdateServiceInput) -> Service:
    s = require(Service, data.id)
    changes = data.model_dump(exclude_unset=True, exclude={'id'})

    completing = (changes.get('status') == ServiceStatus.COMPLETED.value
                  and s.status != ServiceStatus.COMPLETED.value)
    if completing and 'completed_date' not in changes and s.completed_date is None:
        changes['completed_date'] = today()

    apply_changes(s, changes, COST_FIELDS)
    s.updated_at = utcnow()
    log.info("Updated service %s (status %s)", s.id, s.status)
    return s


def get_services_by_status(status: str):
    return Service.query.filter_by(status=status).order_by(Service.id).all()


def get_services_by_customer(customer_id: int):
    return Service.query.filter_by(customer_id=customer_id).order_by(Service.id).all()

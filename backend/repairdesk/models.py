from datetime import date, datetime
from .extensions import db
from .constants import InvoiceStatus, ServiceStatus, TransactionType, values

# naive UTC everywhere; date-only columns hold calendar dates without time of day
def utcnow() -> datetime:
    return datetime.utcnow()

def today() -> date:
    return utcnow().date()

class Customer(db.Model):
    __tablename__ = 'customers'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    email = db.Column(db.Text)
    phone = db.Column(db.Text)
    address = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

class Supplier(db.Model):
    __tablename__ = 'suppliers'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    contact_person = db.Column(db.Text)
    email = db.Column(db.Text)
    phone = db.Column(db.Text)
    address = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

class Product(db.Model):
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text)
    sku = db.Column(db.Text)
    category = db.Column(db.Text)
    purchase_price = db.Column(db.Numeric(10, 2), nullable=False)
    selling_price = db.Column(db.Numeric(10, 2), nullable=False)
    stock_quantity = db.Column(db.Integer, nullable=False)
    min_stock_level = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        db.CheckConstraint('stock_quantity >= 0', name='stock_not_negative'),
    )

    def __repr__(self):
        return f'<Product {self.name}>'

class Service(db.Model):
    __tablename__ = 'services'

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey('customers.id'), nullable=False)
    device_type = db.Column(db.Text, nullable=False)
    device_model = db.Column(db.Text)
    device_serial = db.Column(db.Text)
    problem_description = db.Column(db.Text, nullable=False)
    repair_notes = db.Column(db.Text)
    estimated_cost = db.Column(db.Numeric(10, 2))
    final_cost = db.Column(db.Numeric(10, 2))  # labor charged on completion
    status = db.Column(db.Enum(*values(ServiceStatus), name='service_status'),
                       nullable=False, default=ServiceStatus.RECEIVED.value)
    received_date = db.Column(db.Date, nullable=False, default=today)
    completed_date = db.Column(db.Date)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    customer = db.relationship('Customer')
    items = db.relationship('ServiceItem', back_populates='service', order_by='ServiceItem.id')

class Transaction(db.Model):
    __tablename__ = 'transactions'

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.Enum(*values(TransactionType), name='transaction_type'), nullable=False)
    supplier_id = db.Column(db.Integer, db.ForeignKey('suppliers.id'))
    customer_id = db.Column(db.Integer, db.ForeignKey('customers.id'))
    # set when a POS checkout billed a completed repair
    service_id = db.Column(db.Integer, db.ForeignKey('services.id'))
    total_amount = db.Column(db.Numeric(10, 2), nullable=False)
    service_charge = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    tax_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    transaction_date = db.Column(db.Date, nullable=False, default=today)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    supplier = db.relationship('Supplier')
    customer = db.relationship('Customer')
    service = db.relationship('Service')
    items = db.relationship('TransactionItem', back_populates='transaction',
                            order_by='TransactionItem.id')

class TransactionItem(db.Model):
    __tablename__ = 'transaction_items'

    id = db.Column(db.Integer, primary_key=True)
    transaction_id = db.Column(db.Integer, db.ForeignKey('transactions.id'), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Numeric(10, 2), nullable=False)
    total_price = db.Column(db.Numeric(10, 2), nullable=False)  # quantity * unit_price
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    transaction = db.relationship('Transaction', back_populates='items')
    product = db.relationship('Product')

class ServiceItem(db.Model):
    __tablename__ = 'service_items'

    id = db.Column(db.Integer, primary_key=True)
    service_id = db.Column(db.Integer, db.ForeignKey('services.id'), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Numeric(10, 2), nullable=False)
    total_price = db.Column(db.Numeric(10, 2), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    service = db.relationship('Service', back_populates='items')
    product = db.relationship('Product')

class Invoice(db.Model):
    __tablename__ = 'invoices'

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey('customers.id'), nullable=False)
    service_id = db.Column(db.Integer, db.ForeignKey('services.id'))
    transaction_id = db.Column(db.Integer, db.ForeignKey('transactions.id'))
    invoice_number = db.Column(db.Text, nullable=False)
    subtotal = db.Column(db.Numeric(10, 2), nullable=False)
    tax_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    total_amount = db.Column(db.Numeric(10, 2), nullable=False)
    status = db.Column(db.Enum(*values(InvoiceStatus), name='invoice_status'),
                       nullable=False, default=InvoiceStatus.DRAFT.value)
    issue_date = db.Column(db.Date, nullable=False, default=today)
    due_date = db.Column(db.Date)
    paid_date = db.Column(db.Date)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    customer = db.relationship('Customer')
    service = db.relationship('Service')
    transaction = db.relationship('Transaction')

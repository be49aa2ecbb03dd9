import click
from flask import Flask

from .accounting import money
from .extensions import db
from .logs import log
from .models import Customer, Product, Supplier

def seed_demo_data():
    """Insert a few demo records into empty tables; returns how many were added."""
    added = 0
    if not Customer.query.first():
        db.session.add(Customer(name='John Doe', email='john@example.com', phone='555-0100'))
        added += 1
    if not Supplier.query.first():
        db.session.add(Supplier(name='Parts Depot', contact_person='Jane Smith', phone='555-0200'))
        added += 1
    if not Product.query.first():
        db.session.add(Product(name='iPhone 12 Screen', sku='SCR-IP12', category='Screens',
                               purchase_price=money('80.00'), selling_price=money('120.00'),
                               stock_quantity=10, min_stock_level=2))
        db.session.add(Product(name='USB-C Charging Port', sku='PRT-USBC', category='Ports',
                               purchase_price=money('4.50'), selling_price=money('15.00'),
                               stock_quantity=3, min_stock_level=5))
        added += 2
    db.session.commit()
    log.info("Seeded %s demo records", added)
    return added

def register_commands(app: Flask):
    @app.cli.command('init-db')
    def init_db():
        """Create every table that does not exist yet."""
        db.create_all()
        click.echo('Database tables created.')

    @app.cli.command('seed-demo')
    def seed_demo():
        """Fill empty tables with demo customers, suppliers and products."""
        added = seed_demo_data()
        click.echo(f'Added {added} demo records.')

from decimal import Decimal, ROUND_HALF_UP
from flask import current_app

TWOPLACES = Decimal('0.01')
ZERO = Decimal('0.00')

def money(amount) -> Decimal:
    if amount is None:
        return ZERO
    return Decimal(str(amount)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)

def line_total(quantity: int, unit_price) -> Decimal:
    return money(Decimal(quantity) * money(unit_price))

def calc_tax(amount, rate=None) -> Decimal:
    if rate is None:
        rate = current_app.config.get('DEFAULT_TAX_RATE', 0)
    return (money(amount) * Decimal(str(rate))).quantize(TWOPLACES, rounding=ROUND_HALF_UP)

def invoice_total(subtotal, tax_amount=None) -> Decimal:
    return money(subtotal) + money(tax_amount)

def new_pricing_ctx(service_charge=None):
    return {
        'subtotal': ZERO,
        'service_charge': money(service_charge),
        'tax_amount': ZERO,
        'total_amount': ZERO,
    }

def add_item(pricing_ctx, product, qty: int, unit_price):
    total_price = line_total(qty, unit_price)
    pricing_ctx['subtotal'] += total_price

    return {
        'product_id': product.id,
        'product_name': product.name,
        'product_sku': product.sku,
        'quantity': qty,
        'unit_price': money(unit_price),
        'total_price': total_price,
    }

def finalize(pricing_ctx, tax_rate=None):
    taxable = pricing_ctx['subtotal'] + pricing_ctx['service_charge']
    pricing_ctx['tax_amount'] = calc_tax(taxable, tax_rate)
    pricing_ctx['total_amount'] = taxable + pricing_ctx['tax_amount']
    return pricing_ctx

# Order object type: table and (de)serialisation schemas

from flask_marshmallow import Marshmallow
from flask_sqlalchemy import SQLAlchemy
from marshmallow import EXCLUDE, ValidationError, fields

from functions import OrderRecord, registry
from order_shipment import is_date_text

db = SQLAlchemy()
ma = Marshmallow()

DATE_ERROR = "Date must be in YYYY-MM-DD format"

PENDING = "Pending"
SHIPPED = "Shipped"


def validate_date_text(value):   # same constraint as the action form field
    if not is_date_text(value):
        raise ValidationError(DATE_ERROR)


class Order(db.Model):   # table for 'orders', dates kept as YYYY-MM-DD text
    __tablename__ = 'Orders'
    id = db.Column(db.Integer, primary_key=True)
    order_date = db.Column(db.String(10), nullable=False)
    shipped_date = db.Column(db.String(10))
    status = db.Column(db.String(20), nullable=False, default=PENDING)
    customer_id = db.Column(db.Integer)

    def __repr__(self):
        return f"<Order {self.id} {self.status}>"


class OrderSchema(ma.Schema):   # Schema for 'orders'
    id = fields.Integer(dump_only=True)
    order_date = fields.String(required=True, validate=validate_date_text)
    shipped_date = fields.String(allow_none=True, validate=validate_date_text)
    customer_id = fields.Integer(allow_none=True)
    status = fields.String(dump_only=True)
    shipping_days = fields.Method('get_shipping_days', dump_only=True)

    def get_shipping_days(self, order):
        return registry.get('shippingDays')(OrderRecord.from_order(order))


order_schema = OrderSchema()
orders_schema = OrderSchema(many=True)


class ShipOrderSchema(ma.Schema):   # form for the 'Mark as shipped' action
    shipped_date = fields.String(required=True, validate=validate_date_text)


ship_order_schema = ShipOrderSchema()


class OrderRecordSchema(ma.Schema):   # function input, values passed through unchecked
    order_date = fields.Raw(allow_none=True, load_default=None)
    shipped_date = fields.Raw(allow_none=True, load_default=None)

    class Meta:
        unknown = EXCLUDE


order_record_schema = OrderRecordSchema()

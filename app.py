import logging

from flask import Blueprint, Flask, abort, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import NotFound

import config
from functions import FunctionNotFound, OrderRecord, registry
from models import (PENDING, SHIPPED, Order, db, ma, order_record_schema, order_schema, orders_schema,
                    ship_order_schema)

logger = logging.getLogger(__name__)

orders_bp = Blueprint('orders', __name__)
functions_bp = Blueprint('functions', __name__)


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(config)
    if config_overrides:
        app.config.update(config_overrides)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    db.init_app(app)
    ma.init_app(app)
    app.register_blueprint(orders_bp)
    app.register_blueprint(functions_bp)

    app.register_error_handler(ValidationError, handle_validation_error)
    app.register_error_handler(NotFound, handle_not_found)
    app.register_error_handler(FunctionNotFound, handle_function_not_found)
    app.register_error_handler(SQLAlchemyError, handle_database_error)
    return app


def handle_validation_error(err):
    logger.warning("Rejected %s %s: %s", request.method, request.path, err.messages)
    return jsonify(err.messages), 400


def handle_not_found(err):
    return jsonify({"message": err.description}), 404


def handle_function_not_found(err):
    return jsonify({"message": str(err)}), 404


def handle_database_error(err):
    db.session.rollback()
    logger.exception("Database error on %s %s", request.method, request.path)
    return jsonify({"Error": str(err)}), 500


MAX_ORDER_ID = 2 ** 63 - 1   # largest id a signed 64-bit INTEGER column can hold


def get_order_or_404(id):   # out-of-range ids cannot exist, so skip the query
    if not 0 < id <= MAX_ORDER_ID:
        abort(404, description=f"Order {id} not found")
    return db.get_or_404(Order, id, description=f"Order {id} not found")


def request_json():   # empty, non-JSON or non-object bodies load as {} and fail schema validation
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


# Order Management:
@orders_bp.route('/orders', methods=["GET"])   # GET method to list all orders with their shipping days
def list_orders():
    all_orders = Order.query.order_by(Order.id).all()
    return orders_schema.jsonify(all_orders)

@orders_bp.route('/orders', methods=["POST"])   # POST method to add new order, needs order date; shipped date optional
def add_order():
    order_data = order_schema.load(request_json())

    new_order = Order(
        order_date=order_data['order_date'],
        shipped_date=order_data.get('shipped_date'),
        customer_id=order_data.get('customer_id'),
    )
    if new_order.shipped_date:
        new_order.status = SHIPPED

    db.session.add(new_order)
    db.session.commit()
    logger.info("Created order %s", new_order.id)
    return order_schema.jsonify(new_order), 201

@orders_bp.route('/orders/<int:id>', methods=["GET"])   # GET method to track a single order
def get_order(id):
    order = get_order_or_404(id)
    return order_schema.jsonify(order)

@orders_bp.route('/orders/<int:id>', methods=["PUT"])   # PUT method to correct order fields, only those sent are changed
def update_order(id):
    order = get_order_or_404(id)
    order_data = order_schema.load(request_json(), partial=True)

    for field in ('order_date', 'shipped_date', 'customer_id'):
        if field in order_data:
            setattr(order, field, order_data[field])
    if 'shipped_date' in order_data:
        order.status = SHIPPED if order.shipped_date else PENDING

    db.session.commit()
    logger.info("Updated order %s", id)
    return order_schema.jsonify(order), 200

@orders_bp.route('/orders/<int:id>', methods=["DELETE"])   # DELETE method to remove order
def delete_order(id):
    order = get_order_or_404(id)
    db.session.delete(order)
    db.session.commit()
    logger.info("Deleted order %s", id)
    return jsonify({"message": "Order removed successfully"}), 200

@orders_bp.route('/orders/<int:id>/ship', methods=["POST"])   # 'Mark as shipped' action: record the shipped date
def mark_as_shipped(id):
    order = get_order_or_404(id)
    ship_data = ship_order_schema.load(request_json())

    order.shipped_date = ship_data['shipped_date']
    order.status = SHIPPED
    db.session.commit()
    logger.info("Order %s marked as shipped on %s", id, order.shipped_date)
    return order_schema.jsonify(order), 200


# Functions:
@functions_bp.route('/functions', methods=["GET"])   # GET method to list registered functions and their signatures
def list_functions():
    return jsonify(registry.describe()), 200

@functions_bp.route('/functions/<name>', methods=["POST"])   # POST method to run a function on an order, by id or inline record
def invoke_function(name):
    registry.get(name)   # unknown names 404 before the body is read
    payload = request_json()

    if 'order_id' in payload:
        order_id = payload['order_id']
        if not isinstance(order_id, int) or isinstance(order_id, bool):
            raise ValidationError({"order_id": ["Not a valid integer."]})
        order = get_order_or_404(order_id)
        record = OrderRecord.from_order(order)
    elif isinstance(payload.get('order'), dict):
        record = OrderRecord.from_mapping(order_record_schema.load(payload['order']))
    else:
        raise ValidationError({"order": ["Provide 'order' or 'order_id'."]})

    return jsonify({"function": name, "result": registry.invoke(name, record)}), 200


if __name__ == '__main__':
    app = create_app()
    with app.app_context():
        db.create_all()
    app.run(debug=True)

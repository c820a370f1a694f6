import pytest

from functions import (FunctionAlreadyRegistered, FunctionNotFound, FunctionRegistry,
                       OrderRecord, registry)


@pytest.fixture
def local_registry():
    reg = FunctionRegistry()

    @reg.register('orderYear', inputs={'order': 'Order'}, output='String')
    def order_year(order):
        """Year the order was placed."""
        return order.order_date[:4]

    return reg


def test_shipping_days_is_registered():
    assert 'shippingDays' in registry
    assert registry.describe()[0] == {
        'name': 'shippingDays',
        'inputs': {'order': 'Order'},
        'output': 'String',
        'description': "Days between an order's order date and shipped date.",
    }


def test_invoke_shipping_days():
    record = OrderRecord(order_date="2025-08-01", shipped_date="2025-08-28")
    assert registry.invoke('shippingDays', record) == "27 days"


def test_invoke_shipping_days_on_unshipped_order():
    assert registry.invoke('shippingDays', OrderRecord(order_date="2025-08-01")) == "Not Applicable"


def test_registered_function_is_still_a_plain_function(local_registry):
    func = local_registry.get('orderYear').func
    assert func(OrderRecord(order_date="2025-08-01")) == "2025"


def test_docstring_used_as_description(local_registry):
    assert local_registry.get('orderYear').description == "Year the order was placed."


def test_duplicate_name_is_rejected(local_registry):
    with pytest.raises(FunctionAlreadyRegistered):
        @local_registry.register('orderYear', inputs={'order': 'Order'}, output='String')
        def other(order):
            return ""


def test_unknown_function(local_registry):
    with pytest.raises(FunctionNotFound) as excinfo:
        local_registry.invoke('missing', OrderRecord())
    assert isinstance(excinfo.value, LookupError)
    assert excinfo.value.name == 'missing'


def test_names_are_sorted(local_registry):
    @local_registry.register('aFirst', inputs={'order': 'Order'}, output='String', description="first")
    def a_first(order):
        return ""

    assert local_registry.names() == ['aFirst', 'orderYear']
    assert len(local_registry) == 2


def test_order_record_from_mapping_fills_missing_fields():
    record = OrderRecord.from_mapping({'order_date': "2025-08-01", 'customer_id': 3})
    assert record == OrderRecord(order_date="2025-08-01", shipped_date=None)

# Registry of named functions that can be run against an order record

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from order_shipment import compute_shipping_duration

logger = logging.getLogger(__name__)


class FunctionRegistryError(Exception):
    pass


class FunctionNotFound(FunctionRegistryError, LookupError):
    def __init__(self, name):
        super().__init__(f"No function registered as '{name}'")
        self.name = name


class FunctionAlreadyRegistered(FunctionRegistryError, ValueError):
    def __init__(self, name):
        super().__init__(f"A function is already registered as '{name}'")
        self.name = name


@dataclass(frozen=True)
class OrderRecord:   # the two order fields a function may read
    order_date: Optional[Any] = None
    shipped_date: Optional[Any] = None

    @classmethod
    def from_mapping(cls, data):
        return cls(order_date=data.get('order_date'), shipped_date=data.get('shipped_date'))

    @classmethod
    def from_order(cls, order):
        return cls(order_date=order.order_date, shipped_date=order.shipped_date)


@dataclass(frozen=True)
class RegisteredFunction:
    name: str
    func: Callable[[OrderRecord], str]
    inputs: Dict[str, str]
    output: str
    description: Optional[str] = None

    def __call__(self, record):
        return self.func(record)

    def describe(self):
        return {
            'name': self.name,
            'inputs': dict(self.inputs),
            'output': self.output,
            'description': self.description,
        }


class FunctionRegistry:
    def __init__(self):
        self._functions = {}

    def register(self, name, inputs, output, description=None):
        """Decorator that publishes a function under ``name`` with its signature."""
        def decorator(func):
            if name in self._functions:
                raise FunctionAlreadyRegistered(name)
            doc = description or (func.__doc__ or '').strip() or None
            self._functions[name] = RegisteredFunction(name, func, dict(inputs), output, doc)
            logger.debug("Registered function %s", name)
            return func
        return decorator

    def get(self, name):
        try:
            return self._functions[name]
        except KeyError:
            raise FunctionNotFound(name) from None

    def names(self):
        return sorted(self._functions)

    def describe(self):
        return [self._functions[name].describe() for name in self.names()]

    def invoke(self, name, record):
        function = self.get(name)
        result = function(record)
        logger.info("Invoked %s -> %s", name, result)
        return result

    def __contains__(self, name):
        return name in self._functions

    def __len__(self):
        return len(self._functions)


registry = FunctionRegistry()


@registry.register('shippingDays', inputs={'order': 'Order'}, output='String')
def shipping_days(order):
    """Days between an order's order date and shipped date."""
    return compute_shipping_duration(order.order_date, order.shipped_date)

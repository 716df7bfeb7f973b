"""Customer-side quote draft: configure items, then collect them as line items."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.errors import ValidationError


class ItemState(str, Enum):
    UNCONFIGURED = "Unconfigured"
    COLOR_SELECTED = "ColorSelected"
    SIZES_SELECTED = "SizesSelected"
    READY = "Ready"


def validate_selection(color, size_quantities):
    errors = {}
    if not color or not isinstance(color, str):
        errors["color"] = "Please select a color"
    if not isinstance(size_quantities, dict):
        errors["sizes"] = "Size quantities must map size names to quantities"
    elif not size_quantities:
        errors["sizes"] = "Please select at least one size"
    else:
        bad = [
            name for name, qty in size_quantities.items()
            if not isinstance(qty, int) or isinstance(qty, bool) or qty < 1
        ]
        if bad:
            errors["sizes"] = f"Quantities must be positive whole numbers: {', '.join(bad)}"
    if errors:
        raise ValidationError(errors)


@dataclass
class LineItem:
    product: dict
    color: str
    size_quantities: dict

    @property
    def quantity(self):
        return sum(self.size_quantities.values())

    def to_dict(self):
        return {
            "product": {"id": self.product.get("id"), "name": self.product.get("name")},
            "color": self.color,
            "sizeQuantities": dict(self.size_quantities),
        }


class ItemConfigurator:
    """The item a customer is currently configuring on a product page."""

    def __init__(self, product, color=None):
        self.product = product
        self.color = None
        self.size_quantities = {}
        if color:
            self.select_color(color)

    @property
    def state(self):
        if not self.color:
            return ItemState.UNCONFIGURED
        if not self.size_quantities:
            return ItemState.COLOR_SELECTED
        try:
            self.validate_before_submit()
        except ValidationError:
            return ItemState.SIZES_SELECTED
        return ItemState.READY

    def select_color(self, name):
        names = [c.get("name") for c in self.product.get("availableColors") or []]
        if name not in names:
            raise ValidationError({"color": f"{name} is not available for this product"})
        self.color = name

    def _check_size(self, size_name):
        sizes = [s.get("name") for s in self.product.get("availableSizes") or []]
        if sizes and size_name not in sizes:
            raise ValidationError({"sizes": f"{size_name} is not available for this product"})

    def increment_size(self, size_name):
        self._check_size(size_name)
        self.size_quantities[size_name] = self.size_quantities.get(size_name, 0) + 1

    def decrement_size(self, size_name):
        """Drop one unit; a size reaching zero leaves the mapping."""
        current = self.size_quantities.get(size_name)
        if current is None:
            return
        if current <= 1:
            del self.size_quantities[size_name]
        else:
            self.size_quantities[size_name] = current - 1

    def set_quantity(self, size_name, quantity):
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise ValidationError({"sizes": f"Quantity for {size_name} must be a whole number"})
        if quantity < 1:
            self.size_quantities.pop(size_name, None)
        else:
            self._check_size(size_name)
            self.size_quantities[size_name] = quantity

    def validate_before_submit(self):
        validate_selection(self.color, self.size_quantities)

    def reset(self):
        self.size_quantities = {}


@dataclass
class QuoteDraft:
    items: list = field(default_factory=list)

    def add_item(self, product, color, size_quantities):
        """Append a line item. Identical product+color entries are not merged."""
        validate_selection(color, size_quantities)
        item = LineItem(product=product, color=color, size_quantities=dict(size_quantities))
        self.items.append(item)
        return item

    def add_configured(self, configurator):
        item = self.add_item(
            configurator.product, configurator.color, configurator.size_quantities
        )
        configurator.reset()
        return item

    def remove_item(self, index):
        return self.items.pop(index)

    def clear(self):
        self.items.clear()

    @property
    def total_quantity(self):
        return sum(item.quantity for item in self.items)

    def __len__(self):
        return len(self.items)

    def to_payload(self, contact, kind="quote"):
        """Submission payload for the quote endpoint."""
        if not self.items:
            raise ValidationError({"items": "Add at least one item before submitting"})
        return {
            "type": kind,
            "contact": dict(contact),
            "items": [item.to_dict() for item in self.items],
            "submissionDate": datetime.now(timezone.utc).isoformat(),
        }

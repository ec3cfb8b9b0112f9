"""
Query filter construction for home listings.

The builder accepts the raw query-string values of the list endpoint and
produces a plain filter dict consumed by ``HomeRepository``::

    {"city": "Toronto", "price": {"gte": 100.0, "lte": 500.0}, "property_type": PropertyType.CONDO}

Only constraints that were actually supplied appear in the result; an empty
dict means "all homes".
"""

from typing import Any, Dict, Optional

from app.models.home import PropertyType
from app.utils.validators import ValidationResult, parse_price


class HomeFilterBuilder:
    """Accumulates well-typed home filter constraints."""

    def __init__(self):
        self._filters: Dict[str, Any] = {}
        self.result = ValidationResult()

    def with_city(self, city: Optional[str]) -> "HomeFilterBuilder":
        if city is not None and city.strip():
            self._filters["city"] = city.strip()
        return self

    def with_price_range(self, min_price: Any = None, max_price: Any = None) -> "HomeFilterBuilder":
        gte = parse_price(min_price, "minPrice", self.result)
        lte = parse_price(max_price, "maxPrice", self.result)

        if gte is not None and lte is not None and gte > lte:
            self.result.add("minPrice", "minPrice cannot be greater than maxPrice", "price_range")
            return self

        price: Dict[str, float] = {}
        if gte is not None:
            price["gte"] = gte
        if lte is not None:
            price["lte"] = lte
        if price:
            self._filters["price"] = price
        return self

    def with_property_type(self, property_type: Any) -> "HomeFilterBuilder":
        if property_type is None:
            return self
        if isinstance(property_type, PropertyType):
            self._filters["property_type"] = property_type
            return self

        raw = str(property_type).strip()
        if not raw:
            return self
        try:
            self._filters["property_type"] = PropertyType(raw.upper())
        except ValueError:
            allowed = ", ".join(t.value for t in PropertyType)
            self.result.add(
                "propertyType",
                f"propertyType must be one of: {allowed}",
                "enum",
                raw,
            )
        return self

    def build(self) -> Dict[str, Any]:
        """
        Return the accumulated filters.

        Raises:
            ValidationError: If any supplied value was rejected
        """
        self.result.raise_for_violations("Invalid home filters")
        return dict(self._filters)


def build_home_filters(
    city: Optional[str] = None,
    min_price: Any = None,
    max_price: Any = None,
    property_type: Any = None,
) -> Dict[str, Any]:
    """Build the filter dict for the home list endpoint."""
    return (
        HomeFilterBuilder()
        .with_city(city)
        .with_price_range(min_price, max_price)
        .with_property_type(property_type)
        .build()
    )

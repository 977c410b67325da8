"""
Base class for Value Objects.

Value objects are frozen dataclasses compared by their fields. The base
class only adds primitive conversion for serialization.

Example:
    @dataclass(frozen=True)
    class ContentHash(ValueObject):
        value: str
"""

from dataclasses import astuple, fields, is_dataclass


class ValueObject:
    """Marker base for immutable, self-validating domain values."""

    def to_primitive(self) -> object:
        """Single-field values unwrap to the field; others become a dict."""
        if not is_dataclass(self):
            raise TypeError(f"{type(self).__name__} must be a dataclass")
        names = [f.name for f in fields(self)]
        values = astuple(self)
        if len(names) == 1:
            return values[0]
        return dict(zip(names, values, strict=True))

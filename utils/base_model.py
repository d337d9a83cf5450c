# utils/base_model.py
from typing import TypeVar, Any, cast
from pydantic import BaseModel

T = TypeVar('T', bound=BaseModel)


class ImmutableModel(BaseModel):
    """
    Base class for fixed-schema configuration records.

    Configuration read by the object core (request options and the like)
    is process-wide data that must not change under a caller:
    - Immutability: All instances are frozen after creation
    - Copyability: Modified copies are made via with_changes()

    Field values may be opaque objects, so copies are built from the
    attributes themselves rather than from a serialized dump.
    """
    model_config = {
        "frozen": True,
    }

    def field_values(self) -> dict:
        """Current field values, keyed by field name, without serialization."""
        return {name: getattr(self, name) for name in type(self).model_fields}

    def with_changes(self, **changes: Any) -> T:
        """
        Create a new instance with specified changes.

        Args:
            **changes: Keyword arguments with field values to change

        Returns:
            New instance of the same class with updated values

        Raises:
            ValueError: If an invalid field name is provided
        """
        unknown = sorted(set(changes) - set(type(self).model_fields))
        if unknown:
            raise ValueError(f"Invalid field: {', '.join(unknown)}")

        return cast(T, type(self).model_validate({**self.field_values(), **changes}))

# rational3d/utils/base_model.py
from typing import TypeVar, Any, cast
from pydantic import BaseModel

T = TypeVar('T', bound=BaseModel)


class ImmutableModel(BaseModel):
    """
    Base class for all rational3d models providing immutability and copy functionality.

    All geometry and value models inherit from this class to ensure consistent behavior:
    - Immutability: All instances are frozen after creation
    - Copyability: Modified copies are created via with_changes() and re-validated
    - Exact scalars: Fraction and Decimal values are accepted as field types

    Derived quantities are memoised with functools.cached_property. The cached value
    is written straight into the instance __dict__, so it does not trip the frozen
    check and is never part of the model fields.
    """
    model_config = {
        "frozen": True,  # Make all instances immutable
        "arbitrary_types_allowed": True,  # Fraction fields
    }

    def with_changes(self, **changes: Any) -> T:
        """
        Create a new instance with specified changes.

        Args:
            **changes: Keyword arguments with field values to change

        Returns:
            New instance with updated values

        Raises:
            ValueError: If an invalid field name is provided
        """
        # Field values are taken as-is: nested models and Fractions are reused
        current_data = {name: getattr(self, name) for name in type(self).model_fields}

        for key, value in changes.items():
            if key not in current_data:
                raise ValueError(f"Invalid field: {key}")
            current_data[key] = value

        cls = self.__class__

        # Re-validate so structural invariants hold for the copy as well
        return cast(T, cls.model_validate(current_data))

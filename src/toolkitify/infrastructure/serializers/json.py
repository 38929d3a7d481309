"""JSON serializer implementation."""

import json
from datetime import date, datetime
from typing import Any


class SerializationError(Exception):
    """Raised when serialization or deserialization fails."""

    pass


class JsonSerializer:
    """JSON serializer for stored records.

    Produces compact JSON text, which is what browser storage
    areas and cookies can hold.
    """

    def serialize(self, value: Any) -> str:
        """Serialize value to JSON text.

        Args:
            value: The Python object to serialize.

        Returns:
            The serialized value.

        Raises:
            SerializationError: If the value cannot be serialized.
        """
        try:
            return json.dumps(value, default=self._default_encoder, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize value: {e}") from e

    def deserialize(self, data: str) -> Any:
        """Deserialize JSON text to a value.

        Args:
            data: The text to deserialize.

        Returns:
            The deserialized Python object.

        Raises:
            SerializationError: If the data cannot be deserialized.
        """
        try:
            return json.loads(data)
        except (json.JSONDecodeError, TypeError) as e:
            raise SerializationError(f"Failed to deserialize data: {e}") from e

    def _default_encoder(self, obj: Any) -> Any:
        """Encode datetimes and plain objects that json cannot handle."""
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if hasattr(obj, "__dict__"):
            return obj.__dict__
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

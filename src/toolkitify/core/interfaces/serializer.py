"""Serializer interface."""

from typing import Any, Protocol


class ISerializer(Protocol):
    """Contract for turning records into text and back.

    Browser storage and cookies only hold strings, so persistent
    adapters serialize every record before writing it.
    """

    def serialize(self, value: Any) -> str:
        """Serialize value to text.

        Raises:
            SerializationError: If the value cannot be serialized.
        """
        ...

    def deserialize(self, data: str) -> Any:
        """Deserialize text to a value.

        Raises:
            SerializationError: If the data cannot be deserialized.
        """
        ...

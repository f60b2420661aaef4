"""Enum conversion utilities for config parsing"""

from enum import Enum
from typing import Any, List, Optional, Type, TypeVar

# Generic type for any Enum subclass
E = TypeVar("E", bound=Enum)


class EnumHelper:
    """
    Parse YAML strings into Enum members.

    Accepts either the member name or its value, case-insensitively:
        EnumHelper.from_string(DeviceType, "ws281x")   # -> DeviceType.WS281X
        EnumHelper.from_string(LogLevel, "info")       # -> LogLevel.INFO
    """

    @staticmethod
    def from_string(enum_class: Type[E], text: Any, default: Optional[E] = None) -> E:
        """
        Args:
            enum_class: Enum class to parse into
            text: Member name or value (case-insensitive)
            default: Returned for None / unknown input; None means raise

        Raises:
            ValueError: unknown input and no default
        """
        if isinstance(text, enum_class):
            return text

        if text is not None:
            wanted = str(text).strip().lower()
            for member in enum_class:
                if member.name.lower() == wanted or str(member.value).lower() == wanted:
                    return member

        if default is not None:
            return default
        raise ValueError(
            f"Invalid {enum_class.__name__}: {text!r} "
            f"(expected one of {EnumHelper.list_values(enum_class)})"
        )

    @staticmethod
    def list_values(enum_class: Type[E]) -> List[Any]:
        return [member.value for member in enum_class]

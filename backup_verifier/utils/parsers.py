"""
Parsing utilities for command line arguments and settings files.

Absent or blank values are turned into None here, so the rest of the
program only has to test for None.
"""
from typing import Any, List, Optional


def parse_non_negative_int(value: Any, name: str = "Value") -> int:
    """
    Parse a count or number of seconds.

    Args:
        value: Value as string or int
        name: Label used in error messages

    Returns:
        Integer value >= 0

    Raises:
        ValueError: If value is not a valid non-negative integer

    Examples:
        >>> parse_non_negative_int("5")
        5
        >>> parse_non_negative_int(0)
        0
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid {name}: '{value}' is not a number")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {name}: '{value}' is not a number")
    if isinstance(value, float) and value != number:
        raise ValueError(f"Invalid {name}: '{value}' is not a whole number")
    if number < 0:
        raise ValueError(f"{name} must not be negative")
    return number


def parse_non_negative_float(value: Any, name: str = "Value") -> float:
    """
    Parse a non-negative number of seconds.

    Raises:
        ValueError: If value is not a valid non-negative number
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid {name}: '{value}' is not a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {name}: '{value}' is not a number")
    if number < 0:
        raise ValueError(f"{name} must not be negative")
    return number


def parse_optional_int(value: Any, name: str = "Value") -> Optional[int]:
    """Like parse_non_negative_int, but None or blank yields None."""
    if parse_optional_text(value) is None:
        return None
    return parse_non_negative_int(value, name)


def parse_attempt_limit(value: Any, name: str = "Value") -> Optional[int]:
    """
    Parse an optional cap on attempts.

    None or blank means no cap. Zero is rejected: a cap always allows at
    least one attempt.

    Raises:
        ValueError: If value is not a positive integer
    """
    number = parse_optional_int(value, name)
    if number == 0:
        raise ValueError(f"{name} must be at least 1")
    return number


def parse_optional_text(value: Any) -> Optional[str]:
    """
    Normalize an optional setting.

    Args:
        value: Raw value from argparse or a settings file

    Returns:
        Stripped string, or None if the value is missing or blank

    Examples:
        >>> parse_optional_text("  mail.example.com ")
        'mail.example.com'
        >>> parse_optional_text("   ")
        None
        >>> parse_optional_text(None)
        None
    """
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def parse_addresses(address_string: Any) -> Optional[List[str]]:
    """
    Parse a recipient list.

    Args:
        address_string: Comma or semicolon separated addresses, or a list

    Returns:
        List of addresses, or None if input is empty

    Examples:
        >>> parse_addresses("ops@example.com; dba@example.com")
        ['ops@example.com', 'dba@example.com']
        >>> parse_addresses("")
        None
    """
    if address_string is None:
        return None

    if isinstance(address_string, (list, tuple)):
        parts = [str(a) for a in address_string]
    else:
        parts = str(address_string).replace(";", ",").split(",")

    addresses = [p.strip() for p in parts if p.strip()]
    return addresses if addresses else None

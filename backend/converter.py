"""
Utility functions for converting Kubernetes resource quantities.
"""
import math

from kubernetes.utils import parse_quantity

MEBIBYTE = 1024 * 1024


def cpu_to_display(cores):
    """
    Truncate a CPU quantity in cores toward zero.

    Examples:
        Decimal('1.5')   -> 1
        Decimal('0.999') -> 0

    Args:
        cores (Decimal): CPU usage in cores.

    Returns:
        int: whole cores, never rounded up.
    """
    return int(cores)


def bytes_to_mebibytes(value):
    """
    Convert bytes to mebibytes, rounding up.

    Examples:
        3145728 -> 3
        3145729 -> 4

    Args:
        value (int): memory in bytes.

    Returns:
        int: memory in mebibytes.
    """
    return -(-value // MEBIBYTE)


def quantity_to_cores(value):
    """Parse a CPU quantity string ('250m', '1', '12345n') into cores."""
    return parse_quantity(value)


def quantity_to_bytes(value):
    """Parse a memory quantity string ('128Mi', '125952Ki', '1048576') into whole bytes."""
    return math.ceil(parse_quantity(value))


def quantity_to_milli(value):
    """
    Parse a quantity string into milli-units, rounding up.

    Examples:
        '2500m' -> 2500
        '2.5'   -> 2500
        '3'     -> 3000
    """
    return math.ceil(parse_quantity(value) * 1000)


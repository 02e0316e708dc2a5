"""
Common helpers shared by the calculator, the runner and the CLI.

Covers address/string matching, rendering of large integer amounts for
JSON and log output, RPC hex quantities and structured console loggers.
"""

import dataclasses
import json
import logging
from typing import Any, Dict, List, Optional, Union


# Matching utilities
def match(a: str, b: Union[str, List[str]], case_insensitive: bool = False) -> bool:
    """
    Check whether ``a`` equals ``b`` or is contained in the list ``b``.

    Used to compare addresses, which may come back from RPC nodes checksummed
    or lowercased.

    Args:
        a: Value to look for. An empty value never matches.
        b: Single value or list of candidates
        case_insensitive: Compare lowercased values

    Returns:
        True if ``a`` matches
    """
    if not a:
        return False

    if isinstance(b, (list, tuple)):
        if case_insensitive:
            return a.lower() in [x.lower() for x in b]
        return a in b

    if case_insensitive:
        return a.lower() == b.lower()

    return a == b


# Amount rendering utilities
def to_hex_string(value: int) -> str:
    """Render an integer as an even-length 0x-prefixed hex string (0 -> 0x00)."""
    digits = format(abs(value), "x")
    if len(digits) % 2:
        digits = "0" + digits
    sign = "-" if value < 0 else ""
    return f"{sign}0x{digits}"


def to_rpc_hex_string(value: int) -> str:
    """Render an integer as a JSON-RPC quantity: no leading zeros, 0 -> 0x0."""
    if value < 0:
        raise ValueError(f"RPC quantities must be non-negative: {value}")
    return hex(value)


def stringify_amounts(obj: Any, to_hex: bool = False) -> Any:
    """
    Recursively convert integer amounts to strings.

    Wei-denominated values overflow JSON number precision in most consumers,
    so every int (bools excluded) is rendered as a decimal string, or as a
    hex string when ``to_hex`` is set. Dataclasses, dicts, lists and tuples
    are walked; everything else is returned unchanged.
    """
    if obj is None or isinstance(obj, bool):
        return obj
    if isinstance(obj, int):
        return to_hex_string(obj) if to_hex else str(obj)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return stringify_amounts(dataclasses.asdict(obj), to_hex)
    if isinstance(obj, (list, tuple)):
        return [stringify_amounts(x, to_hex) for x in obj]
    if isinstance(obj, dict):
        return {k: stringify_amounts(v, to_hex) for k, v in obj.items()}
    return obj


# JSON utilities
def safe_json_dump(data: Any, **kwargs) -> str:
    """
    Serialize data to JSON with sensible defaults.

    Args:
        data: Data to serialize
        **kwargs: Additional arguments to json.dumps

    Returns:
        JSON string
    """
    defaults = {"ensure_ascii": False, "indent": 2, "default": str}
    defaults.update(kwargs)
    return json.dumps(data, **defaults)


# Logging utilities
def get_logger(
    name: str,
    level: Union[str, int] = logging.INFO,
    extra: Optional[Dict[str, Any]] = None,
    minimal: bool = False,
) -> Union[logging.Logger, logging.LoggerAdapter]:
    """
    Get a structured logger with consistent formatting and extra context.

    Args:
        name: Logger name (typically __name__)
        level: Logging level
        extra: Additional context fields to include in all log messages
        minimal: If True, use simplified format (time + message only)

    Returns:
        Configured logger, or a LoggerAdapter when ``extra`` is given
    """
    logger = logging.getLogger(name)

    if logger.level == logging.NOTSET:
        logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()

        if minimal:
            format_str = "%(asctime)s | %(message)s"
        else:
            format_str = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"

        if extra:
            extra_fields = " | ".join(f"{k}=%(extra_{k})s" for k in extra)
            format_str = format_str.replace(
                " | %(message)s", f" | {extra_fields} | %(message)s"
            )

        handler.setFormatter(logging.Formatter(format_str, datefmt="%H:%M:%S"))
        logger.addHandler(handler)

    if extra:
        return logging.LoggerAdapter(
            logger, {"extra_" + k: v for k, v in extra.items()}
        )

    return logger

from typing import Union

from starknet_py.constants import FIELD_PRIME


def int_16(val: Union[str, int]) -> int:
    if isinstance(val, int):
        return val
    return int(val, 16)


def parse_felt(val: Union[str, int]) -> int:
    """
    Parses a felt literal: ints pass through, "0x" strings are hex, anything else decimal.
    """
    if isinstance(val, bool):
        raise ValueError(f"{val!r} is not a felt")
    if isinstance(val, int):
        felt = val
    elif not isinstance(val, str):
        raise TypeError(f"{val!r} is not a felt")
    elif val.lower().startswith("0x"):
        felt = int_16(val)
    else:
        felt = int(val, 10)
    if not 0 <= felt < FIELD_PRIME:
        raise ValueError(f"{val} is out of the felt range")
    return felt


def format_hash(value: int) -> str:
    return f"{value:#064x}"

import re

SID_PATTERN = re.compile(r'[0-9]{4}')
NAME_PATTERN = re.compile(r'[A-Za-z]{1,20}')


def valid_sid(sid) -> bool:
    """True for exactly four ASCII digits, e.g. '0007'."""
    return isinstance(sid, str) and SID_PATTERN.fullmatch(sid) is not None


def valid_name(name) -> bool:
    """True for 1-20 ASCII letters once surrounding whitespace is trimmed."""
    return isinstance(name, str) and NAME_PATTERN.fullmatch(name.strip()) is not None

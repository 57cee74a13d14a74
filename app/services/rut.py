import re

from app.core.exceptions import InputError

_NON_DIGITS = re.compile(r"\D")


def clean_rut(value: str) -> str:
    """Chilean RUT reduced to its digits, the form it is stored and looked up in.

    ``12.345.678-5`` and ``12345678-5`` both become ``123456785``.
    """
    digits = _NON_DIGITS.sub("", value or "")
    if not digits:
        raise InputError(f"Invalid RUT {value!r}")
    if len(digits) > 12:
        raise InputError(f"RUT {value!r} is too long")
    return digits

"""Cache thresholds: an absolute byte count or a percentage of the cgroup limit"""

import dataclasses
import math
import re
import typing

_UNITS = {"": 1, "B": 1}
for _i, _p in enumerate("KMGTP", 1):
    # 500M and 500MB are decimal, 500Mi and 500MiB binary.
    _UNITS[_p] = _UNITS[_p + "B"] = 1000**_i
    _UNITS[_p + "I"] = _UNITS[_p + "IB"] = 1024**_i

_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([A-Za-z]*)\s*$")


@dataclasses.dataclass(frozen=True)
class Bytes:
    value: int

    def __str__(self):
        return f"{self.value} bytes"


@dataclasses.dataclass(frozen=True)
class Percent:
    value: float

    def __str__(self):
        return f"{self.value}% of limit"


Threshold = typing.Union[Bytes, Percent]


def parse_bytes(value):
    """Parse '100', '100KB' or '1.5 GiB' into a number of bytes.

    K, KB, M, MB, ... are decimal multiples and Ki, KiB, Mi, MiB, ... binary ones.
    """
    m = _SIZE_RE.match(value)
    if m is None:
        raise ValueError(f"Invalid threshold: '{value}'")
    number, unit = m.groups()
    unit = unit.upper()
    if unit not in _UNITS:
        raise ValueError(f"Invalid threshold: unknown unit '{m.group(2)}' in '{value}'")
    if "." in number:
        return int(float(number) * _UNITS[unit])
    return int(number) * _UNITS[unit]


def parse_threshold(value):
    value = value.strip()
    if value.endswith("%"):
        try:
            percent = float(value[:-1])
        except ValueError:
            raise ValueError(f"Invalid threshold: '{value}'") from None
        if not math.isfinite(percent) or percent < 0:
            raise ValueError(f"Invalid threshold: '{value}'")
        return Percent(percent)
    return Bytes(parse_bytes(value))

"""Type coercion for cell text."""

from __future__ import annotations

import math
import re

from sheetcfg.core.errors import FloatParseError, IntParseError, UnknownTypeError

from .schema import Scalar

INT_TYPE = "int"
FLOAT_TYPE = "float"
STRING_TYPE = "string"
KNOWN_TYPES = frozenset({INT_TYPE, FLOAT_TYPE, STRING_TYPE})
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)


def coerce(text: str, type_label: str, *, strict: bool = False) -> Scalar:
    """Convert ``text`` according to ``type_label``.

    Unrecognised labels pass the text through unchanged unless ``strict``.
    """

    if type_label == INT_TYPE:
        if not _INT_RE.fullmatch(text):
            raise IntParseError(text, type_label, "不是十进制整数")
        value = int(text)
        if not INT64_MIN <= value <= INT64_MAX:
            raise IntParseError(text, type_label, "超出 64 位整数范围")
        return value
    if type_label == FLOAT_TYPE:
        if not _FLOAT_RE.fullmatch(text):
            raise FloatParseError(text, type_label, "不是浮点数")
        value = float(text)
        if math.isinf(value):
            raise FloatParseError(text, type_label, "超出 64 位浮点数范围")
        return value
    if type_label == STRING_TYPE:
        return text
    if strict:
        raise UnknownTypeError(text, type_label, f"未知类型, 仅支持 {', '.join(sorted(KNOWN_TYPES))}")
    return text

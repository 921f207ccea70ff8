"""
字段投影器

从原始请求体中挑出声明过的字段并按类型标签转换。
只复制"已声明且出现在请求体中"的键，缺失的键绝不补默认值，
这样部分更新不会把已有值覆盖成 null。
"""
import json
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from hotelhub.errors import InvalidFieldType

# 类型标签
TEXT = "text"
INTEGER = "integer"
NUMBER = "number"
BOOLEAN = "boolean"
JSON_ARRAY = "jsonArray"

TYPE_TAGS = (TEXT, INTEGER, NUMBER, BOOLEAN, JSON_ARRAY)

_TRUE_WORDS = {"true", "1", "yes", "y", "on"}
_FALSE_WORDS = {"false", "0", "no", "n", "off", ""}

# SQLite INTEGER 为有符号 64 位
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class FieldSpec:
    """单个字段声明：规范列名、类型标签、可接受的输入别名"""
    name: str
    type_tag: str = TEXT
    aliases: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.type_tag not in TYPE_TAGS:
            raise ValueError(f"未知类型标签: {self.type_tag} ({self.name})")

    @property
    def input_keys(self) -> Tuple[str, ...]:
        return (self.name,) + self.aliases


def declare(type_tag: str, *names: str) -> Tuple[FieldSpec, ...]:
    """批量声明同一类型的字段"""
    return tuple(FieldSpec(name, type_tag) for name in names)


def _lookup(payload: Mapping[str, Any], spec: FieldSpec):
    """返回 (是否出现, 原始值)，规范键优先于别名"""
    for key in spec.input_keys:
        if key in payload:
            return True, payload[key]
    return False, None


def present_subset(payload: Mapping[str, Any], specs: Iterable[FieldSpec]) -> Dict[str, Any]:
    """原样取出已声明字段（不做类型转换），用于把平铺字段合成为批量条目"""
    subset = {}
    for spec in specs:
        found, value = _lookup(payload, spec)
        if found:
            subset[spec.name] = value
    return subset


def project(
    payload: Mapping[str, Any],
    specs: Iterable[FieldSpec],
    index: Optional[int] = None,
) -> Dict[str, Any]:
    """投影并转换字段

    Args:
        payload: 原始请求体
        specs: 字段声明
        index: 批量条目序号，仅用于错误信息

    Returns:
        规范列名 -> 转换后的值；没有可识别字段时返回空字典

    Raises:
        InvalidFieldType: 任一字段无法转换
    """
    result = {}
    if not isinstance(payload, Mapping):
        return result
    for spec in specs:
        found, value = _lookup(payload, spec)
        if not found:
            continue
        result[spec.name] = coerce(spec, value, index)
    return result


def coerce(spec: FieldSpec, value: Any, index: Optional[int] = None) -> Any:
    """按类型标签转换单个值；显式 null 原样保留（表示清空该列）"""
    if value is None:
        return None
    converter = _CONVERTERS[spec.type_tag]
    try:
        return converter(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidFieldType(spec.name, _EXPECTED[spec.type_tag], value, index) from None


def _to_text(value: Any) -> str:
    if isinstance(value, (list, dict)):
        raise TypeError("not a scalar")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _to_integer(value: Any) -> Optional[int]:
    number = _parse_integer(value)
    if number is not None and not INT_MIN <= number <= INT_MAX:
        raise ValueError("integer out of range")
    return number


def _parse_integer(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        raise TypeError("boolean is not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("fractional value")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if text == "":
            return None
        try:
            return int(text)
        except ValueError:
            return _parse_integer(float(text))
    raise TypeError("unsupported type")


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        raise TypeError("boolean is not a number")
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if text == "":
            return None
        number = float(text)
    else:
        raise TypeError("unsupported type")
    if not math.isfinite(number):
        raise ValueError("non-finite number")
    return number


def _to_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        # 其余非空字符串按真值处理
        return True
    raise TypeError("unsupported type")


def _to_json_array(value: Any) -> list:
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        decoded = json.loads(value)
        if isinstance(decoded, list):
            return decoded
        raise ValueError("JSON value is not an array")
    raise TypeError("unsupported type")


_CONVERTERS = {
    TEXT: _to_text,
    INTEGER: _to_integer,
    NUMBER: _to_number,
    BOOLEAN: _to_boolean,
    JSON_ARRAY: _to_json_array,
}

_EXPECTED = {
    TEXT: "a text value",
    INTEGER: "an integer",
    NUMBER: "a number",
    BOOLEAN: "a boolean",
    JSON_ARRAY: "a JSON array",
}

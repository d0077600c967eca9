"""
외부 API 숫자 필드 파싱 유틸리티

공공데이터포털/네이버 응답의 숫자는 대부분 문자열로 내려옵니다.
모든 숫자 필드는 여기서 파싱하며, 실패 시 NaN 대신 fallback 값을 반환합니다.
"""

import math
from typing import Any, Optional


def _clean(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip().replace(',', '')
    if text.startswith('+'):
        text = text[1:]
    return text or None


def parse_float(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """
    문자열/숫자 → float

    Example:
        >>> parse_float("1.82")
        1.82
        >>> parse_float("-", default=None) is None
        True
    """
    text = _clean(value)
    if text is None:
        return default
    try:
        result = float(text)
    except ValueError:
        return default
    if not math.isfinite(result):
        return default
    return result


def parse_int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    """
    문자열/숫자 → int (소수부는 버림)

    Example:
        >>> parse_int("72,400")
        72400
        >>> parse_int("N/A", default=None) is None
        True
    """
    text = _clean(value)
    if text is None:
        return default
    try:
        return int(text)
    except ValueError:
        pass
    number = parse_float(text, default=None)
    if number is None:
        return default
    return int(number)

"""
공공데이터포털 JSON 응답 구조 해석

응답 형식:
    {"response": {"header": {...}, "body": {"totalCount": N, "items": {"item": [...]}}}}

형식이 다르면 예외 대신 None / 빈 리스트를 반환합니다.
"""

from typing import Any, Dict, List, Optional


def response_section(payload: Any, key: str) -> Optional[Dict[str, Any]]:
    """payload["response"][key] (dict가 아니면 None)"""
    if not isinstance(payload, dict):
        return None
    response = payload.get("response")
    if not isinstance(response, dict):
        return None
    section = response.get(key)
    return section if isinstance(section, dict) else None


def extract_items(body: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    body["items"]["item"] → dict 리스트

    결과가 없으면 items가 빈 문자열로 내려오고,
    1건이면 item이 리스트가 아닌 dict 하나로 내려옵니다.
    dict가 아닌 항목은 버립니다.
    """
    items = body.get("items")
    if not isinstance(items, dict):
        return []
    raw = items.get("item") or []
    if isinstance(raw, dict):
        raw = [raw]
    if not isinstance(raw, list):
        return []
    return [item for item in raw if isinstance(item, dict)]

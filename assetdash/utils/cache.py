"""
프로세스 로컬 TTL 캐시

자산 목록 API의 단일 캐시 엔트리를 보관합니다.
경과 시간으로만 만료되며 수동 무효화 경로는 없습니다.
동시 miss 시 중복 refill은 허용합니다 (락 없음).
"""

import time
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar('T')


class TTLCache(Generic[T]):
    """{value, filled_at} 단일 엔트리 캐시"""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._value: Optional[T] = None
        self._filled_at: Optional[float] = None

    @property
    def filled_at(self) -> Optional[float]:
        return self._filled_at

    def is_fresh(self) -> bool:
        if self._filled_at is None:
            return False
        return self._clock() - self._filled_at <= self.ttl_seconds

    def get(self) -> Optional[T]:
        """유효한 값이 있으면 반환, 만료/비어있으면 None"""
        if not self.is_fresh():
            return None
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        self._filled_at = self._clock()

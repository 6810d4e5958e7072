"""
In-memory кэш запросов витрины.

Ключ запроса - кортеж, первый элемент которого имя запроса
("brands", "categories", "products"). Мутации сбрасывают кэш
по имени запроса, после чего клиент получает свежие данные.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, Hashable, Tuple

from storefront.core.config import settings

logger = logging.getLogger(__name__)

QueryKey = Tuple[Hashable, ...]


class QueryCache:
    """Кэш с временем жизни записей и сбросом по имени запроса."""

    def __init__(self, ttl: float = 300, max_entries: int = 1000):
        self.ttl = ttl
        self.max_entries = max_entries
        self._entries: Dict[QueryKey, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get_or_load(self, key: QueryKey, loader: Callable[[], Any]) -> Any:
        """Вернуть значение из кэша или загрузить и сохранить его."""
        now = time.monotonic()
        with self._lock:
            entry = self._entries.get(key)
            if entry and now - entry[0] < self.ttl:
                return entry[1]

        value = loader()
        with self._lock:
            self._entries.pop(key, None)
            self._evict(now)
            self._entries[key] = (now, value)
        return value

    def _evict(self, now: float) -> None:
        """Удалить истекшие записи и самые старые сверх max_entries."""
        expired = [key for key, (stored_at, _) in self._entries.items() if now - stored_at >= self.ttl]
        for key in expired:
            del self._entries[key]
        # Записи хранятся в порядке добавления
        while self._entries and len(self._entries) >= self.max_entries:
            del self._entries[next(iter(self._entries))]

    def invalidate(self, *names: str) -> None:
        """Сбросить все записи указанных запросов."""
        with self._lock:
            stale = [key for key in self._entries if key and key[0] in names]
            for key in stale:
                del self._entries[key]
        logger.debug("Invalidated %d cached entries for %s", len(stale), ", ".join(names))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


# Глобальный экземпляр кэша
query_cache = QueryCache(ttl=settings.CACHE_TTL, max_entries=settings.CACHE_MAX_ENTRIES)

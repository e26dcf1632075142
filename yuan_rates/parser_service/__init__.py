"""Parser Service package.

Получение курсов юаня со страницы huobiduihuan.bmcx.com и локальный
кеш exchange_rate.json (XDG cache), который используется, пока сеть
недоступна или медленная.

Публичные точки входа:
- updater.fetch_into_store() — получить курсы и перезаписать таблицу
- storage.load_cache() / storage.save_cache() — чтение и запись кеша
"""

from __future__ import annotations

__all__ = [
    "config",
    "api_clients",
    "storage",
    "updater",
]

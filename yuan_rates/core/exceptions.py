class RatesError(Exception):
    """Базовая ошибка конвертера курсов."""


class CacheError(RatesError):
    """Ошибка работы с файлом кеша курсов."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{reason}: {self.path}")


class CacheReadError(CacheError):
    """Кеш отсутствует или не читается (не фатально)."""

    def __init__(self, path: object, reason: str = "cache is not readable") -> None:
        super().__init__(path, reason)


class CacheParseError(CacheError):
    """Содержимое кеша повреждено (не фатально)."""

    def __init__(self, path: object, reason: str = "malformed cache") -> None:
        super().__init__(path, reason)


class CacheWriteError(CacheError):
    """Не удалось записать кеш при завершении."""

    def __init__(self, path: object, reason: str = "cache is not writable") -> None:
        super().__init__(path, reason)


class FetchError(RatesError):
    """Ошибка при получении курсов со страницы."""


class NetworkError(FetchError):
    """Сеть недоступна, таймаут или HTTP-статус не 2xx."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Network error: {reason}")


class ExtractionError(FetchError):
    """Разметка страницы не совпала с шаблоном для валюты."""

    def __init__(self, code: str, reason: str = "pattern did not match") -> None:
        self.code = (code or "").upper()
        super().__init__(f"Cannot extract rate for '{self.code}': {reason}")


class AmountParseError(RatesError):
    """Введённая сумма не является числом."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"please enter a number (got {value!r})")


class ConfigError(RatesError):
    """Нет пригодного каталога для кеша."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Configuration error: {reason}")

from __future__ import annotations

from typing import Callable

from ncaa_baseball.unified.enums import DataSource

from .adapter import ProviderAdapter

AdapterFactory = Callable[[], ProviderAdapter]


class AdapterRegistry:
    def __init__(self) -> None:
        self._factories: dict[DataSource, AdapterFactory] = {}

    def register(self, provider: DataSource, factory: AdapterFactory) -> None:
        if provider in self._factories:
            raise ValueError(f"Duplicate adapter registration: {provider}")
        self._factories[provider] = factory

    def providers(self) -> list[DataSource]:
        return list(self._factories)

    def build_all(self) -> dict[DataSource, ProviderAdapter]:
        return {p: f() for p, f in self._factories.items()}

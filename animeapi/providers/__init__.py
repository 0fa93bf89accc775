"""Anime providers and the registry that serves them.

Each provider implements the extraction interface of ``Provider``:
- flv: AnimeFLV
- otakudesu: Otakudesu
"""

from __future__ import annotations

from typing import Dict, List, Optional

from animeapi.config import Settings, settings as default_settings
from animeapi.errors import ProviderNotFound
from animeapi.providers.base import Provider, extraction, unique_by_url
from animeapi.providers.flv import FlvProvider
from animeapi.providers.otakudesu import OtakudesuProvider

__all__ = [
    "FlvProvider",
    "OtakudesuProvider",
    "Provider",
    "ProviderRegistry",
    "extraction",
    "unique_by_url",
]


class ProviderRegistry:
    def __init__(self, config: Optional[Settings] = None):
        config = config or default_settings
        available: Dict[str, Provider] = {
            FlvProvider.id: FlvProvider(config.providers.flv_url),
            OtakudesuProvider.id: OtakudesuProvider(config.providers.otakudesu_url),
        }
        self.providers: Dict[str, Provider] = {
            pid: available[pid] for pid in config.providers.enabled if pid in available
        }

    def get(self, provider_id: str) -> Provider:
        try:
            return self.providers[provider_id]
        except KeyError:
            raise ProviderNotFound(f"unknown provider {provider_id!r}") from None

    def all(self) -> List[Provider]:
        return list(self.providers.values())

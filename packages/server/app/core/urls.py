"""Absolute links for emails."""

from __future__ import annotations

from functools import lru_cache
from typing import Union

import httpx

from app.core.config import get_settings


class UrlBuilder:
    def __init__(self, base_url: str):
        self.base_url = httpx.URL(base_url)

    def build_url(self, path: str, param_key: str, param_value: Union[str, int]) -> str:
        """``base_url`` + ``path`` with a single query parameter appended.

        Any path prefix on ``base_url`` is kept.
        """
        full_path = self.base_url.path.rstrip("/") + "/" + path.lstrip("/")
        url = self.base_url.copy_with(path=full_path)
        return str(url.copy_add_param(param_key, str(param_value)))


@lru_cache
def get_url_builder() -> UrlBuilder:
    return UrlBuilder(get_settings().public_base_url)

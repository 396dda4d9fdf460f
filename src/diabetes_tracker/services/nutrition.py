"""Nutrition lookups against Open Food Facts."""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from diabetes_tracker.adapters.openfoodfacts_client import OpenFoodFactsClient
from diabetes_tracker.domain.nutrition import FoodNutrientProfile, FoodProduct
from diabetes_tracker.services.cache import Cache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

SOURCE_OPENFOODFACTS = "openfoodfacts"
HTTP_NOT_FOUND = 404
HTTP_SERVER_ERROR = 500

_NUTRIMENT_KEYS = {
    "calories": "energy-kcal_100g",
    "carbs_g": "carbohydrates_100g",
    "sugars_g": "sugars_100g",
    "fiber_g": "fiber_100g",
    "protein_g": "proteins_100g",
    "fat_g": "fat_100g",
}
_SODIUM_KEY = "sodium_100g"
_IMAGE_KEYS = ("image_front_url", "image_url", "image_small_url")

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Service for food database lookups with caching."""

    client: OpenFoodFactsClient
    cache: Cache
    search_ttl_seconds: int = 3600
    product_ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = 20) -> list[FoodProduct]:
        """Search products by free text, skipping entries without a name."""
        cache_key = f"off:search:{query.strip().lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.search_products(query, page_size=limit),
            action="search",
        )
        products: list[FoodProduct] = []
        for raw in payload.get("products") or []:
            if not isinstance(raw, dict):
                continue
            product = map_product(raw, str(raw.get("code") or ""))
            if product is None:
                _logger.warning("Skipping unnamed product: code=%s", raw.get("code"))
                continue
            products.append(product)
        self.cache.set(cache_key, products, ttl_seconds=self.search_ttl_seconds)
        return products

    async def get_by_barcode(self, barcode: str) -> FoodProduct | None:
        """Return the product for a barcode, or None when unknown."""
        cache_key = f"off:product:{barcode}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodProduct):
            return cached

        try:
            payload = await self._call_with_retry(
                lambda: self.client.get_product(barcode),
                action=f"get_product:{barcode}",
            )
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == HTTP_NOT_FOUND:
                return None
            raise
        raw = payload.get("product")
        if payload.get("status") != 1 or not isinstance(raw, dict):
            return None
        product = map_product(raw, barcode)
        if product is not None:
            self.cache.set(cache_key, product, ttl_seconds=self.product_ttl_seconds)
        return product

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry on transient failures."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                status_code = _status_code_from_exception(exc)
                _logger.warning(
                    "Open Food Facts %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    status_code if status_code is not None else "n/a",
                    exc,
                )
                if attempt > self.retry_attempts or _is_client_error(status_code):
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def map_product(raw: dict[str, object], barcode: str) -> FoodProduct | None:
    """Map an Open Food Facts product to a catalog entry."""
    name = raw.get("product_name")
    if not isinstance(name, str) or not name.strip():
        return None
    nutriments = raw.get("nutriments")
    if not isinstance(nutriments, dict):
        nutriments = {}
    values = {
        field_name: parse_nutriment(nutriments.get(key))
        for field_name, key in _NUTRIMENT_KEYS.items()
    }
    generic_name = raw.get("generic_name")
    return FoodProduct(
        name=name.strip(),
        brand=_first_brand(raw.get("brands")),
        barcode=barcode or None,
        description=generic_name.strip() if isinstance(generic_name, str) else None,
        image_url=_best_image_url(raw),
        profile=FoodNutrientProfile(
            **values,
            sodium_mg=parse_nutriment(nutriments.get(_SODIUM_KEY)) * 1000,
        ),
        source=SOURCE_OPENFOODFACTS,
        is_verified=True,
    )


def parse_nutriment(value: object) -> float:
    """Parse a nutriment value; missing, invalid or negative values become 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        parsed = float(value)
    else:
        try:
            parsed = float(str(value).strip().replace(",", "."))
        except ValueError:
            return 0.0
    if not math.isfinite(parsed) or parsed < 0:
        return 0.0
    return parsed


def _first_brand(brands: object) -> str | None:
    if not isinstance(brands, str):
        return None
    first = brands.split(",")[0].strip()
    return first or None


def _best_image_url(raw: dict[str, object]) -> str | None:
    for key in _IMAGE_KEYS:
        url = raw.get(key)
        if isinstance(url, str) and url.strip():
            return url
    return None


def _status_code_from_exception(exc: Exception) -> int | None:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return status_code
    return None


def _is_client_error(status_code: int | None) -> bool:
    return status_code is not None and status_code < HTTP_SERVER_ERROR

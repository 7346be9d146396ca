"""BaseService: shared foundation for every zonepulse service.

Every service receives a :class:`MarketStore` at construction time and
maps the engine's domain exceptions onto :class:`ServiceResult` failures
in one place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from zonepulse.domain.catalog import UnknownLayerError
from zonepulse.domain.types import Granularity
from zonepulse.domain.zones import UnknownRegionError, is_valid_zone_key
from zonepulse.infrastructure.repositories.layers import StoreUnavailableError
from zonepulse.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from zonepulse.config.settings import PulseSettings
    from zonepulse.infrastructure.store import MarketStore

logger = logging.getLogger(__name__)


class InvalidZoneError(ValueError):
    """Raised for a zone key that is not postal-code-like."""

    def __init__(self, zone: str) -> None:
        super().__init__(f"Invalid zone key: {zone!r}")
        self.zone = zone


class InvalidPeriodError(ValueError):
    """Raised for a time-series period other than monthly or yearly."""

    def __init__(self, period: str) -> None:
        super().__init__(f"Invalid period: {period!r} (expected monthly or yearly)")
        self.period = period


def require_zone(zone: str) -> str:
    """Return *zone* stripped, or raise :class:`InvalidZoneError`."""
    key = (zone or "").strip()
    if not is_valid_zone_key(key):
        raise InvalidZoneError(zone)
    return key


def parse_period(period: str | Granularity) -> Granularity:
    try:
        return Granularity(str(period).strip().lower())
    except ValueError:
        raise InvalidPeriodError(str(period)) from None


class BaseService:
    """Base for service-layer classes.

    Subclasses implement operations as ``@traced`` methods that delegate
    the fallible part to :meth:`_run`, which turns engine exceptions into
    error results.

    Usage::

        class LayerService(BaseService):
            @traced
            def layer_data(self, layer_id: str) -> ServiceResult:
                return self._run("layer_data", lambda: self._layer_data(layer_id))
    """

    def __init__(self, store: MarketStore) -> None:
        self._store = store

    @property
    def settings(self) -> PulseSettings:
        return self._store.settings

    def _run(self, op: str, body: Callable[[], ServiceResult]) -> ServiceResult:
        try:
            return body()
        except UnknownLayerError as exc:
            return ServiceResult.failure(
                op, ErrorCode.UNKNOWN_LAYER, str(exc), layer_id=exc.layer_id
            )
        except UnknownRegionError as exc:
            return ServiceResult.failure(op, ErrorCode.UNKNOWN_REGION, str(exc), region=exc.region)
        except InvalidZoneError as exc:
            return ServiceResult.failure(op, ErrorCode.INVALID_ZONE, str(exc), zone=exc.zone)
        except InvalidPeriodError as exc:
            return ServiceResult.failure(op, ErrorCode.INVALID_PERIOD, str(exc), period=exc.period)
        except StoreUnavailableError:
            logger.exception("backing store unavailable during %s", op)
            return ServiceResult.failure(
                op, ErrorCode.STORE_UNAVAILABLE, "Market data store is unavailable"
            )

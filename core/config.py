"""Dashboard configuration."""

from pydantic import BaseModel, Field


class DashboardConfig(BaseModel):
    """
    Invoice dashboard tunables.

    Durations use their natural units: seconds for cache lifetimes,
    milliseconds for input debounce.
    """

    invoices_path: str = Field(
        default="/dashboard/invoices",
        description="Canonical invoices listing route; also its cache key",
    )
    items_per_page: int = Field(
        default=6,
        description="Invoices shown per listing page",
        ge=1,
        le=100,
    )
    listing_cache_ttl_seconds: int = Field(
        default=300,
        description="Upper bound on how long a cached listing read lives",
        ge=1,
        le=86400,
    )
    search_debounce_ms: int = Field(
        default=300,
        description="Quiet period before a typed search term is applied",
        ge=0,
        le=5000,
    )

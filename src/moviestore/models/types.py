from __future__ import annotations

from enum import StrEnum

# ── Enums ──────────────────────────────────────────────────────────────────────


class CrewRole(StrEnum):
    cast = 'cast'
    crew = 'crew'


class OrderStatus(StrEnum):
    pending = 'PENDING'
    processing = 'PROCESSING'
    shipped = 'SHIPPED'
    delivered = 'DELIVERED'
    cancelled = 'CANCELLED'

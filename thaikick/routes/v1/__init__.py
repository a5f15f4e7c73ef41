"""
API v1 Routes

Versioned API endpoints under /api/v1.
"""

from . import bookings, gyms, health, pricing, prometheus, referrals, trainers

__all__ = [
    "bookings",
    "gyms",
    "health",
    "pricing",
    "prometheus",
    "referrals",
    "trainers",
]

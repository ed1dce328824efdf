"""Database model type definitions."""

from src.models.partner import Partner, PartnerInsert, PartnerRequest

__all__ = [
    "Partner",
    "PartnerInsert",
    "PartnerRequest",
]

"""
Distribution - Shareable Task Links

Creates HIT links for individuals, groups or anyone with the link.

Key Components:
- HitClient: async HTTP adapter for the creation endpoint
- LinkDistributionWorkflow: validation, single in-flight submit, link resolution
"""

from .client import HitClient, create_hit_client
from .workflow import LinkDistributionWorkflow

__all__ = [
    "HitClient",
    "create_hit_client",
    "LinkDistributionWorkflow",
]

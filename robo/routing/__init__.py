"""
Routing - Capture Destination Decisions

Suggests agents for a completed capture and resolves the user's choice to a
single decision: route to an agent or save locally.

Key Components:
- RoutingDecisionEngine: pure heuristic suggestions and capture titles
- RoutingPresentationCoordinator: one presentation at a time, one decision each
"""

from .engine import RoutingDecisionEngine
from .presentation import RoutingPresentation, RoutingPresentationCoordinator

__all__ = [
    "RoutingDecisionEngine",
    "RoutingPresentation",
    "RoutingPresentationCoordinator",
]

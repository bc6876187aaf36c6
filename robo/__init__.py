"""
Robo Core

Capture coordination and routing for the Robo sensor app.

Components:
- Capture: hardware capture session lifecycle with heading sampling
- Routing: heuristic destination suggestions resolved to one decision
- Distribution: shareable task (HIT) link creation

Usage:
    from robo.common import load_config
    from robo.capture import CaptureSessionCoordinator, HeadingTracker
    from robo.routing import RoutingDecisionEngine, RoutingPresentationCoordinator
    from robo.distribution import HitClient, LinkDistributionWorkflow
"""

__version__ = "0.1.0"

"""
Robo Schemas

Data model for capture, routing and link distribution.
"""

from .capture import (
    SensorType,
    HeadingSample,
    CapturedArtifact,
    CaptureRouting,
)
from .routing import (
    AgentStatus,
    AgentConnection,
    SuggestedRoute,
    RouteToAgent,
    SaveLocally,
    RoutingDecision,
    describe_decision,
)
from .distribution import (
    DistributionMode,
    DistributionModeInfo,
    DISTRIBUTION_MODES,
    HitCreationRequest,
    HitCreationResult,
    HitLink,
    parse_participants,
    requires_participants,
)

__all__ = [
    "SensorType",
    "HeadingSample",
    "CapturedArtifact",
    "CaptureRouting",
    "AgentStatus",
    "AgentConnection",
    "SuggestedRoute",
    "RouteToAgent",
    "SaveLocally",
    "RoutingDecision",
    "describe_decision",
    "DistributionMode",
    "DistributionModeInfo",
    "DISTRIBUTION_MODES",
    "HitCreationRequest",
    "HitCreationResult",
    "HitLink",
    "parse_participants",
    "requires_participants",
]

"""
Routing Schemas

Destination agents, suggested routes and the terminal routing decision.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class AgentStatus(str, Enum):
    """Connection status of a registered agent"""
    CONNECTED = "connected"
    PENDING_APPROVAL = "pending_approval"
    SYNCING = "syncing"


@dataclass(frozen=True)
class AgentConnection:
    """
    Destination agent owned by an external registry.

    Only ``id`` and ``name`` matter for routing; the rest is carried for
    callers that render the agent.
    """
    id: str
    name: str
    description: str = ""
    icon: str = ""
    accent_color: str = ""
    status: AgentStatus = AgentStatus.CONNECTED


@dataclass(frozen=True)
class SuggestedRoute:
    """Candidate destination produced by the routing engine"""
    agent_name: str
    icon: str
    color: str
    reason: str
    confidence: float = 0.0  # 0.0-1.0


@dataclass(frozen=True)
class RouteToAgent:
    """Forward the capture to a registered agent"""
    agent_id: str


@dataclass(frozen=True)
class SaveLocally:
    """Keep the capture on device only"""
    pass


RoutingDecision = Union[RouteToAgent, SaveLocally]


def describe_decision(decision: Optional[RoutingDecision]) -> str:
    """Short human-readable form, used in logs"""
    if isinstance(decision, RouteToAgent):
        return f"route_to_agent({decision.agent_id})"
    if isinstance(decision, SaveLocally):
        return "save_locally"
    return "undecided"

"""
Routing Decision Engine

Rule-based heuristic mapping a capture summary to suggested destination
agents. Pure: no I/O, no state, same input gives the same ordered output.
"""

from typing import Dict, List, Sequence, Tuple

from ..common.schemas.capture import CaptureRouting, SensorType
from ..common.schemas.routing import AgentConnection, SuggestedRoute


INTERIOR_DESIGNER = SuggestedRoute(
    agent_name="Interior Designer",
    icon="sofa",
    color="purple",
    confidence=0.9,
    reason="Room scans are ideal for furniture layout and design",
)
CONTRACTOR_BOT = SuggestedRoute(
    agent_name="Contractor Bot",
    icon="hammer",
    color="yellow",
    confidence=0.7,
    reason="Accurate measurements help with renovation estimates",
)
PRACTICAL_CHEF_BARCODE = SuggestedRoute(
    agent_name="Practical Chef",
    icon="fork.knife",
    color="orange",
    confidence=0.8,
    reason="Barcode scans can look up nutrition and recipe data",
)
PRACTICAL_CHEF_PRODUCT = SuggestedRoute(
    agent_name="Practical Chef",
    icon="fork.knife",
    color="orange",
    confidence=0.9,
    reason="Product scans with photos enable full ingredient analysis",
)
HOME_AWARE = SuggestedRoute(
    agent_name="Home Aware",
    icon="sensor.tag.radiowaves.forward",
    color="indigo",
    confidence=0.9,
    reason="Beacon events enable room-based automations",
)

# Single photo, likely a portrait
SINGLE_PHOTO_ROUTES = (
    SuggestedRoute(
        agent_name="Color Analyst",
        icon="paintpalette.fill",
        color="pink",
        confidence=0.6,
        reason="Portrait photos can be analyzed for personalized color palettes",
    ),
    SuggestedRoute(
        agent_name="Smart Stylist",
        icon="tshirt",
        color="cyan",
        confidence=0.5,
        reason="Single photos work for quick outfit feedback",
    ),
)

# Photo sets: wardrobe, store shelves, flowers
MULTI_PHOTO_ROUTES = (
    SuggestedRoute(
        agent_name="Smart Stylist",
        icon="tshirt",
        color="cyan",
        confidence=0.6,
        reason="Multiple photos of clothing or spaces help plan outfits",
    ),
    SuggestedRoute(
        agent_name="Florist",
        icon="leaf.fill",
        color="green",
        confidence=0.5,
        reason="Photos of flowers can be analyzed for arrangement suggestions",
    ),
    SuggestedRoute(
        agent_name="Store Ops",
        icon="building.2",
        color="green",
        confidence=0.4,
        reason="Multi-photo sets work for compliance checklists",
    ),
)

SENSOR_ROUTES: Dict[SensorType, Tuple[SuggestedRoute, ...]] = {
    SensorType.LIDAR: (INTERIOR_DESIGNER, CONTRACTOR_BOT),
    SensorType.BARCODE: (PRACTICAL_CHEF_BARCODE,),
    SensorType.PRODUCT_SCAN: (PRACTICAL_CHEF_PRODUCT,),
    SensorType.BEACON: (HOME_AWARE,),
    # Motion and health data stay on device
    SensorType.MOTION: (),
    SensorType.HEALTH: (),
}

SENSOR_TITLES: Dict[SensorType, str] = {
    SensorType.LIDAR: "Room scan captured!",
    SensorType.BARCODE: "Barcode scanned!",
    SensorType.PRODUCT_SCAN: "Product scanned!",
    SensorType.BEACON: "Beacon event captured!",
    SensorType.MOTION: "Motion data captured!",
    SensorType.HEALTH: "Health data captured!",
}


class RoutingDecisionEngine:
    """
    Suggests where a capture should go.

    Algorithm:
    1. Look up the candidate routes for the sensor type (camera routes
       depend on the photo count)
    2. Rank candidates whose agent is registered ahead of the rest
    3. Within each group, order by confidence (highest first), then by rule order

    Unregistered candidates are kept so the presentation layer can fall back
    to saving locally when they are chosen. An empty result means there is
    nothing to ask: the capture is saved locally.
    """

    def suggest(
        self,
        routing: CaptureRouting,
        available_agents: Sequence[AgentConnection] = (),
    ) -> List[SuggestedRoute]:
        """
        Suggest destinations for a capture.

        Args:
            routing: Capture summary
            available_agents: Agents currently registered

        Returns:
            Ranked suggestions, possibly empty
        """
        candidates = self._candidates(routing)
        if not candidates:
            return []

        registered = {agent.name for agent in available_agents}
        ranked = sorted(
            enumerate(candidates),
            key=lambda item: (
                item[1].agent_name not in registered,
                -item[1].confidence,
                item[0],
            ),
        )
        return [route for _, route in ranked]

    def title(self, routing: CaptureRouting) -> str:
        """Headline shown after a capture"""
        if routing.sensor_type is SensorType.CAMERA:
            if routing.photo_count == 1:
                return "Photo captured!"
            return f"{routing.photo_count} photos captured!"
        return SENSOR_TITLES[routing.sensor_type]

    def explain(self, routing: CaptureRouting, available_agents: Sequence[AgentConnection] = ()) -> str:
        """
        Human-readable explanation of the suggestions, for logs and debugging.
        """
        suggestions = self.suggest(routing, available_agents)
        if not suggestions:
            return f"{self.title(routing)} No destinations suggested (save locally)"

        registered = {agent.name for agent in available_agents}
        lines = [f"{self.title(routing)} {len(suggestions)} destination(s) suggested:"]
        for route in suggestions:
            marker = "" if route.agent_name in registered else " [not registered]"
            lines.append(f"  - {route.agent_name} ({route.confidence:.2f}){marker}: {route.reason}")
        return "\n".join(lines)

    def _candidates(self, routing: CaptureRouting) -> Tuple[SuggestedRoute, ...]:
        if routing.sensor_type is SensorType.CAMERA:
            if routing.photo_count == 1:
                return SINGLE_PHOTO_ROUTES
            return MULTI_PHOTO_ROUTES
        return SENSOR_ROUTES.get(routing.sensor_type, ())

"""
Routing Presentation

Turns the engine's suggestions into one terminal RoutingDecision.

Workflow:
1. present() ranks suggestions for a capture (one presentation at a time)
2. The caller shows title, prompt and suggestions in engine order
3. choose() or save_locally() resolves the presentation exactly once
4. The decision goes to on_decision; the caller owns what happens next
"""

import logging
from typing import Callable, List, Optional, Sequence

from ..common.errors import RoutingError
from ..common.schemas.capture import CaptureRouting
from ..common.schemas.routing import (
    AgentConnection,
    RouteToAgent,
    RoutingDecision,
    SaveLocally,
    SuggestedRoute,
    describe_decision,
)
from .engine import RoutingDecisionEngine

logger = logging.getLogger("robo.routing.presentation")

ROUTE_PROMPT = "Where should this data go?"
SAVED_PROMPT = "Data saved to My Data."


class RoutingPresentation:
    """
    One routing question shown to the user.

    Resolves to exactly one RoutingDecision. Once resolved, further choose()
    or save_locally() calls return that same decision and emit nothing.
    """

    def __init__(
        self,
        routing: CaptureRouting,
        title: str,
        suggestions: List[SuggestedRoute],
        agents: Sequence[AgentConnection],
        on_resolved: Callable[["RoutingPresentation", RoutingDecision], None],
    ):
        self.routing = routing
        self.title = title
        self._suggestions = list(suggestions)
        self._agents = list(agents)
        self._on_resolved = on_resolved
        self._decision: Optional[RoutingDecision] = None

    @property
    def suggestions(self) -> List[SuggestedRoute]:
        return list(self._suggestions)

    @property
    def has_suggestions(self) -> bool:
        return bool(self._suggestions)

    @property
    def prompt(self) -> str:
        return ROUTE_PROMPT if self._suggestions else SAVED_PROMPT

    @property
    def decision(self) -> Optional[RoutingDecision]:
        return self._decision

    @property
    def is_resolved(self) -> bool:
        return self._decision is not None

    def choose(self, suggestion: SuggestedRoute) -> RoutingDecision:
        """
        Resolve with the user's chosen suggestion.

        The suggestion is matched to a registered agent by exact name. With
        no match (agent renamed or removed) the capture is saved locally.

        Raises:
            RoutingError: If there were no suggestions to choose from, or the
                suggestion was not offered by this presentation
        """
        if self._decision is not None:
            logger.warning("Routing already resolved (%s), ignoring choice", describe_decision(self._decision))
            return self._decision

        if not self._suggestions:
            raise RoutingError("No suggestions were offered; only saving locally is possible")

        if suggestion not in self._suggestions:
            raise RoutingError(f"'{suggestion.agent_name}' was not offered by this presentation")

        agent = self._find_agent(suggestion.agent_name)
        if agent is None:
            logger.warning("No registered agent named '%s', saving locally", suggestion.agent_name)
            return self._resolve(SaveLocally())

        return self._resolve(RouteToAgent(agent_id=agent.id))

    def save_locally(self) -> RoutingDecision:
        """Resolve by keeping the capture on device."""
        if self._decision is not None:
            logger.warning("Routing already resolved (%s), ignoring save", describe_decision(self._decision))
            return self._decision
        return self._resolve(SaveLocally())

    def _find_agent(self, name: str) -> Optional[AgentConnection]:
        for agent in self._agents:
            if agent.name == name:
                return agent
        return None

    def _resolve(self, decision: RoutingDecision) -> RoutingDecision:
        self._decision = decision
        self._on_resolved(self, decision)
        return decision


class RoutingPresentationCoordinator:
    """
    Runs routing presentations one at a time.

    Usage:
        coordinator = RoutingPresentationCoordinator(on_decision=forward)
        presentation = coordinator.present(routing, agents)
        presentation.choose(presentation.suggestions[0])
        # or, when the sheet is closed without a choice:
        coordinator.dismiss()
    """

    def __init__(
        self,
        on_decision: Callable[[CaptureRouting, RoutingDecision], None],
        engine: Optional[RoutingDecisionEngine] = None,
    ):
        """
        Initialize coordinator.

        Args:
            on_decision: Receives each presentation's single decision
            engine: Suggestion engine (default: RoutingDecisionEngine())
        """
        self._on_decision = on_decision
        self._engine = engine or RoutingDecisionEngine()
        self._active: Optional[RoutingPresentation] = None

    @property
    def active(self) -> Optional[RoutingPresentation]:
        return self._active

    def present(
        self,
        routing: CaptureRouting,
        agents: Sequence[AgentConnection],
    ) -> RoutingPresentation:
        """
        Start a presentation for a completed capture.

        Args:
            routing: Capture summary
            agents: Registered agents to resolve choices against

        Returns:
            The new active presentation

        Raises:
            RoutingError: If another presentation is still unresolved
        """
        if self._active is not None and not self._active.is_resolved:
            raise RoutingError("A routing presentation is already active")

        suggestions = self._engine.suggest(routing, agents)
        presentation = RoutingPresentation(
            routing=routing,
            title=self._engine.title(routing),
            suggestions=suggestions,
            agents=agents,
            on_resolved=self._handle_resolved,
        )
        self._active = presentation
        logger.debug("Presenting %d suggestion(s) for %s", len(suggestions), routing.sensor_type.value)
        return presentation

    def dismiss(self) -> Optional[RoutingDecision]:
        """
        Close the active presentation without a choice.

        An unresolved presentation resolves to SaveLocally so the next
        present() is not blocked.

        Returns:
            The dismissed presentation's decision, or None if nothing was active
        """
        if self._active is None:
            return None
        return self._active.save_locally()

    def _handle_resolved(self, presentation: RoutingPresentation, decision: RoutingDecision) -> None:
        if presentation is self._active:
            self._active = None
        logger.info("Routing decision for %s: %s", presentation.routing.sensor_type.value, describe_decision(decision))
        self._on_decision(presentation.routing, decision)

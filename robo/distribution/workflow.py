"""
Link Distribution Workflow

Validates and submits a HIT creation request, then interprets the response.

Validation happens before any network call and shows up as a disabled
submit action (can_submit is False), not as an exception. One request may be
outstanding per workflow; failures become a user-facing message and are not
retried.
"""

import logging
from typing import List, Optional, Tuple

from ..common.errors import HitServiceError
from ..common.schemas.distribution import (
    MAX_DESCRIPTION_LENGTH,
    MAX_PARTICIPANT_NAME_LENGTH,
    MAX_PARTICIPANTS,
    DistributionMode,
    HitCreationRequest,
    HitCreationResult,
    parse_participants,
    requires_participants,
)
from .client import HitClient

logger = logging.getLogger("robo.distribution.workflow")

NO_LINK_MESSAGE = "The server did not return a link. Please try again."


class LinkDistributionWorkflow:
    """
    Creates shareable task links in one of three distribution modes.

    - individual: one link per participant
    - group: one link, participants pick their name
    - open: one link, anyone types their name

    Usage:
        workflow = LinkDistributionWorkflow(client, mode=DistributionMode.GROUP)
        workflow.description = "Pick a date for the ski trip"
        workflow.participant_names = "Alice, Bob, "
        if workflow.can_submit:
            link = await workflow.submit()
    """

    def __init__(
        self,
        client: HitClient,
        mode: DistributionMode = DistributionMode.INDIVIDUAL,
        description: str = "",
        participant_names: str = "",
    ):
        self._client = client
        self.mode = mode
        self.description = description
        self.participant_names = participant_names

        self._busy = False
        self.result: Optional[HitCreationResult] = None
        self.error_message: Optional[str] = None

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def participants(self) -> List[str]:
        """Participant names parsed from the comma-separated input"""
        return parse_participants(self.participant_names)

    @property
    def trimmed_description(self) -> str:
        return (self.description or "").strip()

    @property
    def validation_issue(self) -> Optional[str]:
        """Why the request cannot be submitted, or None if it can"""
        description = self.trimmed_description
        if not description:
            return "Enter a task description."
        if len(description) > MAX_DESCRIPTION_LENGTH:
            return f"Task description must be at most {MAX_DESCRIPTION_LENGTH} characters."

        if requires_participants(self.mode):
            participants = self.participants
            if not participants:
                return "Add at least one participant."
            if len(participants) > MAX_PARTICIPANTS:
                return f"At most {MAX_PARTICIPANTS} participants are allowed."
            if any(len(name) > MAX_PARTICIPANT_NAME_LENGTH for name in participants):
                return f"Participant names must be at most {MAX_PARTICIPANT_NAME_LENGTH} characters."

        return None

    @property
    def is_valid(self) -> bool:
        return self.validation_issue is None

    @property
    def can_submit(self) -> bool:
        return self.is_valid and not self._busy

    @property
    def resolved_link(self) -> Optional[str]:
        return self.result.resolved_link if self.result else None

    @property
    def links(self) -> List[Tuple[str, str]]:
        return self.result.links if self.result else []

    def build_request(self) -> HitCreationRequest:
        """Build the outbound request from the current input."""
        return HitCreationRequest(
            mode=self.mode,
            description=self.trimmed_description,
            participants=self.participants if requires_participants(self.mode) else None,
        )

    async def submit(self) -> Optional[str]:
        """
        Submit the request if the input is valid and nothing is in flight.

        Returns:
            The resolved link, or None if nothing was submitted, the call
            failed, or the response carried no link
        """
        if self._busy:
            logger.debug("Submit ignored: request already in flight")
            return None

        issue = self.validation_issue
        if issue is not None:
            logger.debug("Submit ignored: %s", issue)
            return None

        request = self.build_request()
        self._busy = True
        self.error_message = None
        self.result = None

        try:
            self.result = await self._client.create_hit(request)
        except HitServiceError as e:
            self.error_message = f"Failed to create link: {e.description}"
            return None
        finally:
            self._busy = False

        link = self.result.resolved_link
        if link is None:
            logger.warning("HIT created but response carried no link")
            self.error_message = NO_LINK_MESSAGE
        return link

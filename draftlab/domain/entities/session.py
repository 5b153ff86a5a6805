"""Draft session read model exposed to the presentation layer."""

from dataclasses import dataclass, field
from typing import List, Optional

from drafting.models import Alert, AnalyticsResult, DraftState, DraftStatus
from drafting.sequencer import DraftTurn

from ..value_objects.types import SessionId


@dataclass(frozen=True)
class TeamInsights:
    """Latest analytics and alerts for one side's picks."""

    analytics: AnalyticsResult
    alerts: List[Alert] = field(default_factory=list)


@dataclass(frozen=True)
class DraftSessionView:
    """Snapshot of a session, rebuilt as a whole after every mutation."""

    session_id: SessionId
    state: DraftState
    status: DraftStatus
    current_turn: Optional[DraftTurn]
    total_turns: int
    history_depth: int
    blue: TeamInsights
    red: TeamInsights

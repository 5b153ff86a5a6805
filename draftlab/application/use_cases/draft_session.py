"""Use cases for driving a draft session."""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from drafting.alerts import detect_alerts
from drafting.analytics import score
from drafting.availability import available_entities, filter_entities
from drafting.catalog import index_catalog
from drafting.errors import DraftError, Rejection, rejection_message
from drafting.knowledge import SYNERGY_RULES, SynergyRule
from drafting.models import ActionKind, DraftMode, Entity, Position, Side, roster
from drafting.persistence import from_saved, to_saved
from drafting.report import build_report, state_to_dict
from drafting.sequencer import parse_mode
from drafting.state_machine import DraftMachine, DraftResult

from ..ports.catalog_service import CatalogPort
from ...domain.entities.session import DraftSessionView, TeamInsights
from ...domain.value_objects.types import SessionId

logger = logging.getLogger(__name__)


@dataclass
class DraftCommandResult:
    """Result of a draft command."""

    success: bool
    view: DraftSessionView
    rejection: Rejection | None = None
    error: str | None = None
    details: Dict[str, Any] = field(default_factory=dict)


class DraftSessionUseCase:
    """One live draft plus the insights derived from it.

    Mutations are serialized through an asyncio lock; the view is rebuilt
    after each accepted mutation and swapped in whole.
    """

    def __init__(
        self,
        session_id: SessionId,
        entities: List[Entity],
        mode: DraftMode | str = DraftMode.COMPETITIVE,
        synergy_rules: Iterable[SynergyRule] = SYNERGY_RULES,
    ):
        self._session_id = session_id
        self._entities = list(entities)
        self._catalog = index_catalog(self._entities)
        self._synergy_rules: Tuple[SynergyRule, ...] = tuple(synergy_rules)
        self._machine = DraftMachine(mode)
        self._lock = asyncio.Lock()
        self._view = self._build_view()

    @property
    def session_id(self) -> SessionId:
        return self._session_id

    @property
    def view(self) -> DraftSessionView:
        return self._view

    def _insights(self, side: Side) -> TeamInsights:
        members = roster(self._machine.state, side)
        return TeamInsights(
            analytics=score(members),
            alerts=detect_alerts(members, self._synergy_rules),
        )

    def _build_view(self) -> DraftSessionView:
        machine = self._machine
        return DraftSessionView(
            session_id=self._session_id,
            state=machine.state,
            status=machine.status,
            current_turn=machine.current_turn,
            total_turns=len(machine.sequence),
            history_depth=machine.history_depth,
            blue=self._insights(Side.BLUE),
            red=self._insights(Side.RED),
        )

    def _rejected(
        self,
        action: str,
        rejection: Rejection,
        message: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> DraftCommandResult:
        logger.info(f"[{self._session_id}] {action} rejected: {rejection.value}")
        return DraftCommandResult(
            success=False,
            view=self._view,
            rejection=rejection,
            error=message or rejection_message(rejection),
            details=details or {},
        )

    async def _execute(self, action: str, operation: Callable[[], DraftResult]) -> DraftCommandResult:
        async with self._lock:
            result = operation()
            if not result.ok:
                return self._rejected(action, result.rejection)
            self._view = self._build_view()
            logger.debug(f"[{self._session_id}] {action} -> turn {self._view.state.turn_index}")
            return DraftCommandResult(success=True, view=self._view)

    def _lookup(self, entity_id: str) -> Entity | None:
        return self._catalog.get(entity_id)

    def catalog(self) -> List[Entity]:
        return list(self._entities)

    def available(
        self,
        position: Optional[Position] = None,
        query: Optional[str] = None,
    ) -> List[Entity]:
        return filter_entities(available_entities(self._entities, self._view.state), position, query)

    async def select(self, entity_id: str) -> DraftCommandResult:
        entity = self._lookup(entity_id)
        if entity is None:
            return self._rejected("select", Rejection.UNKNOWN_ENTITY, details={"entityId": entity_id})
        return await self._execute("select", lambda: self._machine.apply_selection(entity))

    async def undo(self) -> DraftCommandResult:
        return await self._execute("undo", self._machine.undo)

    async def set_direct(
        self,
        side: Side,
        kind: ActionKind,
        index: int,
        entity_id: str | None,
    ) -> DraftCommandResult:
        entity = None
        if entity_id is not None:
            entity = self._lookup(entity_id)
            if entity is None:
                return self._rejected("direct", Rejection.UNKNOWN_ENTITY, details={"entityId": entity_id})
        return await self._execute("direct", lambda: self._machine.set_direct(side, kind, index, entity))

    async def swap(self, side: Side, first: int, second: int) -> DraftCommandResult:
        return await self._execute("swap", lambda: self._machine.swap_picks(side, first, second))

    async def reset(self, mode: DraftMode | str | None = None) -> DraftCommandResult:
        return await self._execute("reset", lambda: self._machine.reset(mode))

    async def import_saved(self, data: Dict[str, Any]) -> DraftCommandResult:
        try:
            state = from_saved(data, self._catalog)
        except DraftError as e:
            return self._rejected("import", e.rejection, str(e), e.details)
        return await self._execute("import", lambda: self._machine.load(state))

    def export_saved(self) -> Dict[str, Any]:
        return to_saved(self._view.state)

    def report(self) -> Dict[str, Any]:
        return build_report(self._view.state, self._synergy_rules)

    def snapshot(self) -> Dict[str, Any]:
        """Full draft snapshot handed to the analysis service."""
        return state_to_dict(self._view.state)


class DraftSessionRegistry:
    """In-memory store of live draft sessions."""

    def __init__(
        self,
        catalog: CatalogPort,
        default_mode: DraftMode | str = DraftMode.COMPETITIVE,
        synergy_rules: Iterable[SynergyRule] = SYNERGY_RULES,
    ):
        self._catalog = catalog
        self._default_mode = parse_mode(default_mode)
        self._synergy_rules = tuple(synergy_rules)
        self._entities: List[Entity] | None = None
        self._sessions: Dict[str, DraftSessionUseCase] = {}

    def entities(self) -> List[Entity]:
        if self._entities is None:
            self._entities = self._catalog.load_entities()
            logger.info(f"Loaded {len(self._entities)} champions")
        return self._entities

    def create(self, mode: DraftMode | str | None = None) -> DraftSessionUseCase:
        """Open a new session. Unknown modes raise ``UnknownModeError``."""
        draft_mode = self._default_mode if mode is None else parse_mode(mode)
        session_id = SessionId(uuid.uuid4().hex)
        session = DraftSessionUseCase(session_id, self.entities(), draft_mode, self._synergy_rules)
        self._sessions[session_id] = session
        logger.info(f"Created draft session {session_id} ({draft_mode.value})")
        return session

    def get(self, session_id: str) -> DraftSessionUseCase | None:
        return self._sessions.get(session_id)

    def remove(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

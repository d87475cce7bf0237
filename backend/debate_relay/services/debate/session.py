"""
Session Controller — Whose turn is it, and what state is the debate in.

WHAT THIS DOES:
Owns one debate session: the two assigned backends (side A and side B),
the transcript, and a small state machine that keeps turns serialized.

TURN PARITY:
The next speaker is derived from the transcript length, never stored:
    even length → side A
    odd length  → side B
A human message is appended like any other entry, so it consumes a turn
slot and flips parity. After A speaks and the user injects a message, the
transcript has length 2 and A speaks again.

STATE MACHINE:
    IDLE ──start()──▶ READY ──begin_turn()──▶ AWAITING_REPLY
      ▲                 ▲                          │
      │                 └── complete_turn() ───────┤  (entry appended)
      │                 └── fail_turn() ───────────┘  (nothing appended)
      └───────── reset() (from any state)

DISCARDED TURNS:
reset() bumps a generation counter. A reply that arrives for a ticket from an
older generation is dropped instead of being appended to the new session.

USAGE:
    session = SessionController("openai", "anthropic")
    session.start()
    await session.run_turn(orchestrator, topic="Cats or dogs?")   # side A
    session.inject("Please consider allergies.")                   # human
    await session.run_turn(orchestrator, topic="Cats or dogs?")   # side A again
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from debate_relay.errors import InvalidInputError, SessionStateError
from debate_relay.models.schemas import CanonicalReply, TranscriptEntry
from debate_relay.services.debate.orchestrator import TurnOrchestrator

logger = logging.getLogger(__name__)

HUMAN_SPEAKER = "User"


class SessionState(str, Enum):
    IDLE = "idle"
    READY = "ready"
    AWAITING_REPLY = "awaiting_reply"


@dataclass(frozen=True)
class TurnTicket:
    """Handle for one dispatched turn."""

    backend_identity: str
    """Backend that was asked to speak"""

    turn_index: int
    """Transcript length at dispatch time (0-based index of the new entry)"""

    generation: int
    """Session generation at dispatch; a reset makes the ticket stale"""


class SessionController:
    """
    One debate session between two backends.

    Not thread-safe and not meant to be shared: each session belongs to a
    single caller, which serializes its turns.
    """

    def __init__(self, side_a: str, side_b: str):
        """
        Args:
            side_a: Backend key that speaks on even turns (including the first)
            side_b: Backend key that speaks on odd turns (may equal side_a)
        """
        self.side_a = side_a
        self.side_b = side_b
        self.transcript: list[TranscriptEntry] = []
        self.state = SessionState.IDLE
        self._generation = 0

    # =========================================================================
    # TURN PARITY
    # =========================================================================

    def next_speaker(self, transcript: Optional[Sequence[TranscriptEntry]] = None) -> str:
        """Side A when the transcript length is even, side B when odd."""
        entries = self.transcript if transcript is None else transcript
        return self.side_a if len(entries) % 2 == 0 else self.side_b

    # =========================================================================
    # STATE TRANSITIONS
    # =========================================================================

    def start(self) -> None:
        """IDLE → READY."""
        self._require(SessionState.IDLE, "start")
        self.state = SessionState.READY
        logger.info(f"Session started: A={self.side_a}, B={self.side_b}")

    def begin_turn(self) -> TurnTicket:
        """READY → AWAITING_REPLY. Returns the ticket for the dispatched turn."""
        self._require(SessionState.READY, "begin a turn")
        ticket = TurnTicket(
            backend_identity=self.next_speaker(),
            turn_index=len(self.transcript),
            generation=self._generation,
        )
        self.state = SessionState.AWAITING_REPLY
        return ticket

    def complete_turn(self, ticket: TurnTicket, reply: TranscriptEntry) -> bool:
        """
        AWAITING_REPLY → READY, appending the reply.

        Returns False (and changes nothing) when the ticket belongs to a
        session generation that has since been reset.
        """
        if self._is_stale(ticket):
            logger.info(f"Dropping reply for discarded turn {ticket.turn_index}")
            return False
        self._require(SessionState.AWAITING_REPLY, "complete a turn")

        self.transcript.append(TranscriptEntry(speaker=reply.speaker, text=reply.text))
        self.state = SessionState.READY
        return True

    def fail_turn(self, ticket: TurnTicket) -> None:
        """AWAITING_REPLY → READY without touching the transcript."""
        if self._is_stale(ticket):
            return
        self._require(SessionState.AWAITING_REPLY, "fail a turn")
        self.state = SessionState.READY

    def inject(self, text: Optional[str], speaker: str = HUMAN_SPEAKER) -> TranscriptEntry:
        """
        Append a human message. It takes a turn slot like any other entry.

        Raises:
            InvalidInputError: text is missing or blank
            SessionStateError: session is not READY
        """
        message = (text or "").strip()
        if not message:
            raise InvalidInputError("Please enter a custom prompt.")
        self._require(SessionState.READY, "inject a message")

        entry = TranscriptEntry(speaker=speaker, text=message)
        self.transcript.append(entry)
        return entry

    def reset(self) -> None:
        """Any state → IDLE. Clears the transcript; next start begins with side A."""
        self.transcript = []
        self._generation += 1
        self.state = SessionState.IDLE

    # =========================================================================
    # CONVENIENCE
    # =========================================================================

    def last_text(self) -> str:
        """Text of the latest entry, or "" for an empty transcript."""
        return self.transcript[-1].text if self.transcript else ""

    async def run_turn(
        self,
        orchestrator: TurnOrchestrator,
        topic: Optional[str],
        extra_instructions: Optional[str] = None,
    ) -> Optional[CanonicalReply]:
        """
        Dispatch the next turn and apply its result.

        Returns the applied reply, or None when the session was reset while
        the call was in flight and the reply was discarded.

        On failure the session returns to READY with the transcript unchanged
        and the error propagates, so the same side can be retried.
        """
        ticket = self.begin_turn()
        try:
            reply = await orchestrator.take_turn(
                topic,
                list(self.transcript),
                ticket.backend_identity,
                extra_instructions=extra_instructions,
            )
        except Exception:
            self.fail_turn(ticket)
            raise
        except asyncio.CancelledError:
            self.fail_turn(ticket)
            raise

        if not self.complete_turn(ticket, reply):
            return None
        return reply

    def _is_stale(self, ticket: TurnTicket) -> bool:
        return ticket.generation != self._generation

    def _require(self, expected: SessionState, action: str) -> None:
        if self.state != expected:
            raise SessionStateError(
                f"Cannot {action} while session is {self.state.value}"
            )

"""
Debate Module — Two backends taking turns over a shared transcript.

COMPONENTS:
- TurnOrchestrator: one prompt → one backend call → one CanonicalReply
- SessionController: turn parity, human injection, turn state machine

USAGE:
    from debate_relay.services.debate import SessionController, TurnOrchestrator

    orchestrator = TurnOrchestrator(registry, settings)
    session = SessionController("openai", "gemini")
    session.start()
    reply = await session.run_turn(orchestrator, topic="Tabs or spaces?")
"""

from debate_relay.services.debate.orchestrator import TurnOrchestrator
from debate_relay.services.debate.session import (
    HUMAN_SPEAKER,
    SessionController,
    SessionState,
    TurnTicket,
)

__all__ = [
    "TurnOrchestrator",
    "SessionController",
    "SessionState",
    "TurnTicket",
    "HUMAN_SPEAKER",
]

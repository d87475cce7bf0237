"""
Terminal debate client.

Drives a SessionController against the real backends, the same way the
web client drives /api/step: the first turn fires on start, then each
Enter advances one turn.

USAGE:
    python -m debate_relay.cli --a openai --b gemini --topic "Is math invented?"
    python -m debate_relay.cli --list
    python -m debate_relay.cli --a anthropic --b anthropic --topic "..." --turns 4

COMMANDS (interactive):
    <Enter>        next backend turn
    /say <text>    add your own message, then the next backend answers it
    /last          print the latest message again
    /reset         clear the transcript and start over with side A
    /quit          exit
"""

import argparse
import asyncio
import sys

import httpx

from debate_relay.config import Settings, get_settings
from debate_relay.errors import DebateRelayError
from debate_relay.main import configure_logging
from debate_relay.services.debate import SessionController, TurnOrchestrator
from debate_relay.services.providers.registry import build_default_registry


HELP_TEXT = "Enter = next turn | /say <text> | /last | /reset | /quit"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="debate-relay",
        description="Let two text-generation backends debate a topic.",
    )
    parser.add_argument("--a", dest="side_a", default="openai", help="Backend for side A (speaks first)")
    parser.add_argument("--b", dest="side_b", default="anthropic", help="Backend for side B")
    parser.add_argument("--topic", default="", help="Debate topic. Asked interactively when omitted")
    parser.add_argument("--extra", default="", help="Additional instructions sent with every turn")
    parser.add_argument("--turns", type=int, default=0, help="Run N turns without prompting, then exit")
    parser.add_argument("--list", action="store_true", help="List available backends and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log requests")
    return parser


def _print_entry(speaker: str, text: str) -> None:
    print(f"\n[{speaker}]\n{text or '(empty reply)'}\n")


async def _advance(
    session: SessionController,
    orchestrator: TurnOrchestrator,
    topic: str,
    extra: str,
) -> bool:
    """Run one backend turn; print the reply or the error. True on success."""
    speaker = session.next_speaker()
    print(f"... {orchestrator.label_for(speaker)} is thinking")
    try:
        reply = await session.run_turn(orchestrator, topic, extra_instructions=extra)
    except DebateRelayError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return False
    if reply is None:
        print("(reply discarded: the debate was restarted)")
        return False
    _print_entry(reply.speaker, reply.text)
    return True


async def _interactive(
    session: SessionController,
    orchestrator: TurnOrchestrator,
    topic: str,
    extra: str,
) -> None:
    print(HELP_TEXT)
    while True:
        try:
            line = input("> ").strip()
        except EOFError:
            return

        if line in ("/quit", "/exit"):
            return
        if not line:
            await _advance(session, orchestrator, topic, extra)
        elif line.startswith("/say"):
            try:
                entry = session.inject(line[len("/say"):])
            except DebateRelayError as e:
                print(f"Error: {e.message}", file=sys.stderr)
                continue
            _print_entry(entry.speaker, entry.text)
            await _advance(session, orchestrator, topic, extra)
        elif line == "/last":
            print(session.last_text() or "(no messages yet)")
        elif line == "/reset":
            session.reset()
            session.start()
            await _advance(session, orchestrator, topic, extra)
        else:
            print(HELP_TEXT)


async def _debate(
    args: argparse.Namespace,
    settings: Settings,
    http_client: httpx.AsyncClient,
) -> int:
    """Run the client over an open HTTP client; returns the exit code."""
    registry = build_default_registry(http_client, settings)

    if args.list:
        for provider in registry.list_providers():
            print(f"{provider.key:<10} {provider.label}")
        return 0

    try:
        registry.get(args.side_a)
        registry.get(args.side_b)
    except DebateRelayError as e:
        print(f"Error: {e.message} (choose from: {', '.join(registry.keys())})", file=sys.stderr)
        return 2

    try:
        topic = args.topic.strip() or input("Debate topic?\n> ").strip()
    except EOFError:
        topic = ""
    if not topic:
        print("Error: a topic is required.", file=sys.stderr)
        return 2

    orchestrator = TurnOrchestrator(registry, settings)
    session = SessionController(args.side_a, args.side_b)
    session.start()

    ok = await _advance(session, orchestrator, topic, args.extra)

    if args.turns:
        for _ in range(args.turns - 1):
            if not ok:
                return 1
            ok = await _advance(session, orchestrator, topic, args.extra)
        return 0 if ok else 1

    await _interactive(session, orchestrator, topic, args.extra)
    return 0


async def _run(args: argparse.Namespace, settings: Settings) -> int:
    async with httpx.AsyncClient(timeout=settings.request_timeout_seconds) as http_client:
        return await _debate(args, settings, http_client)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging("DEBUG" if args.verbose else "WARNING")

    try:
        return asyncio.run(_run(args, settings))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())

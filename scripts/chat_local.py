#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP, no WhatsApp).

Usage:
  python3 scripts/chat_local.py

What it does:
- Keeps a stable sender id for the session (it doubles as the contact phone)
- Sends your typed messages through the same HandleIncomingMessageUseCase
- Prints the booking step after each message and the reply text

Business-hours auto-replies follow AFTER_HOURS_AUTO_REPLY; set it to false
in .env to try the booking dialogue at night.
"""

from __future__ import annotations

import asyncio
import os
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from studio_bot.domain.entities.message import Message  # noqa: E402


def _print_header(sender_id: str) -> None:
    print("\nLocal Chat Harness")
    print("-" * 60)
    print(f"sender_id: {sender_id}")
    print("Type your message and press Enter.")
    print("Commands: /new (new sender), /history, /events, /quit, /help")
    print("-" * 60)


def _build_container() -> dict[str, object]:
    try:
        from studio_bot.wiring.dependencies import get_calendar, get_container

        container = get_container()
        container["calendar"] = get_calendar()
        return container
    except Exception as e:
        raise RuntimeError(
            "Could not construct HandleIncomingMessageUseCase via wiring.\n"
            f"Original error: {e}"
        ) from e


async def main() -> None:
    sender_id = os.getenv("CHAT_SENDER_ID", "50370000000")
    container = _build_container()
    use_case = container["use_case"]
    store = container["store"]
    drafts = container["drafts"]
    calendar = container["calendar"]
    _print_header(sender_id)

    while True:
        try:
            user_text = (await asyncio.to_thread(input, "\n> ")).strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue

        cmd = user_text.lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print("Commands:")
            print("  /new     -> start a new sender id (fresh dialogue)")
            print("  /history -> show last 10 transcript entries")
            print("  /events  -> list events held by the mock calendar")
            print("  /quit    -> exit")
            continue
        if cmd == "/new":
            sender_id = f"5037{int(time.time()) % 10_000_000:07d}"
            print(f"New sender_id: {sender_id}")
            continue
        if cmd == "/history":
            print("\n--- History (last 10) ---")
            for item in store.get_history(sender_id)[-10:]:
                print(f"{item.get('role')}: {item.get('text') or item.get('content', '')}")
            continue
        if cmd == "/events":
            events = getattr(calendar, "events", None)
            if events is None:
                print("(calendar is not the mock calendar)")
                continue
            for event in events:
                print(f"- {event.start} {event.summary}")
            continue

        message = Message(
            id=f"local_{int(time.time() * 1000)}",
            thread_id=sender_id,
            sender_id=sender_id,
            text=user_text,
            timestamp=int(time.time()),
            platform="local",
        )

        reply = await use_case.handle(message)
        draft = drafts.get(sender_id)

        print("\n--- Decision ---")
        print(f"booking step: {draft.step.value if draft else '(none)'}")
        print("\n--- Reply ---")
        print(reply.strip() if reply else "(no reply)")
        print("-" * 60)


if __name__ == "__main__":
    asyncio.run(main())

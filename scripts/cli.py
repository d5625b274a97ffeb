"""CLI entry point for the chat session client."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from chat import ChatApiClient, EntryKind, SessionController, TranscriptEntry
from chat.config import ChatConfig, load_chat_config
from backend.gateway import TransportGateway

HELP_TEXT = "Commands: /new to create a session, /end to end it, /clear to clear the chat, /quit to stop."

LABELS = {
    EntryKind.USER: "You",
    EntryKind.ASSISTANT: "Assistant",
    EntryKind.SYSTEM: "System",
}


def render_entry(entry: TranscriptEntry) -> str:
    timestamp = entry.created_at.astimezone().strftime("%H:%M:%S")
    return f"[{timestamp}] {LABELS[entry.kind]}: {entry.content}"


def build_controller(config: Optional[ChatConfig] = None) -> SessionController:
    config = config or load_chat_config()
    if config.api_url:
        sender = ChatApiClient(config.api_url)
    else:
        sender = TransportGateway(config.endpoint_url)
    return SessionController(sender, be_limit=config.be_limit, end_session_text=config.end_session_text)


def _print_entry(entry: Optional[TranscriptEntry]) -> None:
    if entry is None:
        print("(chat cleared)")
    elif entry.kind is not EntryKind.USER:
        print(render_entry(entry))


async def handle_command(controller: SessionController, user_text: str) -> bool:
    """Apply one line of input. Returns False when the user asked to quit."""

    command = user_text.lower()
    if command in {"/quit", "exit", "quit"}:
        return False

    if command == "/new":
        if not controller.can_create:
            print("[A session is already active. Use /end first.]")
            return True
        session_id = controller.create_session()
        print(f"Active session: {session_id}")
    elif command == "/end":
        if not controller.can_end:
            print("[No active session.]")
            return True
        print("Ending session...")
        await controller.end_session()
    elif command == "/clear":
        controller.clear_transcript()
    elif command == "/help":
        print(HELP_TEXT)
    else:
        if controller.session_id is None:
            print("[Create a session first to start chatting (/new).]")
            return True
        controller.set_input(user_text)
        print("Typing...")
        await controller.send_message()
    return True


async def run(controller: SessionController) -> None:
    unsubscribe = controller.transcript.subscribe(_print_entry)
    print(f"Chat session manager is ready. {HELP_TEXT}")
    try:
        while True:
            try:
                user_text = input("You: ").strip()
            except (KeyboardInterrupt, EOFError):
                print("\nGoodbye!")
                break

            if not user_text:
                continue

            if not await handle_command(controller, user_text):
                print("Goodbye!")
                break

        if controller.can_end:
            await controller.end_session()
    finally:
        unsubscribe()


def main() -> None:
    config = load_chat_config()
    logging.basicConfig(level=config.log_level)
    asyncio.run(run(build_controller(config)))


if __name__ == "__main__":
    main()

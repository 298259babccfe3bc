from __future__ import annotations

import json
import re
import threading
from datetime import datetime
from pathlib import Path
from typing import Any

from studio_bot.application.ports.conversation_store import ConversationStorePort

DEFAULT_CONTACT_NAME = "Unnamed client"


class JsonConversationStore(ConversationStorePort):
    """
    Transcript log with one JSON file per sender, plus a small index of
    processed message ids used to drop duplicate webhook deliveries.
    """

    def __init__(self, data_dir: str = "./data/threads", history_limit: int = 200, processed_limit: int = 1000) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._history_limit = history_limit
        self._processed_limit = processed_limit
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # guards the locks dict
        self._processed_lock = threading.Lock()

    def _get_lock(self, thread_id: str) -> threading.Lock:
        with self._lock_lock:
            if thread_id not in self._locks:
                self._locks[thread_id] = threading.Lock()
            return self._locks[thread_id]

    def _get_file_path(self, thread_id: str) -> Path:
        safe_id = re.sub(r"[^A-Za-z0-9_.-]", "_", thread_id)
        return self._data_dir / f"{safe_id}.json"

    def _processed_path(self) -> Path:
        return self._data_dir / "_processed.json"

    def _load_thread_data(self, thread_id: str) -> dict[str, Any]:
        """Load thread data from JSON file, return default if missing or corrupted."""
        file_path = self._get_file_path(thread_id)
        default = {
            "thread_id": thread_id,
            "name": DEFAULT_CONTACT_NAME,
            "messages": [],
            "last_update": None,
            "version": 1,
        }
        if not file_path.exists():
            return default
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError):
            return default
        for key, value in default.items():
            data.setdefault(key, value)
        return data

    def _save_json(self, file_path: Path, data: Any) -> None:
        """Write atomically through a temp file."""
        temp_path = file_path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise

    def get_history(self, thread_id: str) -> list[dict[str, Any]]:
        with self._get_lock(thread_id):
            return self._load_thread_data(thread_id).get("messages", [])

    def append_message(self, thread_id: str, role: str, text: str, meta: dict[str, Any] | None = None) -> None:
        meta = dict(meta or {})
        now_ts = datetime.now().timestamp()
        with self._get_lock(thread_id):
            data = self._load_thread_data(thread_id)
            messages = data.get("messages", [])
            messages.append(
                {
                    "role": role,
                    "text": text,
                    "ts": now_ts,
                    "meta": meta,
                }
            )
            if len(messages) > self._history_limit:
                messages = messages[-self._history_limit :]

            if role == "user" and meta.get("sender_name"):
                data["name"] = str(meta["sender_name"])
            data["messages"] = messages
            data["last_update"] = now_ts
            self._save_json(self._get_file_path(thread_id), data)

    def has_processed(self, message_id: str) -> bool:
        with self._processed_lock:
            return message_id in self._load_processed()

    def mark_processed(self, message_id: str) -> None:
        with self._processed_lock:
            processed = self._load_processed()
            if message_id in processed:
                return
            processed.append(message_id)
            self._save_json(self._processed_path(), processed[-self._processed_limit :])

    def get_contact_name(self, thread_id: str) -> str | None:
        with self._get_lock(thread_id):
            if not self._get_file_path(thread_id).exists():
                return None
            name = self._load_thread_data(thread_id).get("name")
        return None if name == DEFAULT_CONTACT_NAME else name

    def _load_processed(self) -> list[str]:
        path = self._processed_path()
        if not path.exists():
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError):
            return []
        return [str(item) for item in data] if isinstance(data, list) else []

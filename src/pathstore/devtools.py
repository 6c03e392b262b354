"""Time-travel debugging bridge.

Connects a store to an external debugging session (a Redux DevTools style
extension). The extension is injected: pass devtools_extension= to a store,
or register one process-wide with set_devtools_extension(). Without an
extension or a session name, no bridge is attached and stores behave as if
this module did not exist.

Outbound, every mutation sends an action descriptor plus a state snapshot.
Inbound, the session can jump to a historical state or ask for a reset.
While a historical state is replayed the bridge is paused, so the replay
does not echo back as a new action.
"""

from __future__ import annotations

import copy
import json
import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Protocol

logger = logging.getLogger("pathstore.devtools")

FEATURES = {
    "jump": True,
    "skip": True,
    "reorder": True,
    "dispatch": True,
    "persist": True,
}


class DevToolsConnection(Protocol):
    def init(self, state: Any) -> None: ...

    def send(self, action: dict[str, Any], state: Any) -> None: ...

    def subscribe(self, listener: Callable[[dict[str, Any]], None]) -> Any: ...


class DevToolsExtension(Protocol):
    def connect(self, **options: Any) -> DevToolsConnection: ...


# ─── Process-wide extension hook ─────────────────────────────────────────────
_extension: DevToolsExtension | None = None


def set_devtools_extension(extension: DevToolsExtension | None) -> None:
    """Register the extension stores connect to when given a session name.

    Pass None to unregister. Stores created before the call are unaffected.
    """
    global _extension
    _extension = extension


def get_devtools_extension() -> DevToolsExtension | None:
    return _extension


class DevToolsBridge:
    """One store's session with a debugging extension."""

    __slots__ = ("_connection", "_serialize", "_apply_state", "_reset", "_paused")

    def __init__(
        self,
        connection: DevToolsConnection,
        *,
        serialize: Callable[[], Any],
        apply_state: Callable[[Any], bool],
        reset: Callable[[], None],
    ) -> None:
        self._connection = connection
        self._serialize = serialize
        self._apply_state = apply_state
        self._reset = reset
        self._paused = False

    @property
    def paused(self) -> bool:
        return self._paused

    @contextmanager
    def pause(self) -> Iterator[None]:
        """Suppress outbound actions for the duration of the block."""
        self._paused = True
        try:
            yield
        finally:
            self._paused = False

    def start(self) -> None:
        """Push the initial state and start listening for session messages."""
        self._connection.init(self._serialize())
        self._connection.subscribe(self.handle_message)

    def send(self, verb: str, path: str = "", value: Any = None) -> None:
        if self._paused:
            return
        action = {
            "type": f"{verb} {path}" if path else verb,
            "path": path,
            "value": copy.deepcopy(value),
        }
        self._connection.send(action, self._serialize())

    def handle_message(self, message: dict[str, Any]) -> None:
        kind = message.get("type")
        if kind == "DISPATCH":
            payload = message.get("payload")
            command = payload.get("type") if isinstance(payload, dict) else None
            if command in ("JUMP_TO_ACTION", "JUMP_TO_STATE"):
                self._jump(message.get("state"))
            elif command == "RESET":
                self._reset()
            else:
                logger.debug("Ignoring devtools dispatch %r", command)
        elif kind == "ACTION":
            try:
                action = json.loads(message.get("payload"))
            except (TypeError, ValueError):
                logger.exception("Failed to parse devtools action")
                return
            logger.debug("Ignoring custom devtools action %r", action)
        else:
            logger.debug("Ignoring devtools message %r", kind)

    def _jump(self, raw_state: Any) -> None:
        try:
            state = json.loads(raw_state)
        except (TypeError, ValueError):
            logger.exception("Failed to parse jump state")
            return
        with self.pause():
            if not self._apply_state(state):
                logger.error(
                    "Ignoring jump state of type %s: expected an object",
                    type(state).__name__,
                )


def connect_devtools(
    name: str | None,
    *,
    serialize: Callable[[], Any],
    apply_state: Callable[[Any], bool],
    reset: Callable[[], None],
    extension: DevToolsExtension | None = None,
    **options: Any,
) -> DevToolsBridge | None:
    """Attach a bridge if a session name is given and an extension exists.

    apply_state(state) replaces the store's live data and returns False if
    the state has the wrong shape. Extra options go to extension.connect().
    """
    if not name:
        return None
    extension = extension if extension is not None else _extension
    if extension is None:
        logger.debug("No devtools extension registered; %r not attached", name)
        return None
    connection = extension.connect(name=name, features=dict(FEATURES), **options)
    bridge = DevToolsBridge(
        connection, serialize=serialize, apply_state=apply_state, reset=reset
    )
    bridge.start()
    logger.info("Attached devtools session %r", name)
    return bridge

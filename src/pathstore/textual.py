"""Textual integration for pathstore. Opt-in — requires textual.

Binds a store subscription to a widget update. A binding pairs a subscribe
function with a snapshot getter, the same contract any UI layer needs:

    unsubscribe = bind_path(app, store, "user.name",
                            lambda name: app.query_one("#name", Label).update(name))

Guard, NoMatches and thread-marshal handling live here, not at call sites.
The pause set has a single owner (this module): an app's id is present
only while inside its pause() block.
"""

import threading
from contextlib import contextmanager
from functools import partial

from textual.css.query import NoMatches

# Paused apps, keyed by id(app) so several apps can coexist.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend bindings during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def bind(app, subscribe, get_snapshot, effect, *, fire_immediately=False):
    """Call effect(get_snapshot()) whenever subscribe's callback fires.

    Skips while the app is paused or not running, swallows NoMatches from
    widget queries, and marshals notifications from other threads through
    app.call_from_thread. Returns the unsubscribe function.
    """
    _main = threading.get_ident()

    def _guarded():
        if not is_safe(app):
            return
        if threading.get_ident() != _main:
            app.call_from_thread(_safe)
        else:
            _safe()

    def _safe():
        try:
            effect(get_snapshot())
        except NoMatches:
            pass

    unsubscribe = subscribe(_guarded)
    if fire_immediately:
        _guarded()
    return unsubscribe


def bind_path(app, store, path, effect, *, fire_immediately=False):
    """bind() to the value at path in a Store."""
    return bind(
        app,
        partial(store.subscribe, path),
        partial(store.get, path),
        effect,
        fire_immediately=fire_immediately,
    )

# addonkeeper/core/logging/context.py
from __future__ import annotations
import contextvars

# Per-task log context (operation, flavor, url, ...). Set around a unit of work, reset after.
_logContextVar: contextvars.ContextVar[dict[str, object] | None] = contextvars.ContextVar("addonkeeper.logctx", default=None)

def setLogContext(**kvs) -> contextvars.Token:
    """
    Set or update per-log context values. None values are ignored.
    Returns a token for resetLogContext() to restore the previous context.
    """
    current = dict(_logContextVar.get() or {}) # use copy
    for key, value in kvs.items():
        if value is not None:
            current[key] = value
    return _logContextVar.set(current)

def resetLogContext(token: contextvars.Token):
    """Restore the context that was active before the matching setLogContext()."""
    _logContextVar.reset(token)

def clearLogContext():
    _logContextVar.set(None)

def getLogContext():
    """Return current context dict or None."""
    return _logContextVar.get()

"""Render-pass logging context.

Every record logged while one agenda is derived carries a ``render_id``
built from the schedule it belongs to (``prof-<id>@<date>``), so a day's
fit-in rejections and plan summary can be grepped together.

``render()`` scopes the id itself. A caller that already set one, such as
the console demo, keeps it.
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

DEFAULT_RENDER_ID = "NO_RENDER_ID"

_render_id: ContextVar[str] = ContextVar("render_id", default=DEFAULT_RENDER_ID)


def render_id_for(professional_id: Optional[int], date: Optional[str]) -> str:
    """Identifier for one professional's day; missing parts read ``?``."""
    professional = professional_id if professional_id is not None else "?"
    return f"prof-{professional}@{date or '?'}"


def set_render_id(render_id: str) -> None:
    _render_id.set(render_id)


def get_render_id() -> str:
    return _render_id.get()


@contextmanager
def scoped_render_id(professional_id: Optional[int], date: Optional[str]) -> Iterator[str]:
    """Tag records with the schedule's id unless an outer scope already set one."""
    current = _render_id.get()
    if current != DEFAULT_RENDER_ID:
        yield current
        return
    token = _render_id.set(render_id_for(professional_id, date))
    try:
        yield _render_id.get()
    finally:
        _render_id.reset(token)


class RenderIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.render_id = _render_id.get()  # type: ignore[attr-defined]
        return True


def get_render_logger(name: str) -> logging.Logger:
    """Logger whose records expose ``%(render_id)s`` to formatters."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, RenderIdFilter) for f in logger.filters):
        logger.addFilter(RenderIdFilter())
    return logger

"""Parse markdown checkbox lines into Task records."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from tasks_query.model.dates import parse_iso_date
from tasks_query.model.priority import PRIORITY_SYMBOLS, Priority
from tasks_query.model.status import StatusRegistry
from tasks_query.model.task import Recurrence, Task

if TYPE_CHECKING:
    from tasks_query.query.settings import GlobalFilter

logger = logging.getLogger(__name__)

TASK_LINE_RE = re.compile(r"^([\s\t>]*)([-*+]|[0-9]+[.)]) +\[(.)\] *(.*)$")

_DATE = r"(\d{4}-\d{2}-\d{2})"
_VS = "\ufe0f?"

# Markers are only recognised at the end of the line, so they are peeled
# off one at a time until nothing more matches.
_MARKERS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("priority", re.compile(rf"\s*([⏫🔼🔽]){_VS}$")),
    ("done", re.compile(rf"\s*✅{_VS} *{_DATE}$")),
    ("due", re.compile(rf"\s*[📅📆🗓]{_VS} *{_DATE}$")),
    ("scheduled", re.compile(rf"\s*[⏳⌛]{_VS} *{_DATE}$")),
    ("start", re.compile(rf"\s*🛫{_VS} *{_DATE}$")),
    ("created", re.compile(rf"\s*➕{_VS} *{_DATE}$")),
    ("recurrence", re.compile(rf"\s*🔁{_VS} ?([a-zA-Z0-9, !]+)$")),
    ("id", re.compile(rf"\s*🆔{_VS} *([a-zA-Z0-9_-]+)$")),
    ("depends_on", re.compile(rf"\s*⛔{_VS} *([a-zA-Z0-9_-]+(?: *, *[a-zA-Z0-9_-]+)*)$")),
)
_BLOCK_LINK_RE = re.compile(r" \^[a-zA-Z0-9-]+$")
_TAG_CHARS = r"[^ !@#$%^&*(),.?\":{}|<>]+"
_TRAILING_TAG_RE = re.compile(rf"\s+(#{_TAG_CHARS})$")
HASHTAG_RE = re.compile(rf"(?:^|\s)(#{_TAG_CHARS})")
MAX_MARKERS = 20


def parse_task_line(
    line: str,
    path: str = "",
    heading: str | None = None,
    global_filter: GlobalFilter | None = None,
    registry: StatusRegistry | None = None,
) -> Task | None:
    """Parse one markdown line.

    Args:
        line: Raw markdown line.
        path: Path of the file the line came from.
        heading: Closest heading above the line, if any.
        global_filter: Lines that do not contain a non-empty global filter are
            not tasks; the filter text is removed from the description.
        registry: Status lookup, defaults to the built-in statuses.

    Returns:
        The parsed Task, or None if the line is not a task.
    """
    match = TASK_LINE_RE.match(line.rstrip("\r\n"))
    if match is None:
        return None
    indentation, list_marker, symbol, body = match.groups()

    if global_filter is not None and not global_filter.includes_global_filter(body):
        return None

    body = body.strip()
    block_link = ""
    link_match = _BLOCK_LINK_RE.search(body)
    if link_match is not None:
        block_link = link_match.group(0).strip()
        body = body[: link_match.start()].rstrip()

    found: dict[str, str] = {}
    trailing_tags: list[str] = []
    for _ in range(MAX_MARKERS):
        matched = False
        for name, regex in _MARKERS:
            marker = regex.search(body)
            if marker is None:
                continue
            found.setdefault(name, marker.group(1).strip())
            body = body[: marker.start()].rstrip()
            matched = True
        tag = _TRAILING_TAG_RE.search(body)
        if tag is not None:
            trailing_tags.insert(0, tag.group(1))
            body = body[: tag.start()].rstrip()
            matched = True
        if not matched:
            break

    description = " ".join([body, *trailing_tags]).strip()
    if global_filter is not None and not global_filter.is_empty():
        description = global_filter.remove_as_word_from(description)

    tags = tuple(
        tag
        for tag in HASHTAG_RE.findall(description)
        if global_filter is None or tag != global_filter.get()
    )

    status = (registry or StatusRegistry()).by_symbol(symbol)
    priority = PRIORITY_SYMBOLS.get(found.get("priority", ""), Priority.NONE)

    depends_on: tuple[str, ...] = ()
    if "depends_on" in found:
        depends_on = tuple(part.strip() for part in found["depends_on"].split(",") if part.strip())

    dates = {}
    invalid_dates: set[str] = set()
    for name in ("created", "start", "scheduled", "due", "done"):
        if name in found:
            value = parse_iso_date(found[name])
            if value is None:
                logger.debug("Invalid %s date %r in %s", name, found[name], path)
                invalid_dates.add(name)
            dates[f"{name}_date"] = value

    return Task(
        status=status,
        description=description,
        path=path,
        indentation=indentation,
        list_marker=list_marker,
        tags=tags,
        priority=priority,
        recurrence=Recurrence(found["recurrence"]) if "recurrence" in found else None,
        id=found.get("id", ""),
        depends_on=depends_on,
        block_link=block_link,
        heading=heading,
        original_markdown=line.rstrip("\r\n"),
        invalid_dates=frozenset(invalid_dates),
        **dates,
    )

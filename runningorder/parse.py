"""
Parsing (HTML -> RunningOrder).

The running order page marks its parts with class attributes:

- lineup_day    one festival day, contains the stages of that day
- lineup_stage  one stage, contains its events
- band_lineup   one event, a link to the band page

Each level is found by its own pass over a subtree. A pass stops descending
at a marker and reads the fields it needs from fixed positions below it.
Any missing position fails the whole parse (StructureMismatch); there is no
partial result.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Callable, List, Optional, Union

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import PageElement, Tag

from runningorder.errors import DocumentParseError, ParseError, StructureMismatch
from runningorder.logging_utils import get_logger
from runningorder.model import Day, Event, RunningOrder, Stage
from runningorder.settings import load_timezone
from runningorder.timestamps import day_from_timestamp, resolve_day_range, resolve_event_range
from runningorder.tools import Emit, Node, attribute_value, has_class_value, run_pass, title_case


logger = get_logger(__name__)

DAY_CLASS = "lineup_day"
STAGE_CLASS = "lineup_stage"
EVENT_CLASS = "band_lineup"
TIME_CLASS = "time"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_marker(n: PageElement, class_name: str) -> bool:
    return isinstance(n, Tag) and has_class_value(n.attrs, class_name)


def _walk(n: PageElement, class_name: str, found: Callable[[Tag], None]) -> None:
    """
    Depth-first, document order walk. Calls `found` for every marker and does
    not descend into it.
    """
    if _is_marker(n, class_name):
        found(n)
        return

    if isinstance(n, Tag):
        for child in n.children:
            _walk(child, class_name, found)


def load_document(source: Union[str, bytes]) -> BeautifulSoup:
    """
    Parse HTML markup. class attributes are kept as plain strings.
    """
    try:
        return BeautifulSoup(source, "html.parser", multi_valued_attributes=None)
    except ParserRejectedMarkup as exc:
        raise DocumentParseError(f"Unable to parse HTML document: {exc}") from exc


# ---------------------------------------------------------------------------
# Days
# ---------------------------------------------------------------------------


def _read_day(n: Tag, year: int, tz: tzinfo) -> Day:
    date_node = Node(n).first_non_empty_child().next_non_empty_sibling().first_non_empty_child().first_non_empty_child()
    if not date_node:
        raise StructureMismatch("day")

    # The page puts a stray space behind each date separator.
    label = date_node.data.replace(". ", ".").strip()
    if not label:
        raise StructureMismatch("day")

    return Day(label, [], resolve_day_range(year, label, tz), n)


def get_days(year: int, n: PageElement, tz: tzinfo) -> List[Day]:
    """
    Return the Days found below `n` in document order.
    """

    def walk(emit: Emit) -> None:
        _walk(n, DAY_CLASS, lambda m: emit(_read_day(m, year, tz)))

    days = run_pass(walk, name="days")
    logger.debug("found %d days", len(days))
    return days


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------


def _read_stage(n: Tag) -> Stage:
    name_node = Node(n).first_non_empty_child().first_non_empty_child().next_non_empty_sibling().first_non_empty_child()
    if not name_node:
        raise StructureMismatch("stage")

    label = title_case(name_node.data.strip())
    if not label:
        raise StructureMismatch("stage")

    return Stage(label, [], n)


def get_stages(n: PageElement) -> List[Stage]:
    """
    Return the Stages found below `n`. Pass a Day's node to get the stages of
    that day.
    """

    def walk(emit: Emit) -> None:
        _walk(n, STAGE_CLASS, lambda m: emit(_read_stage(m)))

    stages = run_pass(walk, name="stages")
    logger.debug("found %d stages", len(stages))
    return stages


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


def _read_event(n: Tag, day: datetime) -> Event:
    first = Node(n).first_non_empty_child()
    time_node = first.next_non_empty_sibling()
    name_node = time_node.next_non_empty_sibling()

    # Some stages (Newforces) render events without the "time" wrapper: the
    # time comes first and the name right after it.
    if not time_node or not time_node.has_class(TIME_CLASS):
        time_node = first
        name_node = first.next_non_empty_sibling()

    time_node = time_node.first_non_empty_child()
    name_node = name_node.first_non_empty_child()

    if not name_node or not time_node:
        raise StructureMismatch("event")

    time_label = time_node.data.strip()
    label = title_case(name_node.data.strip().lower())
    url = attribute_value(n.attrs, "href")

    return Event(time_label, resolve_event_range(day, time_label), label, url)


def get_events(n: PageElement, day: datetime) -> List[Event]:
    """
    Return the Events found below `n`. `day` is the start of the day the
    events belong to and anchors their timestamps. Pass a Stage's node to
    get the events of that stage.
    """

    def walk(emit: Emit) -> None:
        _walk(n, EVENT_CLASS, lambda m: emit(_read_event(m, day)))

    events = run_pass(walk, name="events")
    logger.debug("found %d events", len(events))
    return events


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_running_order(year: int, root: PageElement, tz: tzinfo) -> RunningOrder:
    """
    Build the RunningOrder from a parsed document.

    Raises StructureMismatch if the document has no days at all, so an
    unrelated page never looks like an empty running order.
    """
    days = get_days(year, root, tz)
    if not days:
        raise StructureMismatch("day")

    for day in days:
        day.stages = get_stages(day.node)

        start = day_from_timestamp(day.timestamps.start, tz)
        for stage in day.stages:
            stage.events = get_events(stage.node, start)

    for day in days:
        for stage in day.stages:
            stage.node = None
        day.node = None

    return RunningOrder(days)


def parse_running_order(
    year: int,
    source: Union[str, bytes, PageElement],
    tz: Optional[tzinfo] = None,
) -> RunningOrder:
    """
    Parse the running order page in `source` (markup or an already parsed
    document). `year` is the year the festival takes place in; the page does
    not print it.
    """
    if tz is None:
        tz = load_timezone()

    root = source if isinstance(source, PageElement) else load_document(source)

    try:
        ro = extract_running_order(year, root, tz)
    except ParseError as exc:
        logger.debug("parse failed: %s", exc)
        raise

    logger.info(
        "parsed %d days, %d events",
        len(ro.days),
        sum(1 for _ in ro.iter_events()),
    )
    return ro

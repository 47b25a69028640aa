"""Fixed layout of the PRISMA 2020 flow diagram.

Coordinates are in inches and pinned (``pos='x,y!'``); the layout engine
only routes edges. Box numbers, tooltip positions and hyperlink box names
are part of the public template contract and must not be renumbered.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from ..core.models import DiagramOptions, FlowDiagramInput
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Horizontal origin with and without the previous-studies column.
XSTART_WITH_PREVIOUS = 0.0
XSTART_WITHOUT_PREVIOUS = -3.5
YSTART = 0.0

BOX_WIDTH = 3.5
WIDE_BOX_WIDTH = 7.5
BOX_HEIGHT = 0.5

# Excluded boxes grow downwards once the reason list wraps past this many breaks.
EXCLUDED_Y = 3.5
EXCLUDED_BREAK_THRESHOLD = 3
EXCLUDED_STEP = 9.0

# (dx, dy) from (xstart, ystart) for every numbered box.
POSITIONS: Dict[str, Tuple[float, float]] = {
    "1": (1, 8.25),
    "2": (1, 7),
    "3": (7, 8.25),
    "4": (5, 7),
    "5": (9, 7),
    "6": (5, 5.5),
    "7": (9, 5.5),
    "8": (5, 4.5),
    "9": (9, 4.5),
    "10": (5, 3.5),
    "11": (9, EXCLUDED_Y),
    "12": (5, 1.5),
    "13": (15, 8.25),
    "14": (13, 7),
    "15": (13, 4.5),
    "16": (17, 4.5),
    "17": (13, 3.5),
    "18": (17, EXCLUDED_Y),
    "19": (5, 0),
    "A": (1, 0),
    "B": (13, 1.5),
    "C": (9, 3.5),
}

# 1-based index into FlowDiagramInput.tooltips for each box.
TOOLTIP_INDEX: Dict[str, int] = {
    "1": 1,
    "2": 2,
    "3": 3,
    "4": 4,
    "13": 5,
    "14": 6,
    "5": 7,
    "6": 8,
    "7": 9,
    "8": 10,
    "9": 11,
    "15": 12,
    "16": 13,
    "10": 14,
    "11": 15,
    "17": 16,
    "18": 17,
    "12": 18,
    "19": 19,
}

# Logical names used by the hyperlink table.
BOX_NAMES: Dict[str, str] = {
    "1": "prevstud",
    "2": "box1",
    "3": "newstud",
    "4": "box2",
    "5": "box3",
    "6": "box4",
    "7": "box5",
    "8": "box6",
    "9": "box7",
    "10": "box8",
    "11": "box9",
    "12": "box10",
    "13": "othstud",
    "14": "box11",
    "15": "box12",
    "16": "box13",
    "17": "box14",
    "18": "box15",
    "19": "box16",
    "A": "A",
    "B": "B",
}

# Section bars drawn left of the diagram; labelled in the HTML widget.
SECTION_BARS = ("identification", "screening", "included")
SECTION_LABELS: Dict[str, str] = {
    "identification": "Identification",
    "screening": "Screening",
    "included": "Included",
}
SECTION_BAR_X = -1.4
SECTION_BAR_WIDTH = 0.4
SECTION_BAR_COLOUR = "LightSteelBlue2"

PREVIOUS_BOXES = ("1", "2", "19", "A")
OTHER_BOXES = ("13", "14", "15", "16", "17", "18", "B")


@dataclass(frozen=True)
class Wings:
    """Which optional sections of the diagram are drawn."""
    previous: bool
    other: bool

    @property
    def key(self) -> str:
        return f"{'previous' if self.previous else 'no-previous'}/{'other' if self.other else 'no-other'}"

    @property
    def xstart(self) -> float:
        return XSTART_WITH_PREVIOUS if self.previous else XSTART_WITHOUT_PREVIOUS


def resolve_wings(data: FlowDiagramInput, options: DiagramOptions) -> Wings:
    """A wing is drawn only if requested and at least one of its counts is present."""
    previous = options.previous
    if previous and not data.has_previous():
        logger.debug("Previous studies wing dropped: no previous counts supplied")
        previous = False
    other = options.other
    if other and not data.has_other():
        logger.debug("Other sources wing dropped: no website, organisation or citation counts")
        other = False
    return Wings(previous=previous, other=other)


def position(box: str, wings: Wings, dy: float = 0.0) -> Tuple[float, float]:
    dx0, dy0 = POSITIONS[box]
    return (wings.xstart + dx0, YSTART + dy0 + dy)


def excluded_y(breaks: int) -> float:
    """Vertical position of an excluded box for a reason list with ``breaks`` line breaks."""
    if breaks > EXCLUDED_BREAK_THRESHOLD:
        return EXCLUDED_Y - (breaks - 4) / EXCLUDED_STEP
    return EXCLUDED_Y


def section_bars(wings: Wings) -> Dict[str, Tuple[float, float, float]]:
    """``(x, y, height)`` per section bar; the Included bar shrinks without the previous column."""
    if wings.previous:
        included_y, included_h = 0.87, 2.5
    else:
        included_y, included_h = 0.63 + 0.87, 2.5 - 1.4
    return {
        "identification": (SECTION_BAR_X, YSTART + 7.43, 1.5),
        "screening": (SECTION_BAR_X, YSTART + 4.5, 2.5),
        "included": (SECTION_BAR_X, YSTART + included_y, included_h),
    }


# Rotated label x offsets inside the section bars (SVG user units, y = 19).
AXIS_LABEL_X: Dict[Tuple[bool, bool], Tuple[int, int, int]] = {
    (True, True): (537, 356, 95),
    (False, True): (497, 315, 100),
    (True, False): (536, 357, 95),
    (False, False): (497, 315, 100),
}
AXIS_LABEL_Y = 19


def axis_label_positions(wings: Wings) -> Dict[str, Tuple[int, int]]:
    xs = AXIS_LABEL_X[(wings.previous, wings.other)]
    return {bar: (x, AXIS_LABEL_Y) for bar, x in zip(SECTION_BARS, xs)}

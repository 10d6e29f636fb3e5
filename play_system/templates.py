"""
Play Templates - Starting layouts for new plays.

Each call builds fresh object and phase ids, so two plays started from the
same template never share ids.

Usage:
    template = get_template_by_id("horns")
    document = template.diagram
"""

import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .schema import (
    PlayDocument, PlayPhase, OffensePlayer, DefensePlayer, Point,
    CourtTemplate, PlayType,
)


PLAYER_SIZE = 18


@dataclass(frozen=True)
class PlayTemplate:
    id: str
    name: str
    description: str
    play_type: PlayType
    court_template: CourtTemplate
    tags: List[str] = field(default_factory=list)
    layout: Tuple[tuple, ...] = ()

    @property
    def diagram(self) -> PlayDocument:
        """A new single-phase document with this template's layout"""
        objects = [_make_player(kind, label, x, y) for kind, label, x, y in self.layout]
        return PlayDocument(
            schema_version=1,
            court_template=self.court_template,
            phases=[PlayPhase(id=_uid("phase"), name="Phase 1", objects=objects)],
        )


def _uid(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def _make_player(kind: str, label: str, x: float, y: float):
    model = OffensePlayer if kind == "O" else DefensePlayer
    return model(id=_uid("obj"), label=label, position=Point(x=x, y=y), size=PLAYER_SIZE)


# ============================================================
# LAYOUTS
# ============================================================
# (kind, label, x, y) with kind "O" for offense and "X" for defense

HALF_COURT_SPACING = (
    ("O", "1", 780, 720),
    ("O", "2", 830, 180),
    ("O", "3", 170, 180),
    ("O", "4", 350, 530),
    ("O", "5", 650, 530),
)

HALF_COURT_DEFENSE = (
    ("X", "X1", 740, 680),
    ("X", "X2", 800, 230),
    ("X", "X3", 220, 230),
    ("X", "X4", 390, 490),
    ("X", "X5", 610, 490),
)

FULL_COURT_SPACING = (
    ("O", "1", 500, 850),
    ("O", "2", 840, 740),
    ("O", "3", 160, 740),
    ("O", "4", 330, 530),
    ("O", "5", 670, 530),
)


def _template(id, name, description, play_type, court, tags, layout) -> PlayTemplate:
    return PlayTemplate(
        id=id,
        name=name,
        description=description,
        play_type=PlayType(play_type),
        court_template=CourtTemplate(court),
        tags=list(tags),
        layout=tuple(layout),
    )


CORE_PLAY_TEMPLATES: List[PlayTemplate] = [
    _template("empty", "Empty", "Blank court to draw from scratch.",
              "offense", "half_court", ["empty"], []),
    _template("traditional", "Traditional", "Classic balanced half-court alignment.",
              "offense", "half_court", ["traditional"], HALF_COURT_SPACING),
    _template("five_out", "5 Out", "Perimeter spacing with no low-post anchor.",
              "offense", "half_court", ["5-out", "spacing"], [
                  ("O", "1", 500, 770),
                  ("O", "2", 850, 220),
                  ("O", "3", 150, 220),
                  ("O", "4", 260, 520),
                  ("O", "5", 740, 520),
              ]),
    _template("princeton", "Princeton Offense", "High-post and split-action start.",
              "offense", "half_court", ["princeton"], [
                  ("O", "1", 500, 760),
                  ("O", "2", 820, 220),
                  ("O", "3", 180, 220),
                  ("O", "4", 420, 430),
                  ("O", "5", 580, 430),
              ]),
    _template("box", "Box", "Box alignment for baseline/sideline entries.",
              "ato", "half_court", ["box", "ato"], [
                  ("O", "1", 500, 760),
                  ("O", "2", 360, 380),
                  ("O", "3", 640, 380),
                  ("O", "4", 360, 560),
                  ("O", "5", 640, 560),
              ]),
    _template("one_four_low", "1-4 Low", "One guard high, four players low.",
              "offense", "half_court", ["1-4-low"], [
                  ("O", "1", 500, 760),
                  ("O", "2", 270, 600),
                  ("O", "3", 730, 600),
                  ("O", "4", 380, 520),
                  ("O", "5", 620, 520),
              ]),
    _template("horns", "Horns", "Two elbows with strong-side/weak-side options.",
              "offense", "half_court", ["horns"], [
                  ("O", "1", 500, 760),
                  ("O", "2", 840, 220),
                  ("O", "3", 160, 220),
                  ("O", "4", 400, 460),
                  ("O", "5", 600, 460),
              ]),
    _template("one_four_high", "1-4 High", "One guard and four across the free throw line extended.",
              "offense", "half_court", ["1-4-high"], [
                  ("O", "1", 500, 760),
                  ("O", "2", 220, 430),
                  ("O", "3", 780, 430),
                  ("O", "4", 380, 460),
                  ("O", "5", 620, 460),
              ]),
    _template("flex", "Flex", "Flex continuity spacing as starting shell.",
              "offense", "half_court", ["flex"], HALF_COURT_SPACING),
    _template("zone_2_3", "2-3 Zone", "Two top defenders, three along baseline line.",
              "defense", "half_court", ["2-3-zone", "zone"], [
                  ("X", "X1", 420, 400),
                  ("X", "X2", 580, 400),
                  ("X", "X3", 220, 540),
                  ("X", "X4", 500, 560),
                  ("X", "X5", 780, 540),
              ]),
    _template("zone_3_2", "3-2 Zone", "Three up top, two low defenders.",
              "defense", "half_court", ["3-2-zone", "zone"], [
                  ("X", "X1", 300, 430),
                  ("X", "X2", 500, 390),
                  ("X", "X3", 700, 430),
                  ("X", "X4", 380, 570),
                  ("X", "X5", 620, 570),
              ]),
    _template("zone_1_3_1", "1-3-1 Zone", "Point defender with middle three and baseline rover.",
              "defense", "half_court", ["1-3-1-zone", "zone"], [
                  ("X", "X1", 500, 380),
                  ("X", "X2", 280, 470),
                  ("X", "X3", 500, 490),
                  ("X", "X4", 720, 470),
                  ("X", "X5", 500, 620),
              ]),
    _template("full_court_vertical", "Full Court Vertical", "Full-court vertical setup.",
              "offense", "full_court_vertical", ["full-court"], FULL_COURT_SPACING),
    _template("full_court_horizontal", "Full Court Horizontal", "Full-court horizontal setup.",
              "offense", "full_court_horizontal", ["full-court"], [
                  ("O", "1", 500, 500),
                  ("O", "2", 740, 300),
                  ("O", "3", 740, 700),
                  ("O", "4", 300, 320),
                  ("O", "5", 300, 680),
              ]),
    _template("traditional_defended", "Traditional vs Man", "Traditional offense with matching defenders.",
              "offense", "half_court", ["man", "traditional"],
              HALF_COURT_SPACING + HALF_COURT_DEFENSE),
]


def get_template_by_id(template_id: Optional[str] = None) -> PlayTemplate:
    """Template with the given id; unknown or missing ids give the empty court"""
    if not template_id:
        return CORE_PLAY_TEMPLATES[0]
    return next(
        (t for t in CORE_PLAY_TEMPLATES if t.id == template_id),
        CORE_PLAY_TEMPLATES[0],
    )

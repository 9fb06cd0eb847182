"""
Data model for photographic report rendering.

ReportDocument and PhotoEntry are caller-owned input and are never mutated
by the engine. LayoutCursor is the per-render layout state; renderers take a
cursor and return a new one.
"""
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from utils.image_processing import ReportImage


@dataclass(frozen=True)
class PhotoEntry:
    sequence_number: int
    title: str
    description: str
    image: Optional[ReportImage]
    is_active: bool = True


@dataclass(frozen=True)
class ReportDocument:
    """
    Validated report input.

    `fields` maps field keys (see constants.FIELD_LABELS) to display values.
    """
    fields: Dict[str, str] = field(default_factory=dict)
    photos: Tuple[PhotoEntry, ...] = ()
    header_logo: Optional[ReportImage] = None
    background_image: Optional[ReportImage] = None
    signature_image: Optional[ReportImage] = None

    @property
    def case_number(self) -> str:
        return self.fields.get('case_number', '')


@dataclass(frozen=True)
class ActivePhoto:
    """An active photo with its display number (1..K among active photos)."""
    number: int
    entry: PhotoEntry

    @property
    def title(self) -> str:
        return self.entry.title

    @property
    def description(self) -> str:
        return self.entry.description

    @property
    def image(self) -> Optional[ReportImage]:
        return self.entry.image


def active_photos(report: ReportDocument) -> List[ActivePhoto]:
    """Filter out inactive photos and renumber the rest 1..K, preserving order."""
    active = [p for p in report.photos if p.is_active]
    return [ActivePhoto(number=i, entry=p) for i, p in enumerate(active, start=1)]


@dataclass(frozen=True)
class LayoutCursor:
    y: float
    page_photo_count: int = 0
    page_has_vertical: bool = False

    def advanced(self, dy: float) -> "LayoutCursor":
        return replace(self, y=self.y + dy)

    def new_page(self, top_y: float) -> "LayoutCursor":
        return LayoutCursor(y=top_y)

    def after_photo(self, block_height: float, is_vertical: bool) -> "LayoutCursor":
        return LayoutCursor(
            y=self.y + block_height,
            page_photo_count=self.page_photo_count + 1,
            page_has_vertical=self.page_has_vertical or is_vertical,
        )


# -----------------------------------------------------------------------------
# Display list
# -----------------------------------------------------------------------------
# Coordinates are mm from the page's top-left corner. Text y is the baseline.

@dataclass(frozen=True)
class TextOp:
    x: float
    y: float
    text: str
    font_name: str
    font_size: float
    align: str = 'left'
    width: float = 0.0
    last_line: bool = True


@dataclass(frozen=True)
class ImageOp:
    x: float
    y: float
    width: float
    height: float
    image: ReportImage
    # reportlab "auto" keeps PNG alpha; None flattens transparency to black
    mask: Optional[str] = 'auto'


@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    width: float
    height: float
    line_width: float


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class PhotoBlock:
    """Geometry of one laid-out photo block."""
    number: int
    page_index: int
    top: float
    height: float
    is_vertical: bool
    image_box: Optional[Box]
    description_lines: Tuple[str, ...] = ()

    @property
    def bottom(self) -> float:
        return self.top + self.height

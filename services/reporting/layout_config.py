"""
Layout configuration for photographic report rendering.

Every page dimension, spacing, text style and layout heuristic used by the
renderers lives on LayoutConfig. Defaults come from utils.report_tokens;
LayoutConfig.from_env() applies deployment overrides.
"""
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from constants import DESCRIPTION_OVERFLOW_CLAMP, DESCRIPTION_OVERFLOW_POLICIES
from services.reporting.models import TextOp
from utils import report_tokens as tokens
from utils.env import get_env_str, get_env_float
from utils.geometry import line_height, mm_to_pt, pt_to_mm
from utils.pdf_text import measure_text_width, wrap_text


@dataclass(frozen=True)
class TextStyle:
    size: float
    weight: str = 'normal'
    align: str = 'left'
    line_height: Optional[float] = None

    @property
    def is_bold(self) -> bool:
        return self.weight == 'bold'


def _default_styles() -> Dict[str, TextStyle]:
    return {name: TextStyle(**values) for name, values in tokens.TEXT_STYLES.items()}


@dataclass(frozen=True)
class LayoutConfig:
    page_width: float = tokens.PAGE_WIDTH
    page_height: float = tokens.PAGE_HEIGHT
    margin_h: float = tokens.MARGIN_H
    margin_v: float = tokens.MARGIN_V

    header_logo_height: float = tokens.HEADER_LOGO_HEIGHT
    image_border_width: float = tokens.IMAGE_BORDER_WIDTH

    title_after_logo: float = tokens.SPACING['title_after_logo']
    field_spacing: float = tokens.SPACING['field']
    label_to_value: float = tokens.SPACING['label_to_value']
    section_spacing: float = tokens.SPACING['section']
    photo_title_to_image: float = tokens.SPACING['photo_title_to_image']
    photo_image_to_description: float = tokens.SPACING['photo_image_to_description']
    photo_block_top_padding: float = tokens.SPACING['photo_block_top_padding']

    # Heuristics
    min_image_height: float = tokens.MIN_IMAGE_HEIGHT
    first_photo_signature_reserve: float = tokens.FIRST_PHOTO_SIGNATURE_RESERVE
    last_vertical_shrink: float = tokens.LAST_VERTICAL_SHRINK
    trailing_horizontal_pair_shrink: float = tokens.TRAILING_HORIZONTAL_PAIR_SHRINK
    signature_anchor_y: float = tokens.SIGNATURE_ANCHOR_Y

    signature_max_width: float = tokens.SIGNATURE_MAX_WIDTH
    signature_max_height: float = tokens.SIGNATURE_MAX_HEIGHT
    signature_gap_after_label: float = tokens.SIGNATURE_GAP_AFTER_LABEL
    signature_nudge_wide: float = tokens.SIGNATURE_NUDGE_WIDE
    signature_nudge_tall: float = tokens.SIGNATURE_NUDGE_TALL
    signature_spacing_after: float = tokens.SIGNATURE_SPACING_AFTER

    font_regular: str = "Helvetica"
    font_bold: str = "Helvetica-Bold"
    styles: Dict[str, TextStyle] = field(default_factory=_default_styles)

    description_overflow: str = DESCRIPTION_OVERFLOW_CLAMP

    def __post_init__(self):
        if self.description_overflow not in DESCRIPTION_OVERFLOW_POLICIES:
            raise ValueError(
                f"description_overflow must be one of {sorted(DESCRIPTION_OVERFLOW_POLICIES)}, "
                f"got: {self.description_overflow!r}"
            )

    # Derived geometry -------------------------------------------------------

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin_h

    @property
    def bottom_limit(self) -> float:
        """Lowest y any block may reach."""
        return self.page_height - self.margin_v

    @property
    def usable_height(self) -> float:
        return self.page_height - 2 * self.margin_v - self.photo_block_top_padding

    # Styles -----------------------------------------------------------------

    def style(self, name: str) -> TextStyle:
        return self.styles[name]

    def font_for(self, style: TextStyle) -> str:
        return self.font_bold if style.is_bold else self.font_regular

    def line_height(self, name: str) -> float:
        return line_height(self.styles[name])

    def text_width(self, text: str, name: str) -> float:
        """Rendered width of text in mm."""
        style = self.styles[name]
        return pt_to_mm(measure_text_width(text, self.font_for(style), style.size))

    def wrap(self, text: str, name: str, width: float) -> List[str]:
        """Wrap text in the named style to a width given in mm."""
        style = self.styles[name]
        return wrap_text(text, self.font_for(style), style.size, mm_to_pt(width))

    def text_op(self, text: str, name: str, x: float, y: float, **kwargs) -> TextOp:
        style = self.styles[name]
        kwargs.setdefault('align', style.align)
        return TextOp(x=x, y=y, text=text, font_name=self.font_for(style), font_size=style.size, **kwargs)

    def with_fonts(self, regular: str, bold: str) -> "LayoutConfig":
        return replace(self, font_regular=regular, font_bold=bold)

    @classmethod
    def from_env(cls, **overrides) -> "LayoutConfig":
        """
        Defaults plus environment overrides:

        REPORT_SIGNATURE_MAX_WIDTH_MM, REPORT_SIGNATURE_MAX_HEIGHT_MM,
        REPORT_DESCRIPTION_OVERFLOW ("clamp" | "allow").
        """
        values = {
            'signature_max_width': get_env_float('REPORT_SIGNATURE_MAX_WIDTH_MM', tokens.SIGNATURE_MAX_WIDTH),
            'signature_max_height': get_env_float('REPORT_SIGNATURE_MAX_HEIGHT_MM', tokens.SIGNATURE_MAX_HEIGHT),
            'description_overflow': (
                get_env_str('REPORT_DESCRIPTION_OVERFLOW', default=DESCRIPTION_OVERFLOW_CLAMP).lower()
            ),
        }
        values.update(overrides)
        return cls(**values)

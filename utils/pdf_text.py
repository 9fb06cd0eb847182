"""
PDF Text Utilities

Text measurement, wrapping and aligned drawing for reportlab canvases.
Used by the report renderers for field values, photo titles and descriptions.

Rules:
- Never rasterize text - always draw as vector text objects
- Use registered fonts (services.reporting.fonts.register_fonts)
- Measurement is in points; callers convert from mm
"""
from reportlab.pdfbase.pdfmetrics import stringWidth
from typing import List

ELLIPSIS = "..."


def measure_text_width(text: str, font_name: str, font_size: float) -> float:
    """
    Measure text width in points using ReportLab's stringWidth.

    Args:
        text: Text to measure
        font_name: Registered font name
        font_size: Font size in points

    Returns:
        Width in points
    """
    if not text:
        return 0.0
    return stringWidth(str(text), font_name, font_size)


def _split_long_word(word: str, font_name: str, font_size: float, max_width_pts: float) -> List[str]:
    pieces = []
    current = ""
    for char in word:
        candidate = current + char
        if current and measure_text_width(candidate, font_name, font_size) > max_width_pts:
            pieces.append(current)
            current = char
        else:
            current = candidate
    if current:
        pieces.append(current)
    return pieces


def wrap_text(
    text: str,
    font_name: str,
    font_size: float,
    max_width_pts: float
) -> List[str]:
    """
    Wrap text to fit within max_width, returning a list of lines.

    Explicit newlines start a new line; blank lines are preserved. Words wider
    than the line are split by character.

    Args:
        text: Text to wrap
        font_name: Registered font name
        font_size: Font size in points
        max_width_pts: Maximum width per line in points

    Returns:
        List of wrapped lines ([] for empty text)
    """
    if not text:
        return []

    text = str(text).strip()
    if not text:
        return []

    lines = []
    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        current_line = ""
        for word in words:
            if measure_text_width(word, font_name, font_size) > max_width_pts:
                if current_line:
                    lines.append(current_line)
                    current_line = ""
                pieces = _split_long_word(word, font_name, font_size, max_width_pts)
                lines.extend(pieces[:-1])
                current_line = pieces[-1]
                continue

            candidate = f"{current_line} {word}" if current_line else word
            if measure_text_width(candidate, font_name, font_size) <= max_width_pts:
                current_line = candidate
            else:
                lines.append(current_line)
                current_line = word

        if current_line:
            lines.append(current_line)

    return lines


def truncate_with_ellipsis(line: str, font_name: str, font_size: float, max_width_pts: float) -> str:
    """Shorten a line until it fits with a trailing ellipsis."""
    line = line.rstrip()
    while line and measure_text_width(line + ELLIPSIS, font_name, font_size) > max_width_pts:
        line = line[:-1].rstrip()
    return line + ELLIPSIS


def draw_aligned_line(
    c,
    text: str,
    x: float,
    y: float,
    width: float,
    font_name: str,
    font_size: float,
    align: str = 'left',
    last_line: bool = True
) -> None:
    """
    Draw one line of text on a canvas.

    x is the left edge of the line box (or the anchor for 'center'/'right'
    when width is 0). 'justify' spreads words across `width` except on the
    last line of a paragraph, which is drawn left-aligned.
    """
    c.setFont(font_name, font_size)

    if align == 'center':
        c.drawCentredString(x + width / 2, y, text)
    elif align == 'right':
        c.drawRightString(x + width, y, text)
    elif align == 'justify' and not last_line:
        words = text.split()
        if len(words) < 2:
            c.drawString(x, y, text)
            return
        words_width = sum(measure_text_width(w, font_name, font_size) for w in words)
        gap = (width - words_width) / (len(words) - 1)
        cursor_x = x
        for word in words:
            c.drawString(cursor_x, y, word)
            cursor_x += measure_text_width(word, font_name, font_size) + gap
    else:
        c.drawString(x, y, text)

from constants import FIELD_LABELS, DATE_TIME_TEMPLATE
from services.reporting.models import LayoutCursor


def field_values(fields):
    """
    Ordered (label, value) pairs for the header fields.

    Date and time are combined into one row; a missing half is left out.
    """
    date = (fields.get('date') or '').strip()
    time = (fields.get('time') or '').strip()
    if date and time:
        date_time = DATE_TIME_TEMPLATE.format(date=date, time=time)
    else:
        date_time = date or time

    rows = []
    for key, label in FIELD_LABELS:
        value = date_time if key == 'date_time' else (fields.get(key) or '')
        rows.append((label, str(value).strip()))
    return rows


def draw_field(document, config, label: str, value: str, cursor: LayoutCursor) -> LayoutCursor:
    """
    Draw a bold label with its value wrapped to the remaining content width.

    Returns the cursor advanced past the tallest of the two plus the field
    spacing. An empty value still reserves one label line.
    """
    y = cursor.y
    label_width = config.text_width(label, 'label')
    document.draw(config.text_op(label, 'label', config.margin_h, y))

    height = config.line_height('label')
    if value:
        value_x = config.margin_h + label_width + config.label_to_value
        value_width = config.content_width - label_width - config.label_to_value
        lines = config.wrap(value, 'value', value_width)
        value_line_height = config.line_height('value')
        for i, line in enumerate(lines):
            document.draw(config.text_op(line, 'value', value_x, y + i * value_line_height))
        height = max(len(lines) * value_line_height, height)

    return cursor.advanced(height + config.field_spacing)


def draw_fields(document, report, config, cursor: LayoutCursor) -> LayoutCursor:
    for label, value in field_values(report.fields):
        cursor = draw_field(document, config, label, value, cursor)
    return cursor

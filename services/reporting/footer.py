from constants import PAGE_FOOTER_TEMPLATE


def stamp_footers(document, config):
    """
    Second pass: stamp "Page i of N" at the top-right of every page.

    Needs the finished first pass for N. Returns a new Document; the input
    is left untouched.
    """
    stamped = document.copy()
    total = stamped.page_count
    for page in stamped.pages:
        text = PAGE_FOOTER_TEMPLATE.format(page=page.index + 1, total=total)
        page.ops.append(config.text_op(
            text, 'pagination', config.margin_h, config.margin_v,
            width=config.content_width,
        ))
    return stamped

# Report text
REPORT_TITLE = "Photographic Report"
PHOTO_TITLE_LABEL = "Photo {number}: "
SIGNATURES_LABEL = "Signatures:"
PAGE_FOOTER_TEMPLATE = "Page {page} of {total}"

# Header fields, in the order they are drawn.
# "date_time" is composed from the report's date and time values.
FIELD_LABELS = (
    ("type", "Case type:"),
    ("case_number", "Case number:"),
    ("date_time", "Date and time:"),
    ("address", "Address:"),
    ("subject", "Subject:"),
    ("signatories", "Signatories:"),
)

DATE_TIME_TEMPLATE = "{date}, at {time}"

# Output naming
REPORT_FILENAME_PREFIX = "Photographic_report"
REPORTS_KEY_PREFIX = "reports"

# Title used when the report is persisted remotely (date is dd/mm/yyyy)
SAVED_REPORT_TITLE_TEMPLATE = "Photographic Report - {date}"

# Overflow policies for descriptions longer than their block
DESCRIPTION_OVERFLOW_CLAMP = "clamp"
DESCRIPTION_OVERFLOW_ALLOW = "allow"
DESCRIPTION_OVERFLOW_POLICIES = frozenset({
    DESCRIPTION_OVERFLOW_CLAMP,
    DESCRIPTION_OVERFLOW_ALLOW,
})

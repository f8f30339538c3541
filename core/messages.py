"""Default user-facing message templates.

Templates may be overridden per key from the `messages` section of
`settings.json`, e.g. to localize them.
"""

from __future__ import annotations

DEFAULT_MESSAGES: dict[str, str] = {
    "load_failed": "Could not load the report list.",
    "detail_failed": "Could not load the report details.",
    "select_to_delete": "Select the reports to delete.",
    "delete_failed": "An error occurred while deleting.",
    "delete_partial": "{failed} of {total} report(s) could not be deleted.",
    "deleted": "{count} report(s) deleted.",
    "no_reports": "No video reports yet. Run an analysis to create your first report.",
    "no_matches": "No reports match “{term}”.",
    "no_summary": "No summary available.",
}

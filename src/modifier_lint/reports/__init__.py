"""Report renderers for lint results."""

from modifier_lint.reports.exporters import (
    FORMATS,
    export,
    export_json,
    export_markdown,
    export_text,
)

__all__ = ["FORMATS", "export", "export_json", "export_markdown", "export_text"]

"""
protocol-risk TUI theme
Dark palette shared by all widgets.
"""

from protocol_risk.core.view_model import (
    ACCENT_COLOR,
    MUTED_COLOR,
    RISK_COLORS,
    SEVERITY_COLORS,
)

COLORS = {
    "background": "#1a1b1e",
    "surface": "#2c2d31",
    "accent": ACCENT_COLOR,
    "muted": MUTED_COLOR,
    "text": "#ffffff",
    "error": "#ef4444",
    "success": "#22c55e",
}

SEVERITY_LABELS = {
    "critical": "CRITICAL",
    "warning": "WARNING",
    "info": "INFO",
}

MAIN_CSS = """
Screen {
    background: #1a1b1e;
    color: #ffffff;
}

Footer {
    background: #2c2d31;
    color: #71717a;
}

#header {
    height: auto;
    padding: 1 2;
    content-align: center middle;
    text-align: center;
    border-bottom: solid #2c2d31;
}

#status-line {
    height: 1;
    padding: 0 2;
    color: #71717a;
}

#status-line.-error {
    color: #ef4444;
}

#body {
    height: 1fr;
}
"""


def severity_label(severity: str) -> str:
    return SEVERITY_LABELS.get(severity, severity.upper())


__all__ = [
    "COLORS",
    "MAIN_CSS",
    "RISK_COLORS",
    "SEVERITY_COLORS",
    "SEVERITY_LABELS",
    "severity_label",
]

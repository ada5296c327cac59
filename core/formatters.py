# core/formatters.py

# all pure text and number helpers
# must never import from models!

import math

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


# === number formatters ===


def format_score(value: float | None) -> str:
    """Renders a mark without a trailing `.0`, and blank for ungraded values."""
    if value is None or math.isnan(value):
        return ""

    if math.isfinite(value) and value == int(value):
        return str(int(value))

    return f"{value:g}"


def format_progress_bar(value: float | None, maximum: float, width: int = 20) -> str:
    if value is None or math.isnan(value):
        return "." * width

    if not math.isfinite(maximum) or maximum <= 0:
        return "." * width

    filled = round(width * min(max(value / maximum, 0.0), 1.0))

    return "#" * filled + "." * (width - filled)

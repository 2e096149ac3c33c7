"""
HTML rendering of analysis results

Turns the JSON returned by /analyze and /upload into HTML fragments plus
the data behind the two summary charts. Display preferences are passed in
explicitly through DisplaySettings.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from html import escape
from typing import Any, Dict, List, Optional

LEVELS = ("high", "medium", "low")
LEVEL_COLORS = ["#ef4444", "#f59e0b", "#10b981"]
THEMES = ("light", "dark")


@dataclass(frozen=True)
class DisplaySettings:
    """User display preferences"""
    theme: str = "light"

    def __post_init__(self):
        if self.theme not in THEMES:
            raise ValueError(f"Unknown theme: {self.theme}")

    @property
    def theme_icon(self) -> str:
        return "☀️" if self.theme == "dark" else "🌙"

    def toggled(self) -> "DisplaySettings":
        return replace(self, theme="light" if self.theme == "dark" else "dark")


@dataclass
class ChartData:
    """Data for one chart, in the shape Chart.js expects"""
    chart_type: str
    title: str
    labels: List[str]
    values: List[int]
    colors: List[str] = field(default_factory=lambda: list(LEVEL_COLORS))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.chart_type,
            "title": self.title,
            "data": {
                "labels": self.labels,
                "datasets": [{"data": self.values, "backgroundColor": self.colors}],
            },
        }


@dataclass
class RenderedView:
    """Everything the page shows after a request"""
    html: str
    theme: str
    details_html: str = ""
    charts: List[ChartData] = field(default_factory=list)
    is_error: bool = False


def _count_levels(items: List[Dict[str, Any]], key: str) -> List[int]:
    counts = {level: 0 for level in LEVELS}
    for item in items:
        level = str(item.get(key, "")).lower()
        if level in counts:
            counts[level] += 1
    return [counts[level] for level in LEVELS]


def build_risk_chart(data: Dict[str, Any]) -> ChartData:
    """Bar chart of risk factor counts, ordered high, medium, low"""
    factors = data["riskAssessment"].get("riskFactors") or []
    return ChartData(
        chart_type="bar",
        title="Risk Factors",
        labels=["High Risk", "Medium Risk", "Low Risk"],
        values=_count_levels(factors, "risk"),
    )


def build_priority_chart(data: Dict[str, Any]) -> ChartData:
    """Donut chart of action item counts, ordered high, medium, low"""
    actions = data.get("actionItems") or []
    return ChartData(
        chart_type="doughnut",
        title="Action Priority",
        labels=["High Priority", "Medium Priority", "Low Priority"],
        values=_count_levels(actions, "priority"),
    )


def _wrap(settings: DisplaySettings, body: str) -> str:
    return f'<div class="results" data-theme="{escape(settings.theme)}">{body}</div>'


def render_error(message: str, settings: DisplaySettings) -> RenderedView:
    body = (
        '<div class="error-message">'
        "<h3>Analysis Error</h3>"
        f"<p>{escape(message)}</p>"
        "</div>"
    )
    return RenderedView(html=_wrap(settings, body), theme=settings.theme, is_error=True)


def _render_risk_factor(factor: Dict[str, Any]) -> str:
    risk = escape(str(factor["risk"]))
    return (
        '<div class="risk-factor">'
        '<div class="risk-header">'
        f'<span class="risk-clause">{escape(factor["clause"])}</span>'
        f'<span class="risk-level risk-{risk}">{risk}</span>'
        "</div>"
        f'<p class="risk-explanation">{escape(factor["explanation"])}</p>'
        f'<p class="risk-impact"><strong>Impact:</strong> {escape(factor["impact"])}</p>'
        "</div>"
    )


def _render_key_term(term: Dict[str, Any]) -> str:
    return (
        '<div class="key-term">'
        f"<h4>{escape(term['term'])}</h4>"
        f"<p>{escape(term['definition'])}</p>"
        f"<small><strong>Why it matters:</strong> {escape(term['importance'])}</small>"
        "</div>"
    )


def _render_action_item(action: Dict[str, Any]) -> str:
    priority = escape(str(action["priority"]))
    deadline = action.get("deadline")
    deadline_html = f'<p class="deadline">Deadline: {escape(deadline)}</p>' if deadline else ""
    return (
        f'<div class="action-item priority-{priority}">'
        '<div class="action-header">'
        f'<span class="action-text">{escape(action["action"])}</span>'
        f'<span class="priority-badge">{priority}</span>'
        "</div>"
        f"{deadline_html}"
        "</div>"
    )


def _render_warning(warning: str) -> str:
    return f'<div class="warning-item">{escape(warning)}</div>'


def _section(css_class: str, heading: str, items: Optional[List[Any]], render_item) -> str:
    # Sections with nothing to show are left out entirely
    if not items:
        return ""
    return f'<div class="{css_class}"><h3>{heading}</h3>{"".join(render_item(i) for i in items)}</div>'


def _format_timestamp(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp.replace("Z", "+00:00")).strftime("%Y-%m-%d %H:%M:%S %Z")
    except ValueError:
        return timestamp


def render_details(data: Dict[str, Any]) -> str:
    """The 'Analysis Details' side panel built from the response metadata"""
    metadata = data.get("metadata") or {}
    overall = escape(str(data["riskAssessment"]["overallRisk"]))
    items = [
        f'<div class="metadata-item"><strong>Analyzed:</strong> '
        f'{escape(_format_timestamp(str(metadata.get("timestamp", ""))))}</div>'
    ]
    if metadata.get("fileName"):
        items.append(f'<div class="metadata-item"><strong>File:</strong> {escape(metadata["fileName"])}</div>')
    items.append(
        f'<div class="metadata-item"><strong>Text Length:</strong> {metadata.get("textLength", 0)} characters</div>'
    )
    items.append(
        f'<div class="metadata-item"><strong>Risk Level:</strong> <span class="risk-{overall}">{overall}</span></div>'
    )
    return (
        '<div class="analysis-metadata">'
        "<h3>📊 Analysis Details</h3>"
        f'<div class="metadata-grid">{"".join(items)}</div>'
        "</div>"
    )


def render_result(data: Dict[str, Any], settings: DisplaySettings) -> RenderedView:
    """
    Render a successful analysis.

    Args:
        data: Decoded AnalysisResult JSON
        settings: Display preferences

    Returns:
        RenderedView with the results panel, details panel and both charts
    """
    assessment = data["riskAssessment"]
    overall = escape(str(assessment["overallRisk"]))
    factors = assessment.get("riskFactors") or []

    body = (
        '<div class="analysis-results">'
        '<div class="simplified-section">'
        "<h3>📋 Simplified Analysis</h3>"
        f'<div class="simplified-text">{escape(data["simplified"])}</div>'
        "</div>"
        '<div class="risk-section">'
        "<h3>⚠️ Risk Assessment</h3>"
        f'<div class="overall-risk risk-{overall}">'
        f"Overall Risk Level: <strong>{overall.upper()}</strong>"
        "</div>"
        f'{"".join(_render_risk_factor(f) for f in factors)}'
        "</div>"
        f'{_section("terms-section", "📖 Key Terms", data.get("keyTerms"), _render_key_term)}'
        f'{_section("actions-section", "✅ Action Items", data.get("actionItems"), _render_action_item)}'
        f'{_section("warnings-section", "🚨 Important Warnings", data.get("warnings"), _render_warning)}'
        "</div>"
    )

    return RenderedView(
        html=_wrap(settings, body),
        theme=settings.theme,
        details_html=render_details(data),
        charts=[build_risk_chart(data), build_priority_chart(data)],
    )

"""Rich rendering of validation reports and page layouts."""

from __future__ import annotations

from collections import Counter

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from scriptkit.cli.formatters.base import OutputFormat, OutputFormatter
from scriptkit.importer import ImportResult
from scriptkit.pagination import PageLayout, display_text
from scriptkit.validation import ConfidenceLevel, Severity, ValidationReport

SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "blue",
}

LEVEL_STYLES = {
    ConfidenceLevel.EXCELLENT: "green",
    ConfidenceLevel.GOOD: "green",
    ConfidenceLevel.ACCEPTABLE: "yellow",
    ConfidenceLevel.POOR: "red",
    ConfidenceLevel.FAILED: "bold red",
}


class ReportFormatter(OutputFormatter[ValidationReport]):
    """Render a validation report as a summary panel plus an issue table."""

    max_issues = 20

    def format(
        self, data: ValidationReport, format_type: OutputFormat = OutputFormat.TEXT
    ) -> str:
        if format_type == OutputFormat.JSON:
            from scriptkit.cli.formatters.json_formatter import JsonFormatter

            return JsonFormatter().format(data)
        return data.format_console(self.max_issues)

    def print_report(self, report: ValidationReport) -> None:
        style = LEVEL_STYLES[report.level]
        self.console.print(
            Panel(
                f"[{style}]{report.format_summary()}[/{style}]\n"
                f"{report.recommended_action()}",
                title="Validation",
                expand=False,
            )
        )
        if not report.issues:
            return

        table = Table(title="Issues", show_lines=False)
        table.add_column("Severity")
        table.add_column("Code", style="cyan")
        table.add_column("#", justify="right")
        table.add_column("Message")
        for issue in report.issues[: self.max_issues]:
            severity_style = SEVERITY_STYLES[issue.severity]
            table.add_row(
                f"[{severity_style}]{issue.severity.value}[/{severity_style}]",
                issue.code.value,
                str(issue.element_sequence or "-"),
                escape(issue.message),
            )
        self.console.print(table)
        hidden = len(report.issues) - self.max_issues
        if hidden > 0:
            self.console.print(f"[dim]... and {hidden} more issues[/dim]")

    def print_import(self, result: ImportResult) -> None:
        metadata = result.metadata
        self.console.print(f"[blue]Title:[/blue] {escape(metadata.title or '-')}")
        self.console.print(f"[blue]Author:[/blue] {escape(metadata.author or '-')}")
        counts = Counter(element.type.value for element in result.elements)
        table = Table(title=f"{len(result.elements)} elements")
        table.add_column("Type", style="cyan")
        table.add_column("Count", justify="right")
        for element_type, count in sorted(counts.items()):
            table.add_row(element_type, str(count))
        self.console.print(table)
        if result.auto_fixed_elements:
            self.console.print(
                f"[green]Auto-fixed {len(result.auto_fixed_elements)} elements[/green]"
            )
        elif result.auto_fix_available:
            self.console.print("[yellow]Auto-fix available: rerun with --auto-fix[/yellow]")
        self.print_report(result.validation_report)


class LayoutFormatter(OutputFormatter[PageLayout]):
    """Summarise pages: line usage and the first element on each page."""

    def format(
        self, data: PageLayout, format_type: OutputFormat = OutputFormat.TABLE
    ) -> str:
        if format_type == OutputFormat.JSON:
            from scriptkit.cli.formatters.json_formatter import JsonFormatter

            return JsonFormatter().format(data)
        lines = [f"{data.page_count} pages"]
        for page in data.pages:
            lines.append(
                f"  page {page.number}: {len(page.elements)} elements, "
                f"{page.lines_used} lines"
            )
        return "\n".join(lines)

    def print_table(self, layout: PageLayout) -> None:
        table = Table(title=f"{layout.page_count} pages")
        table.add_column("Page", justify="right")
        table.add_column("Elements", justify="right")
        table.add_column("Lines", justify="right")
        table.add_column("Starts with")
        for page in layout.pages:
            opening = display_text(page.elements[0]) if page.elements else ""
            table.add_row(
                str(page.number),
                str(len(page.elements)),
                str(page.lines_used),
                escape(opening[:50]),
            )
        self.console.print(table)

from __future__ import annotations

from ..models.generation_result import GenerationResult, RowErrorKind

"""SUMMARY line rendering for a generation run."""

__all__ = [
    "format_seconds",
    "render_summary_line",
]


def format_seconds(seconds: float) -> str:
    """Integer seconds without a decimal point, tiny values without exponent."""
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return str(seconds)


def render_summary_line(result: GenerationResult, elapsed_seconds: float) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY rows={source} processed={processed} skipped={skipped}
    missing_field={n} department_not_found={n} invalid_number={n} elapsed_sec={elapsed}

    Examples:
        >>> from payroll_ledger.models import TabularStore
        >>> render_summary_line(GenerationResult(TabularStore(), source_rows=0), 2.0)
        'SUMMARY rows=0 processed=0 skipped=0 missing_field=0 department_not_found=0 invalid_number=0 elapsed_sec=2'
    """
    return (
        f"SUMMARY rows={result.source_rows} "
        f"processed={result.processed_rows} "
        f"skipped={result.skipped_rows} "
        f"missing_field={result.count(RowErrorKind.MISSING_FIELD)} "
        f"department_not_found={result.count(RowErrorKind.DEPARTMENT_NOT_FOUND)} "
        f"invalid_number={result.count(RowErrorKind.INVALID_NUMBER)} "
        f"elapsed_sec={format_seconds(elapsed_seconds)}"
    )

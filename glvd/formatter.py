"""
formatter.py -- Renders GLVD records to terminal tables or JSON.

The format_* functions are pure: they turn decoded records into render
blocks (see glvd.render) tagged with semantic emphasis, and never fail on
well-typed input. The print_* functions are the entry points the CLI uses.
"""

import json
from dataclasses import asdict, is_dataclass
from typing import Any, Optional, TextIO

from .models import CveContext, CveDetail, CveDetailWithContexts, DistroFact, KernelFact, VulnerabilitySummary
from .render import Block, Cell, Column, FieldBlock, Heading, Notice, Table, render_blocks
from .severity import Severity, classify
from .styles import Tag, severity_tag
from .zipper import FLAG_ABSENT, TEXT_ABSENT, zip_ragged

NO_CONTEXT_NOTICE = "No context information available."
NO_VERSIONS_NOTICE = "No Garden Linux versions found."

SUMMARY_COLUMNS = [
    Column("CVE ID", 18),
    Column("Vuln", 4),
    Column("Score", 5),
    Column("Vector String", 46),
    Column("Source Package", 20),
    Column("Version", 20),
]

KERNEL_COLUMNS = [
    Column("LTS Version", 20),
    Column("Fixed Version", 20),
    Column("Is Fixed", 10),
    Column("Relevant Subsystem", 20),
]

DISTRO_COLUMNS = [
    Column("Distro", 25),
    Column("Version", 18),
    Column("Vuln?", 10),
    Column("SourcePkg", 25),
    Column("SourceVer", 25),
    Column("VersionFixed", 20),
]

CVSS_COLUMNS = [
    Column("Version", 18),
    Column("Base Score", 12),
    Column("Vector String", 46),
]

# ---------------------------------------------------------------------------
# Cell helpers
# ---------------------------------------------------------------------------


def _value(text: str) -> Cell:
    return Cell(text, Tag.value)


def _score_cell(score: float, fmt: str) -> Cell:
    """Score text tagged by severity tier; unscored renders as an empty cell."""
    severity = classify(score)
    if severity is Severity.absent:
        return Cell("")
    return Cell(format(score, fmt), severity_tag(severity))


def _vulnerable_cell(flag: bool) -> Cell:
    return Cell("YES", Tag.important) if flag else Cell("no")


# ---------------------------------------------------------------------------
# Summary table
# ---------------------------------------------------------------------------


def format_summaries(summaries: list[VulnerabilitySummary]) -> Table:
    """One row per summary, in the order the service returned them."""
    rows = [
        [
            Cell(s.cve_id),
            _vulnerable_cell(s.is_vulnerable),
            _score_cell(s.base_score, "4.1f"),
            Cell(s.vector_string),
            Cell(s.source_package_name),
            Cell(s.source_package_version),
        ]
        for s in summaries
    ]
    return Table(columns=SUMMARY_COLUMNS, rows=rows)


# ---------------------------------------------------------------------------
# Detail view
# ---------------------------------------------------------------------------


def kernel_facts(detail: CveDetail) -> list[KernelFact]:
    rows = zip_ragged(
        (detail.kernel_lts_version, TEXT_ABSENT),
        (detail.kernel_fixed_version, TEXT_ABSENT),
        (detail.kernel_is_fixed, FLAG_ABSENT),
        (detail.kernel_is_relevant_subsystem, FLAG_ABSENT),
    )
    return [KernelFact(*row) for row in rows]


def distro_facts(detail: CveDetail) -> list[DistroFact]:
    rows = zip_ragged(
        (detail.distro, TEXT_ABSENT),
        (detail.distro_version, TEXT_ABSENT),
        (detail.is_vulnerable, FLAG_ABSENT),
        (detail.source_package_name, TEXT_ABSENT),
        (detail.source_package_version, TEXT_ABSENT),
        (detail.version_fixed, TEXT_ABSENT),
    )
    return [DistroFact(*row) for row in rows]


def _detail_header(d: CveDetail) -> FieldBlock:
    return FieldBlock(
        title=None,
        fields=[
            ("CVE ID", _value(d.cve_id)),
            ("Status", _value(d.vuln_status)),
            ("Description", _value(d.description)),
            ("Published", _value(d.published_date)),
            ("Modified", _value(d.modified_date)),
            ("Ingested", _value(d.ingested_date)),
        ],
    )


def _kernel_table(facts: list[KernelFact]) -> Table:
    rows = [
        [
            _value(f.lts_version),
            _value(f.fixed_version),
            Cell("YES", Tag.fixed) if f.is_fixed else Cell("NO", Tag.important),
            Cell("YES", Tag.important) if f.is_relevant_subsystem else _value("no"),
        ]
        for f in facts
    ]
    return Table(title="=== Kernel Details ===", columns=KERNEL_COLUMNS, rows=rows)


def _distro_table(facts: list[DistroFact]) -> Table:
    rows = [
        [
            _value(f.distro),
            _value(f.distro_version),
            _vulnerable_cell(f.is_vulnerable),
            _value(f.source_package_name),
            _value(f.source_package_version),
            _value(f.version_fixed),
        ]
        for f in facts
    ]
    return Table(title="=== Per-Distro/Package Details ===", columns=DISTRO_COLUMNS, rows=rows)


def _cvss_table(d: CveDetail) -> Table:
    rows = [[_value(c.version), _score_cell(c.score, ".1f"), _value(c.vector)] for c in d.cvss_scores()]
    return Table(title="=== CVSS Scores & Vectors ===", columns=CVSS_COLUMNS, rows=rows)


def _context_block(number: int, ctx: CveContext) -> FieldBlock:
    return FieldBlock(
        title=f"Context #{number}:",
        indent=2,
        blank_after=True,
        fields=[
            ("ID", Cell(str(ctx.id))),
            ("CVE ID", Cell(ctx.cve_id)),
            ("Dist ID", Cell(str(ctx.distribution_id))),
            ("Create Date", Cell(ctx.create_date)),
            ("Use Case", Cell(ctx.use_case)),
            ("Score Override", Cell(f"{ctx.score_override:.2f}")),
            ("Description", Cell(ctx.description)),
            ("Resolved", Cell("true" if ctx.resolved else "false")),
        ],
    )


def format_detail(record: CveDetailWithContexts) -> list[Block]:
    """Blocks for one CVE, always in the same order.

    Header fields, kernel table (only when it has rows), per-distribution
    table, the four CVSS rows, then one block per context or a single
    notice when there are none.
    """
    d = record.details
    blocks: list[Block] = [Heading("=== CVE Details ==="), _detail_header(d)]

    kernel = kernel_facts(d)
    if kernel:
        blocks.append(_kernel_table(kernel))

    blocks.append(_distro_table(distro_facts(d)))
    blocks.append(_cvss_table(d))

    if record.contexts:
        blocks.append(Heading("=== Contexts ==="))
        blocks.extend(_context_block(i, ctx) for i, ctx in enumerate(record.contexts, 1))
    else:
        blocks.append(Notice(NO_CONTEXT_NOTICE))
    return blocks


# ---------------------------------------------------------------------------
# Version list
# ---------------------------------------------------------------------------


def format_versions(versions: list[str]) -> list[Block]:
    if not versions:
        return [Notice(NO_VERSIONS_NOTICE, tag=None)]
    return [Heading("Garden Linux Versions:")] + [Notice(v, indent=2) for v in versions]


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def print_summaries(
    summaries: list[VulnerabilitySummary], out: Optional[TextIO] = None, color: Optional[bool] = None
) -> None:
    render_blocks([format_summaries(summaries)], out, color)


def print_detail(record: CveDetailWithContexts, out: Optional[TextIO] = None, color: Optional[bool] = None) -> None:
    render_blocks(format_detail(record), out, color)


def print_versions(versions: list[str], out: Optional[TextIO] = None, color: Optional[bool] = None) -> None:
    render_blocks(format_versions(versions), out, color)


# ---------------------------------------------------------------------------
# JSON export
# ---------------------------------------------------------------------------


def _plain(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, list):
        return [_plain(o) for o in obj]
    return obj


def to_json(obj: Any) -> str:
    """Serialize decoded records (or lists of them) with snake_case keys."""
    return json.dumps(_plain(obj), indent=2)

from dataclasses import dataclass, field
from typing import NamedTuple

# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------

# Canonical CVE ID format. The CLI validates ids against it before any request.
CVE_PATTERN = r"^CVE-\d{4}-\d{4,}$"

# CVSS schema versions in display order, newest first.
CVSS_VERSIONS = ("V4.0", "V3.1", "V3.0", "V2.0")


@dataclass(frozen=True)
class VulnerabilitySummary:
    """One source package / CVE pairing for a Garden Linux release."""

    cve_id: str
    base_score: float = 0.0  # 0 means not yet scored
    vector_string: str = ""
    source_package_name: str = ""
    source_package_version: str = ""
    distribution_version: str = ""
    is_vulnerable: bool = False
    published_date: str = ""


@dataclass(frozen=True)
class CvssScore:
    version: str
    score: float = 0.0
    vector: str = ""


class KernelFact(NamedTuple):
    lts_version: str
    fixed_version: str
    is_fixed: bool
    is_relevant_subsystem: bool


class DistroFact(NamedTuple):
    distro: str
    distro_version: str
    is_vulnerable: bool
    source_package_name: str
    source_package_version: str
    version_fixed: str


@dataclass(frozen=True)
class CveDetail:
    """Distribution-independent detail record for one CVE.

    The kernel and per-distribution fields are parallel lists as delivered by
    the service: index i across one group describes one fact, but the lists
    are not guaranteed to have equal length.
    """

    cve_id: str
    vuln_status: str = ""
    description: str = ""
    published_date: str = ""
    modified_date: str = ""
    ingested_date: str = ""

    kernel_lts_version: list[str] = field(default_factory=list)
    kernel_fixed_version: list[str] = field(default_factory=list)
    kernel_is_fixed: list[bool] = field(default_factory=list)
    kernel_is_relevant_subsystem: list[bool] = field(default_factory=list)

    distro: list[str] = field(default_factory=list)
    distro_version: list[str] = field(default_factory=list)
    is_vulnerable: list[bool] = field(default_factory=list)
    source_package_name: list[str] = field(default_factory=list)
    source_package_version: list[str] = field(default_factory=list)
    version_fixed: list[str] = field(default_factory=list)

    cvss_v40: CvssScore = field(default_factory=lambda: CvssScore("V4.0"))
    cvss_v31: CvssScore = field(default_factory=lambda: CvssScore("V3.1"))
    cvss_v30: CvssScore = field(default_factory=lambda: CvssScore("V3.0"))
    cvss_v2: CvssScore = field(default_factory=lambda: CvssScore("V2.0"))

    def cvss_scores(self) -> list[CvssScore]:
        """All four CVSS score/vector pairs, newest schema first."""
        return [self.cvss_v40, self.cvss_v31, self.cvss_v30, self.cvss_v2]


@dataclass(frozen=True)
class CveContext:
    """An annotation on a CVE for one Garden Linux release."""

    id: int
    cve_id: str
    distribution_id: int = 0
    create_date: str = ""
    use_case: str = ""
    score_override: float = 0.0
    description: str = ""
    resolved: bool = False


@dataclass(frozen=True)
class CveDetailWithContexts:
    details: CveDetail
    contexts: list[CveContext] = field(default_factory=list)

"""
decoder.py -- Turns decoded GLVD JSON into the typed records in glvd.models.

The service represents "unknown" as empty strings, zero values or empty
lists; null and missing keys are normalized to the same zero values here so
nothing downstream needs to handle None. A payload of the wrong shape raises
DecodeError.
"""

from typing import Any, Callable, TypeVar

from .models import CveContext, CveDetail, CveDetailWithContexts, CvssScore, VulnerabilitySummary

T = TypeVar("T")


class DecodeError(ValueError):
    """Raised when a GLVD response does not have the expected shape."""


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _str(raw: dict, key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"Expected string for {key!r}, got {type(value).__name__}")
    return value


def _float(raw: dict, key: str) -> float:
    value = raw.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"Expected number for {key!r}, got {type(value).__name__}")
    return float(value)


def _int(raw: dict, key: str) -> int:
    value = raw.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"Expected integer for {key!r}, got {type(value).__name__}")
    return value


def _bool(raw: dict, key: str) -> bool:
    value = raw.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DecodeError(f"Expected boolean for {key!r}, got {type(value).__name__}")
    return value


def _list(raw: dict, key: str, item: Callable[[dict, str], T]) -> list[T]:
    """Decode a JSON array under key, converting each element with item()."""
    values = raw.get(key)
    if values is None:
        return []
    if not isinstance(values, list):
        raise DecodeError(f"Expected array for {key!r}, got {type(values).__name__}")
    return [item({key: v}, key) for v in values]


def _object(raw: Any, what: str) -> dict:
    if not isinstance(raw, dict):
        raise DecodeError(f"Expected JSON object for {what}, got {type(raw).__name__}")
    return raw


def _array(raw: Any, what: str) -> list:
    if not isinstance(raw, list):
        raise DecodeError(f"Expected JSON array for {what}, got {type(raw).__name__}")
    return raw


def _cve_id(raw: dict) -> str:
    cve_id = _str(raw, "cveId")
    if not cve_id:
        raise DecodeError("Record is missing its cveId")
    return cve_id


# ---------------------------------------------------------------------------
# Public decoders
# ---------------------------------------------------------------------------


def decode_versions(raw: Any) -> list[str]:
    """Decode the /gardenlinuxVersions response: a JSON array of labels."""
    return _list({"versions": _array(raw, "version list")}, "versions", _str)


def decode_summaries(raw: Any, vulnerable_field: str = "vulnerable") -> list[VulnerabilitySummary]:
    """Decode the /cves/{version} response, preserving the service's order.

    vulnerable_field names the JSON key that carries the vulnerability flag;
    it is a deployment setting (see glvd.config), not guessed per record.
    """
    summaries = []
    for entry in _array(raw, "CVE list"):
        entry = _object(entry, "CVE list entry")
        summaries.append(
            VulnerabilitySummary(
                cve_id=_cve_id(entry),
                base_score=_float(entry, "baseScore"),
                vector_string=_str(entry, "vectorString"),
                source_package_name=_str(entry, "sourcePackageName"),
                source_package_version=_str(entry, "sourcePackageVersion"),
                distribution_version=_str(entry, "gardenlinuxVersion"),
                is_vulnerable=_bool(entry, vulnerable_field),
                published_date=_str(entry, "cvePublishedDate"),
            )
        )
    return summaries


def _decode_context(raw: Any) -> CveContext:
    raw = _object(raw, "CVE context")
    return CveContext(
        id=_int(raw, "id"),
        cve_id=_str(raw, "cveId"),
        distribution_id=_int(raw, "distId"),
        create_date=_str(raw, "createDate"),
        use_case=_str(raw, "useCase"),
        score_override=_float(raw, "scoreOverride"),
        description=_str(raw, "description"),
        resolved=_bool(raw, "resolved"),
    )


def decode_detail(raw: Any) -> CveDetailWithContexts:
    """Decode the /cveDetails/{cveId} envelope: {"details": {...}, "contexts": [...]}."""
    envelope = _object(raw, "CVE details response")
    d = _object(envelope.get("details"), "CVE details")

    details = CveDetail(
        cve_id=_cve_id(d),
        vuln_status=_str(d, "vulnStatus"),
        description=_str(d, "description"),
        published_date=_str(d, "cvePublishedDate"),
        modified_date=_str(d, "cveModifiedDate"),
        ingested_date=_str(d, "cveIngestedDate"),
        kernel_lts_version=_list(d, "kernelLtsVersion", _str),
        kernel_fixed_version=_list(d, "kernelFixedVersion", _str),
        kernel_is_fixed=_list(d, "kernelIsFixed", _bool),
        kernel_is_relevant_subsystem=_list(d, "kernelIsRelevantSubsystem", _bool),
        distro=_list(d, "distro", _str),
        distro_version=_list(d, "distroVersion", _str),
        is_vulnerable=_list(d, "isVulnerable", _bool),
        source_package_name=_list(d, "sourcePackageName", _str),
        source_package_version=_list(d, "sourcePackageVersion", _str),
        version_fixed=_list(d, "versionFixed", _str),
        cvss_v40=CvssScore("V4.0", _float(d, "baseScoreV40"), _str(d, "vectorStringV40")),
        cvss_v31=CvssScore("V3.1", _float(d, "baseScoreV31"), _str(d, "vectorStringV31")),
        cvss_v30=CvssScore("V3.0", _float(d, "baseScoreV30"), _str(d, "vectorStringV30")),
        cvss_v2=CvssScore("V2.0", _float(d, "baseScoreV2"), _str(d, "vectorStringV2")),
    )

    contexts = envelope.get("contexts")
    if contexts is None:
        contexts = []
    return CveDetailWithContexts(
        details=details,
        contexts=[_decode_context(c) for c in _array(contexts, "CVE contexts")],
    )

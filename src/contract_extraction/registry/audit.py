# ============================================================================
# src/contract_extraction/registry/audit.py
# ============================================================================
"""
Registry Audit

Static checks on a loaded registry, run before deploying an edited file:

1. Every pattern compiles and has a capture group (errors)
2. Patterns use a named `value` group (warning if they rely on group 1)
3. Profiles have positive cues, no duplicates, no cue both positive and negative
4. Every document type has at least one field, every field at least one pattern
5. Positive cues shared between types (info: they cannot tell types apart)
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List

import regex

from .models import TypeRegistry


@dataclass
class AuditReport:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    info: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class RegistryAuditor:
    """Audits a TypeRegistry without running it against documents."""

    def audit(self, registry: TypeRegistry) -> AuditReport:
        report = AuditReport()
        self._check_profiles(registry, report)
        self._check_fields(registry, report)
        self._check_shared_cues(registry, report)
        return report

    def _check_profiles(self, registry: TypeRegistry, report: AuditReport):
        for profile in registry.profiles:
            if not profile.positive_cues:
                report.errors.append(f"{profile.name}: no positive cues, type can never be selected")

            lowered = [c.strip().lower() for c in profile.positive_cues]
            duplicates = sorted({c for c in lowered if lowered.count(c) > 1})
            if duplicates:
                report.warnings.append(f"{profile.name}: duplicate positive cues {duplicates}")

            conflicting = sorted(set(lowered) & {c.strip().lower() for c in profile.negative_cues})
            if conflicting:
                report.errors.append(f"{profile.name}: cues both positive and negative {conflicting}")

            if not registry.has_fields_for(profile.name):
                report.warnings.append(f"{profile.name}: no field definitions, pattern matching is skipped")

    def _check_fields(self, registry: TypeRegistry, report: AuditReport):
        for definition in registry.fields:
            if not definition.applicable_types:
                report.warnings.append(f"{definition.key}: not applicable to any document type")
            if not definition.patterns:
                report.warnings.append(f"{definition.key}: no patterns")

            for spec in definition.patterns:
                try:
                    compiled = regex.compile(spec.pattern, regex.IGNORECASE if spec.ignore_case else 0)
                except regex.error as e:
                    report.errors.append(f"{definition.key}: invalid pattern {spec.pattern!r} ({e})")
                    continue

                if "value" not in compiled.groupindex:
                    if compiled.groups == 0:
                        report.errors.append(f"{definition.key}: pattern {spec.pattern!r} has no capture group")
                    else:
                        report.warnings.append(
                            f"{definition.key}: pattern {spec.pattern!r} has no 'value' group, using group 1"
                        )

    def _check_shared_cues(self, registry: TypeRegistry, report: AuditReport):
        owners: Dict[str, List[str]] = defaultdict(list)
        for profile in registry.profiles:
            for cue in {c.strip().lower() for c in profile.positive_cues}:
                owners[cue].append(profile.name)

        for cue in sorted(owners):
            if len(owners[cue]) > 1:
                report.info.append(f"cue '{cue}' shared by {', '.join(owners[cue])}")

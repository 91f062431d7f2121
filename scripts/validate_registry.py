#!/usr/bin/env python3
"""
Registry Validation and Audit Script

Validates the contract type / field registry for:
1. Schema errors (unknown types, duplicate names or keys, blank patterns)
2. Patterns that do not compile or have no capture group
3. Profiles without cues, with duplicate cues, or without fields
4. Positive cues shared across document types

Usage:
    python scripts/validate_registry.py
    python scripts/validate_registry.py --path data/registry/contract_types.yaml
    python scripts/validate_registry.py --verbose  # Show detailed info
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.contract_extraction.config import pipeline_settings  # noqa: E402
from src.contract_extraction.registry import RegistryAuditor, load_registry  # noqa: E402
from src.contract_extraction.utils.exceptions import RegistryError  # noqa: E402


class RegistryValidator:
    """Loads a registry file and prints the audit."""

    def __init__(self, registry_path: Path, verbose: bool = False):
        self.registry_path = registry_path
        self.verbose = verbose
        self.errors = []
        self.warnings = []
        self.info = []

    def validate(self):
        print(f"\n{'=' * 60}")
        print(f"Validating registry: {self.registry_path}")
        print(f"{'=' * 60}\n")

        try:
            registry = load_registry(self.registry_path)
        except RegistryError as e:
            self.errors.append(str(e))
            print(f"  ERROR: {e}")
            self._print_summary()
            return len(self.errors), len(self.warnings), len(self.info)

        report = RegistryAuditor().audit(registry)
        self.errors.extend(report.errors)
        self.warnings.extend(report.warnings)
        self.info.extend(report.info)

        for error in report.errors:
            print(f"  ERROR: {error}")
        for warning in report.warnings:
            print(f"  WARNING: {warning}")

        if self.verbose:
            print()
            for profile in registry.profiles:
                fields = [f.key for f in registry.fields_for(profile.name)]
                print(f"  {profile.name}: {len(profile.positive_cues)} cues, fields={fields}")
            for line in report.info:
                print(f"  INFO: {line}")

        self._print_summary(len(registry.profiles), len(registry.fields))
        return len(self.errors), len(self.warnings), len(self.info)

    def _print_summary(self, type_count: int = 0, field_count: int = 0):
        print(f"\n{'=' * 60}")
        print("SUMMARY")
        print(f"{'=' * 60}")
        print(f"  Document types: {type_count}")
        print(f"  Fields: {field_count}")
        print(f"  Errors: {len(self.errors)}")
        print(f"  Warnings: {len(self.warnings)}")
        print(f"  Info: {len(self.info)}")


def main():
    parser = argparse.ArgumentParser(description="Validate the contract type registry")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show detailed info")
    parser.add_argument("--path", type=str, help="Custom registry path")
    args = parser.parse_args()

    registry_path = Path(args.path) if args.path else pipeline_settings.registry_file

    validator = RegistryValidator(registry_path, verbose=args.verbose)
    errors, warnings, _ = validator.validate()

    if errors > 0:
        sys.exit(1)
    if warnings == 0:
        print("Registry is valid!")
    sys.exit(0)


if __name__ == "__main__":
    main()

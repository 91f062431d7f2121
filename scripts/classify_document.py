#!/usr/bin/env python3
"""
Classify a document and show the prompt it would be sent with.

Runs the pure part of the pipeline (classification, pattern candidates,
enhanced prompt) against a text file. No LLM call is made.

Usage:
    python scripts/classify_document.py contract.txt
    python scripts/classify_document.py contract.txt --filename "Lease Supplement 12.pdf"
    python scripts/classify_document.py contract.txt --prompt-file base_prompt.txt --json
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.contract_extraction.config import logging_settings, pipeline_settings  # noqa: E402
from src.contract_extraction.core.orchestrator import ExtractionOrchestrator  # noqa: E402
from src.contract_extraction.extractors import PatternMatcher  # noqa: E402
from src.contract_extraction.registry import load_registry  # noqa: E402
from src.contract_extraction.utils import RegistryError, setup_logging  # noqa: E402


DEFAULT_BASE_PROMPT = "Extract the contract fields from the document below and answer with a JSON object."


def main():
    parser = argparse.ArgumentParser(description="Classify a contract text file")
    parser.add_argument("text_file", type=str, help="Plain-text document")
    parser.add_argument("--filename", type=str, help="Original filename (defaults to the text file name)")
    parser.add_argument("--registry", type=str, help="Custom registry path")
    parser.add_argument("--prompt-file", type=str, help="File holding the base extraction prompt")
    parser.add_argument("--max-snippets", type=int, default=20, help="Candidate snippets to list")
    parser.add_argument("--json", action="store_true", help="Print the classification as JSON only")
    args = parser.parse_args()

    setup_logging(logging_settings)

    text_path = Path(args.text_file)
    if not text_path.exists():
        print(f"ERROR: Document not found: {text_path}")
        sys.exit(1)

    registry_path = Path(args.registry) if args.registry else pipeline_settings.registry_file
    try:
        registry = load_registry(registry_path)
    except RegistryError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    base_prompt = DEFAULT_BASE_PROMPT
    if args.prompt_file:
        base_prompt = Path(args.prompt_file).read_text(encoding="utf-8")

    orchestrator = ExtractionOrchestrator(
        registry,
        matcher=PatternMatcher(timeout_seconds=pipeline_settings.PATTERN_TIMEOUT_SECONDS),
    )
    text = text_path.read_text(encoding="utf-8", errors="replace")
    prepared = orchestrator.prepare(text, args.filename or text_path.name, base_prompt)

    if args.json:
        print(json.dumps(prepared.classification.to_dict(), indent=2))
        return

    classification = prepared.classification
    print(f"\n{'=' * 60}")
    print(f"Document: {text_path.name}")
    print(f"{'=' * 60}")
    print(f"  Type: {classification.type}")
    print(f"  Confidence: {classification.confidence:.3f}")
    print(f"  Cues: {', '.join(classification.detected_cues) or '-'}")
    for alternative in classification.alternative_types:
        print(f"    {alternative.type}: {alternative.score}")

    snippets = PatternMatcher.build_context_snippets(prepared.candidates, max_snippets=args.max_snippets)
    print(f"\n{'=' * 60}")
    print(f"Candidates ({len(snippets)})")
    print(f"{'=' * 60}")
    for snippet in snippets:
        print(f"  {snippet['field']}: {snippet['value']!r}")
        print(f"      ...{snippet['context']}...")

    print(f"\n{'=' * 60}")
    print("Enhanced prompt")
    print(f"{'=' * 60}")
    print(prepared.prompt)


if __name__ == "__main__":
    main()

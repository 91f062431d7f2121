# ============================================================================
# src/contract_extraction/classifiers/__init__.py
# ============================================================================

from .document_classifier import DocumentClassifier, ProfileScore, classify, score_to_confidence

__all__ = ["DocumentClassifier", "ProfileScore", "classify", "score_to_confidence"]

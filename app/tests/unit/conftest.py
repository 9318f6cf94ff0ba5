"""
Central conftest.py for all unit tests in the app.

This file contains fixtures that are common to all unit tests.
"""

import pytest

from app.domain.services.response_normalizer import ResponseNormalizer
from app.domain.services.severity_classifier import SeverityClassifier


@pytest.fixture
def normalizer() -> ResponseNormalizer:
    return ResponseNormalizer()


@pytest.fixture
def classifier() -> SeverityClassifier:
    return SeverityClassifier()

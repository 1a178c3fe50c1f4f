"""
Tests for error classification.

Run with:
    python -m pytest tests/test_errors.py -v
"""

import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.video_generation.errors import (
    CredentialError,
    ErrorKind,
    OperationCancelledError,
    OperationTimeoutError,
    VideoGenerationError,
    classify_error,
    signature_predicate,
)


class TestSignaturePredicate:
    """Credential detection by message substring."""

    def test_default_signature_matches(self):
        """Test that the default signature is recognised."""
        predicate = signature_predicate()
        assert predicate(Exception("404 NOT_FOUND. Requested entity was not found."))

    def test_default_signature_ignores_other_errors(self):
        """Test that unrelated messages are not credential errors."""
        predicate = signature_predicate()
        assert not predicate(Exception("500 INTERNAL"))
        assert not predicate(Exception(""))

    def test_custom_signatures(self):
        """Test that custom signatures replace the default."""
        predicate = signature_predicate(["API_KEY_INVALID", "PERMISSION_DENIED"])
        assert predicate(RuntimeError("400 API_KEY_INVALID"))
        assert predicate(RuntimeError("403 PERMISSION_DENIED"))
        assert not predicate(RuntimeError("Requested entity was not found."))

    def test_empty_signatures_never_match(self):
        """Test that blank signatures never match."""
        predicate = signature_predicate(["", ""])
        assert not predicate(Exception("anything"))

    def test_single_string_is_one_signature(self):
        """Test that a single string is treated as one signature."""
        predicate = signature_predicate("Requested entity was not found.")
        assert predicate(Exception("404 Requested entity was not found."))
        assert not predicate(Exception("network down"))


class TestClassifyError:
    """Mapping raw failures onto the two-kind taxonomy."""

    @pytest.fixture
    def predicate(self):
        return signature_predicate()

    def test_credential_failure(self, predicate):
        """Test that a matching failure becomes a CredentialError."""
        error = classify_error(Exception("Requested entity was not found."), predicate)

        assert isinstance(error, CredentialError)
        assert error.kind == ErrorKind.CREDENTIAL
        assert error.kind.value == "credential-error"
        assert error.error_code == "INVALID_API_KEY"

    def test_generic_failure_keeps_message(self, predicate):
        """Test that other failures keep their message and type name."""
        error = classify_error(ConnectionError("connection reset by peer"), predicate)

        assert type(error) is VideoGenerationError
        assert error.kind == ErrorKind.GENERIC
        assert error.message == "connection reset by peer"
        assert error.error_code == "ConnectionError"

    def test_empty_message_uses_type_name(self, predicate):
        """Test that an empty message falls back to the exception type name."""
        error = classify_error(TimeoutError(), predicate)
        assert str(error) == "TimeoutError"

    def test_already_classified_passes_through(self, predicate):
        """Test that an already classified error is returned unchanged."""
        original = VideoGenerationError("No previous video found to extend.", error_code="NO_PRIOR_RESULT")
        assert classify_error(original, predicate) is original

    def test_injected_predicate_is_used(self):
        """Test that the injected predicate decides the kind."""
        error = classify_error(Exception("whatever"), lambda exc: True)
        assert isinstance(error, CredentialError)

    def test_timeout_and_cancel_are_generic(self):
        """Test that timeout and cancellation are generic errors."""
        assert OperationTimeoutError("late").kind == ErrorKind.GENERIC
        assert OperationTimeoutError("late").error_code == "TIMEOUT"
        assert OperationCancelledError().kind == ErrorKind.GENERIC
        assert OperationCancelledError().error_code == "CANCELLED"

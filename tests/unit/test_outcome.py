"""
Unit tests for Outcome and response classification.
"""
# [CTX:PBI-1:1-5:OUTCOME]

from unittest.mock import MagicMock

import pytest

from tempo_client.core import BodyDecoder, DecodeError, Outcome, ServerError, classify, is_success
from tempo_client.models import Nothing, NothingDecoder, Series, SeriesDecoder
from tests.fixtures import SERIES_BODY, response


class TestIsSuccess:
    """Tests for status classification."""

    @pytest.mark.parametrize("code", [200, 201, 204, 299])
    def test_2xx_is_success(self, code):
        assert is_success(code)

    @pytest.mark.parametrize("code", [100, 199, 301, 304, 400, 403, 404, 500, 503])
    def test_other_codes_fail(self, code):
        assert not is_success(code)


class TestClassify:
    """Tests for classify()."""

    def test_forbidden_is_failure_with_raw_body(self):
        """A 403 keeps its body verbatim and never reaches the decoder."""
        decoder = MagicMock(spec=BodyDecoder)

        outcome = classify(response(403, "You are forbidden"), decoder)

        assert outcome.success is False
        assert outcome.code == 403
        assert outcome.message == "You are forbidden"
        assert outcome.value is None
        decoder.decode.assert_not_called()

    def test_html_error_body_not_parsed(self):
        """Non-JSON error bodies are fine."""
        outcome = classify(response(500, "<html>oops</html>"), SeriesDecoder())

        assert outcome == Outcome.failure(500, "<html>oops</html>")

    def test_success_decodes_value(self):
        outcome = classify(response(200, SERIES_BODY), SeriesDecoder())

        assert outcome.success is True
        assert outcome.code == 200
        assert outcome.message == ""
        assert outcome.value == Series(
            key="key1", id="id1", name="Key One", tags=["a"], attributes={"host": "web1"}
        )

    def test_success_with_empty_body(self):
        outcome = classify(response(204, ""), NothingDecoder())

        assert outcome == Outcome.ok(Nothing())

    def test_malformed_success_body_raises(self):
        """Decode failures on 2xx are fatal, not failures."""
        with pytest.raises(DecodeError):
            classify(response(200, "{not json"), SeriesDecoder())


class TestOutcome:
    """Tests for Outcome semantics."""

    def test_equality_is_structural(self):
        assert Outcome.ok(Nothing()) == Outcome(value=Nothing(), success=True, message="")
        assert Outcome.failure(403, "no") == Outcome.failure(403, "no")
        assert Outcome.failure(403, "no") != Outcome.failure(403, "yes")

    def test_equality_ignores_code(self):
        assert Outcome.failure(403, "no") == Outcome.failure(401, "no")

    def test_unwrap_success(self):
        assert Outcome.ok(Nothing()).unwrap() == Nothing()

    def test_unwrap_failure_raises(self):
        with pytest.raises(ServerError) as exc_info:
            Outcome.failure(403, "You are forbidden").unwrap()

        assert exc_info.value.code == 403
        assert exc_info.value.message == "You are forbidden"

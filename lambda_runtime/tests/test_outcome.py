import copy

import pytest

from lambda_runtime.core.exceptions import ContractViolationError
from lambda_runtime.core.http_response import ResponseCode
from lambda_runtime.core.outcome import Outcome
from lambda_runtime.models.invocation import InvocationRequest


class TestOutcome:
    def test_success_exposes_only_result(self):
        outcome = Outcome.success("payload")

        assert outcome.is_success() is True
        assert outcome.get_result() == "payload"
        with pytest.raises(ContractViolationError):
            outcome.get_failure()

    def test_failure_exposes_only_failure(self):
        outcome = Outcome.failure(ResponseCode.REQUEST_NOT_MADE)

        assert outcome.is_success() is False
        assert outcome.get_failure() == -1
        with pytest.raises(ContractViolationError):
            outcome.get_result()

    def test_success_with_none_result(self):
        """A post outcome carries no result value but is still a success."""
        outcome = Outcome.success(None)

        assert outcome.is_success() is True
        assert outcome.get_result() is None

    def test_discriminant_is_immutable(self):
        outcome = Outcome.failure(500)

        with pytest.raises(AttributeError):
            outcome._success = True
        assert outcome.is_success() is False

    def test_copy_preserves_active_side(self):
        original = Outcome.failure(503)

        for duplicate in (original.copy(), copy.copy(original)):
            assert duplicate is not original
            assert duplicate.is_success() is False
            assert duplicate.get_failure() == 503
            assert duplicate == original

    def test_success_and_failure_with_same_value_differ(self):
        assert Outcome.success(1) != Outcome.failure(1)

    def test_outcome_is_unhashable(self):
        outcome = Outcome.success(InvocationRequest(request_id="req-1"))

        with pytest.raises(TypeError):
            hash(outcome)

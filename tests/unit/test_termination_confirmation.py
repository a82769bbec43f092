"""Unit tests for instance termination and confirmation polling.

Tests confirm_termination() and terminate_packer_instances().
"""

from __future__ import annotations
import pytest
from unittest.mock import Mock, call, patch

from packer_resource_cleanup.ec2.instances import (
    confirm_termination,
    terminate_packer_instances,
)
from packer_resource_cleanup.exceptions import (
    TerminationError,
    TerminationTimeoutError,
)


@patch("packer_resource_cleanup.ec2.instances.time.sleep")
class TestConfirmTermination:
    """Test the bounded poll loop."""

    def test_confirmations_across_rounds(self, mock_sleep):
        """
        GIVEN i-2 terminates in round 1 and i-1 in round 2
        WHEN confirm_termination is called
        THEN it should succeed after 2 polls, querying only pending ids
        """
        provider = Mock()
        provider.query_instance_state.side_effect = [
            {"i-1": "shutting-down", "i-2": "terminated"},
            {"i-1": "terminated"},
        ]

        polls = confirm_termination(provider, ["i-1", "i-2"])

        assert polls == 2
        assert provider.query_instance_state.call_args_list == [
            call(["i-1", "i-2"]),
            call(["i-1"]),
        ]
        mock_sleep.assert_called_once_with(30)

    def test_adjacent_ids_confirmed_in_same_round(self, mock_sleep):
        """
        GIVEN two adjacent ids confirmed in the same poll response
        WHEN confirm_termination is called
        THEN neither should be skipped and only the third stays pending
        """
        provider = Mock()
        provider.query_instance_state.side_effect = [
            {"i-1": "terminated", "i-2": "terminated", "i-3": "shutting-down"},
            {"i-3": "terminated"},
        ]

        polls = confirm_termination(provider, ["i-1", "i-2", "i-3"])

        assert polls == 2
        assert provider.query_instance_state.call_args_list[1] == call(["i-3"])

    def test_response_order_does_not_matter(self, mock_sleep):
        """
        GIVEN a response listing instances in a different order than requested
        WHEN confirm_termination is called
        THEN matching is done by id, not position
        """
        provider = Mock()
        provider.query_instance_state.side_effect = [
            {"i-3": "terminated", "i-1": "shutting-down", "i-2": "terminated"},
            {"i-1": "terminated"},
        ]

        assert confirm_termination(provider, ["i-1", "i-2", "i-3"]) == 2
        assert provider.query_instance_state.call_args_list[1] == call(["i-1"])

    def test_all_confirmed_first_round_does_not_sleep(self, mock_sleep):
        provider = Mock()
        provider.query_instance_state.return_value = {
            "i-1": "terminated",
            "i-2": "terminated",
        }

        assert confirm_termination(provider, ["i-1", "i-2"]) == 1
        mock_sleep.assert_not_called()

    def test_times_out_naming_unconfirmed_ids(self, mock_sleep):
        """
        GIVEN i-3 never reports terminated
        WHEN confirm_termination runs out of attempts
        THEN TerminationTimeoutError should name exactly i-3
        """
        provider = Mock()
        provider.query_instance_state.side_effect = [
            {"i-1": "terminated", "i-3": "shutting-down"}
        ] + [{"i-3": "shutting-down"}] * 19

        with pytest.raises(TerminationTimeoutError) as exc_info:
            confirm_termination(provider, ["i-1", "i-3"])

        assert exc_info.value.pending_ids == ["i-3"]
        assert exc_info.value.attempts == 20
        assert "i-3" in str(exc_info.value)
        assert provider.query_instance_state.call_count == 20
        assert mock_sleep.call_count == 19

    def test_missing_from_response_stays_pending(self, mock_sleep):
        """
        GIVEN an instance absent from the status response
        WHEN confirm_termination is called
        THEN it is treated as not yet terminated
        """
        provider = Mock()
        provider.query_instance_state.return_value = {}

        with pytest.raises(TerminationTimeoutError) as exc_info:
            confirm_termination(provider, ["i-gone"], max_attempts=3, poll_interval=5)

        assert exc_info.value.pending_ids == ["i-gone"]
        assert mock_sleep.call_args_list == [call(5), call(5)]

    def test_query_error_propagates_immediately(self, mock_sleep):
        """
        GIVEN the state query fails
        WHEN confirm_termination is called
        THEN the error propagates without further polling
        """
        provider = Mock()
        provider.query_instance_state.side_effect = TerminationError("throttled")

        with pytest.raises(TerminationError, match="throttled"):
            confirm_termination(provider, ["i-1"])

        assert provider.query_instance_state.call_count == 1
        mock_sleep.assert_not_called()

    def test_duplicate_ids_polled_once(self, mock_sleep):
        provider = Mock()
        provider.query_instance_state.return_value = {"i-1": "terminated"}

        confirm_termination(provider, ["i-1", "i-1"])

        provider.query_instance_state.assert_called_once_with(["i-1"])


@patch("packer_resource_cleanup.ec2.instances.time.sleep")
class TestTerminatePackerInstances:
    """Test the terminate request followed by confirmation."""

    def test_terminate_then_confirm(self, mock_sleep):
        provider = Mock()
        provider.terminate_instances.return_value = {
            "i-1": "shutting-down",
            "i-2": "shutting-down",
        }
        provider.query_instance_state.return_value = {
            "i-1": "terminated",
            "i-2": "terminated",
        }

        polls = terminate_packer_instances(provider, ["i-1", "i-2"])

        assert polls == 1
        provider.terminate_instances.assert_called_once_with(["i-1", "i-2"])
        provider.query_instance_state.assert_called_once_with(["i-1", "i-2"])

    def test_no_instances_makes_no_calls(self, mock_sleep):
        provider = Mock()

        assert terminate_packer_instances(provider, []) == 0
        provider.terminate_instances.assert_not_called()
        provider.query_instance_state.assert_not_called()

    def test_terminate_request_error_skips_confirmation(self, mock_sleep):
        """
        GIVEN the terminate request fails
        WHEN terminate_packer_instances is called
        THEN the error propagates and no polling happens
        """
        provider = Mock()
        provider.terminate_instances.side_effect = TerminationError("denied")

        with pytest.raises(TerminationError, match="denied"):
            terminate_packer_instances(provider, ["i-1"])

        provider.query_instance_state.assert_not_called()

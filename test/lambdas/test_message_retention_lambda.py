#!/usr/bin/env python3
import os
from datetime import datetime, timezone
from unittest.mock import Mock, patch

import pytest

from tutorhub_backend.lambdas.message_retention_lambda import (
    MessageRetentionJobHandler,
    message_retention_lambda_handler,
)


def create_message_retention_job_handler(messages_table=None, retention_months: int = 12) -> MessageRetentionJobHandler:
    if messages_table is None:
        messages_table = Mock()
        messages_table.delete_messages_created_before.return_value = 0
    handler = MessageRetentionJobHandler(messages_table=messages_table, retention_months=retention_months)
    assert handler.messages_table == messages_table
    assert handler.retention_months == retention_months
    return handler


def test_handler_initialization():
    create_message_retention_job_handler()


def test_handle_with_reference_time():
    messages_table = Mock()
    messages_table.delete_messages_created_before.return_value = 7
    handler = create_message_retention_job_handler(messages_table)

    result = handler.handle({"referenceTime": "2025-03-15T00:00:00+00:00"})

    messages_table.delete_messages_created_before.assert_called_once_with(datetime(2024, 3, 15, tzinfo=timezone.utc))
    assert result == {
        "referenceTime": "2025-03-15T00:00:00+00:00",
        "cutoff": "2024-03-15T00:00:00+00:00",
        "retentionMonths": 12,
        "deletedCount": 7,
    }


def test_handle_custom_retention_clamps_month_end():
    messages_table = Mock()
    messages_table.delete_messages_created_before.return_value = 0
    handler = create_message_retention_job_handler(messages_table, retention_months=1)

    result = handler.handle({"referenceTime": "2025-03-31T12:00:00Z"})

    messages_table.delete_messages_created_before.assert_called_once_with(
        datetime(2025, 2, 28, 12, 0, tzinfo=timezone.utc)
    )
    assert result["cutoff"] == "2025-02-28T12:00:00+00:00"
    assert result["retentionMonths"] == 1


def test_handle_naive_reference_time_is_utc():
    handler = create_message_retention_job_handler(retention_months=6)

    result = handler.handle({"referenceTime": "2025-03-15T00:00:00"})

    assert result["referenceTime"] == "2025-03-15T00:00:00+00:00"
    assert result["cutoff"] == "2024-09-15T00:00:00+00:00"


def test_handle_defaults_to_now():
    messages_table = Mock()
    messages_table.delete_messages_created_before.return_value = 0
    handler = create_message_retention_job_handler(messages_table)

    before = datetime.now(timezone.utc)
    result = handler.handle({})

    (cutoff,), _ = messages_table.delete_messages_created_before.call_args
    assert cutoff.tzinfo is not None
    assert cutoff < before
    assert datetime.fromisoformat(result["referenceTime"]) >= before


def test_handle_invalid_reference_time():
    messages_table = Mock()
    handler = create_message_retention_job_handler(messages_table)

    with pytest.raises(ValueError, match="referenceTime"):
        handler.handle({"referenceTime": "last tuesday"})

    messages_table.delete_messages_created_before.assert_not_called()


@patch("tutorhub_backend.lambdas.message_retention_lambda.MessagesTable")
@patch.dict(os.environ, {"MESSAGING_RETENTION_MONTHS": "6"})
def test_lambda_handler_uses_configuration(mock_messages_table_cls):
    mock_messages_table_cls.return_value.delete_messages_created_before.return_value = 3

    result = message_retention_lambda_handler({"referenceTime": "2025-03-15T00:00:00Z"}, None)

    mock_messages_table_cls.assert_called_once_with("test-messages-table")
    assert result["retentionMonths"] == 6
    assert result["cutoff"] == "2024-09-15T00:00:00+00:00"
    assert result["deletedCount"] == 3


@patch("tutorhub_backend.lambdas.message_retention_lambda.MessagesTable")
@patch.dict(os.environ, {"MESSAGING_RETENTION_MONTHS": "never"})
def test_lambda_handler_configuration_error(mock_messages_table_cls):
    with pytest.raises(ValueError, match="MESSAGING_RETENTION_MONTHS"):
        message_retention_lambda_handler({}, None)


@patch("tutorhub_backend.lambdas.message_retention_lambda.MessagesTable")
def test_lambda_handler_propagates_table_errors(mock_messages_table_cls):
    mock_messages_table_cls.return_value.delete_messages_created_before.side_effect = RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        message_retention_lambda_handler({"referenceTime": "2025-03-15T00:00:00Z"}, None)

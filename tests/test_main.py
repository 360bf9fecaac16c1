#!/usr/bin/env python3
"""
Tests for a full check run
"""

from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest

from conftest import NOW, FakeInventory, make_pod
from pod_status_check import main as main_module
from pod_status_check.config import DEFAULT_LABEL_SELECTOR, Config
from pod_status_check.exceptions import InventoryUnavailable, TransportError
from pod_status_check.main import build_reporter, run
from pod_status_check.reporter import KuberhealthyReporter, RecordingReporter


def test_single_namespace(test_pods):
    inventory = FakeInventory(test_pods)
    reporter = RecordingReporter()

    status = run(Config(skip_duration="10m", target_namespace="foo"), inventory, reporter, now=NOW)

    assert status == 1
    assert reporter.calls == [
        ("failure", ["pod: foo-pod in namespace: foo is in pod status phase Pending "])
    ]
    assert inventory.queries[0]["namespace"] == "foo"
    assert inventory.queries[0]["label_selector"] == DEFAULT_LABEL_SELECTOR


def test_all_namespaces(test_pods):
    reporter = RecordingReporter()

    status = run(Config(skip_duration="10m"), FakeInventory(test_pods), reporter, now=NOW)

    assert status == 1
    assert reporter.calls == [("failure", [
        "pod: bar-pod in namespace: bar is in pod status phase Pending ",
        "pod: foo-pod in namespace: foo is in pod status phase Pending ",
    ])]


def test_healthy_cluster_reports_success():
    pods = [
        make_pod("web", "shop", "Running"),
        make_pod("new", "shop", "Pending", age=timedelta(minutes=2)),
    ]
    reporter = RecordingReporter()

    status = run(Config(skip_duration="10m"), FakeInventory(pods), reporter, now=NOW)

    assert status == 0
    assert reporter.calls == [("success", [])]


def test_invalid_skip_duration_is_reported():
    reporter = RecordingReporter()

    status = run(Config(skip_duration="not-a-duration"), FakeInventory([]), reporter, now=NOW)

    assert status == 1
    assert len(reporter.calls) == 1
    kind, messages = reporter.calls[0]
    assert kind == "failure"
    assert len(messages) == 1
    assert "failed to parse skip duration" in messages[0]


def test_out_of_range_skip_duration_is_reported():
    reporter = RecordingReporter()
    pods = [make_pod("foo-pod", "foo", "Pending")]

    status = run(Config(skip_duration="100000000h"), FakeInventory(pods), reporter, now=NOW)

    assert status == 1
    assert len(reporter.calls) == 1
    kind, messages = reporter.calls[0]
    assert kind == "failure"
    assert len(messages) == 1
    assert "failed to parse skip duration" in messages[0]


def test_inventory_failure_is_reported():
    inventory = FakeInventory(error=InventoryUnavailable("failed to list pods: Forbidden"))
    reporter = RecordingReporter()

    status = run(Config(skip_duration="10m"), inventory, reporter, now=NOW)

    assert status == 1
    assert reporter.calls == [("failure", ["failed to list pods: Forbidden"])]


def test_transport_error_propagates(test_pods):
    reporter = MagicMock()
    reporter.report_failure.side_effect = TransportError("bad status code")

    with pytest.raises(TransportError):
        run(Config(skip_duration="10m"), FakeInventory(test_pods), reporter, now=NOW)


def test_deadline_bounds_the_inventory_query():
    inventory = FakeInventory([])
    config = Config(skip_duration="10m", run_deadline=NOW.timestamp())

    run(config, inventory, RecordingReporter(), now=NOW)

    assert inventory.queries[0]["timeout"] == 1.0


def test_metrics_pushed_after_evaluation(test_pods):
    metrics = MagicMock()

    run(Config(skip_duration="10m"), FakeInventory(test_pods), RecordingReporter(), now=NOW, metrics=metrics)

    metrics.push_result.assert_called_once_with(2, 2, NOW)


def test_build_reporter():
    assert isinstance(build_reporter(Config(reporter="log")), RecordingReporter)

    reporter = build_reporter(Config(reporting_url="http://kh/check", run_uuid="r1"))
    assert isinstance(reporter, KuberhealthyReporter)
    assert reporter.reporting_url == "http://kh/check"
    assert reporter.run_uuid == "r1"


@patch.object(main_module, "setup_logging")
@patch.object(main_module, "KubernetesClient")
def test_main_with_log_reporter(mock_client, mock_logging, monkeypatch):
    monkeypatch.setenv("SKIP_DURATION", "10m")
    monkeypatch.setenv("REPORTER", "log")
    mock_client.return_value = FakeInventory([make_pod("web", "shop", "Running")])

    assert main_module.main() == 0
    mock_client.assert_called_once_with(None)


@patch.object(main_module, "setup_logging")
@patch.object(main_module, "KubernetesClient")
def test_main_exits_non_zero_when_report_cannot_be_sent(mock_client, mock_logging, monkeypatch):
    monkeypatch.setenv("SKIP_DURATION", "10m")
    mock_client.return_value = FakeInventory([])

    # No KH_REPORTING_URL, so the success report cannot be delivered
    assert main_module.main() == 1


@patch.object(main_module, "setup_logging")
@patch.object(main_module, "KubernetesClient")
def test_main_reports_client_bootstrap_failure(mock_client, mock_logging, monkeypatch):
    monkeypatch.setenv("SKIP_DURATION", "10m")
    monkeypatch.setenv("REPORTER", "log")
    mock_client.side_effect = InventoryUnavailable("Unable to create kubernetes client: no config")

    with patch.object(main_module, "RecordingReporter") as mock_reporter_cls:
        assert main_module.main() == 1

    mock_reporter_cls.return_value.report_failure.assert_called_once_with(
        ["Unable to create kubernetes client: no config"]
    )

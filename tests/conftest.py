"""
Shared fixtures for Pod Status Check tests
"""

from datetime import datetime, timedelta, timezone

import pytest

from pod_status_check.models import PodRecord

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

CONFIG_ENV_VARS = [
    "SKIP_DURATION",
    "TARGET_NAMESPACE",
    "KUBECONFIG",
    "KUBE_CONFIG_PATH",
    "LABEL_SELECTOR",
    "REPORTER",
    "KH_REPORTING_URL",
    "KH_RUN_UUID",
    "KH_CHECK_RUN_DEADLINE",
    "PROMETHEUS_PUSHGATEWAY_URL",
    "PROMETHEUS_JOB_NAME",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of Config()"""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def make_pod(name, namespace, phase, age=timedelta(minutes=20), now=NOW):
    return PodRecord(
        name=name,
        namespace=namespace,
        creation_timestamp=now - age,
        phase=phase,
    )


class FakeInventory:
    """Serves a fixed pod snapshot, filtered by namespace like the API server"""

    def __init__(self, pods=None, error=None):
        self.pods = list(pods or [])
        self.error = error
        self.queries = []

    def list_pods(self, namespace="", label_selector="", timeout=None):
        self.queries.append(
            {"namespace": namespace, "label_selector": label_selector, "timeout": timeout}
        )
        if self.error is not None:
            raise self.error
        if not namespace:
            return list(self.pods)
        return [pod for pod in self.pods if pod.namespace == namespace]


@pytest.fixture
def test_pods():
    """One stuck pod in each of the foo and bar namespaces"""
    return [
        make_pod("bar-pod", "bar", "Pending"),
        make_pod("foo-pod", "foo", "Pending"),
    ]

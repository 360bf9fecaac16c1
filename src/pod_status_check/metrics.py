"""
Prometheus Pushgateway export of check results
"""

import logging
from datetime import datetime
from typing import Optional

from prometheus_client import CollectorRegistry, Gauge, push_to_gateway

logger = logging.getLogger(__name__)


class MetricsPusher:
    def __init__(self, pushgateway_url: Optional[str], job_name: str = "pod_status_check"):
        self.pushgateway_url = pushgateway_url
        self.job_name = job_name

    @property
    def enabled(self) -> bool:
        return bool(self.pushgateway_url)

    def push_result(self, unhealthy_pods: int, pods_evaluated: int, now: datetime) -> bool:
        """Push the run outcome; a failed push is logged and otherwise ignored"""
        if not self.enabled:
            return False

        registry = CollectorRegistry()
        Gauge(
            "pod_status_check_unhealthy_pods",
            "Pods found in an unhealthy phase by the last run",
            registry=registry,
        ).set(unhealthy_pods)
        Gauge(
            "pod_status_check_pods_evaluated",
            "Pods returned by the inventory query in the last run",
            registry=registry,
        ).set(pods_evaluated)
        Gauge(
            "pod_status_check_last_run_timestamp_seconds",
            "Unix time of the last run",
            registry=registry,
        ).set(now.timestamp())

        try:
            push_to_gateway(self.pushgateway_url, job=self.job_name, registry=registry)
        except Exception as e:
            logger.error(f"Failed to push to Pushgateway: {e}")
            return False

        logger.debug(f"Pushed check metrics to {self.pushgateway_url}")
        return True

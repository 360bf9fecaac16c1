#!/usr/bin/env python3
"""
Pod Status Check - Main Application
"""

import sys
from datetime import datetime, timezone

from pod_status_check.config import Config
from pod_status_check.evaluator import evaluate
from pod_status_check.exceptions import EvaluationError, TransportError
from pod_status_check.kubernetes_client import KubernetesClient
from pod_status_check.logger import CheckLogger, setup_logging
from pod_status_check.metrics import MetricsPusher
from pod_status_check.reporter import KuberhealthyReporter, RecordingReporter


def _report_error(reporter, check_logger, error, context):
    check_logger.log_error(error, context=context)
    reporter.report_failure([str(error)])
    return 1


def run(config: Config, inventory, reporter, now: datetime = None, metrics: MetricsPusher = None) -> int:
    """Run one check pass and return the process exit status.

    Exactly one of reporter.report_success / reporter.report_failure is
    called. TransportError from the reporter propagates to the caller.
    """
    check_logger = CheckLogger()
    eval_config = config.evaluation_config()
    timeout = None
    if config.run_deadline is not None:
        timeout = max(config.run_deadline - datetime.now(timezone.utc).timestamp(), 1.0)

    check_logger.log_scope(eval_config.target_namespace)
    try:
        pods = inventory.list_pods(
            eval_config.target_namespace,
            label_selector=config.label_selector,
            timeout=timeout,
        )
    except EvaluationError as e:
        return _report_error(reporter, check_logger, e, "inventory query")

    if now is None:
        now = datetime.now(timezone.utc)

    try:
        failures = evaluate(pods, eval_config, now)
    except EvaluationError as e:
        return _report_error(reporter, check_logger, e, "evaluation")

    if metrics is not None:
        metrics.push_result(len(failures), len(pods), now)

    if failures:
        reporter.report_failure(failures)
        return 1

    reporter.report_success()
    return 0


def build_reporter(config: Config):
    if config.reporter == "log":
        return RecordingReporter()
    return KuberhealthyReporter(config.reporting_url, config.run_uuid, config.run_deadline)


def main() -> int:
    """Main application entry point"""
    config = Config()
    setup_logging(config.log_level, config.log_format)
    check_logger = CheckLogger()
    check_logger.log_startup(config.to_log_dict())

    reporter = build_reporter(config)
    metrics = MetricsPusher(config.pushgateway_url, config.prometheus_job_name)

    try:
        try:
            inventory = KubernetesClient(config.kube_config_path)
        except EvaluationError as e:
            return _report_error(reporter, check_logger, e, "client bootstrap")
        return run(config, inventory, reporter, metrics=metrics)
    except TransportError as e:
        check_logger.log_error(e, context="reporting")
        return 1


if __name__ == "__main__":
    sys.exit(main())

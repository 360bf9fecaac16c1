"""
Configuration management for Pod Status Check
"""

import logging
import math
import os
from typing import Any, Dict, Optional
from dataclasses import asdict, dataclass
from dotenv import load_dotenv

from pod_status_check.models import EvaluationConfig

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# Keeps the check from judging its own pods
DEFAULT_LABEL_SELECTOR = "app!=kuberhealthy-check,source!=kuberhealthy"


@dataclass
class Config:
    """Configuration class for Pod Status Check"""

    # Evaluation
    skip_duration: str = ""
    target_namespace: str = ""

    # Kubernetes configuration
    kube_config_path: Optional[str] = None
    label_selector: str = DEFAULT_LABEL_SELECTOR

    # Kuberhealthy reporting
    reporter: str = "kuberhealthy"
    reporting_url: Optional[str] = None
    run_uuid: str = ""
    run_deadline: Optional[float] = None

    # Prometheus Pushgateway (optional)
    pushgateway_url: Optional[str] = None
    prometheus_job_name: str = "pod_status_check"

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"

    def __post_init__(self):
        """Override with environment variables if present"""
        self.skip_duration = os.getenv("SKIP_DURATION", self.skip_duration)
        self.target_namespace = os.getenv("TARGET_NAMESPACE", self.target_namespace).strip()

        self.kube_config_path = (
            os.getenv("KUBECONFIG")
            or os.getenv("KUBE_CONFIG_PATH")
            or self.kube_config_path
        )
        self.label_selector = os.getenv("LABEL_SELECTOR", self.label_selector)

        self.reporter = os.getenv("REPORTER", self.reporter).lower()
        self.reporting_url = os.getenv("KH_REPORTING_URL", self.reporting_url)
        self.run_uuid = os.getenv("KH_RUN_UUID", self.run_uuid)

        deadline_env = os.getenv("KH_CHECK_RUN_DEADLINE")
        if deadline_env:
            try:
                deadline = float(deadline_env)
            except ValueError:
                deadline = None
            if deadline is not None and math.isfinite(deadline):
                self.run_deadline = deadline
            else:
                logger.warning(f"Ignoring malformed KH_CHECK_RUN_DEADLINE: {deadline_env!r}")

        self.pushgateway_url = os.getenv("PROMETHEUS_PUSHGATEWAY_URL", self.pushgateway_url)
        self.prometheus_job_name = os.getenv("PROMETHEUS_JOB_NAME", self.prometheus_job_name)

        self.log_level = os.getenv("LOG_LEVEL", self.log_level)
        self.log_format = os.getenv("LOG_FORMAT", self.log_format)

    def evaluation_config(self) -> EvaluationConfig:
        """Freeze the settings the evaluator needs for this run"""
        return EvaluationConfig(
            skip_duration=self.skip_duration,
            target_namespace=self.target_namespace,
        )

    def to_log_dict(self) -> Dict[str, Any]:
        """Config summary for the startup log line, without the run UUID"""
        values = asdict(self)
        values.pop("run_uuid", None)
        return values

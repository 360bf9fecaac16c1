"""
Logging configuration for Pod Status Check
"""

import logging
import sys
from typing import Any, Dict, List
import structlog
from colorama import init as colorama_init

# Initialize colorama for cross-platform colored output
colorama_init()


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Setup structured logging for the application"""

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if log_format == "json"
            else structlog.dev.ConsoleRenderer(colors=True)
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    # Suppress verbose kubernetes client logs
    logging.getLogger("kubernetes").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)


class CheckLogger:
    """Specialized logger for pod status check runs"""

    def __init__(self, name: str = "pod-status-check"):
        self.logger = get_logger(name)

    def log_startup(self, config_dict: Dict[str, Any]) -> None:
        """Log application startup"""
        self.logger.info(
            "Pod status check starting up",
            version="1.0.0",
            config=config_dict
        )

    def log_scope(self, namespace: str) -> None:
        """Log which namespaces the query covers"""
        if namespace:
            self.logger.info("Looking for pods in namespace", namespace=namespace)
        else:
            self.logger.info(
                "Looking for pods across all namespaces, this requires a cluster role"
            )

    def log_pod_skipped(self, namespace: str, pod_name: str, reason: str) -> None:
        """Log when a pod is left out of the evaluation"""
        self.logger.debug(
            "Pod skipped",
            namespace=namespace,
            pod_name=pod_name,
            reason=reason
        )

    def log_unrecognized_phase(self, namespace: str, pod_name: str, phase: str) -> None:
        """Log a pod whose phase is none of the five known ones"""
        self.logger.info(
            "Pod is not in one of the five possible pod status phases",
            namespace=namespace,
            pod_name=pod_name,
            phase=phase
        )

    def log_result(self, failures: List[str], total_checked: int) -> None:
        """Log the outcome of an evaluation pass"""
        if failures:
            self.logger.info(
                "Unhealthy pods found",
                failure_count=len(failures),
                total_pods_checked=total_checked
            )
        else:
            self.logger.info(
                "No unhealthy pods found",
                total_pods_checked=total_checked
            )

    def log_error(self, error: Exception, context: str = None) -> None:
        """Log errors with context"""
        self.logger.error(
            "Error occurred",
            error=str(error),
            error_type=type(error).__name__,
            context=context,
            exc_info=True
        )

"""
Reporting of check results to Kuberhealthy
"""

import logging
import time
from typing import List, Optional

import requests

from pod_status_check.exceptions import TransportError

logger = logging.getLogger(__name__)

RUN_UUID_HEADER = "kh-run-uuid"


class KuberhealthyReporter:
    """Sends the run verdict to the Kuberhealthy reporting endpoint"""

    def __init__(self, reporting_url: Optional[str], run_uuid: str = "",
                 deadline: Optional[float] = None):
        self.reporting_url = reporting_url
        self.run_uuid = run_uuid
        self.deadline = deadline

    def report_success(self) -> None:
        self._send_report(ok=True, errors=[])
        logger.info("Reporting success, no unhealthy pods found")

    def report_failure(self, messages: List[str]) -> None:
        self._send_report(ok=False, errors=list(messages))
        logger.info(f"Reported {len(messages)} failure(s) to Kuberhealthy")

    def _timeout(self) -> Optional[float]:
        """Seconds left until the run deadline, if there is one"""
        if self.deadline is None:
            return None
        return max(self.deadline - time.time(), 1.0)

    def _send_report(self, ok: bool, errors: List[str]) -> None:
        if not self.reporting_url:
            raise TransportError("KH_REPORTING_URL is not set, cannot report check result")

        payload = {"OK": ok, "Errors": errors}
        headers = {RUN_UUID_HEADER: self.run_uuid}

        try:
            response = requests.post(
                self.reporting_url,
                json=payload,
                headers=headers,
                timeout=self._timeout(),
            )
        except requests.RequestException as e:
            logger.error(f"Error reporting to Kuberhealthy servers: {e}")
            raise TransportError(f"failed to send report: {e}") from e

        if response.status_code != requests.codes.ok:
            logger.error(
                f"Kuberhealthy rejected report with status {response.status_code}: {response.text}"
            )
            raise TransportError(
                f"bad status code from kuberhealthy status reporting url: {response.status_code}"
            )

        logger.debug(f"Report accepted by {self.reporting_url}")


class RecordingReporter:
    """Keeps the verdict in memory instead of sending it anywhere"""

    def __init__(self):
        self.calls = []

    @property
    def outcome(self):
        return self.calls[-1] if self.calls else None

    def report_success(self) -> None:
        self.calls.append(("success", []))
        logger.info("Check passed, no unhealthy pods found")

    def report_failure(self, messages: List[str]) -> None:
        self.calls.append(("failure", list(messages)))
        for message in messages:
            logger.error(f"Check failure: {message}")

"""
Pod phase evaluation - decides which pods make the cluster unhealthy
"""

import re
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from pod_status_check.exceptions import InvalidConfig
from pod_status_check.logger import CheckLogger
from pod_status_check.models import EvaluationConfig, PodPhase, PodRecord

check_logger = CheckLogger(__name__)

FAILURE_TEMPLATE = "pod: {name} in namespace: {namespace} is in pod status phase {phase} "

HEALTHY_PHASES = frozenset({PodPhase.RUNNING.value, PodPhase.SUCCEEDED.value})
UNHEALTHY_PHASES = frozenset({
    PodPhase.PENDING.value,
    PodPhase.FAILED.value,
    PodPhase.UNKNOWN.value,
})

# Nanoseconds per duration unit
_UNIT_NANOSECONDS = {
    "ns": 1,
    "us": 1000,
    "µs": 1000,  # micro sign
    "μs": 1000,  # greek mu
    "ms": 1000 * 1000,
    "s": 1000 * 1000 * 1000,
    "m": 60 * 1000 * 1000 * 1000,
    "h": 60 * 60 * 1000 * 1000 * 1000,
}

# Largest duration an int64 nanosecond count can hold (~292 years)
MAX_DURATION_NANOSECONDS = 2 ** 63 - 1

_COMPONENT = r"(\d*)(?:\.(\d*))?(ns|us|µs|μs|ms|s|m|h)"
_DURATION_RE = re.compile(r"^([+-]?)((?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+)$")
_COMPONENT_RE = re.compile(_COMPONENT)


def parse_duration(value: str) -> timedelta:
    """Parse a duration string such as "10m", "1h30m" or "1.5s".

    Raises InvalidConfig for anything unparseable, negative, or longer
    than MAX_DURATION_NANOSECONDS. Precision below a microsecond is dropped.
    """
    if value in ("0", "+0", "-0"):
        return timedelta(0)

    match = _DURATION_RE.match(value or "")
    if not match:
        raise InvalidConfig(f"failed to parse skip duration: invalid duration {value!r}")

    sign, body = match.group(1), match.group(2)
    nanos = 0
    for whole, fraction, unit in _COMPONENT_RE.findall(body):
        scale = _UNIT_NANOSECONDS[unit]
        nanos += int(whole or "0") * scale
        if fraction:
            nanos += int(fraction) * scale // 10 ** len(fraction)
        if nanos > MAX_DURATION_NANOSECONDS:
            raise InvalidConfig(f"failed to parse skip duration: invalid duration {value!r}")

    if sign == "-" and nanos > 0:
        raise InvalidConfig(f"failed to parse skip duration: negative duration {value!r}")

    return timedelta(microseconds=nanos // 1000)


def format_failure(pod: PodRecord) -> str:
    return FAILURE_TEMPLATE.format(name=pod.name, namespace=pod.namespace, phase=pod.phase)


def classify_phase(phase: str) -> Optional[bool]:
    """True for unhealthy phases, False for healthy ones, None if unrecognized"""
    if phase in HEALTHY_PHASES:
        return False
    if phase in UNHEALTHY_PHASES:
        return True
    return None


def evaluate(pods: Iterable[PodRecord], config: EvaluationConfig, now: datetime) -> List[str]:
    """Return one failure string per pod old enough to judge and stuck in a bad phase.

    `now` is the single cutoff reference for the whole pass. Entries come
    back in the order the pods were given.
    """
    skip_duration = parse_duration(config.skip_duration)
    try:
        skip_barrier = now - skip_duration
    except OverflowError:
        raise InvalidConfig(
            f"failed to parse skip duration: {config.skip_duration!r} reaches before the earliest representable time"
        )

    failures = []
    checked = 0
    for pod in pods:
        checked += 1

        if pod.creation_timestamp > skip_barrier:
            check_logger.log_pod_skipped(
                pod.namespace, pod.name, "pod is too young to evaluate"
            )
            continue

        unhealthy = classify_phase(pod.phase)
        if unhealthy is None:
            check_logger.log_unrecognized_phase(pod.namespace, pod.name, pod.phase)
        elif unhealthy:
            failures.append(format_failure(pod))

    check_logger.log_result(failures, checked)
    return failures

"""
Pod Status Check - Kubernetes Pod Phase Health Probe

A Python application that looks for pods stuck in non-running phases
and reports the cluster's health to Kuberhealthy.
"""

__version__ = "1.0.0"
__author__ = "Pod Status Check Team"

import logging
from typing import List, Optional
from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from pod_status_check.config import DEFAULT_LABEL_SELECTOR
from pod_status_check.exceptions import InventoryUnavailable
from pod_status_check.models import PodRecord

logger = logging.getLogger(__name__)


class KubernetesClient:
    def __init__(self, kube_config_path: Optional[str] = None, api=None):
        self.client = client

        if api is not None:
            self.v1 = api
            return

        try:
            if kube_config_path:
                logger.info(f"Loading kubeconfig from: {kube_config_path}")
                config.load_kube_config(config_file=kube_config_path)
            else:
                try:
                    # In-cluster config (when running in Kubernetes)
                    config.load_incluster_config()
                    logger.info("Loaded in-cluster Kubernetes configuration")
                except ConfigException:
                    # Default kubeconfig location for local runs
                    config.load_kube_config()
                    logger.info("Loaded kubeconfig from default location")
        except Exception as e:
            logger.error(f"Failed to initialize Kubernetes client: {e}")
            raise InventoryUnavailable(f"Unable to create kubernetes client: {e}") from e

        self.v1 = client.CoreV1Api()

    def list_pods(self, namespace: str = "", label_selector: str = DEFAULT_LABEL_SELECTOR,
                  timeout: Optional[float] = None) -> List[PodRecord]:
        """List pods in one namespace, or all namespaces when namespace is empty"""
        kwargs = {"label_selector": label_selector, "watch": False}
        if timeout is not None:
            kwargs["_request_timeout"] = timeout

        try:
            if namespace:
                pods = self.v1.list_namespaced_pod(namespace, **kwargs)
            else:
                pods = self.v1.list_pod_for_all_namespaces(**kwargs)
        except Exception as e:
            logger.error(f"Failed to list pods: {e}")
            raise InventoryUnavailable(f"failed to list pods: {e}") from e

        logger.debug(f"Retrieved {len(pods.items)} pods")
        return [PodRecord.from_v1_pod(pod) for pod in pods.items]

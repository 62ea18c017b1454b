#!/usr/bin/env python3
"""
Kubernetes cluster client implementation.

Wraps the official ``kubernetes`` client library: apply (create, then patch
on conflict), readiness waits, namespace status listing, and command
execution and file writes inside running containers.
"""

import base64
import logging
import time
from typing import Any, Callable

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.stream import stream
from urllib3.exceptions import HTTPError

from k3s_wordpress.domain.cluster import ExecResult, ResourceStatus
from k3s_wordpress.domain.errors import DeploymentTimeoutError, ExternalCommandError
from k3s_wordpress.domain.manifest import Manifest
from k3s_wordpress.infrastructure.config import ClusterConfig

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "cluster_client",
        "description": "Kubernetes cluster client implementation",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


# kind -> (API attribute, method suffix, namespaced)
RESOURCE_METHODS: dict[str, tuple[str, str, bool]] = {
    "Namespace": ("core_v1", "namespace", False),
    "Secret": ("core_v1", "namespaced_secret", True),
    "PersistentVolumeClaim": ("core_v1", "namespaced_persistent_volume_claim", True),
    "Service": ("core_v1", "namespaced_service", True),
    "Deployment": ("apps_v1", "namespaced_deployment", True),
    "Ingress": ("networking_v1", "namespaced_ingress", True),
}


def load_api_client(cluster_config: ClusterConfig) -> client.ApiClient:
    """Build an ApiClient from an explicit kubeconfig path and context.

    The global default configuration of the kubernetes package is left
    untouched.

    Args:
        cluster_config: Cluster connection settings

    Returns:
        Configured ApiClient

    Raises:
        ExternalCommandError: If the kubeconfig cannot be loaded
    """
    try:
        return config.new_client_from_config(
            config_file=cluster_config.kubeconfig,
            context=cluster_config.context,
        )
    except (config.ConfigException, OSError) as e:
        source = cluster_config.kubeconfig or "default kubeconfig"
        raise ExternalCommandError(f"Load Kubernetes configuration from {source}", str(e)) from e


class KubernetesClusterClient:
    """Cluster operations used by the deploy and PHP limits workflows.

    Implements the ClusterApplier and PodExecutor protocols.
    """

    def __init__(
        self,
        cluster_config: ClusterConfig,
        api_client: client.ApiClient | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cluster client.

        Args:
            cluster_config: Cluster connection settings and timeouts
            api_client: Pre-built ApiClient (default: built from cluster_config)
            sleep: Sleep function used between readiness polls
            clock: Monotonic clock used for timeouts
        """
        self.cluster_config = cluster_config
        self.api_client = api_client or load_api_client(cluster_config)
        self.core_v1 = client.CoreV1Api(self.api_client)
        self.apps_v1 = client.AppsV1Api(self.api_client)
        self.networking_v1 = client.NetworkingV1Api(self.api_client)
        self._sleep = sleep
        self._clock = clock

    # =========================================================================
    # APPLY
    # =========================================================================

    def apply_manifest(self, manifest: Manifest) -> None:
        """Create or update every object in a manifest, in order.

        Args:
            manifest: Manifest to apply

        Raises:
            ExternalCommandError: If any API call fails
        """
        logger.debug(f"Applying manifest {manifest.name} ({', '.join(manifest.kinds())})")
        for document in manifest.documents:
            self.apply_object(document)

    def apply_object(self, obj: Any) -> None:
        """Create an object, or patch it if it already exists.

        Args:
            obj: kubernetes.client model object with kind and metadata set

        Raises:
            ExternalCommandError: If the kind is unsupported or the API call fails
        """
        kind = obj.kind
        name = obj.metadata.name
        if kind not in RESOURCE_METHODS:
            raise ExternalCommandError(f"Apply {kind} {name}", "unsupported resource kind")

        api_attr, suffix, namespaced = RESOURCE_METHODS[kind]
        api = getattr(self, api_attr)
        namespace = obj.metadata.namespace
        target = f"{kind} {namespace}/{name}" if namespaced else f"{kind} {name}"
        scope = {"namespace": namespace} if namespaced else {}

        try:
            getattr(api, f"create_{suffix}")(body=obj, **scope)
            logger.info(f"Created {target}")
            return
        except ApiException as e:
            if e.status != 409:
                raise ExternalCommandError(f"Create {target}", e.reason, e.status) from e

        try:
            getattr(api, f"patch_{suffix}")(name=name, body=obj, **scope)
            logger.info(f"Configured {target}")
        except ApiException as e:
            raise ExternalCommandError(f"Patch {target}", e.reason, e.status) from e

    # =========================================================================
    # READINESS
    # =========================================================================

    def wait_for_nodes_ready(self, timeout: float | None = None) -> None:
        """Block until every node reports the Ready condition.

        Connection errors are tolerated while polling, since a freshly
        installed API server may not be listening yet.

        Args:
            timeout: Seconds to wait (default: cluster_config.node_ready_timeout)

        Raises:
            DeploymentTimeoutError: If nodes are not Ready in time
        """
        timeout = self.cluster_config.node_ready_timeout if timeout is None else timeout

        def nodes_ready() -> bool:
            try:
                nodes = self.core_v1.list_node().items
            except (ApiException, HTTPError) as e:
                logger.debug(f"Node list not available yet: {e}")
                return False
            if not nodes:
                return False
            return all(_has_condition(node.status, "Ready") for node in nodes)

        logger.info(f"Waiting up to {timeout:g}s for cluster nodes to be Ready...")
        self._poll(nodes_ready, "nodes", timeout)
        logger.info("All cluster nodes are Ready")

    def wait_for_deployment_available(
        self, name: str, namespace: str, timeout: float | None = None
    ) -> None:
        """Block until a deployment reports the Available condition.

        Args:
            name: Deployment name
            namespace: Namespace
            timeout: Seconds to wait (default: cluster_config.deployment_timeout)

        Raises:
            DeploymentTimeoutError: If the deployment is not Available in time
            ExternalCommandError: If reading the deployment fails (other than 404)
        """
        timeout = self.cluster_config.deployment_timeout if timeout is None else timeout

        def available() -> bool:
            try:
                deployment = self.apps_v1.read_namespaced_deployment(
                    name=name, namespace=namespace
                )
            except ApiException as e:
                if e.status == 404:
                    return False
                raise ExternalCommandError(
                    f"Read deployment {namespace}/{name}", e.reason, e.status
                ) from e
            return _has_condition(deployment.status, "Available")

        logger.info(f"Waiting up to {timeout:g}s for deployment/{name} to be available...")
        self._poll(available, f"deployment/{name}", timeout)
        logger.info(f"deployment/{name} is available")

    def _poll(self, check: Callable[[], bool], resource: str, timeout: float) -> None:
        deadline = self._clock() + timeout
        while True:
            if check():
                return
            remaining = deadline - self._clock()
            if remaining <= 0:
                raise DeploymentTimeoutError(resource, timeout)
            self._sleep(min(self.cluster_config.poll_interval, remaining))

    # =========================================================================
    # STATUS
    # =========================================================================

    def list_namespace_resources(self, namespace: str) -> list[ResourceStatus]:
        """List the workload resources in a namespace for status reporting.

        Args:
            namespace: Namespace

        Returns:
            Status lines for deployments, pods, services, claims and ingresses

        Raises:
            ExternalCommandError: If any list call fails
        """
        try:
            deployments = self.apps_v1.list_namespaced_deployment(namespace=namespace).items
            pods = self.core_v1.list_namespaced_pod(namespace=namespace).items
            services = self.core_v1.list_namespaced_service(namespace=namespace).items
            claims = self.core_v1.list_namespaced_persistent_volume_claim(
                namespace=namespace
            ).items
            ingresses = self.networking_v1.list_namespaced_ingress(namespace=namespace).items
        except ApiException as e:
            raise ExternalCommandError(
                f"List resources in namespace {namespace}", e.reason, e.status
            ) from e

        statuses: list[ResourceStatus] = []
        for d in deployments:
            ready = d.status.ready_replicas or 0
            status = f"{ready}/{d.spec.replicas} ready"
            statuses.append(ResourceStatus("Deployment", d.metadata.name, status))
        for p in pods:
            status = p.status.phase or "Unknown"
            statuses.append(ResourceStatus("Pod", p.metadata.name, status))
        for s in services:
            ports = ",".join(str(port.port) for port in (s.spec.ports or []))
            status = f"{s.spec.type} {s.spec.cluster_ip} {ports}".strip()
            statuses.append(ResourceStatus("Service", s.metadata.name, status))
        for c in claims:
            capacity = (c.status.capacity or {}).get("storage", "")
            status = f"{c.status.phase} {capacity}".strip()
            statuses.append(ResourceStatus("PersistentVolumeClaim", c.metadata.name, status))
        for i in ingresses:
            hosts = ",".join(rule.host for rule in (i.spec.rules or []) if rule.host)
            statuses.append(ResourceStatus("Ingress", i.metadata.name, hosts or "*"))
        return statuses

    # =========================================================================
    # POD OPERATIONS
    # =========================================================================

    def find_pod(self, namespace: str, label_selector: str) -> str | None:
        """Find a pod by label selector, preferring running pods.

        Args:
            namespace: Namespace
            label_selector: Label selector (e.g. "app=wordpress")

        Returns:
            Pod name, or None if no pod matches

        Raises:
            ExternalCommandError: If listing pods fails
        """
        try:
            pods = self.core_v1.list_namespaced_pod(
                namespace=namespace, label_selector=label_selector
            ).items
        except ApiException as e:
            raise ExternalCommandError(
                f"List pods {label_selector} in {namespace}", e.reason, e.status
            ) from e

        if not pods:
            return None
        running = [p for p in pods if p.status and p.status.phase == "Running"]
        return (running or pods)[0].metadata.name

    def exec_in_pod(
        self,
        pod_name: str,
        namespace: str,
        command: list[str],
        container: str | None = None,
        check: bool = True,
    ) -> ExecResult:
        """Execute a command in a pod and collect its output.

        Args:
            pod_name: Name of the pod
            namespace: Namespace
            command: Command to execute as list
            container: Container name (default: the pod's only container)
            check: Raise if the command exits nonzero

        Returns:
            ExecResult with stdout, stderr and exit code

        Raises:
            ExternalCommandError: If the exec channel fails, or the command
                exits nonzero and check is True
        """
        logger.debug(f"Executing in pod {pod_name}: {' '.join(command[:3])}...")
        kwargs: dict[str, Any] = {"container": container} if container else {}
        try:
            resp = stream(
                self.core_v1.connect_get_namespaced_pod_exec,
                pod_name,
                namespace,
                command=command,
                stderr=True,
                stdin=False,
                stdout=True,
                tty=False,
                _preload_content=False,
                **kwargs,
            )
            resp.run_forever(timeout=self.cluster_config.exec_timeout)
            stdout = resp.read_stdout(timeout=0) or ""
            stderr = resp.read_stderr(timeout=0) or ""
            returncode = resp.returncode
            resp.close()
        except (ApiException, HTTPError) as e:
            raise ExternalCommandError(f"Exec {command[0]} in pod {pod_name}", str(e)) from e

        if returncode is None:
            raise ExternalCommandError(
                f"Exec {command[0]} in pod {pod_name}",
                f"no exit status after {self.cluster_config.exec_timeout:g}s",
            )

        result = ExecResult(stdout=stdout, stderr=stderr, returncode=returncode)
        if check and not result.ok:
            raise ExternalCommandError(
                f"Exec {command[0]} in pod {pod_name}", stderr.strip(), returncode
            )
        return result

    def write_file_in_pod(
        self,
        pod_name: str,
        namespace: str,
        pod_path: str,
        content: str | bytes,
        container: str | None = None,
    ) -> None:
        """Write a file inside a container through the exec channel.

        Content travels base64-encoded as a positional shell argument, so
        it is never interpreted by the shell.

        Args:
            pod_name: Name of the pod
            namespace: Namespace
            pod_path: Destination path in the container
            content: File content
            container: Container name

        Raises:
            ExternalCommandError: If the write fails
        """
        data = content.encode("utf-8") if isinstance(content, str) else content
        encoded = base64.b64encode(data).decode("ascii")
        command = ["sh", "-c", 'printf %s "$1" | base64 -d > "$2"', "sh", encoded, pod_path]
        self.exec_in_pod(pod_name, namespace, command, container=container)
        logger.debug(f"Wrote {pod_path} in pod {pod_name} ({len(data)} bytes)")


def _has_condition(status: Any, condition_type: str) -> bool:
    """Check if a status object carries a condition with status "True"."""
    conditions = getattr(status, "conditions", None) or []
    return any(c.type == condition_type and c.status == "True" for c in conditions)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")

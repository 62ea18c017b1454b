#!/usr/bin/env python3
"""
Service for rendering the site's Kubernetes manifests.

Builds typed ``kubernetes.client`` model objects from SiteParameters. User
supplied strings are only ever set as field values, never spliced into
YAML text. Rendering is pure: no network and no filesystem access.
"""

import base64
from typing import Any

import yaml
from kubernetes import client

from k3s_wordpress.domain.manifest import Manifest
from k3s_wordpress.domain.site import (
    DATABASE_NAME,
    DATABASE_USER,
    DB_PASSWORD_KEY,
    INGRESS_NAME,
    SECRET_NAME,
    TRAEFIK_ENTRYPOINTS_ANNOTATION,
    WP_PASSWORD_KEY,
    SiteParameters,
    WorkloadSettings,
)

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "manifest_renderer",
        "description": "Service for rendering Kubernetes manifests",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


MANAGED_BY_LABEL = {"app.kubernetes.io/managed-by": "k3s-wordpress"}

# Apply order; later manifests reference earlier ones by name
MANIFEST_ORDER = ("namespace", "secret", "storage", "database", "application", "ingress")


def encode_secret_value(value: str) -> str:
    """Base64-encode a secret value the way the Secret ``data`` field expects."""
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def to_dicts(manifest: Manifest) -> list[dict[str, Any]]:
    """Serialize a manifest's documents to plain dictionaries.

    Args:
        manifest: Manifest to serialize

    Returns:
        One dictionary per document, with API field names (camelCase)
    """
    with client.ApiClient() as api_client:
        return [api_client.sanitize_for_serialization(doc) for doc in manifest.documents]


def to_yaml(manifest: Manifest) -> str:
    """Serialize a manifest to a multi-document YAML string.

    Args:
        manifest: Manifest to serialize

    Returns:
        YAML text, documents separated by ``---``
    """
    return yaml.safe_dump_all(to_dicts(manifest), sort_keys=False, default_flow_style=False)


class ManifestRenderer:
    """Application service that turns site parameters into manifests."""

    def render(self, params: SiteParameters) -> list[Manifest]:
        """Render every manifest for a site, in apply order.

        Args:
            params: Site parameters

        Returns:
            Manifests named namespace, secret, storage, database,
            application and ingress
        """
        return [
            self.render_namespace(params),
            self.render_secret(params),
            self.render_storage(params),
            self.render_database(params),
            self.render_application(params),
            self.render_ingress(params),
        ]

    def render_namespace(self, params: SiteParameters) -> Manifest:
        namespace = client.V1Namespace(
            api_version="v1",
            kind="Namespace",
            metadata=client.V1ObjectMeta(name=params.namespace, labels=dict(MANAGED_BY_LABEL)),
        )
        return Manifest(name="namespace", filename="namespace.yaml", documents=(namespace,))

    def render_secret(self, params: SiteParameters) -> Manifest:
        """Render the Opaque secret holding both passwords.

        Values go in ``data`` base64-encoded, not in ``stringData``.
        """
        secret = client.V1Secret(
            api_version="v1",
            kind="Secret",
            metadata=self._metadata(SECRET_NAME, params),
            type="Opaque",
            data={
                DB_PASSWORD_KEY: encode_secret_value(params.db_password),
                WP_PASSWORD_KEY: encode_secret_value(params.wp_password),
            },
        )
        return Manifest(name="secret", filename="secrets.yaml", documents=(secret,))

    def render_storage(self, params: SiteParameters) -> Manifest:
        claims = (
            self._claim(params.application, params),
            self._claim(params.database, params),
        )
        return Manifest(name="storage", filename="pvc.yaml", documents=claims)

    def render_database(self, params: SiteParameters) -> Manifest:
        """Render the MariaDB deployment and service."""
        workload = params.database
        env = [
            self._secret_env("MYSQL_ROOT_PASSWORD", DB_PASSWORD_KEY),
            client.V1EnvVar(name="MYSQL_DATABASE", value=DATABASE_NAME),
            client.V1EnvVar(name="MYSQL_USER", value=DATABASE_USER),
            self._secret_env("MYSQL_PASSWORD", DB_PASSWORD_KEY),
        ]
        container = self._container(workload, env)
        return Manifest(
            name="database",
            filename=f"{workload.name}.yaml",
            documents=(
                self._deployment(workload, container, params),
                self._service(workload, params),
            ),
        )

    def render_application(self, params: SiteParameters) -> Manifest:
        """Render the WordPress deployment and service.

        The database host is the database service name, which resolves
        inside the namespace.
        """
        workload = params.application
        env = [
            client.V1EnvVar(name="WORDPRESS_DB_HOST", value=params.database.name),
            client.V1EnvVar(name="WORDPRESS_DB_NAME", value=DATABASE_NAME),
            client.V1EnvVar(name="WORDPRESS_DB_USER", value=DATABASE_USER),
            self._secret_env("WORDPRESS_DB_PASSWORD", DB_PASSWORD_KEY),
        ]
        container = self._container(workload, env)
        container.readiness_probe = self._http_probe(workload.port, initial_delay=30, period=10)
        container.liveness_probe = self._http_probe(workload.port, initial_delay=60, period=30)
        return Manifest(
            name="application",
            filename=f"{workload.name}.yaml",
            documents=(
                self._deployment(workload, container, params),
                self._service(workload, params),
            ),
        )

    def render_ingress(self, params: SiteParameters) -> Manifest:
        """Render the Traefik HTTP ingress routing the domain to WordPress.

        The host is lowercased; the API rejects uppercase ingress hosts.
        """
        workload = params.application
        metadata = self._metadata(INGRESS_NAME, params)
        metadata.annotations = {TRAEFIK_ENTRYPOINTS_ANNOTATION: params.ingress_entrypoints}
        ingress = client.V1Ingress(
            api_version="networking.k8s.io/v1",
            kind="Ingress",
            metadata=metadata,
            spec=client.V1IngressSpec(
                rules=[
                    client.V1IngressRule(
                        host=params.domain.lower(),
                        http=client.V1HTTPIngressRuleValue(
                            paths=[
                                client.V1HTTPIngressPath(
                                    path="/",
                                    path_type="Prefix",
                                    backend=client.V1IngressBackend(
                                        service=client.V1IngressServiceBackend(
                                            name=workload.name,
                                            port=client.V1ServiceBackendPort(
                                                number=workload.port
                                            ),
                                        )
                                    ),
                                )
                            ]
                        ),
                    )
                ]
            ),
        )
        return Manifest(name="ingress", filename="ingress.yaml", documents=(ingress,))

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def _metadata(self, name: str, params: SiteParameters) -> client.V1ObjectMeta:
        return client.V1ObjectMeta(
            name=name, namespace=params.namespace, labels=dict(MANAGED_BY_LABEL)
        )

    def _claim(
        self, workload: WorkloadSettings, params: SiteParameters
    ) -> client.V1PersistentVolumeClaim:
        return client.V1PersistentVolumeClaim(
            api_version="v1",
            kind="PersistentVolumeClaim",
            metadata=self._metadata(workload.pvc_name, params),
            spec=client.V1PersistentVolumeClaimSpec(
                access_modes=["ReadWriteOnce"],
                resources=client.V1VolumeResourceRequirements(
                    requests={"storage": workload.storage_size}
                ),
            ),
        )

    def _secret_env(self, name: str, key: str) -> client.V1EnvVar:
        return client.V1EnvVar(
            name=name,
            value_from=client.V1EnvVarSource(
                secret_key_ref=client.V1SecretKeySelector(name=SECRET_NAME, key=key)
            ),
        )

    def _http_probe(self, port: int, initial_delay: int, period: int) -> client.V1Probe:
        return client.V1Probe(
            http_get=client.V1HTTPGetAction(path="/", port=port),
            initial_delay_seconds=initial_delay,
            period_seconds=period,
        )

    def _container(
        self, workload: WorkloadSettings, env: list[client.V1EnvVar]
    ) -> client.V1Container:
        return client.V1Container(
            name=workload.name,
            image=workload.image,
            env=env,
            ports=[client.V1ContainerPort(container_port=workload.port)],
            volume_mounts=[
                client.V1VolumeMount(name=workload.volume_name, mount_path=workload.mount_path)
            ],
            resources=client.V1ResourceRequirements(
                requests=workload.resources.requests(),
                limits=workload.resources.limits(),
            ),
        )

    def _deployment(
        self,
        workload: WorkloadSettings,
        container: client.V1Container,
        params: SiteParameters,
    ) -> client.V1Deployment:
        """Build a deployment whose selector and pod labels come from one dict."""
        labels = workload.labels()
        return client.V1Deployment(
            api_version="apps/v1",
            kind="Deployment",
            metadata=self._metadata(workload.name, params),
            spec=client.V1DeploymentSpec(
                replicas=workload.replicas,
                selector=client.V1LabelSelector(match_labels=dict(labels)),
                template=client.V1PodTemplateSpec(
                    metadata=client.V1ObjectMeta(labels=dict(labels)),
                    spec=client.V1PodSpec(
                        containers=[container],
                        volumes=[
                            client.V1Volume(
                                name=workload.volume_name,
                                persistent_volume_claim=client.V1PersistentVolumeClaimVolumeSource(
                                    claim_name=workload.pvc_name
                                ),
                            )
                        ],
                    ),
                ),
            ),
        )

    def _service(self, workload: WorkloadSettings, params: SiteParameters) -> client.V1Service:
        return client.V1Service(
            api_version="v1",
            kind="Service",
            metadata=self._metadata(workload.name, params),
            spec=client.V1ServiceSpec(
                ports=[client.V1ServicePort(port=workload.port, target_port=workload.port)],
                selector=workload.labels(),
            ),
        )


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")

#!/usr/bin/env python3
"""
Domain model for a WordPress site deployment.

Holds every value the manifest renderer needs: the validated names, the
generated passwords, and the workload settings (images, replicas, storage,
resources) for the database and the application.
"""

from dataclasses import dataclass, field

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "site",
        "description": "Domain model for site deployment parameters",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


SECRET_NAME = "wordpress-secrets"
DB_PASSWORD_KEY = "db-password"
WP_PASSWORD_KEY = "wp-password"
DATABASE_NAME = "wordpress"
DATABASE_USER = "wordpress"
INGRESS_NAME = "wordpress-ingress"
TRAEFIK_ENTRYPOINTS_ANNOTATION = "traefik.ingress.kubernetes.io/router.entrypoints"


@dataclass(frozen=True)
class ContainerResources:
    """CPU and memory requests/limits for one container.

    Attributes:
        request_memory: Memory request (e.g. "256Mi")
        request_cpu: CPU request (e.g. "250m")
        limit_memory: Memory limit
        limit_cpu: CPU limit
    """

    request_memory: str = "256Mi"
    request_cpu: str = "250m"
    limit_memory: str = "512Mi"
    limit_cpu: str = "500m"

    def requests(self) -> dict[str, str]:
        """Return the requests block as a Kubernetes resource dict."""
        return {"memory": self.request_memory, "cpu": self.request_cpu}

    def limits(self) -> dict[str, str]:
        """Return the limits block as a Kubernetes resource dict."""
        return {"memory": self.limit_memory, "cpu": self.limit_cpu}


@dataclass(frozen=True)
class WorkloadSettings:
    """Settings for one Deployment + Service + PVC triple.

    Attributes:
        name: Deployment, service, container name and the ``app`` label value
        image: Container image
        replicas: Replica count
        port: Container and service port
        mount_path: Where the persistent volume is mounted
        storage_size: Requested PVC size
        resources: Container resources
    """

    name: str
    image: str
    replicas: int
    port: int
    mount_path: str
    storage_size: str
    resources: ContainerResources = field(default_factory=ContainerResources)

    @property
    def pvc_name(self) -> str:
        """Name of the workload's persistent volume claim."""
        return f"{self.name}-pvc"

    @property
    def volume_name(self) -> str:
        """Name of the pod volume that mounts the claim."""
        return f"{self.name}-storage"

    def labels(self) -> dict[str, str]:
        """Pod labels; also used as the deployment and service selector."""
        return {"app": self.name}


DEFAULT_DATABASE = WorkloadSettings(
    name="mariadb",
    image="mariadb:10.11",
    replicas=1,
    port=3306,
    mount_path="/var/lib/mysql",
    storage_size="5Gi",
)

DEFAULT_APPLICATION = WorkloadSettings(
    name="wordpress",
    image="wordpress:php8.2-apache",
    replicas=2,
    port=80,
    mount_path="/var/www/html",
    storage_size="10Gi",
)


@dataclass(frozen=True)
class SiteParameters:
    """Everything needed to render the manifests for one site.

    Attributes:
        domain: Validated domain name
        namespace: Validated namespace
        db_password: Generated database password
        wp_password: Generated WordPress admin password
        database: MariaDB workload settings
        application: WordPress workload settings
        ingress_entrypoints: Traefik entrypoints for the ingress route
    """

    domain: str
    namespace: str
    db_password: str
    wp_password: str
    database: WorkloadSettings = DEFAULT_DATABASE
    application: WorkloadSettings = DEFAULT_APPLICATION
    ingress_entrypoints: str = "web"

    def __repr__(self) -> str:
        # Keep passwords out of logs and tracebacks
        return (
            f"SiteParameters(domain={self.domain!r}, namespace={self.namespace!r}, "
            f"database={self.database.name!r}, application={self.application.name!r})"
        )


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")

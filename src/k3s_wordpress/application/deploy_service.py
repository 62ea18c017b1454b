#!/usr/bin/env python3
"""
Service for deploying a WordPress site to the cluster.

Renders the site's manifests and applies them through an explicit, ordered
list of named steps, each declaring the steps it depends on.
"""

import logging
from typing import Callable, Optional, Protocol

from k3s_wordpress.application.manifest_renderer import ManifestRenderer, to_yaml
from k3s_wordpress.application.step_runner import Step, StepRunner
from k3s_wordpress.domain.manifest import Manifest
from k3s_wordpress.domain.site import SiteParameters
from k3s_wordpress.domain.step_result import DeploymentRun

logger = logging.getLogger(__name__)

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "deploy_service",
        "description": "Service for deploying WordPress to the cluster",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


# step name -> steps it depends on
STEP_DEPENDENCIES: dict[str, tuple[str, ...]] = {
    "namespace": (),
    "secret": ("namespace",),
    "storage": ("namespace",),
    "database": ("secret", "storage"),
    "application": ("secret", "storage", "database"),
    "ingress": ("application",),
    "wait-database": ("database",),
    "wait-application": ("application",),
}


class ClusterApplier(Protocol):
    """Protocol defining the cluster operations the deploy needs.

    Infrastructure layer must implement this protocol.
    """

    def apply_manifest(self, manifest: Manifest) -> None:
        """Create or update every object in a manifest."""
        ...

    def wait_for_deployment_available(
        self, name: str, namespace: str, timeout: float | None = None
    ) -> None:
        """Block until a deployment is Available.

        Raises:
            DeploymentTimeoutError: If the timeout elapses first
        """
        ...


class DeployService:
    """Application service for site deployment."""

    def __init__(
        self,
        cluster: Optional[ClusterApplier],
        renderer: ManifestRenderer | None = None,
        on_update: Optional[Callable[[DeploymentRun], None]] = None,
        dry_run: bool = False,
        deployment_timeout: float | None = None,
    ) -> None:
        """Initialize the deploy service.

        Args:
            cluster: Cluster client (may be None in dry-run mode)
            renderer: Manifest renderer (default: ManifestRenderer())
            on_update: Called with the run record after each step change
            dry_run: If True, log what would be applied without calling the cluster
            deployment_timeout: Readiness timeout per deployment (default: client's)

        Raises:
            ValueError: If no cluster client is given outside dry-run mode
        """
        if cluster is None and not dry_run:
            raise ValueError("A cluster client is required unless dry_run is set")
        self.cluster = cluster
        self.renderer = renderer or ManifestRenderer()
        self.runner = StepRunner(on_update=on_update)
        self.dry_run = dry_run
        self.deployment_timeout = deployment_timeout
        self.current_run: DeploymentRun | None = None

    def render(self, params: SiteParameters) -> list[Manifest]:
        """Render the site's manifests in apply order."""
        return self.renderer.render(params)

    def render_files(self, manifests: list[Manifest]) -> dict[str, str]:
        """Serialize manifests to YAML keyed by filename.

        Args:
            manifests: Rendered manifests

        Returns:
            Mapping of filename to YAML text, in apply order
        """
        return {manifest.filename: to_yaml(manifest) for manifest in manifests}

    def build_steps(self, params: SiteParameters, manifests: list[Manifest]) -> list[Step]:
        """Build the ordered deploy steps.

        Args:
            params: Site parameters
            manifests: Rendered manifests, one per apply step

        Returns:
            Apply steps in manifest order, then the readiness waits

        Raises:
            ValueError: If a manifest needed by a step is missing
        """
        by_name = {manifest.name: manifest for manifest in manifests}
        steps = []
        for name in ("namespace", "secret", "storage", "database", "application", "ingress"):
            if name not in by_name:
                raise ValueError(f"No manifest rendered for step {name!r}")
            steps.append(
                Step(name, self._apply_action(by_name[name]), STEP_DEPENDENCIES[name])
            )

        waits = {
            "wait-database": params.database.name,
            "wait-application": params.application.name,
        }
        for name, deployment in waits.items():
            action = self._wait_action(deployment, params.namespace)
            steps.append(Step(name, action, STEP_DEPENDENCIES[name]))
        return steps

    def deploy(
        self, params: SiteParameters, manifests: list[Manifest] | None = None
    ) -> DeploymentRun:
        """Apply the site's manifests and wait for both workloads.

        Args:
            params: Site parameters
            manifests: Pre-rendered manifests (default: rendered from params)

        Returns:
            Run record with every step completed

        Raises:
            ExternalCommandError: If an API call fails
            DeploymentTimeoutError: If a deployment is not Available in time
        """
        manifests = manifests if manifests is not None else self.render(params)
        steps = self.build_steps(params, manifests)
        self.current_run = self.runner.create_run(steps, params.domain, params.namespace)

        mode = " (dry run)" if self.dry_run else ""
        logger.info(f"Deploying {params.domain} to namespace {params.namespace}{mode}")
        return self.runner.run(steps, self.current_run)

    def _apply_action(self, manifest: Manifest) -> Callable[[], None]:
        def apply() -> None:
            if self.dry_run:
                kinds = ", ".join(manifest.kinds())
                logger.info(f"[DRY RUN] Would apply {manifest.filename} ({kinds})")
                return
            logger.info(f"Applying {manifest.filename}...")
            self.cluster.apply_manifest(manifest)

        return apply

    def _wait_action(self, deployment: str, namespace: str) -> Callable[[], None]:
        def wait() -> None:
            if self.dry_run:
                logger.info(f"[DRY RUN] Would wait for deployment/{deployment}")
                return
            self.cluster.wait_for_deployment_available(
                deployment, namespace, timeout=self.deployment_timeout
            )

        return wait


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")

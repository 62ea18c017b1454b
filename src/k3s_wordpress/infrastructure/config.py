#!/usr/bin/env python3
"""
Configuration management for k3s-wordpress.

Handles loading configuration from environment variables. The resulting
objects are passed explicitly into the cluster client and services; nothing
here modifies the process environment.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "config",
        "description": "Configuration management",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


K3S_KUBECONFIG = "/etc/rancher/k3s/k3s.yaml"
K3S_INSTALL_URL = "https://get.k3s.io"
PUBLIC_IP_URL = "http://checkip.amazonaws.com"


def _env_float(env: Mapping[str, str], key: str, default: float) -> float:
    """Read a float from the environment.

    Raises:
        ValueError: If the variable is set but not a number
    """
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be a number, got {raw!r}") from e


def default_kubeconfig(env: Mapping[str, str] | None = None) -> Optional[str]:
    """Pick the kubeconfig file to use.

    Order: K3S_WP_KUBECONFIG, KUBECONFIG, then the K3s default path if it
    exists. None means the Kubernetes client's own default (~/.kube/config).

    Args:
        env: Environment mapping (default: os.environ)

    Returns:
        Path to a kubeconfig file, or None
    """
    env = os.environ if env is None else env
    for key in ("K3S_WP_KUBECONFIG", "KUBECONFIG"):
        if env.get(key):
            return env[key]
    if Path(K3S_KUBECONFIG).exists():
        return K3S_KUBECONFIG
    return None


@dataclass
class ClusterConfig:
    """Kubernetes cluster connection settings.

    Attributes:
        kubeconfig: Path to kubeconfig file (None for client default)
        context: kubeconfig context name (None for current context)
        node_ready_timeout: Seconds to wait for all nodes to be Ready
        deployment_timeout: Seconds to wait for a deployment to be Available
        poll_interval: Seconds between readiness checks
        exec_timeout: Seconds allowed for a remote exec call
    """

    kubeconfig: Optional[str] = None
    context: Optional[str] = None
    node_ready_timeout: float = 300.0
    deployment_timeout: float = 600.0
    poll_interval: float = 5.0
    exec_timeout: float = 60.0

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "ClusterConfig":
        """Load configuration from environment variables.

        Args:
            env: Environment mapping (default: os.environ)

        Returns:
            ClusterConfig instance

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        env = os.environ if env is None else env
        return cls(
            kubeconfig=default_kubeconfig(env),
            context=env.get("K3S_WP_CONTEXT") or None,
            node_ready_timeout=_env_float(env, "K3S_WP_NODE_TIMEOUT", 300.0),
            deployment_timeout=_env_float(env, "K3S_WP_DEPLOYMENT_TIMEOUT", 600.0),
            poll_interval=_env_float(env, "K3S_WP_POLL_INTERVAL", 5.0),
            exec_timeout=_env_float(env, "K3S_WP_EXEC_TIMEOUT", 60.0),
        )


@dataclass
class DeployConfig:
    """Deployment run settings.

    Attributes:
        base_dir: Parent directory of the per-domain deployment directories
        public_ip_url: "What is my IP" service queried for the summary
        k3s_install_url: K3s install script URL
        install_runtime: Install K3s when kubectl is missing
        dry_run: Render and write manifests without touching the cluster
    """

    base_dir: Path
    public_ip_url: str = PUBLIC_IP_URL
    k3s_install_url: str = K3S_INSTALL_URL
    install_runtime: bool = True
    dry_run: bool = False

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "DeployConfig":
        """Load configuration from environment variables.

        Args:
            env: Environment mapping (default: os.environ)

        Returns:
            DeployConfig instance
        """
        env = os.environ if env is None else env
        base_dir = env.get("K3S_WP_BASE_DIR")
        return cls(
            base_dir=Path(base_dir).expanduser() if base_dir else Path.home(),
            public_ip_url=env.get("K3S_WP_IP_SERVICE_URL", PUBLIC_IP_URL),
            k3s_install_url=env.get("K3S_WP_INSTALL_URL", K3S_INSTALL_URL),
            dry_run=env.get("K3S_WP_DRY_RUN", "false").lower() == "true",
        )


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")

#!/usr/bin/env python3
"""
CLI entry points for k3s-wordpress.

``k3s-wordpress`` provisions a WordPress site on K3s and writes its
credentials; ``k3s-wordpress-php-limits`` raises PHP limits on a running
WordPress pod.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import NoReturn, Sequence

from k3s_wordpress.domain.errors import InvalidInputError, WordPressDeployError
from k3s_wordpress.domain.passwords import generate_password_pair
from k3s_wordpress.domain.site import SiteParameters
from k3s_wordpress.domain.validation import resolve_site_names, validate_namespace
from k3s_wordpress.infrastructure.config import K3S_KUBECONFIG, ClusterConfig, DeployConfig
from k3s_wordpress.infrastructure.logger import log_operation, log_success, setup_logger

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "cli",
        "description": "Command-line interface for k3s-wordpress",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


class UsageExitParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit code 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-h", "--help",
        action="store_true",
        help="Show this help message and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--kubeconfig",
        help="Path to kubeconfig (default: $K3S_WP_KUBECONFIG, $KUBECONFIG or the K3s kubeconfig)",
    )

    parser.add_argument(
        "--context",
        help="kubeconfig context to use (default: current context)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the deploy argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = UsageExitParser(
        prog="k3s-wordpress",
        description="Deploy WordPress with MariaDB on a K3s cluster",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog="""
Examples:
  k3s-wordpress blog.example.com
  k3s-wordpress blog.example.com my-blog
  k3s-wordpress blog.example.com --dry-run --base-dir ./out

Environment:
  K3S_WP_KUBECONFIG, K3S_WP_CONTEXT, K3S_WP_BASE_DIR, K3S_WP_DRY_RUN,
  K3S_WP_INSTALL_URL, K3S_WP_IP_SERVICE_URL, K3S_WP_NODE_TIMEOUT,
  K3S_WP_DEPLOYMENT_TIMEOUT, K3S_WP_POLL_INTERVAL, K3S_WP_EXEC_TIMEOUT
        """,
    )

    parser.add_argument(
        "domain",
        nargs="?",
        help="Domain name of the site (e.g. blog.example.com)",
    )

    parser.add_argument(
        "namespace",
        nargs="?",
        help="Kubernetes namespace (default: wordpress-<domain>)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Render and write manifests without touching the cluster",
    )

    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Do not install K3s when kubectl is missing",
    )

    parser.add_argument(
        "--base-dir",
        help="Parent directory for the deployment directory (default: $K3S_WP_BASE_DIR or home)",
    )

    parser.add_argument(
        "--output",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    _add_common_arguments(parser)
    return parser


def create_php_limits_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the PHP limits command.

    Returns:
        Configured ArgumentParser instance
    """
    from k3s_wordpress.application.php_limits_service import DEFAULT_NAMESPACE

    parser = UsageExitParser(
        prog="k3s-wordpress-php-limits",
        description="Raise PHP upload, memory and execution limits on a WordPress pod",
        add_help=False,
    )

    parser.add_argument(
        "namespace",
        nargs="?",
        default=DEFAULT_NAMESPACE,
        help=f"Namespace of the WordPress deployment (default: {DEFAULT_NAMESPACE})",
    )

    _add_common_arguments(parser)
    return parser


def build_cluster_config(args: argparse.Namespace) -> ClusterConfig:
    """Load cluster settings from the environment, then apply CLI overrides.

    Raises:
        ValueError: If an environment variable cannot be parsed
    """
    cluster_config = ClusterConfig.from_env()
    if args.kubeconfig:
        cluster_config.kubeconfig = args.kubeconfig
    if args.context:
        cluster_config.context = args.context
    return cluster_config


def build_deploy_config(args: argparse.Namespace) -> DeployConfig:
    """Load deploy settings from the environment, then apply CLI overrides."""
    deploy_config = DeployConfig.from_env()
    if args.base_dir:
        deploy_config.base_dir = Path(args.base_dir).expanduser()
    if args.dry_run:
        deploy_config.dry_run = True
    if args.skip_install:
        deploy_config.install_runtime = False
    return deploy_config


def cmd_deploy(args: argparse.Namespace) -> int:
    """Execute the deploy command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    from k3s_wordpress.application.credential_reporter import CredentialReporter
    from k3s_wordpress.application.deploy_service import DeployService
    from k3s_wordpress.infrastructure.cluster_client import KubernetesClusterClient
    from k3s_wordpress.infrastructure.deployment_directory import DeploymentDirectory
    from k3s_wordpress.infrastructure.public_ip import resolve_public_ip
    from k3s_wordpress.infrastructure.run_repository import RunRepository
    from k3s_wordpress.infrastructure.runtime_installer import K3sInstaller
    from k3s_wordpress.infrastructure.signal_handler import ShutdownCoordinator

    # Keep stdout clean for JSON output
    log_stream = sys.stderr if args.output == "json" else None
    logger = setup_logger(verbose=args.verbose, stream=log_stream)

    # Validate before anything touches the host or the cluster
    try:
        domain, namespace = resolve_site_names(args.domain, args.namespace)
        cluster_config = build_cluster_config(args)
        deploy_config = build_deploy_config(args)
    except (InvalidInputError, ValueError) as e:
        logger.error(str(e))
        return 1

    db_password, wp_password = generate_password_pair()
    params = SiteParameters(
        domain=domain,
        namespace=namespace,
        db_password=db_password,
        wp_password=wp_password,
    )
    directory = DeploymentDirectory(deploy_config.base_dir, domain)
    run_repo = RunRepository(directory.run_record_path)

    log_operation(
        logger,
        "Deploying WordPress",
        {"domain": domain, "namespace": namespace, "directory": directory.path},
    )

    service = None
    try:
        if deploy_config.dry_run:
            logger.info("[DRY RUN] No changes will be made to the cluster")
            service = DeployService(None, dry_run=True)
            manifests = service.render(params)
            written = directory.write_manifests(service.render_files(manifests))
            service.deploy(params, manifests)
            if args.output == "json":
                print(json.dumps({"dry_run": True, "files": [str(p) for p in written]}, indent=2))
            else:
                for path in written:
                    print(path)
            return 0

        if deploy_config.install_runtime:
            installer = K3sInstaller(install_url=deploy_config.k3s_install_url)
            if installer.ensure_installed() and cluster_config.kubeconfig is None:
                cluster_config.kubeconfig = K3S_KUBECONFIG

        try:
            previous = run_repo.load()
        except ValueError as e:
            logger.warning(f"Ignoring unreadable run record {run_repo.record_path}: {e}")
            previous = None
        if previous is not None and not previous.succeeded():
            stopped = previous.failed_step()
            where = f" at step {stopped.name}" if stopped else ""
            logger.warning(
                f"Previous run {previous.run_id} did not finish{where}; re-applying all steps"
            )

        cluster = KubernetesClusterClient(cluster_config)
        cluster.wait_for_nodes_ready()

        service = DeployService(
            cluster,
            on_update=run_repo.save,
            deployment_timeout=cluster_config.deployment_timeout,
        )
        manifests = service.render(params)
        directory.write_manifests(service.render_files(manifests))

        def save_run_on_shutdown() -> None:
            if service.current_run is not None:
                service.current_run.mark_interrupted()
                run_repo.save(service.current_run)
                logger.info(f"Run record saved to {run_repo.record_path}")

        with ShutdownCoordinator(save_run_on_shutdown):
            run = service.deploy(params, manifests)
        log_success(logger, f"All {len(run.steps)} deployment steps completed")

        reporter = CredentialReporter(
            directory,
            resolve_ip=lambda: resolve_public_ip(deploy_config.public_ip_url),
        )
        summary = reporter.report(params)
        resources = cluster.list_namespace_resources(namespace)

        if args.output == "json":
            output_data = {
                "summary": summary.to_dict(),
                "run_id": run.run_id,
                "completed_steps": run.completed_steps(),
                "resources": [
                    {"kind": r.kind, "name": r.name, "status": r.status} for r in resources
                ],
            }
            print(json.dumps(output_data, indent=2))
        else:
            print(summary.format_console_summary())
            print("\nCluster Status:")
            for resource in resources:
                print(f"  {resource.format_line()}")

        log_success(logger, f"WordPress deployment complete: {summary.url}")
        return 0

    except WordPressDeployError as e:
        logger.error(str(e))
        failed = service.current_run.failed_step() if service and service.current_run else None
        if failed is not None:
            logger.error(f"Deployment stopped at step {failed.name}")
        if run_repo.record_path.exists():
            logger.info(f"Step record: {run_repo.record_path}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error during deployment: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


def cmd_php_limits(args: argparse.Namespace) -> int:
    """Execute the PHP limits command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    from k3s_wordpress.application.php_limits_service import PhpLimitsService
    from k3s_wordpress.infrastructure.cluster_client import KubernetesClusterClient

    logger = setup_logger(verbose=args.verbose)

    try:
        namespace = validate_namespace(args.namespace)
        cluster_config = build_cluster_config(args)
    except (InvalidInputError, ValueError) as e:
        logger.error(str(e))
        return 1

    logger.info(f"Updating PHP limits for WordPress in namespace {namespace}")
    try:
        cluster = KubernetesClusterClient(cluster_config)
        result = PhpLimitsService(cluster).apply(namespace)
        print(result.format_report())
        log_success(logger, "PHP limits updated")
        return 0
    except WordPressDeployError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Unexpected error updating PHP limits: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


def main(argv: Sequence[str] | None = None) -> NoReturn:
    """Main entry point for the deploy command.

    Parses arguments and dispatches to the command handler.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.help or not args.domain:
        parser.print_help()
        sys.exit(1)

    sys.exit(cmd_deploy(args))


def php_limits_main(argv: Sequence[str] | None = None) -> NoReturn:
    """Main entry point for the PHP limits command."""
    parser = create_php_limits_parser()
    args = parser.parse_args(argv)

    if args.help:
        parser.print_help()
        sys.exit(1)

    sys.exit(cmd_php_limits(args))


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
PHP limit settings applied through a WordPress .htaccess file.

The stock WordPress image caps uploads at 2MB. These settings raise the
upload, memory and execution limits through ``php_value`` directives that
Apache's mod_php reads from .htaccess.
"""

from dataclasses import dataclass

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "php_limits",
        "description": "PHP limit settings and .htaccess rendering",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


HTACCESS_PATH = "/var/www/html/.htaccess"
HTACCESS_BACKUP_PATH = "/var/www/html/.htaccess.backup"
HTACCESS_OWNER = "www-data:www-data"
HTACCESS_MODE = "644"

WORDPRESS_REWRITE_BLOCK = r"""# BEGIN WordPress
# The directives (lines) between "BEGIN WordPress" and "END WordPress" are
# dynamically generated, and should only be modified via WordPress filters.
# Any changes to the directives between these markers will be overwritten.
<IfModule mod_rewrite.c>
RewriteEngine On
RewriteRule .* - [E=HTTP_AUTHORIZATION:%{HTTP:Authorization}]
RewriteBase /
RewriteRule ^index\.php$ - [L]
RewriteCond %{REQUEST_FILENAME} !-f
RewriteCond %{REQUEST_FILENAME} !-d
RewriteRule . /index.php [L]
</IfModule>

# END WordPress
"""


@dataclass(frozen=True)
class PhpLimits:
    """PHP limits written to .htaccess.

    Attributes:
        upload_max_filesize: Largest single upload
        post_max_size: Largest POST body
        memory_limit: PHP memory limit
        max_execution_time: Script execution limit in seconds
        max_input_time: Input parsing limit in seconds
    """

    upload_max_filesize: str = "128M"
    post_max_size: str = "128M"
    memory_limit: str = "256M"
    max_execution_time: int = 300
    max_input_time: int = 300

    def as_settings(self) -> dict[str, str]:
        """Return the settings in directive order.

        Returns:
            Ordered mapping of PHP setting name to value
        """
        return {
            "upload_max_filesize": self.upload_max_filesize,
            "post_max_size": self.post_max_size,
            "memory_limit": self.memory_limit,
            "max_execution_time": str(self.max_execution_time),
            "max_input_time": str(self.max_input_time),
        }

    def render_htaccess(self) -> str:
        """Render the full .htaccess content.

        Returns:
            PHP configuration block followed by the WordPress rewrite block
        """
        lines = ["# PHP Configuration"]
        lines.extend(f"php_value {name} {value}" for name, value in self.as_settings().items())
        return "\n".join(lines) + "\n\n" + WORDPRESS_REWRITE_BLOCK


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")

import os
import ssl
from typing import Any, Dict

from .constants import ENV_DISABLE_SSL_VERIFY


def expand_path(path):
    """Expand environment variables and user home directory in path."""
    if not path:
        return path
    path = os.path.expandvars(path)
    path = os.path.expanduser(path)
    return path


def create_ssl_context():
    ssl_cert_file = expand_path(os.environ.get("SSL_CERT_FILE"))
    requests_ca_bundle = expand_path(os.environ.get("REQUESTS_CA_BUNDLE"))
    ssl_cert_dir = expand_path(os.environ.get("SSL_CERT_DIR"))

    if ssl_cert_file or requests_ca_bundle or ssl_cert_dir:
        import certifi

        return ssl.create_default_context(
            cafile=ssl_cert_file or requests_ca_bundle or certifi.where(),
            capath=ssl_cert_dir,
        )

    # System certificates
    import truststore

    return truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)


def get_httpx_client_kwargs() -> Dict[str, Any]:
    """Get standardized httpx client configuration."""
    client_kwargs: Dict[str, Any] = {"follow_redirects": True, "timeout": 30.0}

    disable_ssl_env = os.environ.get(ENV_DISABLE_SSL_VERIFY, "").lower()
    disable_ssl_from_env = disable_ssl_env in ("1", "true", "yes", "on")

    if disable_ssl_from_env:
        client_kwargs["verify"] = False
    else:
        client_kwargs["verify"] = create_ssl_context()

    # HTTP_PROXY, HTTPS_PROXY, NO_PROXY are read by httpx by default

    return client_kwargs

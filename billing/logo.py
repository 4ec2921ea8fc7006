"""Company logo handling.

Logos are stored on the document as PNG data URIs so a rendered bill is
self-contained and can be captured without fetching anything later.
"""

import base64
import io
import ipaddress
import logging
import socket
from urllib.parse import urlparse

import requests
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 256
DEFAULT_TIMEOUT = 30


LOGO_URL_SCHEMES = ('http', 'https')


class LogoError(Exception):
    """Raised when a logo cannot be downloaded or decoded."""


def resolves_to_internal_address(hostname):
    """True when a logo host resolves somewhere the service must not fetch.

    Hosts that do not resolve count as internal.
    """
    try:
        address = ipaddress.ip_address(socket.gethostbyname(hostname))
    except (socket.gaierror, ValueError):
        return True
    return any((
        address.is_private,
        address.is_loopback,
        address.is_link_local,
        address.is_reserved,
        address.is_multicast,
    ))


def _host_allowed(hostname, allowed_domains):
    return any(
        hostname == domain or hostname.endswith(f".{domain}")
        for domain in allowed_domains
    )


def validate_logo_url(url, allowed_domains=()):
    """Check a logo URL before it is downloaded.

    Raises:
        ValueError: If the URL is not a public http(s) URL on an
            allowed host.
    """
    parsed = urlparse(url)
    if parsed.scheme not in LOGO_URL_SCHEMES:
        raise ValueError(
            f"Logo URL must use http or https, not '{parsed.scheme}'"
        )

    hostname = parsed.hostname
    if not hostname:
        raise ValueError("Logo URL has no host")
    if allowed_domains and not _host_allowed(hostname, allowed_domains):
        raise ValueError(f"Logo host '{hostname}' is not an allowed domain")
    if resolves_to_internal_address(hostname):
        raise ValueError(f"Logo host '{hostname}' is an internal address")


def image_to_data_uri(image):
    """Encode a PIL image as a PNG data URI."""
    buffered = io.BytesIO()
    image.save(buffered, format="PNG")
    encoded = base64.b64encode(buffered.getvalue()).decode('utf-8')
    return f"data:image/png;base64,{encoded}"


def logo_from_bytes(data, max_size=DEFAULT_MAX_SIZE):
    """Turn uploaded image bytes into a logo data URI.

    The image is converted to RGB (RGBA when it has transparency) and
    shrunk to fit within ``max_size`` pixels on each side.

    Raises:
        LogoError: If the bytes are not a readable image.
    """
    if not data:
        raise LogoError("Logo image is empty")
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise LogoError(f"Failed to read logo image: {str(e)}") from e

    if image.mode in ('RGBA', 'LA') or 'transparency' in image.info:
        image = image.convert('RGBA')
    elif image.mode != 'RGB':
        image = image.convert('RGB')

    image.thumbnail((max_size, max_size))
    return image_to_data_uri(image)


def logo_from_url(url, allowed_domains=(), max_size=DEFAULT_MAX_SIZE,
                  timeout=DEFAULT_TIMEOUT):
    """Download a logo and turn it into a data URI.

    Raises:
        ValueError: If the URL fails validation.
        LogoError: If the download fails or is not an image.
    """
    validate_logo_url(url, allowed_domains)

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise LogoError(f"Failed to download logo: {str(e)}") from e

    logger.info(f"Downloaded logo from {url} ({len(response.content)} bytes)")
    return logo_from_bytes(response.content, max_size)

"""Shortcode generation and URL inspection utilities

This module provides the pure functions behind URL shortening: validating a
submitted URL, deriving its deterministic shortcode and extracting the domain
used for metrics.

Functions:
    generate_shortcode(url) -> str:
        Derive an 8-character shortcode from the SHA-256 hash of a URL.

    validate_url(url) -> None:
        Raise ValidationError unless url is an absolute http(s) URL with a host.

    extract_domain(url) -> str | None:
        Return the host of a URL without port or userinfo, None if unparseable.

Example:
    >>> from urlshortener.utils import generate_shortcode, extract_domain
    >>> generate_shortcode('https://example.com/test')
    'm4bHI5oT'
    >>> extract_domain('https://example.com:8080/test')
    'example.com'
"""

import re
import base64
import string
import hashlib
from typing import NamedTuple
from urllib.parse import unquote

from urlshortener.constants import ShortCode
from urlshortener.exceptions import ValidationError


ALLOWED_SCHEMES = frozenset({'http', 'https'})

_CONTROL_CHARACTERS = re.compile(r'[\x00-\x1f\x7f]')

# fmt: off
_SCHEME_CHARACTERS   = frozenset(string.ascii_letters + string.digits + '+-.')
_USERINFO_CHARACTERS = frozenset(string.ascii_letters + string.digits + "-._~!$&'()*+,;=:%@")
_HOST_CHARACTERS     = frozenset(string.ascii_letters + string.digits + "-._~!$&'()*+,;=:[]<>\"")
_HEX_DIGITS          = frozenset(string.hexdigits)
# fmt: on


# fmt: off
class URLParts(NamedTuple):
    scheme: str     # Lowercased, '' when absent
    host: str       # Unescaped host with optional ':port', '' when absent
    path: str       # Escaped path, query and fragment removed
# fmt: on


def generate_shortcode(url: str) -> str:
    """Derive a deterministic shortcode from a URL.

    Procedure:
        1. SHA-256 over the UTF-8 bytes of the exact URL (no normalization).
        2. URL-safe base64 encoding of the 32-byte digest.
        3. Keep the first 8 characters.
        4. Replace '_' with 'a', then '-' with 'b'.

    Args:
        url (str):
            URL to hash, used verbatim.

    Returns:
        str: 8-character alphanumeric shortcode.

    Example:
        >>> generate_shortcode('https://example.com')
        'EAaArVRs'

    NOTE:
        - Two different URLs sharing the same 8-character prefix get the same
          shortcode. Collisions are neither detected nor resolved.
        - The substitution step keeps codes alphanumeric; it is part of the
          code format and must not change.
    """
    digest = hashlib.sha256(url.encode('utf-8')).digest()
    shortcode = base64.urlsafe_b64encode(digest).decode('ascii')[: ShortCode.LENGTH]
    for old, new in ShortCode.SUBSTITUTIONS:
        shortcode = shortcode.replace(old, new)
    return shortcode


def _valid_optional_port(port: str) -> bool:
    """'' or ':' followed by ASCII digits only (no range check)."""
    if not port:
        return True
    return port[0] == ':' and all(c in string.digits for c in port[1:])


def _check_escapes(text: str, mode: str | None = None) -> None:
    """Reject malformed %XX escapes, and characters not allowed in a host.

    mode:
        None    - only the escapes are checked (path, fragment, userinfo)
        'host'  - also restricts characters, and escapes to %25 or non-ASCII bytes
        'zone'  - IPv6 zone identifier, host characters with any valid escape
    """
    i = 0
    while i < len(text):
        if text[i] == '%':
            escape = text[i : i + 3]
            if len(escape) < 3 or not (escape[1] in _HEX_DIGITS and escape[2] in _HEX_DIGITS):
                raise ValueError(f'invalid URL escape "{escape}"')
            if mode == 'host' and int(escape[1], 16) < 8 and escape != '%25':
                raise ValueError(f'invalid URL escape "{escape}"')
            i += 3
            continue
        if mode is not None and text[i] < '\x80' and text[i] not in _HOST_CHARACTERS:
            raise ValueError(f'invalid character "{text[i]}" in host name')
        i += 1


def _split_scheme(url: str) -> tuple[str, str]:
    for i, c in enumerate(url):
        if c == ':':
            if i == 0:
                raise ValueError('missing protocol scheme')
            return url[:i].lower(), url[i + 1 :]
        if c not in _SCHEME_CHARACTERS or (i == 0 and c not in string.ascii_letters):
            # A scheme starts with a letter; anything else means there is none
            return '', url
    return '', url


def _parse_host(host: str) -> str:
    if host.startswith('['):
        end = host.rfind(']')
        if end < 0:
            raise ValueError("missing ']' in host")
        port = host[end + 1 :]
        if not _valid_optional_port(port):
            raise ValueError(f'invalid port "{port}" after host')
        zone = host.find('%25', 0, end)
        if zone >= 0:
            _check_escapes(host[:zone], 'host')
            _check_escapes(host[zone:end], 'zone')
            _check_escapes(host[end:], 'host')
            return unquote(host)
    else:
        colon = host.rfind(':')
        if colon >= 0 and not _valid_optional_port(host[colon:]):
            raise ValueError(f'invalid port "{host[colon:]}" after host')
    _check_escapes(host, 'host')
    return unquote(host)


def _parse_authority(authority: str) -> str:
    userinfo, at, host = authority.rpartition('@')
    if at:
        if any(c not in _USERINFO_CHARACTERS for c in userinfo):
            raise ValueError('invalid userinfo')
        _check_escapes(userinfo)
    return _parse_host(host)


def _parse(url: str) -> URLParts:
    """Parse an absolute or relative URL reference, raising ValueError when malformed."""
    url, _, fragment = url.partition('#')
    if _CONTROL_CHARACTERS.search(url):
        raise ValueError('invalid control character in URL')

    scheme, rest = _split_scheme(url)
    rest = rest.partition('?')[0]

    if not rest.startswith('/'):
        if scheme:
            # Opaque URL such as 'mailto:someone@example.com', no host
            _check_escapes(fragment)
            return URLParts(scheme, '', '')
        if ':' in rest.partition('/')[0]:
            raise ValueError('first path segment in URL cannot contain colon')

    host = ''
    if rest.startswith('//') and (scheme or not rest.startswith('///')):
        authority, slash, path = rest[2:].partition('/')
        host = _parse_authority(authority)
        rest = slash + path

    _check_escapes(rest)
    _check_escapes(fragment)
    return URLParts(scheme, host, rest)


def _hostname(host: str) -> str:
    """Strip the port from a host, keep case and IPv6 literals without brackets."""
    colon = host.rfind(':')
    if colon >= 0 and _valid_optional_port(host[colon:]):
        host = host[:colon]
    if host.startswith('[') and host.endswith(']'):
        host = host[1:-1]
    return host


def validate_url(url: str) -> None:
    """Ensure a URL can be shortened.

    Args:
        url (str):
            URL submitted for shortening.

    Raises:
        ValidationError:
            - 'invalid URL format: <reason>' if the URL is malformed (control
              or disallowed host characters, bad %-escapes, non-numeric port,
              colon in a scheme-less first segment, e.g. ' http://example.com');
            - 'URL must have http or https scheme' for any other (or no) scheme;
            - 'URL must have a host' if the host is empty.

    Example:
        >>> validate_url('ftp://example.com')
        Traceback (most recent call last):
            ...
        urlshortener.exceptions.ValidationError: URL must have http or https scheme
        >>> validate_url('http://exa mple.com')
        Traceback (most recent call last):
            ...
        urlshortener.exceptions.ValidationError: invalid URL format: invalid character " " in host name
    """
    try:
        parts = _parse(url)
    except ValueError as e:
        raise ValidationError(f'invalid URL format: {e}') from e

    if parts.scheme not in ALLOWED_SCHEMES:
        raise ValidationError('URL must have http or https scheme')

    if not parts.host:
        raise ValidationError('URL must have a host')


def extract_domain(url: str) -> str | None:
    """Extract the domain (host without port) of a URL.

    Args:
        url (str):
            URL to inspect.

    Returns:
        str | None:
            Unescaped domain, '' when the URL has no host,
            None when the URL cannot be parsed.

    Example:
        >>> extract_domain('https://sub.example.com/path?q=1')
        'sub.example.com'
        >>> extract_domain('not-a-url')
        ''
    """
    try:
        parts = _parse(url)
    except ValueError:
        return None
    return _hostname(parts.host)

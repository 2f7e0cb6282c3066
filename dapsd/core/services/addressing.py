"""
Host addressing — the ``<language>.docs`` virtual-directory convention.

A reader asks for ``http://rust.docs/daps/index.html``; the language
comes from the host, the project and file from the path. This module
only deals with the host part.
"""

from __future__ import annotations

from dapsd.core.errors import BadAddressingError

DOCS_SUFFIX = ".docs"


def normalize_language(language: str) -> str:
    """Canonical form of a language name (hosts are case-insensitive)."""
    return language.strip().lower()


def language_from_host(host: str | None) -> str:
    """Extract the language name from a request host.

    The host is lower-cased and any ``:port`` is dropped before the
    suffix is stripped:

        >>> language_from_host("Rust.docs:8080")
        'rust'

    Raises:
        BadAddressingError: No host, or the host does not end in
            ``.docs``, or nothing is left once the suffix is removed.
    """
    if not host:
        raise BadAddressingError("Request carries no host")

    name = normalize_language(host)
    if not name.startswith("[") and name.count(":") == 1:
        name = name.partition(":")[0]

    if not name.endswith(DOCS_SUFFIX):
        raise BadAddressingError(f"Host {host!r} is not a '{DOCS_SUFFIX}' address")

    language = name[: -len(DOCS_SUFFIX)]
    if not language:
        raise BadAddressingError(f"Host {host!r} names no language")
    return language

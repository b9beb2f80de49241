"""
Link extraction, URL resolution and scope checks for SiteCrawler.
"""
from __future__ import annotations

from typing import List, Optional
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag
from pydantic_core import Url

__all__ = ("extract_links", "resolve_url", "in_scope")


def extract_links(html: str) -> List[str]:
    """
    Return the raw ``href`` of every ``<a>`` in *html*, in document order.

    Values are not validated; anchors without ``href`` are ignored.
    """
    soup = BeautifulSoup(html, "html.parser")
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if isinstance(href_val, str):
            links.append(href_val)
    return links


def resolve_url(href: Optional[str], base: str) -> Optional[str]:
    """
    Resolve *href* against *base* into an absolute URL.

    Handles relative, protocol-relative and absolute references. The result
    is serialized the way pydantic serializes ``HttpUrl`` (WHATWG rules):
    scheme and host lowercased, IDN hosts punycoded, default ports dropped,
    non-ASCII and unsafe characters percent-encoded, an empty http(s) path
    becomes ``/``. Query and fragment are otherwise kept as written.
    Returns None if the result is not a usable absolute URL.
    """
    if href is None:
        return None
    try:
        return str(Url(urljoin(base, href.strip())))
    except ValueError:
        # pydantic_core.ValidationError subclasses ValueError
        return None


def in_scope(url: str, prefix: str, strict: bool = False) -> bool:
    """
    Check that *url* belongs to the crawl rooted at *prefix*.

    By default this is a plain string-prefix test, so ``/ab`` matches a
    ``/a`` prefix. With *strict* the scheme and host must be equal and the
    path must continue the prefix path at a ``/`` boundary.
    """
    if not strict:
        return url.startswith(prefix)
    target, root = urlsplit(url), urlsplit(prefix)
    if (target.scheme, target.netloc) != (root.scheme, root.netloc):
        return False
    if target.path == root.path:
        return True
    root_dir = root.path if root.path.endswith("/") else root.path + "/"
    return target.path.startswith(root_dir)

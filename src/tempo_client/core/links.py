"""
Parser for Link-style continuation headers.

A header value holds one or more descriptors separated by commas. Each
descriptor is a URL followed by semicolon-separated key=value attributes:

    </v1/series/key/k/segment/?start=...>; rel="next", </v1/...>; rel="prev"

Only the descriptor whose rel attribute is "next" matters to pagination, but
the parser returns all of them.
"""
# [CTX:PBI-1:1-2:LINK]

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_URL_STRIP = "<> \t'\""
_ATTR_STRIP = " \t'\""

NEXT_REL = "next"


@dataclass
class LinkDescriptor:
    """
    One descriptor from a Link header.

    Attributes:
        url: Target URL with brackets and quotes removed
        attributes: Lower-cased attribute names mapped to their values
    """
    url: str
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def rel(self) -> str | None:
        return self.attributes.get("rel")


def parse_link_header(value: str | None) -> list[LinkDescriptor]:
    """
    Parse a Link header value into descriptors, in header order.

    Attribute tokens without '=' are skipped rather than failing the parse.

    Args:
        value: Raw header value; None or blank means no links

    Returns:
        List of LinkDescriptor, empty if the header is absent or blank
    """
    if not value or not value.strip():
        return []

    descriptors = []
    for chunk in value.split(","):
        if not chunk.strip():
            continue

        url_token, *attr_tokens = chunk.split(";")
        descriptor = LinkDescriptor(url=url_token.strip(_URL_STRIP))

        for token in attr_tokens:
            if "=" not in token:
                if token.strip():
                    logger.debug(
                        f"[CTX:PBI-1:1-2:LINK] Skipping malformed link attribute {token!r}"
                    )
                continue
            key, _, attr_value = token.partition("=")
            descriptor.attributes[key.strip(_ATTR_STRIP).lower()] = attr_value.strip(_ATTR_STRIP)

        descriptors.append(descriptor)

    return descriptors


def index_by_rel(descriptors: list[LinkDescriptor]) -> dict[str, LinkDescriptor]:
    """Map each descriptor by its rel attribute, or by its URL when it has none."""
    indexed = {}
    for descriptor in descriptors:
        key = descriptor.rel if descriptor.rel is not None else descriptor.url
        indexed.setdefault(key, descriptor)
    return indexed


def find_next_url(value: str | None) -> str | None:
    """Return the URL of the rel="next" descriptor, or None."""
    descriptor = index_by_rel(parse_link_header(value)).get(NEXT_REL)
    if descriptor is None or not descriptor.url:
        return None
    return descriptor.url

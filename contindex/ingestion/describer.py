"""Descriptive chapter identifiers derived from section titles and content."""

import logging
import re

from contindex.config import NamingConfig
from contindex.models.section import Section

logger = logging.getLogger(__name__)

DESCRIPTOR_SEPARATOR = "-"

TITLE_STOP_WORDS: frozenset[str] = frozenset(
    {"the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by"}
)
MAX_TITLE_WORDS = 3

# Ordered (pattern, label) tables, first match wins. Reordering an entry
# changes the identifiers of existing documents.
TOPIC_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"postgresql|postgres|pg"), "postgresql"),
    (re.compile(r"mongodb|mongo"), "mongodb"),
    (re.compile(r"redis"), "redis"),
    (re.compile(r"kubernetes|k8s"), "kubernetes"),
    (re.compile(r"docker"), "docker"),
    (re.compile(r"jwt|oauth"), "oauth"),
    (re.compile(r"stripe|payment"), "payments"),
    (re.compile(r"webhook"), "webhooks"),
    (re.compile(r"graphql|gql"), "graphql"),
    (re.compile(r"rest|api"), "rest-api"),
)

FUNCTION_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"authentication|auth|login"), "authentication"),
    (re.compile(r"authorization|permission"), "authorization"),
    (re.compile(r"database|schema|model"), "database"),
    (re.compile(r"deployment|deploy|production"), "deployment"),
    (re.compile(r"monitoring|metrics|logging"), "monitoring"),
    (re.compile(r"security|encryption|compliance"), "security"),
    (re.compile(r"testing|test|spec"), "testing"),
    (re.compile(r"configuration|config|setup"), "configuration"),
)

_UNSAFE_IDENTIFIER_CHARS = re.compile(r"[^a-z0-9-]")
_MULTIPLE_DASHES = re.compile(r"-+")


def first_match(
    patterns: tuple[tuple[re.Pattern[str], str], ...], text: str
) -> str:
    """Return the label of the first pattern found in ``text``, or ""."""
    for pattern, label in patterns:
        if pattern.search(text):
            return label
    return ""


def sanitize_identifier(name: str) -> str:
    """Reduce a name to lower-case letters, digits and single dashes."""
    name = _UNSAFE_IDENTIFIER_CHARS.sub("-", name.lower())
    return _MULTIPLE_DASHES.sub("-", name).strip("-")


class DescriptorExtractor:
    """Derives a filesystem-safe identifier for a section.

    The identifier joins up to three descriptors: meaningful title words,
    a technology topic and a functional role. The result depends only on
    the section's title and body, so the same section always gets the same
    identifier; collisions between sections are not resolved here.

    Args:
        config: NamingConfig with the length limit and fallback identifier.
    """

    def __init__(self, config: NamingConfig | None = None) -> None:
        self._config = config or NamingConfig()

    def describe(self, section: Section) -> str:
        """Build the identifier (without extension) for ``section``."""
        content = f"{section.title} {section.body}".lower()

        descriptors = [
            self.title_descriptor(section.title),
            self.topic_descriptor(content),
            self.function_descriptor(content),
        ]
        joined = DESCRIPTOR_SEPARATOR.join(d for d in descriptors if d)

        identifier = sanitize_identifier(joined)
        identifier = identifier[: self._config.max_identifier_length].rstrip("-")

        if not identifier:
            identifier = self._config.default_identifier

        logger.debug("Section '%s' -> %s", section.title, identifier)
        return identifier

    def title_descriptor(self, title: str) -> str:
        """Keep the first few meaningful words of a title."""
        words = [
            word
            for word in title.lower().split()
            if word not in TITLE_STOP_WORDS and len(word) > 2
        ]
        return DESCRIPTOR_SEPARATOR.join(words[:MAX_TITLE_WORDS])

    def topic_descriptor(self, content: str) -> str:
        """Label the technology a lower-cased text is mostly about."""
        return first_match(TOPIC_PATTERNS, content)

    def function_descriptor(self, content: str) -> str:
        """Label the functional role of a lower-cased text."""
        return first_match(FUNCTION_PATTERNS, content)

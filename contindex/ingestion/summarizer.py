"""Size estimates, summaries and key terms for sections."""

from contindex.config import SummaryConfig
from contindex.models.section import Section, SectionMetadata

ELLIPSIS = "..."

# Scanned in this order; a term is reported at most once.
KEY_TERMS: tuple[str, ...] = (
    "api",
    "endpoint",
    "database",
    "schema",
    "authentication",
    "authorization",
    "security",
    "deployment",
    "monitoring",
    "testing",
    "configuration",
    "jwt",
    "oauth",
    "postgresql",
    "mongodb",
    "redis",
    "kubernetes",
    "docker",
)


def estimate_tokens(text: str, chars_per_token: int = 4) -> int:
    """Estimate the token count of a text from its length.

    This is a fixed character ratio, not a tokenizer, and is only good
    enough for rough sizing.

    Args:
        text: The text to estimate tokens for.
        chars_per_token: Characters assumed per token.

    Returns:
        ``len(text) // chars_per_token``.
    """
    return len(text) // chars_per_token


def extract_key_terms(text: str) -> list[str]:
    """Return the vocabulary terms found in ``text``, in vocabulary order."""
    lowered = text.lower()
    return [term for term in KEY_TERMS if term in lowered]


class MetadataSummarizer:
    """Computes the metadata listed for each chapter.

    Args:
        config: SummaryConfig with summary length and token ratio.
    """

    def __init__(self, config: SummaryConfig | None = None) -> None:
        self._config = config or SummaryConfig()

    def summarize(self, section: Section) -> SectionMetadata:
        """Build summary, key terms and size estimates for a section."""
        return SectionMetadata(
            summary=self.summary(section.body),
            key_terms=extract_key_terms(section.body),
            token_estimate=estimate_tokens(section.body, self._config.chars_per_token),
            word_count=section.word_count,
        )

    def summary(self, text: str) -> str:
        """Use the first sentence, or the opening characters when it is too short.

        Args:
            text: Section body.

        Returns:
            At most ``max_length`` characters, followed by an ellipsis when
            the text was cut.
        """
        limit = self._config.max_length

        first_sentence = text.split(".")[0]
        if len(first_sentence) > self._config.min_sentence_length:
            return self._truncate(first_sentence.strip(), limit)

        return self._truncate(text, limit)

    @staticmethod
    def _truncate(text: str, limit: int) -> str:
        if len(text) > limit:
            return text[:limit] + ELLIPSIS
        return text

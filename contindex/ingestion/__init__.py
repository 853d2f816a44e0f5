"""Document ingestion: reading, segmentation, naming and summarizing."""

from contindex.ingestion.analyzer import DocumentAnalyzer
from contindex.ingestion.describer import DescriptorExtractor
from contindex.ingestion.reader import DocumentReader
from contindex.ingestion.segmenter import Segmenter
from contindex.ingestion.summarizer import MetadataSummarizer, estimate_tokens

__all__ = [
    "DescriptorExtractor",
    "DocumentAnalyzer",
    "DocumentReader",
    "MetadataSummarizer",
    "Segmenter",
    "estimate_tokens",
]

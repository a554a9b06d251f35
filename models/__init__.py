from .extraction_request import ExtractionRequest, LabelMode
from .snippet import FormatOutcome, PageResult, SiteResult, SnippetLabel, SnippetRecord

__all__ = [
    'ExtractionRequest',
    'LabelMode',
    'FormatOutcome',
    'PageResult',
    'SiteResult',
    'SnippetLabel',
    'SnippetRecord',
]

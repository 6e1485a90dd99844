"""Exception hierarchy for the triage pipeline."""


class TriageError(Exception):
    """Base class for all ae_triage errors."""


class InputError(TriageError):
    """Transcript or entity list missing at the boundary."""


class UpstreamExtractionError(TriageError):
    """The entity extractor failed; fatal for the request."""


class UpstreamCorpusError(TriageError):
    """The adverse event feed failed; recovered by the corpus adapter."""


class ConfigurationError(TriageError):
    """Invalid engine configuration (unknown strategy, bad threshold)."""

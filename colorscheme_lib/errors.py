"""Error types raised by the color-scheme downloader.

Every error is local to one source or one file. The pipeline logs them and
moves on; none of them aborts a run.
"""


class ColorSchemeError(Exception):
    """Base class for all downloader errors."""


class FetchExhausted(ColorSchemeError):
    """The retry budget for a URL was used up without a successful transfer."""

    def __init__(self, url: str, attempts: int, last_error: Exception = None):
        self.url = url
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Giving up on {url} after {attempts} attempt(s): {last_error}")


class UnpackFailure(ColorSchemeError):
    """An archive could not be extracted."""


class UnrecognizedArtifact(ColorSchemeError):
    """A downloaded file matches none of the known archive or file patterns."""


class MergeError(ColorSchemeError):
    """Base class for merges that leave the incoming file unplaced."""

    def __init__(self, base_name: str, message: str):
        self.base_name = base_name
        super().__init__(message)


class MergeAmbiguous(MergeError):
    """Same-scheme occupants exist but none could be judged obsolete."""


class MergeSlotsExhausted(MergeError):
    """Every variant slot is taken by an unrelated scheme."""

"""Update status model."""

from enum import Enum


class UpdateStatus(str, Enum):
    """Per-mod update state."""

    UNKNOWN = "unknown"  # not yet checked, or check cancelled
    CHECKING = "checking"  # catalog request in flight
    UP_TO_DATE = "up_to_date"
    UPDATE_AVAILABLE = "update_available"
    DOWNLOADING = "downloading"  # update download in progress
    NO_SOURCE = "no_source"  # no catalog slug, or a guessed one that found nothing
    ERROR = "error"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")

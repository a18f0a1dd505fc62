class TrackerError(Exception):
    """Base class for every error raised by the tracker."""


class FetchError(TrackerError):
    """The target page could not be fetched. Fatal for the run."""


class LedgerError(TrackerError):
    """The ledger file exists but cannot be read or parsed. Fatal for the run."""


class LedgerSaveError(LedgerError):
    """The ledger could not be written. Reported in-band."""


class ValidationError(TrackerError):
    """The extracted blob is not a usable version payload. Reported in-band."""


class EmptyBlobError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Base64 content is empty")


class Base64Error(ValidationError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid base64 content: {detail}")


class Utf8Error(ValidationError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Decoded content is not valid UTF-8: {detail}")


class JsonError(ValidationError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Decoded content is not a valid JSON object: {detail}")


class MissingFieldError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Properties 'clientVersion' or 'buildDate' not found")

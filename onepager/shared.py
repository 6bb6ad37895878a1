from enum import Enum


class Color(str, Enum):
    SUCCESS = "\033[92m"
    ERROR = "\033[91m"
    INFO = "\033[94m"
    WARNING = "\033[93m"
    RESET = "\033[0m"


def colored(text: str, color: Color) -> str:
    return f"{color.value}{text}{Color.RESET.value}"


def echo(text: str, color: Color = Color.INFO) -> None:
    print(colored(text, color))


class UnknownSectionError(ValueError):
    def __init__(self, section: str):
        super().__init__(f"Unknown resume section: {section}")


class UnknownFieldError(ValueError):
    def __init__(self, owner: str, field: str):
        super().__init__(f"Unknown field '{field}' on {owner}")


class MeasurementUnavailableError(ValueError):
    def __init__(self, content_height: float | None):
        super().__init__(f"No measurable content (content height: {content_height})")


class ExportError(Exception):
    """Base for failures that abort an export without producing a file."""


class CaptureFailureError(ExportError):
    def __init__(self, reason: str):
        super().__init__(f"Could not capture preview bitmap: {reason}")


class EncodingFailureError(ExportError):
    def __init__(self, kind: str, reason: str):
        super().__init__(f"Failed to encode {kind} artifact: {reason}")


class CollaboratorFailureError(Exception):
    def __init__(self, reason: str):
        super().__init__(f"Suggestion request failed: {reason}")


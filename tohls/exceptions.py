"""Custom exceptions for the tohls conversion pipeline"""

class TohlsError(Exception):
    """
    Base exception for all tohls errors.

    Attributes:
        message (str): A description of the error.
        module (str): The module where the error originated.

    Usage:
        raise TohlsError("An error occurred", module="pipeline")
    """
    def __init__(self, message: str, module: str = None):
        self.message = message
        self.module = module or "unknown"
        super().__init__(f"[{self.module}] {self.message}")

class FormatParseError(TohlsError):
    """
    Exception raised when a format string does not follow SIZE:FRAMERATE:QUALITY.

    Every grammar violation is reported as the same "malformed format" error.
    """
    def __init__(self, value: str, module: str = "formats"):
        self.value = value
        super().__init__(f"malformed format '{value}'", module)

class MetadataError(TohlsError):
    """
    Exception raised when source metadata cannot be retrieved or parsed.

    Covers an unreachable probe tool, unparsable probe output and a zero
    frame-rate denominator.
    """
    pass

class PlanningError(TohlsError):
    """Exception raised when a rendition cannot be resolved from its format and source."""
    pass

class EncodingError(TohlsError):
    """
    Exception raised when the external encoder fails to produce a rendition.

    Attributes:
        ffmpeg_output (str): Diagnostic output of the encoder, if any.
    """
    def __init__(self, message: str, module: str = None, ffmpeg_output: str = ""):
        super().__init__(message, module)
        self.ffmpeg_output = ffmpeg_output

class PlaylistError(TohlsError):
    """Exception raised when the master playlist cannot be created or written."""
    pass

class DependencyError(TohlsError):
    """
    Exception raised when required external tools are missing.

    tohls needs both ffmpeg and ffprobe on the PATH.
    """
    pass

class ProcessingError(TohlsError):
    """
    Exception raised when processing an input file fails at some stage.

    Attributes:
        input_file: The input file being processed.
        stage: Short description of the failed stage, e.g. "unable to convert".
    """
    def __init__(self, input_file, stage: str, cause: str):
        self.input_file = input_file
        self.stage = stage
        super().__init__(f"Error while processing file '{input_file}': {stage}: {cause}", module="pipeline")

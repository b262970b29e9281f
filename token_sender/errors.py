from typing import Optional


class ScriptError(Exception):
    """
    Base class for every failure a command reports to the user.

    step names the stage that failed (e.g. "load config", "fetch chain id") and subject
    names what it failed on (a file path, an env key, a URL).
    """

    def __init__(self, message: str, step: Optional[str] = None, subject: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.step = step
        self.subject = subject

    def __str__(self) -> str:
        if self.step is None:
            return self.message
        if self.subject is None:
            return f"{self.step} failed: {self.message}"
        return f"{self.step} failed for {self.subject}: {self.message}"


class ConfigError(ScriptError):
    pass


class ManifestError(ConfigError):
    pass


class ArtifactError(ScriptError):
    pass


class NetworkError(ScriptError):
    pass


class SubmissionError(ScriptError):
    pass

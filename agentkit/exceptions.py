"""Shared exception classes for agentkit."""


class AgentKitError(Exception):
    """Base exception for agentkit errors."""


class ConfigNotFoundError(AgentKitError):
    """Raised when agent.config.json is not found."""


class ConfigParseError(AgentKitError):
    """Raised when agent.config.json cannot be parsed."""


class ConfigValidationError(AgentKitError):
    """Raised when agent.config.json contains invalid configuration."""


class PresetNotFoundError(AgentKitError):
    """Raised when no preset file matches the requested identifier."""


class PresetParseError(AgentKitError):
    """Raised when a preset file is not a valid preset document."""


class SourceNotFoundError(AgentKitError):
    """Raised when a local registry source doesn't exist or isn't a directory."""


class RetrievalError(AgentKitError):
    """Raised when a remote registry cannot be downloaded."""


class InvalidModulePathError(AgentKitError):
    """Raised when a module path is not of the form <category>/<name>."""


class ModuleSourceNotFoundError(AgentKitError):
    """Raised when a module cannot be found in any registry layout."""


class OverrideNotFoundError(AgentKitError):
    """Raised when the local file of an override doesn't exist."""

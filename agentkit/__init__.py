"""agentkit - assemble a .agent directory from a registry of modules."""

__version__ = "0.3.0"

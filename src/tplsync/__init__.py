"""tplsync - StackGuardian template pull/push engine."""

__version__ = "0.1.0"

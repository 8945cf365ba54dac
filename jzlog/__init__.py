"""Named, thread-safe log libraries with stream helpers, message capture, environment flags, stack traces and a symbol demangler."""

__version__ = "0.1.0"
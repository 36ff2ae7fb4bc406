"""Department rates / employee payroll processing."""

__version__ = "0.1.0"

"""contentdesk: authentication, role-based access control and activity logging."""

__version__ = "0.1.0"

"""Core domain: authentication, authorization and activity logging."""

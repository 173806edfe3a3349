"""Provision a Windows service account and a startup task that mounts a network share."""

__version__ = "0.1.0"

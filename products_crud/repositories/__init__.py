"""Repositories: persistence gateways implementing core/repository_protocols.py."""

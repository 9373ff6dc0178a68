"""
ReportPortal Client - Test Suite Package.

Pytest-based unit tests for the models, filtering, HTTP clients,
launch services, configuration and CLI.
"""

"""
Application Modules.

- backend/: Knowledge base API, database, configuration
"""

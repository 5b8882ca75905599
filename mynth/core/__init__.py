"""Core utilities and shared infrastructure.

- config: Client configuration and polling policy
- constants: API URL, endpoint paths, environment variable names
- exceptions: Custom exception hierarchy
"""

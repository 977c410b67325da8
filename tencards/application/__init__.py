"""
Application layer.

Use cases orchestrate domain objects and talk to infrastructure only through
the protocols declared here.
"""

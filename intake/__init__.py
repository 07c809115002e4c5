"""
Document intake core.

Framework-free building blocks for the intake service: identities and
session tokens under ``intake.auth``, the upload schema and file receiver
under ``intake.uploads``. The FastAPI surface lives in ``intake_web``.
"""

__version__ = "1.0.0"

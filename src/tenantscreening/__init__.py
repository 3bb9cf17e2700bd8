"""Applicant risk screening and listing match scoring."""

__version__ = "0.1.0"

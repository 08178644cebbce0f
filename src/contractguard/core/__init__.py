"""Core analysis API."""

from .guardian import ContractGuardian, analyze

__all__ = ["ContractGuardian", "analyze"]

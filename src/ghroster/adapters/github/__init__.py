"""GitHub contributor source adapter."""

from __future__ import annotations

from .client import GitHubAPIError, GitHubClient

__all__ = ["GitHubAPIError", "GitHubClient"]

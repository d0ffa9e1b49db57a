"""Exception hierarchy for orgscribe."""

from __future__ import annotations


class OrgscribeError(RuntimeError):
    """Base class for every failure the command line reports and exits on."""

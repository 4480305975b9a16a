"""
Continuity of seminorms derived from a single neighbourhood ball.
"""

from src.continuity.derivation import (
    ContinuityCertificate,
    ShellRescaling,
    bound_of_shell,
    continuity_from_bound,
    continuity_of_le,
    derive_continuity,
    rescale_to_shell,
)

__all__ = [
    "ContinuityCertificate",
    "ShellRescaling",
    "derive_continuity",
    "continuity_of_le",
    "continuity_from_bound",
    "rescale_to_shell",
    "bound_of_shell",
]

"""
TUI (Terminal User Interface) module for protocol-risk.
Interactive screen for submitting a protocol and reading its risk assessment.
"""

from .app import ProtocolRiskTUI, run_tui

__all__ = ["ProtocolRiskTUI", "run_tui"]

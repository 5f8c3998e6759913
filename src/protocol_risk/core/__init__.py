"""
Request orchestration and result presentation for protocol risk assessments.
"""

from .analysis_client import (
    AnalysisClient,
    HttpAnalysisClient,
    SimulatedAnalysisClient,
    create_client,
)
from .errors import AnalysisError, InvalidTransition, ProtocolRiskError, QueryValidationError
from .lifecycle import Failure, Idle, RequestLifecycle, RequestStatus, Submitting, Success
from .orchestrator import RiskAssessmentOrchestrator
from .tabs import ResultTab, TabSelector

__all__ = [
    "AnalysisClient",
    "HttpAnalysisClient",
    "SimulatedAnalysisClient",
    "create_client",
    "ProtocolRiskError",
    "QueryValidationError",
    "AnalysisError",
    "InvalidTransition",
    "RequestLifecycle",
    "RequestStatus",
    "Idle",
    "Submitting",
    "Success",
    "Failure",
    "RiskAssessmentOrchestrator",
    "ResultTab",
    "TabSelector",
]

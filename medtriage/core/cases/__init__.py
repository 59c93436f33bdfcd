"""
Case Pipeline

Case lifecycle state machine, domain dispatch and persistence.

Usage:
    from medtriage.core.cases import (
        AnalysisDispatcher, CaseLifecycleController, InMemoryCaseStore,
    )

    controller = CaseLifecycleController(InMemoryCaseStore())
    dispatcher = AnalysisDispatcher(provider, controller)
    case = await dispatcher.submit_scan(domain, scan_type, image)
"""
from .models import Case, CaseStatus, ClinicianDecision
from .store import CaseStore, InMemoryCaseStore
from .lifecycle import CaseLifecycleController
from .routes import DOMAIN_ROUTES, PLACEHOLDER_ROUTE, DomainRoute, get_route
from .dispatcher import AnalysisDispatcher

__all__ = [
    "Case",
    "CaseStatus",
    "ClinicianDecision",
    "CaseStore",
    "InMemoryCaseStore",
    "CaseLifecycleController",
    "DOMAIN_ROUTES",
    "PLACEHOLDER_ROUTE",
    "DomainRoute",
    "get_route",
    "AnalysisDispatcher",
]

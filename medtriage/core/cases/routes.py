"""
Domain dispatch table.

Maps each health domain to how it is analysed: which provider call to make,
how the payload is normalized and how priority is derived.

Adding a domain:
    1. Write an ``async def _analyze_<domain>(provider, case)`` returning a
       tagged payload.
    2. Register it in DOMAIN_ROUTES below.
Domains without an entry take PLACEHOLDER_ROUTE.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional

from medtriage.core.clinical.base import CanonicalAnalysisResult, CasePriority, HealthDomain
from medtriage.core.clinical.normalizer import DomainPayload, normalize
from medtriage.core.clinical.payloads import PlaceholderPayload
from medtriage.core.clinical.priority import classify
from medtriage.core.llm.base import InferenceProvider
from medtriage.utils import UnsupportedDomainError
from .models import Case


@dataclass(frozen=True)
class DomainRoute:
    """How one domain is analysed, normalized and prioritised."""
    name: str
    analyze: Callable[[InferenceProvider, Case], Awaitable[DomainPayload]]
    normalize: Callable[[DomainPayload, Optional[HealthDomain]], CanonicalAnalysisResult] = normalize
    classify: Callable[[CanonicalAnalysisResult], CasePriority] = classify


async def _analyze_breast_scan(provider: InferenceProvider, case: Case) -> DomainPayload:
    return await provider.analyze_scan(case.image, case.health_domain, case.scan_type, include_bi_rads=True)


async def _analyze_breast_image(provider: InferenceProvider, case: Case) -> DomainPayload:
    return await provider.analyze_breast_image(case.image)


async def _analyze_skin_photo(provider: InferenceProvider, case: Case) -> DomainPayload:
    return await provider.analyze_scan(case.image, case.health_domain, case.scan_type, include_bi_rads=False)


async def _placeholder(provider: InferenceProvider, case: Case) -> DomainPayload:
    # No provider call: the domain has no analysis path yet
    return PlaceholderPayload(
        health_domain=case.health_domain.value,
        scan_type=case.scan_type.value,
    )


PLACEHOLDER_ROUTE = DomainRoute(name="placeholder", analyze=_placeholder)

# ── Registry: domain → route ─────────────────────────────────────────────────
DOMAIN_ROUTES: Dict[HealthDomain, DomainRoute] = {
    HealthDomain.BREAST_HEALTH: DomainRoute(name="breast_scan", analyze=_analyze_breast_scan),
    HealthDomain.BREAST_CANCER_ANALYSIS: DomainRoute(name="breast_imaging", analyze=_analyze_breast_image),
    HealthDomain.SKIN_HEALTH: DomainRoute(name="skin_photo", analyze=_analyze_skin_photo),
    # HealthDomain.DENTAL_ORTHODONTICS: cephalometry runs outside the case pipeline
}


def get_route(domain: HealthDomain, routes: Optional[Dict[HealthDomain, DomainRoute]] = None) -> DomainRoute:
    """Return the route for ``domain`` or raise UnsupportedDomainError."""
    table = DOMAIN_ROUTES if routes is None else routes
    route = table.get(domain)
    if route is None:
        raise UnsupportedDomainError(
            f"No analysis route registered for {domain.value}",
            domain=domain.value,
        )
    return route

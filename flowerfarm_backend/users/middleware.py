# users/middleware.py

"""
SESSION GATE MIDDLEWARE

Wraps every path under settings.SESSION_GATE_PROTECTED_PREFIXES
(default: /api/admin/) with the session gate.

Must sit after SessionMiddleware and AuthenticationMiddleware.
Redirects are plain 302s: the blocked URL is replaced, never stacked.
"""

from __future__ import annotations

import logging

from django.http import HttpResponseRedirect

from persistence.stores import visitor_store
from users.services.session_gate import GateConfig, GateOutcome, evaluate_gate

logger = logging.getLogger(__name__)


class SessionGateMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response
        self.config = GateConfig.from_settings()

    def __call__(self, request):
        if not self.config.protects(request.path):
            return self.get_response(request)

        user = getattr(request, "user", None)
        decision = evaluate_gate(
            is_authenticated=bool(user and user.is_authenticated),
            path=request.path,
            query_string=request.META.get("QUERY_STRING", ""),
            store=visitor_store(request),
            config=self.config,
        )

        if decision.outcome is GateOutcome.ALLOW:
            return self.get_response(request)

        if decision.outcome is GateOutcome.LOGIN:
            logger.info("Gate redirecting to login", extra={"path": request.path})

        return HttpResponseRedirect(decision.location)

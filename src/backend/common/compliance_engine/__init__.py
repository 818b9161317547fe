"""Source-agnostic rules engine for Ad Grants compliance checks.

This package intentionally contains only domain logic:
- Rule inputs are an account data provider, a link transport, and account config.
- No Google Ads SDK, SMTP, or concrete HTTP calls live here.
"""

from .context import RuleContext
from .models import (
    AccountSnapshot,
    ComplianceReport,
    RuleResult,
    RuleResultDetail,
    RuleStatus,
)
from .provider import AccountDataProvider, InMemoryAccountProvider, LinkTransport
from .runner import RulesRunner

# Import built-in rules so they self-register with the global registry.
from . import rules as _builtin_rules  # noqa: F401

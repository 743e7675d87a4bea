# Clients subpackage - External API clients
from .anthropic import ScoringClient

__all__ = ["ScoringClient"]

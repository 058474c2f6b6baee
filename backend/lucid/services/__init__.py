"""Services Layer — oracle operations and the reading/daily/journal flows.

Invariants:
    - Flows reach storage and the model only through core Protocols
    - AiConfigService is the one service that holds the ProviderHub (it reconfigures it)
    - Every model-backed operation degrades to a fallback instead of raising
"""

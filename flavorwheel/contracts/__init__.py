"""
Type contracts for the flavor wheel service.

Protocols only, no logic: the service depends on these, and concrete
descriptor stores implement them.
"""

from flavorwheel.contracts.descriptors import (
    REQUIRED_SCOPE_FIELD,
    DescriptorSource,
    ScopeFilter,
    ScopeTags,
)

__all__ = [
    "DescriptorSource",
    "REQUIRED_SCOPE_FIELD",
    "ScopeFilter",
    "ScopeTags",
]

from .contributions import (
    ContributionDef,
    ContributionDiscoveryError,
    ContributionMeta,
    apply_contributions,
    contributes,
    discover_contributions,
    import_modules,
)
from .runtime import ComposedSchema, compose_schema, render_document

__all__ = [
    "ComposedSchema",
    "ContributionDef",
    "ContributionDiscoveryError",
    "ContributionMeta",
    "apply_contributions",
    "compose_schema",
    "contributes",
    "discover_contributions",
    "import_modules",
    "render_document",
]

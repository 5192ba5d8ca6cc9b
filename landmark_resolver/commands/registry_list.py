from __future__ import annotations

from ..registry import EntityRegistry


def run(registry: EntityRegistry) -> list[str]:
    lines: list[str] = []
    for definition in registry:
        lines.append(f"{definition.canonical_id}  {definition.primary_name}")
        if definition.alternative_names:
            lines.append(f"    also: {', '.join(sorted(definition.alternative_names))}")
        if definition.keywords:
            lines.append(f"    keywords: {', '.join(definition.keywords)}")
    return lines

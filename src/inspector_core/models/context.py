"""
inspector_core.models.context

Hierarchy/trigger descriptor threaded through a UI or business-logic tree walk.

Responsibilities:
- Build the `source_chain` stamped onto action and state events.
- Derive child contexts without mutating the parent, so one parent can be shared by
  many sibling call sites concurrently.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from inspector_core.models.action import SOURCE_CHAIN_SEPARATOR

COMPONENT_LOAD_TRIGGER = "onComponentLoad"


@dataclass(frozen=True, slots=True)
class ObservabilityContext:
    widget_hierarchy: tuple[str, ...] = ()
    # Page or component owning the current context.
    current_entity_id: str | None = None
    # e.g. "onClick", "onPageLoad", "onComponentLoad"
    trigger_type: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "widget_hierarchy", tuple(self.widget_hierarchy))

    @property
    def source_chain(self) -> tuple[str, ...]:
        # Hierarchy only; the trigger is reported separately.
        if self.current_entity_id is not None:
            return (self.current_entity_id, *self.widget_hierarchy)
        return self.widget_hierarchy

    @property
    def formatted_source_chain(self) -> str:
        return SOURCE_CHAIN_SEPARATOR.join(self.source_chain)

    def copy_with(
        self,
        *,
        widget_hierarchy: Iterable[str] | None = None,
        current_entity_id: str | None = None,
        trigger_type: str | None = None,
    ) -> ObservabilityContext:
        # `None` means "keep the receiver's value".
        return replace(
            self,
            widget_hierarchy=(
                tuple(widget_hierarchy) if widget_hierarchy is not None else self.widget_hierarchy
            ),
            current_entity_id=(
                current_entity_id if current_entity_id is not None else self.current_entity_id
            ),
            trigger_type=trigger_type if trigger_type is not None else self.trigger_type,
        )

    def extend_hierarchy(self, additional: Iterable[str]) -> ObservabilityContext:
        return self.copy_with(widget_hierarchy=(*self.widget_hierarchy, *additional))

    def for_component(self, component_id: str) -> ObservabilityContext:
        # Entering a component is itself a trigger.
        return self.copy_with(
            widget_hierarchy=(*self.widget_hierarchy, component_id),
            trigger_type=COMPONENT_LOAD_TRIGGER,
        )

    def for_trigger(self, trigger_type: str) -> ObservabilityContext:
        return self.copy_with(trigger_type=trigger_type)

    def for_entity(self, entity_id: str) -> ObservabilityContext:
        return self.copy_with(current_entity_id=entity_id)

    def __str__(self) -> str:
        return f"ObservabilityContext(sourceChain: {self.formatted_source_chain})"


# --- Module Notes -----------------------------------------------------------
# Frozen + tuple-backed: every derivation returns a fresh value and no list is shared
# between a parent and its children.

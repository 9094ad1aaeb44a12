"""Merge engine — applies partial updates to settings domains.

A partial update overwrites the fields it names and leaves every other field
untouched (shallow merge). The two option groups of ``ContentDefaults`` are
the exception: their sub-fields are merged one level deep, against the
group's current value and the declared defaults, so toggling one sub-option
never resets its siblings.

Merging never validates values. Keys the target model does not know are
ignored, which keeps older code working against newer payloads.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, TypeVar, Union

from pydantic import BaseModel

from curriculum_settings.domain.models.settings import Settings
from curriculum_settings.domain.rules.registry import (
    DOMAIN_MODELS,
    OPTION_GROUPS,
    option_group_defaults,
    resolve_field_name,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
Partial = Union[Mapping[str, Any], BaseModel]


def _as_mapping(partial: Partial) -> Mapping[str, Any]:
    if isinstance(partial, BaseModel):
        # Only what the caller actually set counts as "present"
        return partial.model_dump(exclude_unset=True)
    return partial


def _merge_option_group(
    group: str,
    current: Optional[BaseModel],
    partial: Optional[Partial],
) -> Optional[BaseModel]:
    """Deep-merge *partial* into the option group *group*.

    Precedence, lowest first: declared defaults, *current*, *partial*.
    An explicit ``None`` clears the group.
    """
    if partial is None:
        return None
    model = OPTION_GROUPS[group]
    merged = option_group_defaults(group)
    if current is not None:
        merged.update(current.model_dump())
    for key, value in _as_mapping(partial).items():
        name = resolve_field_name(model, key)
        if name is None:
            logger.debug("Ignoring unknown %s option %r", group, key)
            continue
        merged[name] = value
    return model.model_construct(**merged)


def merge_domain(domain: ModelT, partial: Partial) -> ModelT:
    """Return a copy of *domain* with *partial* applied.

    *partial* may be keyed by field name or by camelCase alias, or be a model
    whose explicitly set fields form the update. The input is never mutated.
    """
    model = type(domain)
    updates: dict[str, Any] = {}
    for key, value in _as_mapping(partial).items():
        name = resolve_field_name(model, key)
        if name is None:
            logger.debug("Ignoring unknown %s field %r", model.__name__, key)
            continue
        if name in OPTION_GROUPS:
            value = _merge_option_group(name, getattr(domain, name), value)
        updates[name] = value
    return domain.model_copy(update=updates, deep=True)


def apply_update(settings: Settings, domain: str, partial: Partial) -> Settings:
    """Merge *partial* into one domain of *settings* and return the new aggregate.

    Raises
    ------
    KeyError
        If *domain* is not ``profile``, ``defaults`` or ``preferences``.
    """
    if domain not in DOMAIN_MODELS:
        raise KeyError(f"Unknown settings domain: {domain!r}")
    merged = merge_domain(getattr(settings, domain), partial)
    return settings.model_copy(update={domain: merged})

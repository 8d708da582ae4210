"""Walking a model's parent chain and resolving its texture variables."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from minecraft_assets.resource import ModelIdentifier, ResourceLocation
from minecraft_assets.schemas.models import Model, Textures

logger = logging.getLogger(__name__)

ModelLoader = Callable[[ResourceLocation], Model]
"""Given a model location, return the decoded model or raise."""


def for_each_parent(
    start: ResourceLocation,
    visit: Callable[[Model], None],
    load_model: ModelLoader,
) -> None:
    """Load ``start`` and each of its ancestors, passing every model to ``visit``.

    Models are visited child first, root last. The walk stops when a model has
    no ``parent`` or when the parent is a builtin model such as
    ``builtin/generated`` (which is never loaded). Parents are always loaded
    as the same kind as ``start``: block models chain to block models and
    item models to item models.

    Any exception raised by ``load_model`` propagates unchanged and ends the
    walk.

    Note:
        There is no depth limit; a parent chain that loops back on itself
        never terminates.

    Args:
        start: Location of a block or item model.
        visit: Called once per loaded model.
        load_model: Loads the model at a location.

    Raises:
        ValueError: If ``start`` is not a model location.
    """
    if not start.is_model:
        raise ValueError(f"Cannot walk parents of non-model resource {start!r}")

    kind = start.kind
    current = start
    while True:
        logger.debug("Loading %r", current)
        model = load_model(current)
        parent = model.parent

        visit(model)

        if parent is None:
            logger.debug("%r has no parent", current)
            return

        parent_id = ModelIdentifier(parent)
        if parent_id.is_builtin:
            logger.debug("%r ends at builtin parent '%s'", current, parent)
            return

        current = ResourceLocation(parent_id.to_owned(), kind)


def load_model_chain(
    start: ResourceLocation, load_model: ModelLoader
) -> list[Model]:
    """Return ``start`` and all of its ancestors, child first."""
    models: list[Model] = []
    for_each_parent(start, models.append, load_model)
    return models


class ModelResolver:
    """Methods for resolving a model's properties against its parents."""

    @staticmethod
    def resolve_textures(models: Iterable[Model]) -> Textures:
        """Merge the texture variables of a parent chain.

        ``models`` must be ordered child first. At each level the variables
        collected so far are resolved against the level's own variables, the
        level's variables are resolved against the collected ones, and the
        level is merged in without overriding anything a closer child already
        defined.

        Each level performs a single substitution pass. References whose
        target is never defined stay as literal ``#name`` values.

        Example:
            >>> child = Model(
            ...     parent="parent",
            ...     textures=Textures({"child_texture": "textures/child",
            ...                        "bar": "#parent_texture"}),
            ... )
            >>> parent = Model(
            ...     textures=Textures({"parent_texture": "textures/parent",
            ...                        "foo": "#child_texture"}),
            ... )
            >>> ModelResolver.resolve_textures([child, parent]).to_dict()["foo"]
            'textures/child'
        """
        resolved = Textures()
        for model in models:
            ModelResolver._fold_level(resolved, model)
        return resolved

    @staticmethod
    def resolve_model_textures(
        start: ResourceLocation, load_model: ModelLoader
    ) -> Textures:
        """Walk the parents of ``start`` and resolve its textures as it goes.

        Equivalent to ``resolve_textures(load_model_chain(start, load_model))``
        without keeping the intermediate models around.
        """
        resolved = Textures()
        for_each_parent(
            start, lambda model: ModelResolver._fold_level(resolved, model), load_model
        )
        return resolved

    @staticmethod
    def _fold_level(resolved: Textures, model: Model) -> None:
        if model.textures is None:
            return
        level = model.textures.copy()

        # child -> parent references first, then parent -> child
        resolved.resolve(level)
        level.resolve(resolved)
        resolved.merge(level)

"""Strip noise fields and empty strings from results.

Atlassian responses carry avatar URLs, self links, workflow flags and other
fields an LLM never needs. The optimizer returns a pruned copy of a JSON
tree; the original value is never mutated, so a caller can always fall back
to it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from atlassian_mcp.settings.models import GatewaySettings

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_FIELDS: tuple[str, ...] = (
    "avatarUrls",  # Jira user avatars in four sizes
    "iconUrl",  # Jira issue type / status / priority icons
    "profilePicture",  # Confluence user images
    "icon",  # Confluence space / content icons
    "self",  # self-referencing REST URLs
    "expand",
    "avatarId",
    "accountType",  # effectively always "atlassian"
    "projectTypeKey",  # effectively always "software"
    "simplified",
    "_expandable",
    "childTypes",
    "macroRenderedOutput",
    "restrictions",
    "breadcrumbs",
    "entityType",  # always "content"
    "iconCssClass",
    "colorName",
    "hasScreen",
    "isAvailable",
    "isConditional",
    "isGlobal",
    "isInitial",
    "isLooped",
    "friendlyLastModified",  # duplicate of lastModified
    "editui",
    "edituiv2",
)


@dataclass
class OptimizationStats:
    """Counters collected during one :meth:`ResponseOptimizer.optimize` pass."""

    fields_removed: int = 0
    empty_strings_removed: int = 0


class ResponseOptimizer:
    """Remove excluded keys and empty-string values from a JSON tree.

    At every object: excluded keys go first, then keys whose value is ``""``
    (``None`` survives), then surviving values are visited. Arrays keep their
    length and order; primitives pass through untouched.

    The walk uses an explicit stack so very deep trees do not hit the
    interpreter recursion limit.
    """

    def __init__(
        self,
        exclude_fields: Iterable[str] | None = None,
        *,
        remove_empty_strings: bool = True,
    ) -> None:
        fields = DEFAULT_EXCLUDE_FIELDS if exclude_fields is None else exclude_fields
        self._exclude = frozenset(fields)
        self._remove_empty_strings = remove_empty_strings

    @classmethod
    def from_settings(cls, settings: GatewaySettings) -> ResponseOptimizer:
        """Use ``response_exclude_fields`` when configured, else the defaults."""
        if settings.response_exclude_fields is not None:
            logger.info(
                "Using %d custom response exclude fields from config",
                len(settings.response_exclude_fields),
            )
            return cls(settings.response_exclude_fields)
        logger.debug("Using %d default response exclude fields", len(DEFAULT_EXCLUDE_FIELDS))
        return cls()

    @property
    def exclude_fields(self) -> frozenset[str]:
        return self._exclude

    @property
    def remove_empty_strings(self) -> bool:
        return self._remove_empty_strings

    def optimize(self, value: Any) -> Any:
        """Return an optimized copy of *value*."""
        optimized, _ = self.optimize_with_stats(value)
        return optimized

    def optimize_with_stats(self, value: Any) -> tuple[Any, OptimizationStats]:
        """Like :meth:`optimize`, also returning what was removed."""
        stats = OptimizationStats()
        pending: list[tuple[Any, Any]] = []
        root = self._shell(value, pending)

        while pending:
            source, target = pending.pop()
            if isinstance(source, dict):
                for key, child in source.items():
                    if key in self._exclude:
                        stats.fields_removed += 1
                        continue
                    if self._remove_empty_strings and isinstance(child, str) and not child:
                        stats.empty_strings_removed += 1
                        continue
                    target[key] = self._shell(child, pending)
            else:
                for child in source:
                    target.append(self._shell(child, pending))

        return root, stats

    @staticmethod
    def _shell(node: Any, pending: list[tuple[Any, Any]]) -> Any:
        """Return an empty container for *node* queued for filling, or *node* itself."""
        if isinstance(node, dict):
            shell: Any = {}
        elif isinstance(node, list):
            shell = []
        else:
            return node
        pending.append((node, shell))
        return shell

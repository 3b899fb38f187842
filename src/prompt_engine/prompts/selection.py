"""
Options and the dependency-aware selection set behind checkbox prompts.

An option may require other options.  Selecting it selects everything it
requires, transitively; deselecting an option deselects everything that
still requires it, transitively.  Requirements are resolved to indices once,
when the options are built, and both cascades are iterative walks guarded by
a visited set, so cyclic declarations terminate.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

from prompt_engine.logging import get_logger

logger = get_logger("prompts.selection")

T = TypeVar("T")

DependencyRef = Union[int, str]
OptionsSource = Union[Sequence[str], Mapping[str, Any]]


@dataclass(frozen=True)
class Option(Generic[T]):
    """
    A single choice.

    Attributes
    ----------
    label:
        Display text.
    value:
        Returned when the option is chosen.
    selected:
        Whether a checkbox prompt starts with this option selected.
    requires:
        Indices of the options that must be selected along with this one.
    """

    label: str
    value: T
    selected: bool = False
    requires: frozenset[int] = field(default_factory=frozenset)


def _is_option_spec(entry: Any) -> bool:
    return isinstance(entry, Mapping) and "value" in entry


def _as_refs(raw: Any) -> list[Any]:
    if raw is None:
        return []
    if isinstance(raw, (list, tuple, set, frozenset)):
        return list(raw)
    return [raw]


def resolve_dependencies(
    refs: Iterable[Any],
    labels: Sequence[str],
    owner: str = "",
) -> frozenset[int]:
    """
    Resolve dependency references against sibling *labels*.

    A reference is an index into *labels* or an exact label.  Anything that
    does not resolve is dropped.
    """
    resolved: set[int] = set()
    for ref in refs:
        if isinstance(ref, bool):
            index = None
        elif isinstance(ref, int):
            index = ref if 0 <= ref < len(labels) else None
        elif isinstance(ref, str):
            index = labels.index(ref) if ref in labels else None
        else:
            index = None

        if index is None:
            logger.debug("Dropping unresolved dependency %r of option %r", ref, owner)
            continue
        resolved.add(index)
    return frozenset(resolved)


def build_options(source: OptionsSource) -> list[Option[Any]]:
    """
    Build options from a caller-supplied source.

    The source is one of:

    * a sequence of labels (each label is also the value);
    * a mapping of label to value;
    * a mapping of label to ``{"value": ..., "selected": bool,
      "requires": ref | [ref, ...]}`` where a ref is an index or a label.

    Example::

        build_options({
            "Cheese": {"value": "cheese", "selected": True},
            "Crackers": {"value": "crackers", "requires": "Cheese"},
        })
    """
    if isinstance(source, Mapping):
        labels = [str(label) for label in source]
        options: list[Option[Any]] = []
        for label, entry in zip(labels, source.values()):
            if _is_option_spec(entry):
                options.append(
                    Option(
                        label=label,
                        value=entry["value"],
                        selected=bool(entry.get("selected", False)),
                        requires=resolve_dependencies(
                            _as_refs(entry.get("requires")), labels, owner=label
                        ),
                    )
                )
            else:
                options.append(Option(label=label, value=entry))
        return options

    return [Option(label=str(label), value=label) for label in source]


class SelectionGraph:
    """
    Selected indices of a list of options, with dependency cascades.

    Parameters
    ----------
    options:
        The options, in display order.  Options flagged ``selected`` are
        selected on construction (with their requirements).
    """

    def __init__(self, options: Sequence[Option[Any]]) -> None:
        self._options = list(options)
        self._requires: list[frozenset[int]] = [opt.requires for opt in self._options]
        dependents: list[set[int]] = [set() for _ in self._options]
        for index, required in enumerate(self._requires):
            for dep in required:
                dependents[dep].add(index)
        self._dependents: list[frozenset[int]] = [frozenset(d) for d in dependents]
        # dict keeps insertion order for the final answer
        self._selected: dict[int, None] = {}

        for index, option in enumerate(self._options):
            if option.selected:
                self.select(index)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def options(self) -> list[Option[Any]]:
        return list(self._options)

    @property
    def selected(self) -> list[int]:
        """Selected indices in the order they were selected."""
        return list(self._selected)

    def is_selected(self, index: int) -> bool:
        return index in self._selected

    def requires(self, index: int) -> frozenset[int]:
        return self._requires[index]

    def dependents(self, index: int) -> frozenset[int]:
        return self._dependents[index]

    def values(self) -> list[Any]:
        """Values of the selected options, in selection order."""
        return [self._options[index].value for index in self._selected]

    def labels(self) -> list[str]:
        return [self._options[index].label for index in self._selected]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def select(self, index: int) -> None:
        """Select *index* and everything it requires."""
        self._check(index)
        stack = [index]
        while stack:
            current = stack.pop()
            if current in self._selected:
                continue
            self._selected[current] = None
            # reversed keeps lower indices first in selection order
            stack.extend(
                dep for dep in sorted(self._requires[current], reverse=True)
                if dep not in self._selected
            )

    def deselect(self, index: int) -> None:
        """Deselect *index* and everything selected that requires it."""
        self._check(index)
        if index not in self._selected:
            return
        stack = [index]
        visited: set[int] = set()
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            self._selected.pop(current, None)
            for dependent in sorted(self._dependents[current], reverse=True):
                if dependent in self._selected and dependent not in visited:
                    stack.append(dependent)

    def toggle(self, index: int) -> bool:
        """
        Flip *index*.

        Returns
        -------
        bool
            Whether *index* is selected afterwards.
        """
        if index in self._selected:
            self.deselect(index)
            return False
        self.select(index)
        return True

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._options):
            raise IndexError(f"Option index out of range: {index}")

"""View selection state and reactive recomputation of the pyramid.

`ViewController` owns no global state: it works on a `ViewState` handed to it
by the caller and publishes each new `ChartModel` to its subscribers.

Module notes:
- Every recompute reads the latest view and dataset from the state.
- Each load takes a generation number from `begin_load`; results and
  failures from an older generation are discarded.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

from population_pyramid.aggregate.build_series import compute_chart_model
from population_pyramid.ingest.load_csv import LoadFailure, load_rows
from population_pyramid.models import ChartModel, ViewKind

log = logging.getLogger(__name__)

Dataset = Sequence[Mapping[str, Any]]
Loader = Callable[[str], Dataset]
Subscriber = Callable[[ChartModel], None]


@dataclass
class ViewState:
    """Mutable state shared by the controller and whoever owns it.

    Attributes:
        current_view: Selected population view.
        dataset: Rows of the current source, or None while not loaded.
        model: Last published chart model, or None if not yet computed.
        source: Data source of the most recent load request.
        generation: Counter identifying the most recent load request.
        last_error: Failure of the most recent load, if it failed.
    """
    current_view: ViewKind = ViewKind.TOTAL
    dataset: Dataset | None = None
    model: ChartModel | None = None
    source: str | None = None
    generation: int = 0
    last_error: LoadFailure | None = None


class ViewController:
    """Recompute and publish the chart model when the view or data changes."""

    def __init__(self, state: ViewState | None = None, loader: Loader = load_rows) -> None:
        self.state = state if state is not None else ViewState()
        self._loader = loader
        self._subscribers: list[Subscriber] = []

    # --------------------------------------------------
    # Subscriptions
    # --------------------------------------------------
    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback` to receive every newly computed model.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, model: ChartModel) -> None:
        for callback in list(self._subscribers):
            callback(model)

    # --------------------------------------------------
    # Inputs
    # --------------------------------------------------
    def set_view(self, view: ViewKind | str) -> None:
        """Select `view`; recompute only if it differs from the current one.

        Raises:
            ValueError: if `view` is a label naming no view.
        """
        view = ViewKind.parse(view)
        if view == self.state.current_view:
            return
        log.info("View changed: %s -> %s", self.state.current_view.value, view.value)
        self.state.current_view = view
        self.recompute()

    def begin_load(self, source: str) -> int:
        """Start a load for `source` and return its generation number.

        The dataset and model of the previous source are dropped so that no
        recompute mixes the old data with the new selection.
        """
        self.state.generation += 1
        self.state.source = source
        self.state.dataset = None
        self.state.model = None
        self.state.last_error = None
        log.info("Loading %s (generation %d)", source, self.state.generation)
        return self.state.generation

    def _is_stale(self, generation: int | None) -> bool:
        return generation is not None and generation != self.state.generation

    def on_data_loaded(self, dataset: Dataset, generation: int | None = None) -> bool:
        """Store a loaded dataset and recompute against the current view.

        Args:
            dataset: Raw rows as column → text mappings.
            generation: Value returned by `begin_load`; ``None`` skips the
                staleness check.

        Returns:
            False if the dataset belongs to a superseded load and was dropped.
        """
        if self._is_stale(generation):
            log.info(
                "Discarding stale load (generation %s, current %d)",
                generation,
                self.state.generation,
            )
            return False
        self.state.dataset = dataset
        self.state.last_error = None
        self.recompute()
        return True

    def on_load_failed(self, error: LoadFailure, generation: int | None = None) -> bool:
        """Record a failed load; the model stays absent.

        Returns:
            False if the failure belongs to a superseded load and was ignored.
        """
        if self._is_stale(generation):
            log.info("Ignoring failure of stale load (generation %s)", generation)
            return False
        log.error("Load failed: %s", error)
        self.state.last_error = error
        self.state.dataset = None
        self.state.model = None
        return True

    # --------------------------------------------------
    # Pipeline
    # --------------------------------------------------
    def recompute(self) -> ChartModel | None:
        """Rebuild the model from the latest dataset and view and publish it.

        Returns:
            The new model, or None while no dataset is loaded.
        """
        dataset = self.state.dataset
        if dataset is None:
            log.debug("Recompute skipped: no dataset loaded")
            return None

        model = compute_chart_model(dataset, self.state.current_view)
        if model.coerced_cells:
            log.warning(
                "%d numeric cells in %s could not be read and were treated as 0",
                model.coerced_cells,
                self.state.source or "dataset",
            )
        self.state.model = model
        self._publish(model)
        return model

    # --------------------------------------------------
    # Loading
    # --------------------------------------------------
    def load(self, source: str) -> bool:
        """Load `source` synchronously and recompute.

        Returns:
            True if a model was published, False if the load failed.
        """
        generation = self.begin_load(source)
        try:
            rows = self._loader(source)
        except LoadFailure as e:
            self.on_load_failed(e, generation)
            return False
        return self.on_data_loaded(rows, generation)

    async def load_async(self, source: str) -> bool:
        """Load `source` in a worker thread, then recompute on the event loop.

        If another load starts before this one finishes, this result is
        discarded.

        Returns:
            True if this load's data was applied.
        """
        generation = self.begin_load(source)
        try:
            rows = await asyncio.to_thread(self._loader, source)
        except LoadFailure as e:
            self.on_load_failed(e, generation)
            return False
        return self.on_data_loaded(rows, generation)

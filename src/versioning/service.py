"""Batch evaluation of components against a metadata provider."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple

from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants

from .bounds import BoundedVersionSet, DecisionTrace, VersionPool
from .classifier import UpdateClassifier
from .errors import InvalidRangeSpecification, MetadataRetrievalError
from .latest import LatestVersionResolver
from .models import (
    BatchReport,
    ComponentOutcome,
    ComponentRequest,
    EvaluationMode,
    Failure,
    FailureKind,
)
from .settings import EffectiveSettings, EngineSettings
from .version import ArtifactVersion

logger = logging.getLogger(__name__)

Plan = List[Tuple[ComponentRequest, EffectiveSettings]]


class UpdateService:
    """Evaluates components in summary or single-best mode.

    ``provider`` and ``reactor`` are metadata providers exposing
    ``pool(coordinate, comparator, spec=None)``. A retrieval failure skips
    the component; a configuration failure aborts the batch before anything
    is evaluated.
    """

    def __init__(
        self,
        provider,
        settings: Optional[EngineSettings] = None,
        reactor=None,
        max_workers: int = Constants.DEFAULT_MAX_WORKERS,
        collect_trace: bool = False,
    ):
        self.provider = provider
        self.settings = settings or EngineSettings()
        self.reactor = reactor
        self.max_workers = max(1, int(max_workers or 1))
        self.collect_trace = collect_trace

    def plan(self, requests: Iterable[ComponentRequest]) -> Tuple[Plan, Optional[Failure]]:
        """Resolve settings for every request that is not excluded.

        Returns:
            (plan, None) on success, or ([], failure) for the first
            configuration defect found, including a malformed declared range.
        """
        planned: Plan = []
        for request in requests:
            if self.settings.is_excluded(request.coordinate):
                if is_debug_enabled(logger):
                    logger.debug("Component excluded", extra=extra_context(
                        event="decision", component="service", action="plan",
                        outcome="excluded", target=request.coordinate
                    ))
                continue
            try:
                planned.append((request, self.settings.resolve(request.coordinate, request.current_version)))
            except (InvalidRangeSpecification, ValueError) as exc:
                return [], Failure(FailureKind.CONFIGURATION, request.coordinate, str(exc))
        return planned, None

    def evaluate(
        self,
        request: ComponentRequest,
        mode: EvaluationMode = EvaluationMode.SUMMARY,
        effective: Optional[EffectiveSettings] = None,
    ) -> ComponentOutcome:
        """Evaluate one component; failures are returned, not raised."""
        if effective is None:
            try:
                effective = self.settings.resolve(request.coordinate, request.current_version)
            except (InvalidRangeSpecification, ValueError) as exc:
                return ComponentOutcome(
                    request, failure=Failure(FailureKind.CONFIGURATION, request.coordinate, str(exc))
                )

        if not request.current_version:
            logger.info("Skipping %s: no current version", request.coordinate)
            return ComponentOutcome(request, failure=Failure(
                FailureKind.MISSING_VERSION, request.coordinate, "no current version"
            ))

        with Timer() as timer:
            try:
                outcome = self._evaluate_resolved(request, mode, effective)
            except MetadataRetrievalError as exc:
                logger.warning("Problem encountered while searching for newer versions of %s: %s",
                               request.coordinate, exc.reason)
                outcome = ComponentOutcome(
                    request, failure=Failure(FailureKind.RETRIEVAL, request.coordinate, exc.reason)
                )

        if is_debug_enabled(logger):
            logger.debug("Component evaluated", extra=extra_context(
                event="function_exit", component="service", action="evaluate",
                outcome="failure" if outcome.failure else ("update" if outcome.has_updates else "current"),
                target=request.coordinate, mode=mode.value, duration_ms=timer.duration_ms()
            ))
            for line in outcome.trace:
                logger.debug("%s: %s", request.coordinate, line)
        return outcome

    def _evaluate_resolved(
        self, request: ComponentRequest, mode: EvaluationMode, effective: EffectiveSettings
    ) -> ComponentOutcome:
        pool = self._pool(self.provider, request.coordinate, effective)
        current, pool = self._current(request, effective, pool)
        if current is None:
            logger.info("Skipping %s: no available version satisfies %s",
                        request.coordinate, request.current_version)
            return ComponentOutcome(request, failure=Failure(
                FailureKind.MISSING_VERSION, request.coordinate,
                f"no available version satisfies {request.current_version}"
            ))
        if mode is EvaluationMode.LATEST:
            return self._recommend(request, effective, current, pool)
        return self._summarize(request, effective, current, pool)

    def evaluate_all(
        self,
        requests: Iterable[ComponentRequest],
        mode: EvaluationMode = EvaluationMode.SUMMARY,
    ) -> BatchReport:
        """Evaluate a batch; outcomes keep request order."""
        planned, aborted = self.plan(list(requests))
        if aborted is not None:
            logger.error("Configuration error, nothing evaluated: %s", aborted.message)
            return BatchReport(aborted=aborted)

        if self.max_workers == 1 or len(planned) <= 1:
            outcomes = [self.evaluate(req, mode, eff) for req, eff in planned]
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                outcomes = list(executor.map(lambda item: self.evaluate(item[0], mode, item[1]), planned))
        return BatchReport(outcomes=outcomes)

    def _pool(self, provider, coordinate: str, effective: EffectiveSettings):
        pool = provider.pool(coordinate, effective.comparator, effective.spec)
        if pool.rejected and is_debug_enabled(logger):
            logger.debug("Dropped unparsable versions", extra=extra_context(
                event="anomaly", component="service", action="build_pool",
                target=coordinate, count=len(pool.rejected)
            ))
        return pool

    def _current(
        self, request: ComponentRequest, effective: EffectiveSettings, pool: VersionPool
    ) -> Tuple[Optional[ArtifactVersion], VersionPool]:
        """Effective current version and candidate pool.

        A declared range restricts the pool and resolves to its newest
        satisfying version; a plain declared version is used as is.
        """
        declared = effective.declared
        if declared is None or not declared.restricted:
            current = declared.recommended if declared is not None else None
            return current or effective.comparator.version(request.current_version), pool
        restricted = VersionPool(
            BoundedVersionSet(pool).versions_in_spec(declared, include_snapshots=True),
            effective.comparator,
            pool.rejected,
        )
        current = BoundedVersionSet(restricted).newest_in_spec(declared, effective.include_snapshots)
        if current is not None and is_debug_enabled(logger):
            logger.debug("Declared range resolved", extra=extra_context(
                event="decision", component="service", action="resolve_declared",
                target=request.coordinate, outcome=str(current), spec=declared.spec
            ))
        return current, restricted

    def _trace(self) -> Optional[DecisionTrace]:
        return DecisionTrace() if self.collect_trace else None

    def _summarize(
        self,
        request: ComponentRequest,
        effective: EffectiveSettings,
        current: ArtifactVersion,
        pool: VersionPool,
    ) -> ComponentOutcome:
        classifier = UpdateClassifier(effective.comparator, self.settings.show_all)
        trace = self._trace()
        summary = classifier.summarize(
            request.coordinate, current, pool, effective.include_snapshots, trace
        )
        return ComponentOutcome(
            request,
            summary=summary,
            details=classifier.details(current, pool, effective.include_snapshots),
            has_updates=classifier.has_updates(summary),
            trace=trace.lines() if trace is not None else [],
        )

    def _recommend(
        self,
        request: ComponentRequest,
        effective: EffectiveSettings,
        current: ArtifactVersion,
        pool: VersionPool,
    ) -> ComponentOutcome:
        declared = effective.declared
        spec = declared if declared is not None and declared.restricted else effective.spec
        reactor_pool = None
        if effective.search_reactor and self.reactor is not None:
            reactor_pool = self._pool(self.reactor, request.coordinate, effective)
        resolver = LatestVersionResolver(
            effective.comparator, effective.search_reactor, effective.prefer_reactor
        )
        trace = self._trace()
        recommendation, decision = resolver.recommend(
            request.coordinate, current, pool, reactor_pool,
            spec, effective.include_snapshots, trace,
        )
        lines = trace.lines() if trace is not None else []
        if decision is not None:
            lines.append(f"reactor merge: {decision.reason}")
        return ComponentOutcome(
            request,
            recommendation=recommendation,
            has_updates=self.settings.show_all or recommendation.has_update,
            trace=lines,
        )

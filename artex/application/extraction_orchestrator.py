import logging
from collections.abc import Sequence

from artex.application.config_models import ArtexConfig
from artex.domain.constants import MANAGER_PRODUCER
from artex.domain.extractors import CodeExtractor, ExtractorFactory
from artex.domain.models.artifact import Artifact
from artex.domain.models.extraction_outcome import ExtractionOutcome
from artex.domain.models.extractor_description import ExtractorDescription

logger = logging.getLogger(__name__)


def _describe_failure(e: Exception) -> str:
    message = str(e)
    return f"{type(e).__name__}: {message}" if message else type(e).__name__


class ExtractionOrchestrator:
    """Coordinates the registered extractors over one response text.

    Extractors run sequentially in registration order. A failure inside one
    extractor is recorded against its producer id and never stops the others.
    Every call returns a fresh, frozen ``ExtractionOutcome``; nothing here
    raises for bad input.
    """

    def __init__(self, extractors: Sequence[CodeExtractor] | None = None) -> None:
        if extractors is None:
            extractors = ExtractorFactory.create_all()
        self._extractors: tuple[CodeExtractor, ...] = tuple(extractors)
        logger.info(
            f"Initialized ExtractionOrchestrator with {len(self._extractors)} extractors: "
            f"{', '.join(self.producer_ids)}"
        )

    @classmethod
    def from_config(cls, config: ArtexConfig) -> "ExtractionOrchestrator":
        """
        Build an orchestrator with the extractors named in config, in that order.

        Raises:
            KeyError: If config names an unregistered extractor
        """
        return cls(ExtractorFactory.create_all(config.extractors))

    @property
    def producer_ids(self) -> list[str]:
        return [extractor.kind_id() for extractor in self._extractors]

    def extract_all(self, text: str) -> ExtractionOutcome:
        """
        Run every applicable extractor and aggregate the results.

        Args:
            text: Raw assistant response

        Returns:
            Outcome with artifacts in registration order then match order.
            ``by_producer`` holds an entry (possibly empty) for every
            extractor that was applicable and did not fail.
        """
        logger.info(
            f"Extracting with {len(self._extractors)} extractors (content length: {len(text)})"
        )

        all_artifacts: list[Artifact] = []
        by_producer: dict[str, tuple[Artifact, ...]] = {}
        errors: dict[str, str] = {}

        for extractor in self._extractors:
            producer = extractor.kind_id()
            try:
                if not extractor.can_handle(text):
                    logger.debug(f"Extractor {producer} cannot handle this content")
                    continue
                found = tuple(extractor.extract(text))
            except Exception as e:
                logger.error(f"Error in extractor {producer}: {e}", exc_info=True)
                errors[producer] = _describe_failure(e)
                continue

            logger.debug(f"Extractor {producer} found {len(found)} artifacts")
            by_producer[producer] = found
            all_artifacts.extend(found)

        outcome = ExtractionOutcome(
            all_artifacts=tuple(all_artifacts),
            by_producer=by_producer,
            errors=errors,
            source_length=len(text),
        )
        self._log_outcome(outcome)
        return outcome

    def extract_with(self, text: str, producer_id: str) -> ExtractionOutcome:
        """
        Run one named extractor, bypassing its applicability check.

        Lookup is case-insensitive. An unknown name is reported as an error
        keyed by the manager pseudo-producer, not raised.
        """
        logger.info(f"Extracting with specific extractor: {producer_id}")

        extractor = self._find(producer_id)
        if extractor is None:
            available = ", ".join(self.producer_ids)
            logger.error(f"Extractor '{producer_id}' not found")
            return ExtractionOutcome(
                errors={
                    MANAGER_PRODUCER: (
                        f"Extractor '{producer_id}' not found. Available extractors: {available}"
                    )
                },
                source_length=len(text),
            )

        producer = extractor.kind_id()
        try:
            found = tuple(extractor.extract(text))
        except Exception as e:
            logger.error(f"Error in extractor {producer}: {e}", exc_info=True)
            return ExtractionOutcome(
                errors={producer: _describe_failure(e)},
                source_length=len(text),
            )

        outcome = ExtractionOutcome(
            all_artifacts=found,
            by_producer={producer: found},
            source_length=len(text),
        )
        self._log_outcome(outcome)
        return outcome

    def detect_applicable(self, text: str) -> list[str]:
        """
        Ids of every extractor whose ``can_handle`` accepts ``text``.

        More than one id is not an error: several kinds may share one
        response. Callers use the list to surface ambiguity.
        """
        applicable: list[str] = []
        for extractor in self._extractors:
            try:
                if extractor.can_handle(text):
                    applicable.append(extractor.kind_id())
            except Exception as e:
                logger.warning(f"Extractor {extractor.kind_id()} failed applicability check: {e}")
        return applicable

    def describe_extractors(self) -> list[ExtractorDescription]:
        descriptions: list[ExtractorDescription] = []
        for extractor in self._extractors:
            meta = extractor.get_metadata()
            descriptions.append(
                ExtractorDescription(
                    producer_id=meta["name"],
                    suffixes=meta["suffixes"],
                    implementation_name=type(extractor).__name__,
                    fence_tags=meta["fence_tags"],
                    description=meta["description"],
                )
            )
        return descriptions

    def _find(self, producer_id: str) -> CodeExtractor | None:
        wanted = producer_id.strip().lower()
        for extractor in self._extractors:
            if extractor.kind_id().lower() == wanted:
                return extractor
        return None

    def _log_outcome(self, outcome: ExtractionOutcome) -> None:
        for artifact in outcome.invalid_artifacts:
            logger.warning(f"Invalid artifact {artifact.path or '<no path>'}: {artifact.error}")
        logger.info(
            f"Extraction completed: {len(outcome.all_artifacts)} artifacts "
            f"({outcome.valid_count} valid, {outcome.invalid_count} invalid)"
        )
